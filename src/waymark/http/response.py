"""Response-side collaborators.

The router only ever needs to set a status (the implicit 404). That
contract is the ``Responder`` protocol; ``ResponseRecorder`` is the
in-memory implementation used by the ASGI adapter and by tests.
"""

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Protocol, runtime_checkable

from waymark.http.request import RequestContext


@runtime_checkable
class Responder(Protocol):
    """Anything that can receive a response status from the router."""

    def set_status(self, status: int, reason: str) -> None: ...


@dataclass(slots=True)
class ResponseRecorder:
    """Collects the status, headers and body produced for one request.

    Mutable by design: handlers write to it while the request runs,
    the transport reads it afterwards.
    """

    status: int = 200
    reason: str = "OK"
    protocol: str = "HTTP/1.1"
    content_type: str = "text/html; charset=utf-8"
    headers: list[tuple[str, str]] = field(default_factory=list)
    _chunks: list[bytes] = field(default_factory=list, repr=False)

    @classmethod
    def for_request(cls, request: RequestContext, **kwargs: Any) -> "ResponseRecorder":
        """Create a recorder that answers in the protocol *request* used."""
        return cls(protocol=request.protocol, **kwargs)

    def set_status(self, status: int, reason: str = "") -> None:
        """Set the response status; *reason* defaults to the standard phrase."""
        self.status = status
        if not reason:
            try:
                reason = HTTPStatus(status).phrase
            except ValueError:
                reason = ""
        self.reason = reason

    def status_line(self, protocol: str | None = None) -> str:
        """Render the status line, e.g. ``HTTP/1.1 404 Not Found``.

        Uses the recorder's own ``protocol`` unless one is given.
        """
        return f"{protocol or self.protocol} {self.status} {self.reason}".rstrip()

    def add_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def write(self, data: str | bytes) -> None:
        """Append *data* to the response body (str is UTF-8 encoded)."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._chunks.append(data)

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    @property
    def written(self) -> bool:
        """True once anything has been written to the body."""
        return bool(self._chunks)
