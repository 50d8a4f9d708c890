"""Waymark exception hierarchy.

Shared across the route table, dispatcher and ASGI adapter so every
module raises and catches the same types.
"""

from collections.abc import Iterable
from dataclasses import dataclass


class WaymarkError(Exception):
    """Base for all waymark-specific errors."""


class ConfigurationError(WaymarkError):
    """Raised when a route registration is invalid.

    Always raised synchronously from the registration call, before
    anything is added to the route table.
    """


class InvalidMethods(ConfigurationError):  # noqa: N818
    """No allowed HTTP method survived filtering of a registration call."""

    def __init__(self, methods: Iterable[str] | str = ()) -> None:
        self.methods = (methods,) if isinstance(methods, str) else tuple(methods)
        shown = ", ".join(repr(m) for m in self.methods) or "none"
        super().__init__(
            f"Invalid methods provided: {shown}. "
            "Allowed methods are DELETE, GET, PATCH, POST and PUT."
        )


class UnresolvedHandler(ConfigurationError):  # noqa: N818
    """A ``"Target@Member"`` handler reference could not be resolved."""

    def __init__(self, reference: str, reason: str = "") -> None:
        self.reference = reference
        msg = f"Cannot resolve handler reference {reference!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


@dataclass(frozen=True, slots=True)
class HTTPError(WaymarkError):
    """An error that maps directly to an HTTP status code.

    Used by the ASGI adapter to render responses the router itself
    only signals through a ``Responder``.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
