"""Immutable request context.

The router never reads process-wide state. Everything it needs about
the current request travels in a ``RequestContext`` built by the
transport adapter (WSGI/CGI environ, ASGI scope, or a test).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from waymark.http.headers import Headers, headers_from_environ


@dataclass(frozen=True, slots=True)
class RequestContext:
    """The parts of an HTTP request the router consumes.

    ``uri`` is the raw request target: it may still carry a query
    string and the mount path of the serving script.
    """

    method: str
    uri: str
    headers: Headers = field(default_factory=Headers)
    script_name: str = ""
    protocol: str = "HTTP/1.1"

    @classmethod
    def build(
        cls,
        method: str,
        uri: str,
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> "RequestContext":
        """Convenience constructor accepting a plain header dict."""
        return cls(method=method, uri=uri, headers=Headers(headers or {}), **kwargs)

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> "RequestContext":
        """Create a context from a WSGI/CGI environ.

        ``REQUEST_URI`` is used when the server provides it; otherwise
        the URI is rebuilt from ``SCRIPT_NAME``, ``PATH_INFO`` and
        ``QUERY_STRING``.
        """
        script_name = environ.get("SCRIPT_NAME", "")
        uri = environ.get("REQUEST_URI")
        if uri is None:
            uri = script_name + environ.get("PATH_INFO", "")
            query = environ.get("QUERY_STRING", "")
            if query:
                uri = f"{uri}?{query}"
        return cls(
            method=environ.get("REQUEST_METHOD", "GET"),
            uri=uri or "/",
            headers=headers_from_environ(environ),
            script_name=script_name,
            protocol=environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> "RequestContext":
        """Create a context from an ASGI HTTP scope.

        ``root_path`` is treated as the directory of the serving script,
        so relative routing strips it the same way it strips a CGI
        ``SCRIPT_NAME`` directory.
        """
        root_path = scope.get("root_path", "")
        uri = scope["path"]
        if root_path and not uri.startswith(root_path):
            uri = root_path + uri
        query = scope.get("query_string", b"")
        if query:
            uri = f"{uri}?{query.decode('latin-1')}"
        return cls(
            method=scope["method"],
            uri=uri,
            headers=Headers(tuple(scope.get("headers", ()))),
            script_name=f"{root_path.rstrip('/')}/" if root_path else "",
            protocol=f"HTTP/{scope.get('http_version', '1.1')}",
        )
