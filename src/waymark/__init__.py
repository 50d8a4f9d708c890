"""Waymark — a small first-match HTTP request router.

Maps a method and path to a handler through ordered, anchored regex
patterns; capture groups become positional handler arguments.

Basic usage::

    from waymark import RequestContext, Router

    router = Router()
    router.get("/users/{id:int}", show_user)
    router.get("/users/{id}/posts/{post_id}", show_post)
    router.route("POST|PUT", "/items", save_item)

    router.run(RequestContext.build("GET", "/users/42"))

Serve it over ASGI with ``waymark.RouterApp(router)``.
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "Headers",
    "InvalidMethods",
    "NotFound",
    "RequestContext",
    "Responder",
    "ResponseRecorder",
    "Route",
    "RouteMatch",
    "Router",
    "RouterApp",
    "RouterConfig",
    "UnresolvedHandler",
    "WaymarkError",
    "get_response",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waymark`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from waymark.routing.router import Router

        return Router

    if name == "RouterApp":
        from waymark.server.asgi import RouterApp

        return RouterApp

    if name == "RouterConfig":
        from waymark.config import RouterConfig

        return RouterConfig

    if name in ("Route", "RouteMatch"):
        from waymark.routing import route

        return getattr(route, name)

    if name == "RequestContext":
        from waymark.http.request import RequestContext

        return RequestContext

    if name == "Headers":
        from waymark.http.headers import Headers

        return Headers

    if name in ("Responder", "ResponseRecorder"):
        from waymark.http import response

        return getattr(response, name)

    if name == "get_response":
        from waymark.context import get_response

        return get_response

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InvalidMethods",
        "NotFound",
        "UnresolvedHandler",
        "WaymarkError",
    ):
        from waymark import errors

        return getattr(errors, name)

    msg = f"module 'waymark' has no attribute {name!r}"
    raise AttributeError(msg)
