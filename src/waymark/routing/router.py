"""Router with ordered, first-match dispatch.

Routes are compiled at registration and evaluated in registration
order for the request's effective method. The first pattern that
matches the whole normalized path wins; its capture groups become the
handler's positional arguments.
"""

import logging
from collections.abc import Iterable
from typing import Any

from waymark._internal.types import Callback, Handler
from waymark.config import RouterConfig
from waymark.errors import ConfigurationError
from waymark.http.request import RequestContext
from waymark.http.response import Responder
from waymark.routing.handlers import HandlerRef, resolve_handler
from waymark.routing.params import extract_params
from waymark.routing.path import base_path, normalize_path
from waymark.routing.route import Route, RouteMatch
from waymark.routing.table import RouteTable

logger = logging.getLogger("waymark.routing")


class Router:
    """Request router.

    Usage::

        router = Router()
        router.get("/users/{id}", show_user)
        router.route("POST|PUT", "/items", save_item)
        router.set_not_found(not_found)

        handled = router.run(RequestContext.build("GET", "/users/42?tab=posts"))

    Register more specific patterns before more general ones: the
    first match wins.
    """

    __slots__ = ("_base_path", "_not_found", "_table", "_targets", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config = config or RouterConfig()
        self._table = RouteTable()
        self._targets: dict[str, Any] = {}
        self._not_found: HandlerRef | None = None
        self._base_path: str | None = None

    # -- Registration --

    def route(
        self,
        methods: str | Iterable[str],
        pattern: str,
        handler: Handler | str | None = None,
    ) -> Any:
        """Register *handler* for *pattern* under one or more methods.

        *methods* is ``"GET|POST"`` or a sequence of names, matched
        case-insensitively; names outside DELETE/GET/PATCH/POST/PUT are
        ignored. Raises ``InvalidMethods`` when none remain.

        Returns the router for chaining. Without *handler*, returns a
        decorator instead::

            @router.route("GET|HEAD", "/about")
            def about(): ...
        """
        if handler is None:

            def decorator(func: Handler) -> Handler:
                self.route(methods, pattern, func)
                return func

            return decorator

        ref = resolve_handler(handler, self._targets, strict=self.config.strict_handlers)
        self._table.add(methods, pattern, ref)
        return self

    def delete(self, pattern: str, handler: Handler | str | None = None) -> Any:
        return self.route("DELETE", pattern, handler)

    def get(self, pattern: str, handler: Handler | str | None = None) -> Any:
        return self.route("GET", pattern, handler)

    def patch(self, pattern: str, handler: Handler | str | None = None) -> Any:
        return self.route("PATCH", pattern, handler)

    def post(self, pattern: str, handler: Handler | str | None = None) -> Any:
        return self.route("POST", pattern, handler)

    def put(self, pattern: str, handler: Handler | str | None = None) -> Any:
        return self.route("PUT", pattern, handler)

    def register_target(self, name: str, target: Any) -> "Router":
        """Make *target* available to ``"name@member"`` handler references.

        Must be called before the routes that reference it.
        """
        self._check_not_frozen("register targets")
        self._targets[name] = target
        return self

    def set_not_found(self, handler: Handler | str) -> "Router":
        """Set the handler invoked, with no arguments, when nothing matches."""
        self._check_not_frozen("set the not-found handler")
        self._not_found = resolve_handler(handler, self._targets, strict=self.config.strict_handlers)
        return self

    def freeze(self) -> None:
        """Freeze routes, targets and the not-found handler. Changes afterwards raise."""
        self._table.freeze()

    def _check_not_frozen(self, action: str) -> None:
        if self._table.frozen:
            msg = f"Cannot {action} after the router is frozen."
            raise ConfigurationError(msg)

    @property
    def routes(self) -> list[Route]:
        """Every registered route once, in registration order."""
        return self._table.routes

    @property
    def table(self) -> RouteTable:
        return self._table

    # -- Request resolution --

    def resolve_method(self, request: RequestContext) -> str:
        """Return the method to dispatch on, honouring POST overrides."""
        method = request.method.upper()
        if method != "POST":
            return method
        override = request.headers.get(self.config.override_header)
        if override is not None:
            override = override.strip().upper()
            if override in self.config.override_methods:
                return override
        return method

    def resolve_path(self, request: RequestContext) -> str:
        """Return the normalized path for *request*.

        With relative routing, the script's directory is computed from
        the first request seen and stripped from every path.
        """
        base = None
        if self.config.relative_routing:
            if self._base_path is None:
                self._base_path = base_path(request.script_name)
            base = self._base_path
        return normalize_path(request.uri, base)

    # -- Matching and dispatch --

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Find the first route for *method* matching the whole *path*.

        *path* must already be normalized. Returns ``None`` when no
        route matches; an unknown method simply has no candidates.
        """
        for route in self._table.routes_for(method):
            found = route.match(path)
            if found is not None:
                return RouteMatch(route=route, params=extract_params(found))
        return None

    def dispatch(
        self,
        method: str,
        path: str,
        callback: Callback | None = None,
        *,
        responder: Responder | None = None,
    ) -> bool:
        """Invoke the first route matching *method* and *path*.

        On a match the handler is called with the extracted parameters,
        then *callback* (if callable) with no arguments. Otherwise the
        not-found handler runs, or, without one, *responder* receives a
        404 status. Handler exceptions propagate unchanged.

        Returns whether a route was handled.
        """
        path = normalize_path(path)
        found = self.match(method, path)

        if found is not None:
            logger.debug("%s %s -> %s %r", method, path, found.route.handler.name, found.params)
            found.route.handler.invoke(*found.params)
            if callable(callback):
                callback()
            return True

        logger.debug("%s %s -> no route", method, path)
        if self._not_found is not None:
            self._not_found.invoke()
        elif responder is not None:
            responder.set_status(404, "Not Found")
        return False

    def run(
        self,
        request: RequestContext,
        callback: Callback | None = None,
        *,
        responder: Responder | None = None,
    ) -> bool:
        """Dispatch *request*: resolve its method and path, then route it.

        Returns whether a route was handled, so the caller can decide
        whether to continue with other processing.

        A miss reaches the transport only through the not-found handler
        or *responder*; with neither, it is logged at debug level and
        the return value is the only signal. Build the responder with
        ``ResponseRecorder.for_request(request)`` so the 404 status line
        uses the request's protocol.
        """
        return self.dispatch(
            self.resolve_method(request),
            self.resolve_path(request),
            callback,
            responder=responder,
        )
