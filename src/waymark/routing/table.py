"""Per-method route table.

Stores, for each allowed HTTP method, the routes registered under it
in registration order. Order matters: the first matching route wins.
"""

import logging
from collections.abc import Iterable, Iterator

from waymark.config import ALLOWED_METHODS
from waymark.errors import ConfigurationError, InvalidMethods
from waymark.routing.handlers import HandlerRef
from waymark.routing.pattern import compile_pattern, strip_pattern
from waymark.routing.route import Route

logger = logging.getLogger("waymark.routing")


def parse_methods(methods: str | Iterable[str]) -> tuple[str, ...]:
    """Normalize a methods argument and drop methods outside the allowed set.

    Accepts ``"GET|post"`` or ``["GET", "post"]``. Returns uppercase
    names in first-seen order without duplicates; may be empty.

    Examples::

        "get|POST"           -> ("GET", "POST")
        ["PUT", "TRACE"]     -> ("PUT",)
        ""                   -> ()
    """
    if isinstance(methods, str):
        methods = methods.split("|")
    valid: list[str] = []
    for method in methods:
        name = method.strip().upper()
        if name in ALLOWED_METHODS and name not in valid:
            valid.append(name)
    return tuple(valid)


class RouteTable:
    """Ordered routes keyed by HTTP method.

    Usage::

        table = RouteTable()
        table.add("GET|POST", "/items", handler_ref)
        for route in table.routes_for("GET"):
            ...
    """

    __slots__ = ("_frozen", "_order", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, list[Route]] = {}
        # Every route once, in registration order (a route may sit under several methods)
        self._order: list[Route] = []
        self._frozen = False

    def add(self, methods: str | Iterable[str], pattern: str, handler: HandlerRef) -> Route:
        """Register *handler* for *pattern* under every valid method.

        Raises ``InvalidMethods`` if no allowed method remains after
        filtering, and ``ConfigurationError`` if the table is frozen or
        the pattern does not compile. Nothing is registered on error.
        """
        if self._frozen:
            msg = "Cannot add routes after the route table is frozen."
            raise ConfigurationError(msg)

        if not isinstance(methods, str):
            methods = tuple(methods)
        valid = parse_methods(methods)
        if not valid:
            raise InvalidMethods(methods)

        stored = strip_pattern(pattern)
        route = Route(
            pattern=stored,
            handler=handler,
            regex=compile_pattern(stored),
            methods=frozenset(valid),
        )
        for method in valid:
            self._routes.setdefault(method, []).append(route)
        self._order.append(route)
        logger.debug("Registered %s /%s -> %s", "|".join(valid), stored, handler.name)
        return route

    def routes_for(self, method: str) -> tuple[Route, ...]:
        """Routes registered under *method*, in registration order."""
        return tuple(self._routes.get(method.upper(), ()))

    @property
    def routes(self) -> list[Route]:
        """Every registered route once, in registration order."""
        return list(self._order)

    @property
    def methods(self) -> frozenset[str]:
        """Methods that hold at least one route."""
        return frozenset(self._routes)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the table read-only. No more routes can be added."""
        self._frozen = True

    def __iter__(self) -> Iterator[Route]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)
