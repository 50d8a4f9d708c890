"""Route and RouteMatch frozen dataclasses."""

import re
from dataclasses import dataclass

from waymark.routing.handlers import HandlerRef


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route.

    ``pattern`` is stored without leading/trailing ``/``; ``regex`` is
    its anchored compiled form. Created by the route table at
    registration, never mutated afterwards.
    """

    pattern: str
    handler: HandlerRef
    regex: re.Pattern[str]
    methods: frozenset[str]

    def match(self, path: str) -> re.Match[str] | None:
        """Match a normalized path against the whole pattern."""
        return self.regex.fullmatch(path)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: tuple[str | None, ...]
