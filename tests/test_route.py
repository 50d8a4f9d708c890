"""Tests for waymark.routing.route — Route and RouteMatch."""

import pytest

from waymark.routing.handlers import CallableHandler
from waymark.routing.pattern import compile_pattern
from waymark.routing.route import Route, RouteMatch


def _handler() -> str:
    return "ok"


def _route(pattern: str) -> Route:
    return Route(
        pattern=pattern,
        handler=CallableHandler(_handler),
        regex=compile_pattern(pattern),
        methods=frozenset({"GET"}),
    )


class TestRoute:
    def test_match_whole_path(self) -> None:
        route = _route("users/{id}")
        found = route.match("/users/42")
        assert found is not None
        assert found.group(1) == "42"

    def test_rejects_partial(self) -> None:
        route = _route("users/{id}")
        assert route.match("/users/42/posts") is None
        assert route.match("/x/users/42") is None

    def test_rejects_trailing_newline(self) -> None:
        assert _route("users").match("/users\n") is None

    def test_frozen(self) -> None:
        route = _route("")
        with pytest.raises(AttributeError):
            route.pattern = "other"  # type: ignore[misc]


class TestRouteMatch:
    def test_creation(self) -> None:
        route = _route("users/{id}")
        match = RouteMatch(route=route, params=("42",))
        assert match.route is route
        assert match.params == ("42",)

    def test_frozen(self) -> None:
        match = RouteMatch(route=_route(""), params=())
        with pytest.raises(AttributeError):
            match.params = ("x",)  # type: ignore[misc]
