"""Tests for waymark.routing.table — method filtering and ordered storage."""

import pytest

from waymark.errors import ConfigurationError, InvalidMethods
from waymark.routing.handlers import CallableHandler
from waymark.routing.table import RouteTable, parse_methods


def _handler() -> str:
    return "ok"


_REF = CallableHandler(_handler)


class TestParseMethods:
    @pytest.mark.parametrize(
        ("methods", "expected"),
        [
            ("GET", ("GET",)),
            ("get|post", ("GET", "POST")),
            ("GET | PUT", ("GET", "PUT")),
            (["delete", "PATCH"], ("DELETE", "PATCH")),
            ("GET|TRACE|HEAD", ("GET",)),
            ("GET|get", ("GET",)),
            ("", ()),
            ([], ()),
            ("TRACE", ()),
        ],
    )
    def test_parse(self, methods: str | list[str], expected: tuple[str, ...]) -> None:
        assert parse_methods(methods) == expected


class TestRouteTable:
    def test_add_under_each_method(self) -> None:
        table = RouteTable()
        route = table.add("GET|POST", "/items/", _REF)

        assert route.pattern == "items"
        assert route.methods == frozenset({"GET", "POST"})
        assert table.routes_for("GET") == (route,)
        assert table.routes_for("post") == (route,)
        assert table.routes_for("PUT") == ()
        assert table.methods == frozenset({"GET", "POST"})

    def test_registration_order_preserved(self) -> None:
        table = RouteTable()
        first = table.add("GET", "/a", _REF)
        second = table.add("GET", "/b", _REF)
        third = table.add("GET", "/a", _REF)

        assert table.routes_for("GET") == (first, second, third)
        assert table.routes == [first, second, third]
        assert list(table) == [first, second, third]
        assert len(table) == 3

    def test_multi_method_route_listed_once(self) -> None:
        table = RouteTable()
        table.add("GET|POST|PUT", "/items", _REF)
        assert len(table.routes) == 1

    @pytest.mark.parametrize("methods", ["", "TRACE", "HEAD|OPTIONS", [], ["CONNECT"]])
    def test_invalid_methods_register_nothing(self, methods: str | list[str]) -> None:
        table = RouteTable()
        with pytest.raises(InvalidMethods):
            table.add(methods, "/items", _REF)
        assert table.routes == []
        assert table.methods == frozenset()

    def test_invalid_methods_from_generator(self) -> None:
        table = RouteTable()
        with pytest.raises(InvalidMethods) as exc_info:
            table.add((m for m in ["TRACE"]), "/items", _REF)
        assert exc_info.value.methods == ("TRACE",)

    def test_bad_pattern_registers_nothing(self) -> None:
        table = RouteTable()
        with pytest.raises(ConfigurationError):
            table.add("GET", "/items/(", _REF)
        assert len(table) == 0

    def test_freeze(self) -> None:
        table = RouteTable()
        table.add("GET", "/", _REF)
        table.freeze()

        assert table.frozen is True
        with pytest.raises(ConfigurationError, match="frozen"):
            table.add("GET", "/other", _REF)
        assert len(table) == 1
