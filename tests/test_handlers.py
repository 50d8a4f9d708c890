"""Tests for waymark.routing.handlers — handler resolution and invocation."""

import logging
import types

import pytest

from waymark.errors import ConfigurationError, UnresolvedHandler
from waymark.routing.handlers import (
    CallableHandler,
    MemberHandler,
    MissingHandler,
    resolve_handler,
)

calls: list[tuple[str, tuple[object, ...]]] = []


class Users:
    instances = 0

    def __init__(self) -> None:
        Users.instances += 1

    def show(self, user_id: str) -> str:
        calls.append(("show", (user_id,)))
        return ""  # falsy on purpose: must not trigger a second call

    @staticmethod
    def count() -> int:
        calls.append(("count", ()))
        return 0

    @classmethod
    def kind(cls, name: str) -> str:
        calls.append(("kind", (name,)))
        return cls.__name__

    label = "users"


class NeedsArgs:
    def __init__(self, db: object) -> None:
        self.db = db

    def show(self) -> None: ...


@pytest.fixture(autouse=True)
def _reset() -> None:
    calls.clear()
    Users.instances = 0


@pytest.fixture
def _fake_views_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with handler targets on sys.modules."""
    mod = types.ModuleType("_fake_waymark_views")
    mod.Users = Users  # type: ignore[attr-defined]
    mod.ping = lambda: "pong"  # type: ignore[attr-defined]
    monkeypatch.setitem(__import__("sys").modules, "_fake_waymark_views", mod)


class TestCallable:
    def test_function(self) -> None:
        def handler(a: str, b: str) -> str:
            return a + b

        ref = resolve_handler(handler, {})
        assert isinstance(ref, CallableHandler)
        assert ref.invoke("x", "y") == "xy"
        assert ref.name.endswith("handler")

    def test_already_resolved_passes_through(self) -> None:
        ref = CallableHandler(print)
        assert resolve_handler(ref, {}) is ref

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="must be callable"):
            resolve_handler(42, {})  # type: ignore[arg-type]

    def test_rejects_string_without_at(self) -> None:
        with pytest.raises(ConfigurationError, match="not a 'Target@Member' reference"):
            resolve_handler("Users.show", {})


class TestRegistryTargets:
    def test_instance_member(self) -> None:
        ref = resolve_handler("Users@show", {"Users": Users})
        assert isinstance(ref, MemberHandler)
        assert ref.per_instance is True

        ref.invoke("42")
        ref.invoke("43")
        assert calls == [("show", ("42",)), ("show", ("43",))]
        assert Users.instances == 2

    def test_falsy_result_invokes_once(self) -> None:
        resolve_handler("Users@show", {"Users": Users}).invoke("1")
        assert len(calls) == 1

    def test_static_member(self) -> None:
        ref = resolve_handler("Users@count", {"Users": Users})
        assert isinstance(ref, MemberHandler)
        assert ref.per_instance is False
        assert ref.invoke() == 0
        assert Users.instances == 0
        assert calls == [("count", ())]

    def test_class_member(self) -> None:
        ref = resolve_handler("Users@kind", {"Users": Users})
        assert ref.invoke("x") == "Users"
        assert Users.instances == 0

    def test_object_target(self) -> None:
        target = types.SimpleNamespace(hello=lambda name: f"hi {name}")
        ref = resolve_handler("greeter@hello", {"greeter": target})
        assert ref.invoke("ann") == "hi ann"
        assert ref.name == "greeter@hello"


@pytest.mark.usefixtures("_fake_views_module")
class TestImportTargets:
    def test_colon_form(self) -> None:
        ref = resolve_handler("_fake_waymark_views:Users@count", {})
        assert isinstance(ref, MemberHandler)
        assert ref.target is Users

    def test_dotted_form(self) -> None:
        ref = resolve_handler("_fake_waymark_views.Users@show", {})
        assert isinstance(ref, MemberHandler)
        assert ref.per_instance is True

    def test_bare_module_is_not_a_target(self) -> None:
        ref = resolve_handler("_fake_waymark_views@ping", {})
        with pytest.raises(UnresolvedHandler):
            resolve_handler("_fake_waymark_views@ping", {}, strict=True)
        assert isinstance(ref, MissingHandler)

    def test_registry_wins_over_import(self) -> None:
        class Other:
            @staticmethod
            def count() -> int:
                return 99

        ref = resolve_handler("_fake_waymark_views:Users@count", {"_fake_waymark_views:Users": Other})
        assert ref.invoke() == 99


class TestUnresolved:
    @pytest.mark.parametrize(
        "reference",
        [
            "Ghost@show",
            "Users@missing",
            "Users@label",
            "NeedsArgs@show",
            "@show",
            "Users@",
            "no_such_module_xyz:Thing@run",
            "_fake_waymark_views:Nope@run",
        ],
    )
    def test_strict_raises(self, reference: str) -> None:
        targets = {"Users": Users, "NeedsArgs": NeedsArgs}
        with pytest.raises(UnresolvedHandler) as exc_info:
            resolve_handler(reference, targets, strict=True)
        assert exc_info.value.reference == reference

    def test_lenient_returns_noop(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="waymark.routing"):
            ref = resolve_handler("Ghost@show", {})

        assert isinstance(ref, MissingHandler)
        assert ref.invoke("1", "2") is None
        assert ref.name == "Ghost@show"
        assert "Cannot resolve handler reference 'Ghost@show'" in caplog.text
