"""Handler references — resolved once, at registration.

A route handler is either a plain callable or a ``"Target@Member"``
string. Both are turned into a ``HandlerRef`` with a single
``invoke(*params)`` capability, so dispatch never has to inspect the
handler again.

Named references look the target up in the router's registry first,
then fall back to an import string::

    router.register_target("Users", UsersController)
    router.get("/users/{id}", "Users@show")
    router.get("/health", "myapp.views:Health@check")
"""

import importlib
import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from waymark._internal.types import Handler
from waymark.errors import ConfigurationError, UnresolvedHandler

logger = logging.getLogger("waymark.routing")


class HandlerRef(Protocol):
    """A resolved route handler."""

    @property
    def name(self) -> str: ...

    def invoke(self, *params: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class CallableHandler:
    """A plain callable, called with the route parameters positionally."""

    func: Handler

    @property
    def name(self) -> str:
        return getattr(self.func, "__qualname__", repr(self.func))

    def invoke(self, *params: Any) -> Any:
        return self.func(*params)


@dataclass(frozen=True, slots=True)
class MemberHandler:
    """A ``Target@Member`` reference.

    With ``per_instance`` the target is constructed (no arguments) on
    every invocation and the member is called on the new instance.
    Otherwise the member is called on the target itself (static and
    class methods, or module-level functions).
    """

    reference: str
    target: Any
    member: str
    per_instance: bool

    @property
    def name(self) -> str:
        return self.reference

    def invoke(self, *params: Any) -> Any:
        owner = self.target() if self.per_instance else self.target
        return getattr(owner, self.member)(*params)


@dataclass(frozen=True, slots=True)
class MissingHandler:
    """An unresolvable reference, registered as a no-op."""

    reference: str
    reason: str

    @property
    def name(self) -> str:
        return self.reference

    def invoke(self, *params: Any) -> None:
        logger.debug("Skipping unresolved handler %r", self.reference)


def resolve_handler(
    handler: Handler | str | HandlerRef,
    targets: Mapping[str, Any],
    *,
    strict: bool = False,
) -> HandlerRef:
    """Turn a registration-time handler value into a ``HandlerRef``.

    Raises ``UnresolvedHandler`` for an unresolvable named reference
    when *strict* is set; otherwise logs a warning and returns a
    ``MissingHandler``. Raises ``ConfigurationError`` for values that
    are neither callable nor a named reference.
    """
    if isinstance(handler, (CallableHandler, MemberHandler, MissingHandler)):
        return handler
    if isinstance(handler, str):
        if "@" not in handler:
            msg = f"Handler string {handler!r} is not a 'Target@Member' reference"
            raise ConfigurationError(msg)
        try:
            return _resolve_reference(handler, targets)
        except UnresolvedHandler as exc:
            if strict:
                raise
            logger.warning("%s; the route will do nothing when matched", exc)
            return MissingHandler(reference=handler, reason=str(exc))
    if callable(handler):
        return CallableHandler(handler)
    msg = f"Route handler must be callable or a 'Target@Member' string, got {type(handler).__name__}"
    raise ConfigurationError(msg)


def _resolve_reference(reference: str, targets: Mapping[str, Any]) -> MemberHandler:
    target_name, _, member = reference.rpartition("@")
    if not target_name or not member:
        raise UnresolvedHandler(reference, "expected 'Target@Member'")

    target = targets.get(target_name)
    if target is None:
        target = _import_target(reference, target_name)

    if inspect.isclass(target):
        try:
            attr = inspect.getattr_static(target, member)
        except AttributeError:
            raise UnresolvedHandler(reference, f"{target.__name__} has no member {member!r}") from None
        static = isinstance(attr, (staticmethod, classmethod))
        if not static and not callable(attr):
            raise UnresolvedHandler(reference, f"{target.__name__}.{member} is not callable")
        if not static and not _constructible(target):
            raise UnresolvedHandler(reference, f"{target.__name__}() needs constructor arguments")
        per_instance = not static
    else:
        if not callable(getattr(target, member, None)):
            raise UnresolvedHandler(reference, f"{target_name} has no callable {member!r}")
        per_instance = False

    return MemberHandler(reference=reference, target=target, member=member, per_instance=per_instance)


def _import_target(reference: str, target_name: str) -> Any:
    """Import ``"pkg.mod:Attr"`` or ``"pkg.mod.Attr"``."""
    if ":" in target_name:
        module_path, _, attr_path = target_name.partition(":")
    else:
        module_path, _, attr_path = target_name.rpartition(".")
    if not module_path or not attr_path:
        raise UnresolvedHandler(reference, f"no registered target named {target_name!r}")

    try:
        obj: Any = importlib.import_module(module_path)
    except ImportError as exc:
        raise UnresolvedHandler(reference, f"cannot import {module_path!r}") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise UnresolvedHandler(reference, f"{module_path!r} has no attribute {attr_path!r}") from None
    return obj


def _constructible(cls: type) -> bool:
    """Whether *cls* can be instantiated without arguments."""
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return True
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in signature.parameters.values()
    )

