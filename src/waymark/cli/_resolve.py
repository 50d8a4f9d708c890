"""Router import resolution — resolves ``"module:attribute"`` strings."""

import importlib

from waymark.routing.router import Router
from waymark.server.asgi import RouterApp


def resolve_router(import_string: str) -> Router:
    """Resolve an import string to a waymark ``Router``.

    Accepts ``"module:attribute"`` format. When the attribute portion
    is omitted, defaults to ``"router"``. A ``RouterApp`` resolves to
    the router it wraps; any other callable is treated as a factory
    and called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``Router``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if isinstance(obj, RouterApp):
        obj = obj.router
    elif callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc
        if isinstance(obj, RouterApp):
            obj = obj.router

    if not isinstance(obj, Router):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a waymark.Router instance"
        raise TypeError(msg)

    return obj
