"""Shared type aliases used across waymark modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: user-defined function called with positional path params
Handler: TypeAlias = Callable[..., Any]

# Post-dispatch callback, called with no arguments after a handled route
Callback: TypeAlias = Callable[[], Any]
