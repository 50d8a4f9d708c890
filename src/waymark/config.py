"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass

ALLOWED_METHODS: frozenset[str] = frozenset({"DELETE", "GET", "PATCH", "POST", "PUT"})


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(relative_routing=True, strict_handlers=True)
    """

    # Strip the serving script's directory from request paths, so one
    # router can be mounted in a sub folder (e.g. /blog/index.py -> /blog/)
    relative_routing: bool = False

    # Method override (POST tunnelling for clients limited to GET/POST)
    override_header: str = "X-HTTP-Method-Override"
    override_methods: frozenset[str] = frozenset({"PUT", "DELETE", "PATCH"})

    # Raise UnresolvedHandler at registration instead of registering a no-op
    strict_handlers: bool = False
