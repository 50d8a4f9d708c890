"""Route pattern compilation.

A pattern is a regular expression over the normalized path (without
its leading ``/``). ``{name}`` and ``{name:type}`` placeholders are
expanded to capture groups before compiling.
"""

import re

from waymark.errors import ConfigurationError
from waymark.routing.params import CONVERTERS

# {name} or {name:type}, or an escape sequence that is left untouched
# (so \{id} stays literal). Quantifiers like {2,3} never match.
_PLACEHOLDER = re.compile(r"\\.|\{([A-Za-z_][A-Za-z0-9_]*)(?::([A-Za-z_]+))?\}")


def strip_pattern(pattern: str) -> str:
    """Strip leading and trailing ``/`` from a route pattern."""
    return pattern.strip("/")


def expand_placeholders(pattern: str) -> str:
    """Replace placeholders with capture groups, preserving their order.

    Examples::

        "users/{id}"            -> "users/([^/]+)"
        "users/{id:int}"        -> "users/(\\d+)"
        "files/{rest:path}"     -> "files/(.+)"
    """

    def replace(match: re.Match[str]) -> str:
        if match.group(1) is None:
            return match.group(0)
        param_type = match.group(2) or "str"
        try:
            return f"({CONVERTERS[param_type]})"
        except KeyError:
            msg = (
                f"Unknown converter {param_type!r} in placeholder {match.group(0)!r}. "
                f"Available: {', '.join(sorted(CONVERTERS))}"
            )
            raise ConfigurationError(msg) from None

    return _PLACEHOLDER.sub(replace, pattern)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a stored (stripped) pattern, anchored at both ends.

    The compiled regex must match an entire normalized path, including
    its leading ``/``. The empty pattern therefore matches only ``/``.
    """
    source = f"^/{expand_placeholders(pattern)}$"
    try:
        return re.compile(source)
    except re.error as exc:
        msg = f"Invalid route pattern {pattern!r}: {exc}"
        raise ConfigurationError(msg) from exc
