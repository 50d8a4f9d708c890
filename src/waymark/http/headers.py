"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]``. Names are stored in canonical
``Title-Case-With-Hyphens`` form so lookups tolerate transports that
do not preserve header casing.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

# CGI/WSGI keys that carry headers without the HTTP_ prefix
_UNPREFIXED_ENVIRON_KEYS = ("CONTENT_TYPE", "CONTENT_LENGTH")


def canonical_name(name: str) -> str:
    """Return *name* in canonical header form.

    Examples::

        "x-http-method-override"      -> "X-HTTP-Method-Override"
        "CONTENT_TYPE"                -> "Content-Type"
        "  accept  "                  -> "Accept"
    """
    words = name.strip().replace("_", "-").lower().split("-")
    return "-".join("HTTP" if word == "http" else word.capitalize() for word in words)


def headers_from_environ(environ: Mapping[str, Any]) -> "Headers":
    """Reconstruct request headers from a WSGI/CGI environ.

    Used when the transport has no native header enumeration: every
    ``HTTP_*`` key plus ``CONTENT_TYPE`` and ``CONTENT_LENGTH`` becomes
    a header with a canonical name.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in environ.items():
        if not isinstance(key, str):
            continue
        if key.startswith("HTTP_"):
            pairs.append((canonical_name(key[5:]), str(value)))
        elif key in _UNPREFIXED_ENVIRON_KEYS and value != "":
            pairs.append((canonical_name(key), str(value)))
    return Headers(pairs)


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header.
    """

    __slots__ = ("_pairs",)

    def __init__(
        self,
        pairs: Mapping[str, str] | Iterable[tuple[str | bytes, str | bytes]] = (),
    ) -> None:
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        normalized = tuple((canonical_name(_text(name)), _text(value)) for name, value in items)
        object.__setattr__(self, "_pairs", normalized)

    def __getitem__(self, key: str) -> str:
        wanted = canonical_name(key)
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = canonical_name(key)
        return any(name == wanted for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._pairs:
            if name not in seen:
                seen.add(name)
                yield name

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        wanted = canonical_name(key)
        return [value for name, value in self._pairs if name == wanted]


def _text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value
