"""Request path normalization."""


def base_path(script_name: str) -> str:
    """Return the directory of the serving script, with a trailing ``/``.

    Examples::

        "/blog/index.py"  -> "/blog/"
        "/index.py"       -> "/"
        ""                -> "/"
    """
    return "/".join(script_name.split("/")[:-1]) + "/"


def normalize_path(uri: str, base: str | None = None) -> str:
    """Reduce a raw request URI to the canonical path the router matches.

    Strips *base* when the URI starts with it, drops the query string,
    then trims surrounding ``/`` and prepends exactly one. Without a
    *base* the result is idempotent.
    """
    if base and uri.startswith(base):
        uri = uri[len(base) :]
    uri = uri.split("?", 1)[0]
    return "/" + uri.strip("/")
