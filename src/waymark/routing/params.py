"""Path parameter converters and positional parameter extraction.

Built-in converters for placeholders like ``{id:int}``, and the
offset-based slicing that turns a regex match into handler arguments.
"""

import re

# Regex fragment for each supported placeholder converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


def extract_params(match: re.Match[str]) -> tuple[str | None, ...]:
    """Return the positional parameters for a successful route match.

    One value per capture group, in group order. A group followed by a
    group that participated in the match is cut at that group's start
    offset, so adjacent optional groups do not bleed into each other.
    Every value has surrounding ``/`` trimmed. Groups that did not
    participate yield ``None``.

    Examples (pattern -> path -> params)::

        "users/(\\w+)"                 "/users/ann"      -> ("ann",)
        "blog(/\\d+)?(/\\d+)?"         "/blog/2024/07"   -> ("2024", "07")
        "blog(/\\d+)?(/\\d+)?"         "/blog"           -> (None, None)
    """
    params: list[str | None] = []
    count = match.re.groups
    for index in range(1, count + 1):
        value = match.group(index)
        if value is None:
            params.append(None)
            continue
        if index < count and match.start(index + 1) != -1:
            value = value[: max(match.start(index + 1) - match.start(index), 0)]
        params.append(value.strip("/"))
    return tuple(params)
