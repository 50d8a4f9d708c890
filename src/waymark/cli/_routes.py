"""``waymark routes`` — list registered routes.

Prints one row per route in registration order, which is also the
order in which routes are tried.
"""

import argparse
import sys

from waymark.cli._resolve import resolve_router


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a waymark router.

    Resolves ``args.router`` and prints a table of METHOD, PATTERN and
    HANDLER, optionally filtered by ``args.method``.
    """
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.method:
        routes = list(router.table.routes_for(args.method))
    else:
        routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = "|".join(sorted(route.methods))
        rows.append((methods_str, f"/{route.pattern}", route.handler.name))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = max_methods + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, pattern, handler_name in rows:
        print(fmt.format(methods_str, pattern, handler_name))
