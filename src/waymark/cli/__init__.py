"""Waymark CLI — route table inspection.

Entry point registered as ``waymark`` in ``pyproject.toml``::

    [project.scripts]
    waymark = "waymark.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waymark`` command."""
    parser = argparse.ArgumentParser(
        prog="waymark",
        description="Waymark — a small first-match HTTP request router.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waymark routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )
    routes_parser.add_argument(
        "--method",
        default=None,
        help="Only list routes registered for this method",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waymark.cli._routes import run_routes

        run_routes(args)
