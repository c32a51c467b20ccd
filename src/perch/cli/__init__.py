"""Perch CLI — list the routes of a live app.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — recover the route table of a live layer-stack app.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    routes_parser.add_argument(
        "--domain",
        action="append",
        default=None,
        help="Only routes with this path segment (repeatable)",
    )
    routes_parser.add_argument("--prefix", default=None, help="Only paths starting with this prefix")
    routes_parser.add_argument(
        "--unprotected",
        action="store_true",
        help="Only routes that are not protected",
    )
    routes_parser.add_argument(
        "--protect",
        action="append",
        default=None,
        metavar="NAME",
        help="Middleware name that marks a route as protected (repeatable)",
    )
    routes_parser.add_argument(
        "--format",
        choices=("table", "json", "html"),
        default="table",
        help="Output format (default: table)",
    )
    routes_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in table output",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
