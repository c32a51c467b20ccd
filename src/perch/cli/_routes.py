"""``perch routes`` — list registered routes.

Resolves an import string to an app, discovers its routes, and prints
them as a grouped table, JSON, or an HTML page.
"""

import argparse
import logging
import sys

from perch.cli._resolve import resolve_app
from perch.config import DiscoveryConfig
from perch.discovery import discover, log_notices
from perch.errors import AppResolutionError

logger = logging.getLogger("perch.cli")


def build_config(args: argparse.Namespace) -> DiscoveryConfig:
    """Translate CLI flags into a ``DiscoveryConfig``."""
    return DiscoveryConfig(
        domain_filter=tuple(args.domain) if args.domain else None,
        path_prefix=args.prefix,
        show_unprotected_only=args.unprotected,
        protection_middleware_name=tuple(args.protect) if args.protect else None,
    )


def run_routes(args: argparse.Namespace) -> None:
    """List routes for an app.

    Resolves ``args.app``, runs discovery with the filters from the
    command line, and writes the result to stdout. Notices go to the
    ``perch.cli`` logger.
    """
    try:
        app = resolve_app(args.app)
    except AppResolutionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = discover(app, build_config(args))
    log_notices(result, logger)

    if args.format == "json":
        from perch.report import to_json

        print(to_json(result.routes))
    elif args.format == "html":
        from perch.report import render_html

        print(render_html(result.routes, title=f"Routes: {args.app}"))
    else:
        from perch.terminal import print_routes

        print_routes(result.routes, color=False if args.no_color else None)
