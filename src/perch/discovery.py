"""Discovery entry point — routing tree in, filtered route records out.

``discover`` never raises for any tree shape. A missing or empty root
stack is reported as a ``Notice`` on the result; the caller decides
whether and how to surface it.
"""

import logging
from typing import Any

from perch.config import DiscoveryConfig
from perch.filters import filter_routes
from perch.nodes import field, stack_of
from perch.records import Discovery, Notice, RouteRecord, Severity
from perch.walker import walk

logger = logging.getLogger("perch")

_ROOT_ATTRS = ("_router", "router")

NO_ROUTER = Notice(
    severity=Severity.WARNING,
    code="no-router",
    message="No router found on the app. The app may be empty or not initialized properly.",
)
EMPTY_ROUTER = Notice(
    severity=Severity.WARNING,
    code="empty-router",
    message="The app's router has no layers. No routes are registered yet.",
)


def find_root(app: Any) -> Any:
    """Locate the root router of *app*, or ``None``.

    Looks at ``_router``, then ``router``, then treats *app* itself as
    the root when it exposes a ``stack``.
    """
    for name in _ROOT_ATTRS:
        root = field(app, name)
        if root is not None:
            return root
    if field(app, "stack") is not None:
        return app
    return None


def discover(app: Any, config: DiscoveryConfig | None = None) -> Discovery:
    """Discover every route on *app* and apply the configured filters."""
    config = config or DiscoveryConfig()

    root = find_root(app)
    if root is None:
        return Discovery(notices=(NO_ROUTER,))

    stack = stack_of(root)
    if not stack:
        return Discovery(notices=(EMPTY_ROUTER,))

    routes = walk(
        stack,
        "/",
        is_protected=config.is_protected,
        protection_names=config.protection_names,
    )
    return Discovery(routes=tuple(filter_routes(routes, config)))


def log_notices(result: Discovery, log: logging.Logger = logger) -> None:
    """Forward a result's notices to *log* at their severity."""
    for notice in result.notices:
        level = logging.WARNING if notice.severity == Severity.WARNING else logging.INFO
        log.log(level, notice.message)


def extract_routes(app: Any, config: DiscoveryConfig | None = None) -> list[RouteRecord]:
    """Discover routes and return the records, logging any notices."""
    result = discover(app, config)
    log_notices(result)
    return list(result.routes)
