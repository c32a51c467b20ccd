"""``display_routes`` — discover and print in one call."""

from typing import IO, Any

from perch.config import DiscoveryConfig
from perch.discovery import discover, log_notices
from perch.records import Discovery
from perch.terminal import print_routes


def display_routes(
    app: Any,
    config: DiscoveryConfig | None = None,
    *,
    file: IO[str] | None = None,
    color: bool | None = None,
) -> Discovery:
    """Print the routes of *app* as a grouped table.

    Notices are logged to the ``perch`` logger. Returns the discovery
    result so callers can inspect what was printed.
    """
    result = discover(app, config)
    log_notices(result)
    print_routes(result.routes, file=file, color=color)
    return result
