"""Terminal formatting for discovered routes.

Sorts records by domain and method, groups them under a domain label,
and colors methods. Respects TTY detection — no ANSI codes when piped
or redirected.

Example output (without color)::

    DOMAIN     │ METHOD │ PATH            │ PROTECTION
    ─────────────────────────────────────────────────────────
    Posts      │ GET    │ /api/posts      │ 🌐
               │ POST   │ /api/posts      │ 🔒
    Root       │ GET    │ /health         │ 🌐

"""

import os
import sys
from collections.abc import Iterable
from typing import IO

from perch.records import RouteRecord

METHOD_PRIORITY = {"GET": 0, "POST": 1, "PUT": 2, "PATCH": 3, "DELETE": 4}
EMPTY_MESSAGE = "No routes found matching your criteria"

_LOCK = "\U0001f512"  # 🔒
_GLOBE = "\U0001f310"  # 🌐
_BAR = "│"  # │
_RULE = "─"  # ─


# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------

_SGR = {
    "reset": 0,
    "bold": 1,
    "dim": 2,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}


def _use_color(stream: IO[str] | None = None) -> bool:
    """Color only for an interactive stream; ``NO_COLOR`` turns it off."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream or sys.stdout, "isatty", None)
    try:
        return bool(isatty and isatty())
    except (OSError, ValueError):
        return False


class _Palette:
    """Escape sequences by SGR name (``c.green``); all ``""`` when disabled."""

    __slots__ = ("_enabled",)

    def __init__(self, *, enabled: bool) -> None:
        self._enabled = enabled

    def __getattr__(self, name: str) -> str:
        code = _SGR.get(name)
        if code is None:
            raise AttributeError(name)
        return f"\033[{code}m" if self._enabled else ""


def _method_color(method: str, c: _Palette) -> str:
    match method:
        case "GET":
            return c.green
        case "POST":
            return c.blue
        case "PUT":
            return c.yellow
        case "DELETE":
            return c.red
        case "PATCH":
            return c.magenta
        case _:
            return c.dim


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def extract_domain(path: str) -> str:
    """Domain of a path: ``/api/users/1`` -> ``users``; anything else -> ``root``."""
    parts = [p for p in path.split("/") if p]
    if len(parts) >= 2 and parts[0] == "api":
        return parts[1]
    return "root"


def format_domain_name(domain: str) -> str:
    if domain == "root":
        return "Root"
    return domain[:1].upper() + domain[1:]


def sort_routes(routes: Iterable[RouteRecord]) -> list[RouteRecord]:
    """Sorted copy: by domain (case-insensitive), then method priority. Stable within ties."""
    return sorted(
        routes,
        key=lambda r: (extract_domain(r.path).lower(), METHOD_PRIORITY.get(r.method, 99)),
    )


def group_routes(routes: Iterable[RouteRecord]) -> dict[str, list[RouteRecord]]:
    """Group sorted records by domain, groups in domain order."""
    groups: dict[str, list[RouteRecord]] = {}
    for route in sort_routes(routes):
        groups.setdefault(extract_domain(route.path), []).append(route)
    return dict(sorted(groups.items(), key=lambda item: item[0].lower()))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_routes(routes: Iterable[RouteRecord], *, color: bool | None = None) -> str:
    """Format records as a grouped table.

    Args:
        routes: Records to show. The caller's sequence is not reordered.
        color: Force color on/off.  ``None`` auto-detects from stdout.

    Returns:
        Multi-line string ready for ``print()``.
    """
    use = color if color is not None else _use_color()
    c = _Palette(enabled=use)

    groups = group_routes(routes)
    if not groups:
        return f"{c.yellow}{EMPTY_MESSAGE}{c.reset}"

    rows = [route for group in groups.values() for route in group]
    method_width = max(max(len(r.method) for r in rows), 6)
    path_width = max(max(len(r.path) for r in rows), 10)
    group_width = max(max(len(format_domain_name(g)) for g in groups), 10)

    lines: list[str] = []
    header = (
        f"{'DOMAIN'.ljust(group_width)} {_BAR} "
        f"{'METHOD'.ljust(method_width)} {_BAR} "
        f"{'PATH'.ljust(path_width)} {_BAR} "
        "PROTECTION"
    )
    lines.append(f"{c.bold}{c.white}{header}{c.reset}")
    lines.append(f"{c.dim}{_RULE * (group_width + method_width + path_width + 20)}{c.reset}")

    for domain, group in groups.items():
        label = format_domain_name(domain)
        for i, route in enumerate(group):
            shown = label if i == 0 else ""
            icon = _LOCK if route.protected else _GLOBE
            lines.append(
                f"{c.bold}{c.cyan}{shown.ljust(group_width)}{c.reset} {_BAR} "
                f"{_method_color(route.method, c)}{route.method.ljust(method_width)}{c.reset} {_BAR} "
                f"{c.white}{route.path.ljust(path_width)}{c.reset} {_BAR} "
                f"{icon}"
            )

    lines.append("")
    return "\n".join(lines)


def print_routes(
    routes: Iterable[RouteRecord],
    *,
    file: IO[str] | None = None,
    color: bool | None = None,
) -> None:
    """Print records as a grouped table to *file* (default stdout)."""
    out = file or sys.stdout
    use = color if color is not None else _use_color(out)
    print(format_routes(routes, color=use), file=out)
