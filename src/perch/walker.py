"""Tree walker — depth-first traversal of a layer stack.

Produces one ``RouteRecord`` per declared method of every terminal
route, in declaration order, siblings left to right. Pure: the tree is
only read, and nothing outlives the call.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from perch.decoding import normalize_route_path
from perch.nodes import NestedRouter, OpaqueMiddleware, TerminalRoute, Unrecognized, classify
from perch.paths import combine_paths
from perch.protection import resolve_protection
from perch.records import RouteCheck, RouteRecord


def walk(
    stack: Sequence[Any],
    base_path: str = "/",
    *,
    is_protected: Callable[[RouteCheck], bool] | None = None,
    protection_names: str | Iterable[str] | None = None,
) -> list[RouteRecord]:
    """Collect route records from *stack*, mounted at *base_path*.

    Recursion depth equals the router nesting depth.
    """
    records: list[RouteRecord] = []
    for layer in stack:
        match classify(layer):
            case TerminalRoute() as route:
                records.extend(
                    _route_records(route, base_path, is_protected, protection_names)
                )
            case NestedRouter(matcher=matcher, stack=inner):
                records.extend(
                    walk(
                        inner,
                        combine_paths(base_path, matcher),
                        is_protected=is_protected,
                        protection_names=protection_names,
                    )
                )
            case OpaqueMiddleware(matcher=matcher, stack=inner) if inner is not None:
                records.extend(
                    walk(
                        inner,
                        combine_paths(base_path, matcher),
                        is_protected=is_protected,
                        protection_names=protection_names,
                    )
                )
            case OpaqueMiddleware() | Unrecognized():
                pass
    return records


def _route_records(
    route: TerminalRoute,
    base_path: str,
    is_protected: Callable[[RouteCheck], bool] | None,
    protection_names: str | Iterable[str] | None,
) -> list[RouteRecord]:
    full_path = combine_paths(base_path, normalize_route_path(route.path))
    return [
        RouteRecord(
            method=method,
            path=full_path,
            protected=resolve_protection(
                full_path, method, route.middlewares, is_protected, protection_names
            ),
            middlewares=route.middlewares,
        )
        for method in route.methods
    ]
