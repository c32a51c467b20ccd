"""Filter pipeline — narrow a record set by domain, prefix, protection, predicates.

Filters run in a fixed order: domain, path prefix, unprotected-only,
include, exclude. Each one only removes records.
"""

from collections.abc import Callable, Iterable

from perch.config import DiscoveryConfig
from perch.records import RouteRecord


def path_segments(path: str) -> list[str]:
    """Non-empty ``/``-delimited segments of *path*, lower-cased."""
    return [segment for segment in path.lower().split("/") if segment]


def filter_by_domain(routes: Iterable[RouteRecord], domains: Iterable[str]) -> list[RouteRecord]:
    """Keep records with any path segment equal to a domain token.

    Matching is case-insensitive; a leading ``/`` on a token is ignored.
    """
    tokens = {token.lower().removeprefix("/") for token in domains}
    return [r for r in routes if tokens.intersection(path_segments(r.path))]


def filter_by_prefix(routes: Iterable[RouteRecord], prefix: str) -> list[RouteRecord]:
    return [r for r in routes if r.path.startswith(prefix)]


def filter_unprotected(routes: Iterable[RouteRecord]) -> list[RouteRecord]:
    return [r for r in routes if not r.protected]


def filter_include(
    routes: Iterable[RouteRecord], predicate: Callable[[RouteRecord], bool]
) -> list[RouteRecord]:
    return [r for r in routes if predicate(r)]


def filter_exclude(
    routes: Iterable[RouteRecord], predicate: Callable[[RouteRecord], bool]
) -> list[RouteRecord]:
    return [r for r in routes if not predicate(r)]


def filter_routes(routes: Iterable[RouteRecord], config: DiscoveryConfig) -> list[RouteRecord]:
    """Apply every filter configured in *config*, in pipeline order."""
    result = list(routes)
    if config.domains:
        result = filter_by_domain(result, config.domains)
    if config.path_prefix:
        result = filter_by_prefix(result, config.path_prefix)
    if config.show_unprotected_only:
        result = filter_unprotected(result)
    if config.include_filter is not None:
        result = filter_include(result, config.include_filter)
    if config.exclude_filter is not None:
        result = filter_exclude(result, config.exclude_filter)
    return result
