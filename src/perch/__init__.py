"""Perch — recover the route table of a live layer-stack app.

Walks a compiled, in-memory routing tree and returns one record per
(method, path): the full path, whether it is protected, and the
middleware attached to it.

Basic usage::

    from perch import DiscoveryConfig, discover, display_routes

    result = discover(app, DiscoveryConfig(protection_middleware_name="require_auth"))
    for route in result:
        print(route.method, route.path, route.protected)

    display_routes(app, DiscoveryConfig(domain_filter="users"))
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AppResolutionError",
    "ConfigurationError",
    "Discovery",
    "DiscoveryConfig",
    "Notice",
    "PerchError",
    "RouteCheck",
    "RouteRecord",
    "Severity",
    "combine_paths",
    "decode_path",
    "discover",
    "display_routes",
    "extract_routes",
    "filter_routes",
    "format_routes",
    "normalize_route_path",
    "print_routes",
    "walk",
]

# name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AppResolutionError": "perch.errors",
    "ConfigurationError": "perch.errors",
    "Discovery": "perch.records",
    "DiscoveryConfig": "perch.config",
    "Notice": "perch.records",
    "PerchError": "perch.errors",
    "RouteCheck": "perch.records",
    "RouteRecord": "perch.records",
    "Severity": "perch.records",
    "combine_paths": "perch.paths",
    "decode_path": "perch.decoding",
    "discover": "perch.discovery",
    "display_routes": "perch.display",
    "extract_routes": "perch.discovery",
    "filter_routes": "perch.filters",
    "format_routes": "perch.terminal",
    "normalize_route_path": "perch.decoding",
    "print_routes": "perch.terminal",
    "walk": "perch.walker",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
