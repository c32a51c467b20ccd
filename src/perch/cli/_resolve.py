"""App import resolution — resolves ``"module:attribute"`` strings to apps.

Used by ``perch routes`` to locate the app whose routing tree is read.
"""

import importlib
from typing import Any

from perch.discovery import find_root
from perch.errors import AppResolutionError


def resolve_app(import_string: str) -> Any:
    """Resolve an import string to an object carrying a routing tree.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"app"`` (e.g. ``"myapp"`` resolves to
    ``myapp.app``).

    Supports factory functions: if the resolved object has no router
    but is callable, it is called (assuming it's an app factory).

    Args:
        import_string: Dotted module path with optional ``:attribute``
            suffix (e.g. ``"myapp:app"``, ``"myapp:create_app"``).

    Returns:
        The resolved app object.

    Raises:
        AppResolutionError: If the module or attribute cannot be
            found, the module raised on import, or a factory raised.

    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        msg = f"Cannot import module {module_path!r}: {exc}"
        raise AppResolutionError(msg) from exc
    except Exception as exc:
        msg = f"Module {module_path!r} raised an error on import: {exc}"
        raise AppResolutionError(msg) from exc

    try:
        obj = getattr(module, attr_name)
    except AttributeError as exc:
        msg = f"Module {module_path!r} has no attribute {attr_name!r}"
        raise AppResolutionError(msg) from exc

    # Support factory functions - call them if they don't carry a router
    if find_root(obj) is None and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise AppResolutionError(msg) from exc

    return obj
