"""Protection resolution — decide whether a route counts as protected.

Precedence, first applicable wins:

1. A custom ``is_protected`` predicate, called with a ``RouteCheck``.
2. Named middleware: protected iff any attached middleware's name
   equals one of the given names exactly.
3. Unprotected.

There is no built-in naming heuristic; a middleware called ``auth`` is
not special unless the caller names it.
"""

import functools
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from perch.nodes import field
from perch.records import RouteCheck


def middleware_name(middleware: Any) -> str | None:
    """Identifying name of a middleware, or ``None``.

    Reads ``__name__`` (functions, classes), then a ``name`` field
    (descriptors, dict nodes). ``functools.partial`` is unwrapped.
    """
    while isinstance(middleware, functools.partial):
        middleware = middleware.func
    if middleware is None:
        return None
    name = None if isinstance(middleware, Mapping) else field(middleware, "__name__")
    if isinstance(name, str) and name:
        return name
    name = field(middleware, "name")
    return name if isinstance(name, str) and name else None


def resolve_protection(
    path: str,
    method: str,
    middlewares: Sequence[Any],
    is_protected: Callable[[RouteCheck], bool] | None = None,
    protection_names: str | Iterable[str] | None = None,
) -> bool:
    """Resolve the protection flag for one (method, path) record."""
    if is_protected is not None:
        check = RouteCheck(path=path, method=method.upper(), middlewares=tuple(middlewares))
        return bool(is_protected(check))

    if isinstance(protection_names, str):
        names = frozenset({protection_names})
    else:
        names = frozenset(protection_names or ())
    if names:
        return any(middleware_name(mw) in names for mw in middlewares)

    return False
