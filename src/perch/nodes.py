"""Layer classification — one exhaustive match over the routing tree's layers.

A layer-stack router holds an ordered list of layers. Each layer is
one of:

- ``TerminalRoute``    — carries a route descriptor (path, methods, handlers)
- ``NestedRouter``     — a mounted router (kind tag ``"router"``) with its own stack
- ``OpaqueMiddleware`` — a callable mounted at a matcher; may hide a stack
- ``Unrecognized``     — anything else (static-file handlers, junk); inert

Fields are read as attributes or mapping keys, so dict dumps of a
tree classify the same way as live objects.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from perch.decoding import CompiledMatcher

_MISSING = object()


def field(node: Any, name: str) -> Any:
    """Read *name* from a node as an attribute or mapping key. Never raises."""
    if node is None or isinstance(node, (str, bytes, int, float, bool)):
        return None
    if isinstance(node, Mapping):
        return node.get(name)
    try:
        value = getattr(node, name, _MISSING)
    except Exception:
        return None
    return None if value is _MISSING else value


def stack_of(handle: Any) -> Sequence[Any] | None:
    """A node's layer stack as a sequence, or ``None`` when it has none."""
    stack = field(handle, "stack")
    if stack is None or isinstance(stack, (str, bytes, Mapping)):
        return None
    if isinstance(stack, Sequence):
        return stack
    if isinstance(stack, Iterable):
        try:
            return tuple(stack)
        except Exception:
            return None
    return None


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_route_layer(layer: Any) -> bool:
    """True iff the layer carries a route descriptor."""
    return field(layer, "route") is not None


def is_nested_router(layer: Any) -> bool:
    """True iff the layer is tagged ``"router"`` and its handle has a stack."""
    return field(layer, "name") == "router" and stack_of(field(layer, "handle")) is not None


def is_opaque_middleware(layer: Any) -> bool:
    """True iff the layer's handle is callable and the layer has a matcher."""
    return callable(field(layer, "handle")) and field(layer, "regexp") is not None


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TerminalRoute:
    path: Any
    methods: tuple[str, ...]
    middlewares: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class NestedRouter:
    matcher: CompiledMatcher | None
    stack: Sequence[Any]


@dataclass(frozen=True, slots=True)
class OpaqueMiddleware:
    """A mounted callable. ``stack`` is ``None`` for plain middleware."""

    matcher: CompiledMatcher | None
    handle: Any
    stack: Sequence[Any] | None


@dataclass(frozen=True, slots=True)
class Unrecognized:
    layer: Any


type Node = TerminalRoute | NestedRouter | OpaqueMiddleware | Unrecognized


def declared_methods(route: Any) -> tuple[str, ...]:
    """Declared HTTP methods of a route descriptor, in declaration order.

    ``methods`` is normally a mapping of verb to flag; an iterable of
    verbs is accepted too. Verbs are upper-cased and de-duplicated.
    """
    methods = field(route, "methods")
    if methods is None or isinstance(methods, (bytes, int, float, bool)):
        return ()
    if isinstance(methods, str):
        names: Iterable[Any] = (methods,)
    elif isinstance(methods, Mapping):
        names = (name for name, declared in methods.items() if declared)
    elif isinstance(methods, Iterable):
        names = methods
    else:
        return ()

    seen: dict[str, None] = {}
    for name in names:
        if isinstance(name, str) and name:
            seen.setdefault(name.upper(), None)
    return tuple(seen)


def extract_middlewares(route: Any) -> tuple[Any, ...]:
    """Handlers attached to a route: each wrapper's ``handle``, or the wrapper."""
    stack = stack_of(route) or ()
    result: list[Any] = []
    for wrapper in stack:
        handle = field(wrapper, "handle")
        result.append(handle if handle is not None else wrapper)
    return tuple(result)


def classify(layer: Any) -> Node:
    """Classify one layer. Total: unknown shapes become ``Unrecognized``."""
    if is_route_layer(layer):
        route = field(layer, "route")
        return TerminalRoute(
            path=field(route, "path"),
            methods=declared_methods(route),
            middlewares=extract_middlewares(route),
        )
    if is_nested_router(layer):
        return NestedRouter(
            matcher=CompiledMatcher.of(field(layer, "regexp")),
            stack=stack_of(field(layer, "handle")) or (),
        )
    if is_opaque_middleware(layer):
        handle = field(layer, "handle")
        return OpaqueMiddleware(
            matcher=CompiledMatcher.of(field(layer, "regexp")),
            handle=handle,
            stack=stack_of(handle),
        )
    return Unrecognized(layer)
