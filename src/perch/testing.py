"""Tree builders for exercising discovery without a live server.

Builds routing trees in the layer-stack shape discovery reads, with
mount matchers compiled the way a layer-stack framework compiles them::

    from perch.testing import App, Router

    api = Router()
    api.route("/users", "get", "post")

    app = App()
    app.use("/api", api)

    [(r.method, r.path) for r in discover(app)]
    # [("GET", "/api/users"), ("POST", "/api/users")]
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

_TOKEN = re.compile(r"(/?):(\w+)(\?)?|(\*)|([/.])|([^/.:*]+|:)")


def compile_mount(
    path: str,
    *,
    end: bool = False,
    strict: bool = False,
    sensitive: bool = False,
) -> re.Pattern[str]:
    """Compile a mount or route path into its matcher.

    ``end=False`` produces a prefix matcher (router mounts, middleware);
    ``end=True`` anchors the whole path (route layers).

    Examples::

        compile_mount("/api")       -> ^\\/api\\/?(?=\\/|$)
        compile_mount("/users/:id") -> ^\\/users\\/(?:([^\\/]+?))\\/?(?=\\/|$)
        compile_mount("/")          -> ^\\/?(?=\\/|$)
    """
    source = path if strict else path.removesuffix("/")
    parts = ["^"]
    for match in _TOKEN.finditer(source):
        slash, name, optional, star, separator, literal = match.groups()
        if name:
            lead = "\\/" if slash else ""
            if optional:
                parts.append(f"(?:{lead}([^\\/]+?))?")
            else:
                parts.append(f"{lead}(?:([^\\/]+?))")
        elif star:
            parts.append("(.*)")
        elif separator:
            parts.append("\\" + separator)
        else:
            parts.append(re.escape(literal))
    if not strict:
        parts.append("\\/?")
    parts.append("$" if end else "(?=\\/|$)")
    return re.compile("".join(parts), 0 if sensitive else re.IGNORECASE)


def _noop(*args: Any, **kwargs: Any) -> None:
    return None


@dataclass(slots=True)
class Handler:
    """Per-method wrapper inside a route's stack."""

    handle: Callable[..., Any]
    method: str | None = None


@dataclass(slots=True)
class RouteDescriptor:
    path: Any
    methods: dict[str, bool] = field(default_factory=dict)
    stack: list[Handler] = field(default_factory=list)


@dataclass(slots=True)
class Layer:
    handle: Any
    name: str = "<anonymous>"
    regexp: Any = None
    route: RouteDescriptor | None = None


class Router:
    """A mountable router: callable, with an ordered ``stack`` of layers."""

    def __init__(self) -> None:
        self.stack: list[Layer] = []

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        return None

    def route(self, path: Any, *methods: str, middlewares: tuple[Any, ...] = ()) -> "Router":
        """Declare *path* for *methods*, each with the given middleware chain."""
        descriptor = RouteDescriptor(
            path=path,
            methods={method.lower(): True for method in methods},
            stack=[Handler(handle=h) for h in middlewares],
        )
        matcher = compile_mount(path, end=True) if isinstance(path, str) else path
        self.stack.append(
            Layer(handle=_noop, name="bound dispatch", regexp=matcher, route=descriptor)
        )
        return self

    def use(self, path: str | Callable[..., Any], handle: Any = None) -> "Router":
        """Mount a router or middleware at *path* (default ``/``)."""
        if handle is None:
            path, handle = "/", path
        name = "router" if isinstance(handle, Router) else getattr(handle, "__name__", "<anonymous>")
        self.stack.append(Layer(handle=handle, name=name, regexp=compile_mount(str(path))))
        return self


class App:
    """Minimal app exposing its root router as ``_router``."""

    def __init__(self) -> None:
        self._router = Router()

    def route(self, path: Any, *methods: str, middlewares: tuple[Any, ...] = ()) -> "App":
        self._router.route(path, *methods, middlewares=middlewares)
        return self

    def use(self, path: str | Callable[..., Any], handle: Any = None) -> "App":
        self._router.use(path, handle)
        return self
