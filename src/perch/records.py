"""RouteRecord, Notice, and Discovery frozen dataclasses."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """One discovered (method, path) pair.

    Created fresh on every discovery call, never mutated afterwards.
    ``middlewares`` keeps the route's handler order.
    """

    method: str
    path: str
    protected: bool
    middlewares: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class RouteCheck:
    """What a custom ``is_protected`` predicate receives.

    ``method`` is always upper-cased.
    """

    path: str
    method: str
    middlewares: tuple[Any, ...]


class Severity(Enum):
    """Severity of a discovery notice."""

    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Notice:
    """A diagnostic produced during discovery instead of an exception."""

    severity: Severity
    code: str
    message: str


@dataclass(frozen=True, slots=True)
class Discovery:
    """Result of a discovery call: the records plus any notices.

    Iterates over the records, so ``list(discover(app))`` works::

        result = discover(app)
        for notice in result.notices:
            ...
        for route in result:
            print(route.method, route.path)
    """

    routes: tuple[RouteRecord, ...] = ()
    notices: tuple[Notice, ...] = ()

    def __iter__(self) -> Iterator[RouteRecord]:
        return iter(self.routes)

    def __len__(self) -> int:
        return len(self.routes)

    @property
    def warnings(self) -> list[Notice]:
        return [n for n in self.notices if n.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        """True when discovery produced no warnings."""
        return not self.warnings
