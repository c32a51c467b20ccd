"""Discovery configuration.

DiscoveryConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from perch.errors import ConfigurationError

_PREDICATES = ("is_protected", "include_filter", "exclude_filter")


@dataclass(frozen=True, slots=True)
class DiscoveryConfig:
    """Options for a discovery call. Immutable after creation.

    Every field is optional; the defaults list every route as
    unprotected with no filtering::

        config = DiscoveryConfig(
            domain_filter="users",
            protection_middleware_name="require_auth",
        )
    """

    # Filters
    domain_filter: str | Sequence[str] | None = None
    path_prefix: str | None = None
    show_unprotected_only: bool = False
    include_filter: Callable[[Any], bool] | None = None
    exclude_filter: Callable[[Any], bool] | None = None

    # Protection
    is_protected: Callable[[Any], bool] | None = None
    protection_middleware_name: str | Sequence[str] | None = None

    def __post_init__(self) -> None:
        for name in _PREDICATES:
            value = getattr(self, name)
            if value is not None and not callable(value):
                msg = f"{name} must be callable, got {type(value).__name__}"
                raise ConfigurationError(msg)

    @property
    def domains(self) -> tuple[str, ...]:
        """Domain filter tokens as a tuple (empty when unset)."""
        return _as_tuple(self.domain_filter)

    @property
    def protection_names(self) -> tuple[str, ...]:
        """Protection middleware names as a tuple (empty when unset)."""
        return _as_tuple(self.protection_middleware_name)

    def with_overrides(self, **changes: Any) -> "DiscoveryConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def _as_tuple(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        return (str(value),)
    return tuple(str(v) for v in value if v)
