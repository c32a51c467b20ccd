"""Perch exception hierarchy.

The discovery engine never raises for any routing-tree shape; these
types cover misuse around it (bad configuration, unresolvable apps).
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a ``DiscoveryConfig`` is invalid.

    Typically raised at construction time, before any tree is walked.
    """


class AppResolutionError(PerchError):
    """Raised when an import string cannot be resolved to a routable app."""
