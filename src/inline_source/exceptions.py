"""Error taxonomy for django-inline-source.

None of these escape the inlining core: each is caught where it is raised
and degraded to "leave as-is" or "fallback".
"""

from __future__ import annotations


class InlineSourceError(Exception):
    """Base class for inlining errors."""


class UnresolvableAsset(InlineSourceError):
    """A referenced asset could not be resolved to content."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Could not resolve: {reference}")
        self.reference = reference


class BuildFailure(InlineSourceError):
    """A nested build for one inline entry failed."""


class MissingCapability(InlineSourceError):
    """The build backend lacks every primitive needed to attempt inlining."""
