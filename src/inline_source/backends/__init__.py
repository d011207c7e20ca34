from .base import (
    ArtifactEmissionBackend,
    BuildBackend,
    Capability,
    ChildBuildBackend,
    DirectBackend,
)
from .local import LocalChildBuildBackend, LocalDirectBackend

__all__ = [
    "ArtifactEmissionBackend",
    "BuildBackend",
    "Capability",
    "ChildBuildBackend",
    "DirectBackend",
    "LocalChildBuildBackend",
    "LocalDirectBackend",
]
