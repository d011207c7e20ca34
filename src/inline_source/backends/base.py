"""Build backend interface.

A backend is the engine's view of the hosting bundler. Its capability is a
static fact of the integration, not something probed at runtime:

- ``ARTIFACT_EMISSION``: the bundler can emit extra chunks during the build
  and report their output names afterwards (Rollup-style ``emitFile``).
- ``CHILD_BUILD``: the bundler cannot emit chunks but can run an isolated
  nested build at finalization (webpack-style child compilers).
- ``NONE``: no deferral is possible; content is resolved while loading.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar

from ..conf import get_setting
from ..graph import Artifact
from ..registry import InlineEntry


class Capability(str, Enum):
    ARTIFACT_EMISSION = "artifact-emission"
    CHILD_BUILD = "child-build"
    NONE = "none"


class BuildBackend(ABC):
    """Abstract base class for build backends."""

    capability: ClassVar[Capability]
    name: ClassVar[str] = "backend"

    def __init__(
        self,
        overrides: Mapping[str, Any] | None = None,
        fallback_to_raw_file: bool | None = None,
    ) -> None:
        if overrides is None:
            overrides = get_setting("BUILD_OVERRIDES")
        self.overrides: dict[str, Any] = dict(overrides)
        if fallback_to_raw_file is None:
            fallback_to_raw_file = get_setting("FALLBACK_TO_RAW_FILE")
        self.fallback_to_raw_file: bool = bool(fallback_to_raw_file)

    def check(self) -> None:
        """Verify the backend can attempt inlining at all.

        Raises:
            MissingCapability: If a primitive the engine needs is unavailable.
        """


class ArtifactEmissionBackend(BuildBackend):
    capability = Capability.ARTIFACT_EMISSION

    @abstractmethod
    def emit_chunk(self, module_id: str) -> str:
        """Ask the bundler to emit a chunk rooted at ``module_id``; return its handle."""
        ...

    @abstractmethod
    def get_file_name(self, handle: str) -> str:
        """Return the output file name of an emitted chunk (after the build)."""
        ...


class ChildBuildBackend(BuildBackend):
    capability = Capability.CHILD_BUILD

    @abstractmethod
    async def build_child(self, entry: InlineEntry, marker: str) -> list[Artifact]:
        """Run an isolated nested build for one entry.

        Raises:
            BuildFailure: If the nested build fails.
        """
        ...


class DirectBackend(BuildBackend):
    capability = Capability.NONE

    async def build_file(self, entry: InlineEntry) -> str | None:
        """Build one file at load time with the bundler's minimal primitive.

        Returns None when the bundler exposes no such primitive, in which
        case the raw file is inlined.
        """
        return None
