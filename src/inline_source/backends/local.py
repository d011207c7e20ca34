"""Backends that build inline assets in-process with the configured builders."""

from __future__ import annotations

import asyncio

from ..conf import get_setting
from ..exceptions import MissingCapability
from ..graph import Artifact, ArtifactType
from ..registry import InlineEntry
from ..utils import build_asset, import_class
from .base import ChildBuildBackend, DirectBackend


def _check_builders() -> None:
    for key in ("JS_BUILDER", "CSS_BUILDER"):
        path = get_setting(key)
        try:
            import_class(path)
        except (ImportError, AttributeError, ValueError) as e:
            raise MissingCapability(f"{key} {path!r} cannot be imported: {e}") from e


class LocalChildBuildBackend(ChildBuildBackend):
    """Nested builds run through :func:`inline_source.utils.build_asset`.

    Each build yields a single artifact named after the entry's marker.
    """

    name = "local-child-build"

    def check(self) -> None:
        _check_builders()

    async def build_child(self, entry: InlineEntry, marker: str) -> list[Artifact]:
        content = await asyncio.to_thread(
            build_asset, entry.path, entry.kind, self.overrides
        )
        return [
            Artifact(
                file_name=f"__inline_build_{marker}.{entry.kind.value}",
                type=ArtifactType.CHUNK,
                content=content,
            )
        ]


class LocalDirectBackend(DirectBackend):
    """Single-file builds at load time, for hosts that cannot defer."""

    name = "local-direct"

    def check(self) -> None:
        _check_builders()

    async def build_file(self, entry: InlineEntry) -> str | None:
        return await asyncio.to_thread(
            build_asset, entry.path, entry.kind, self.overrides
        )
