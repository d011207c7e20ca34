"""Per-build inlining session: discovery hooks for the two-phase protocol.

Phase 1 runs while the bundler walks the module graph:

    transform()   component source -> imports of "<path>?__inline_build"
    resolve_id()  "<path>?__inline_build" -> marker module id (deferred)
                  or "<abs path>?__inline_build" (direct)
    load()        marker module id -> export default "__INLINE_BUILD_0__"
                  direct id        -> export default "<built content>"

Phase 2 (:meth:`InlineSession.finalize`) runs once the output set is
complete and swaps every marker for the asset's final content.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from enum import Enum
from pathlib import Path

from .backends.base import (
    ArtifactEmissionBackend,
    BuildBackend,
    Capability,
    DirectBackend,
)
from .components import transform_component_source
from .conf import get_project_root, get_setting
from .exceptions import MissingCapability
from .finalize import FinalizeResult, finalize_graph
from .graph import BuildGraph
from .paths import AssetKind, get_asset_kind, resolve_inline_path
from .registry import InlineEntry, MarkerRegistry
from .utils import read_source

logger = logging.getLogger(__name__)

INLINE_QUERY = "?__inline_build"
BUILD_PREFIX = "\0inline-build:"
CSS_LOADER_PREFIX = "\0inline-css:"

_COMPONENT_MODULE_RE = re.compile(r"\.[jt]sx$")


class ProtocolMode(str, Enum):
    DIRECT = "direct"
    MARKER = "marker"


class InlineSession:
    """State for one build invocation.

    The protocol mode follows from the backend's capability and is fixed
    for the session's lifetime. Create a new session for every build.
    """

    def __init__(
        self,
        backend: BuildBackend,
        attribute: str | None = None,
        root: str | Path | None = None,
    ) -> None:
        self.backend = backend
        self.attribute: str = attribute or get_setting("ATTRIBUTE")
        self.root = Path(root) if root is not None else get_project_root()
        self.registry = MarkerRegistry()
        if backend.capability is Capability.NONE:
            self.mode = ProtocolMode.DIRECT
        else:
            self.mode = ProtocolMode.MARKER

        self.enabled = True
        try:
            backend.check()
        except MissingCapability as e:
            self.enabled = False
            logger.warning("Inlining skipped for %s backend: %s", backend.name, e)

    @property
    def deferred(self) -> bool:
        return self.mode is ProtocolMode.MARKER

    def transform(self, code: str, module_id: str) -> str | None:
        """Rewrite marked tags in JSX/TSX modules; other modules are ignored."""
        if not self.enabled or not _COMPONENT_MODULE_RE.search(module_id):
            return None
        return transform_component_source(code, self.attribute, INLINE_QUERY)

    def resolve_id(self, source: str, importer: str | None = None) -> str | None:
        """Resolve an inline import specifier to the id the bundler should load."""
        if not self.enabled:
            return None
        if source.startswith(CSS_LOADER_PREFIX):
            return source
        if not source.endswith(INLINE_QUERY):
            return None

        resolved = resolve_inline_path(source[: -len(INLINE_QUERY)], importer, self.root)
        if not self.deferred:
            return f"{resolved}{INLINE_QUERY}"

        kind = get_asset_kind(resolved)
        marker = self.registry.register(resolved, kind)
        if isinstance(self.backend, ArtifactEmissionBackend):
            entry = self.registry[marker]
            if kind is AssetKind.SCRIPT:
                entry.handle = self.backend.emit_chunk(str(resolved))
            else:
                # The bundler's CSS pipeline processes the loader's import and
                # attaches the extracted stylesheet to the loader chunk.
                entry.handle = self.backend.emit_chunk(f"{CSS_LOADER_PREFIX}{marker}")
        return f"{BUILD_PREFIX}{marker}"

    async def load(self, module_id: str) -> str | None:
        """Return module code for ids produced by :meth:`resolve_id`."""
        if not self.enabled:
            return None

        if module_id.startswith(CSS_LOADER_PREFIX):
            entry = self.registry.get(module_id[len(CSS_LOADER_PREFIX) :])
            if entry is None:
                return None
            return f"import {json.dumps(str(entry.path))}"

        if module_id.startswith(BUILD_PREFIX):
            marker = module_id[len(BUILD_PREFIX) :]
            return f'export default "{marker}"'

        if module_id.endswith(INLINE_QUERY) and not self.deferred:
            path = Path(module_id[: -len(INLINE_QUERY)])
            entry = InlineEntry(path=path, kind=get_asset_kind(path))
            content = await self._load_direct(entry)
            return f"export default {json.dumps(content)}"

        return None

    async def _load_direct(self, entry: InlineEntry) -> str:
        content: str | None = None
        fallback = True
        if isinstance(self.backend, DirectBackend):
            try:
                content = await self.backend.build_file(entry)
            except Exception as e:  # noqa: BLE001
                logger.warning("Failed to build %s: %s", entry.path, e)
                fallback = self.backend.fallback_to_raw_file

        if content is None and fallback:
            content = await asyncio.to_thread(read_source, entry.path)
        if content is None:
            logger.warning("Could not inline %s; exporting empty content", entry.path)
            return ""
        return content

    async def finalize(self, graph: BuildGraph) -> FinalizeResult:
        """Resolve every marker in ``graph`` and inline marked tags in its markup."""
        return await finalize_graph(self, graph)
