"""Phase 2: resolve markers against the finished build graph.

For every registered marker the final content is obtained (emitted chunk,
extracted stylesheet, nested build output, or the raw file), then every
quoted occurrence of the marker in every textual artifact is replaced with
the content as a string literal. Markup artifacts get a second pass that
inlines marked tags from the finished outputs.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import TYPE_CHECKING, NamedTuple

from .backends.base import ArtifactEmissionBackend, ChildBuildBackend
from .graph import Artifact, ArtifactType, BuildGraph
from .paths import AssetKind
from .registry import InlineEntry
from .transform import atransform_html
from .utils import read_source

if TYPE_CHECKING:
    from .session import InlineSession

logger = logging.getLogger(__name__)


class FinalizeResult(NamedTuple):
    """Outcome of one finalization."""

    resolved: list[str]
    unresolved: list[InlineEntry]


async def finalize_graph(session: InlineSession, graph: BuildGraph) -> FinalizeResult:
    """Replace every marker of ``session`` in ``graph`` with final content.

    A no-op for disabled sessions and for sessions in direct mode, where
    nothing was deferred.
    """
    if not session.enabled or not session.deferred:
        return FinalizeResult([], [])

    items = session.registry.items()
    contents = await asyncio.gather(
        *(_obtain_content(session, graph, marker, entry) for marker, entry in items)
    )

    resolved: list[str] = []
    for (marker, _entry), content in zip(items, contents):
        if content is None:
            continue
        replace_marker(graph, marker, content)
        resolved.append(marker)

    unresolved = _report_unresolved(session, graph)
    await inline_markup_artifacts(graph, session.attribute)

    logger.info(
        "Inlined %d of %d deferred assets", len(resolved), len(session.registry)
    )
    return FinalizeResult(resolved, unresolved)


async def _obtain_content(
    session: InlineSession, graph: BuildGraph, marker: str, entry: InlineEntry
) -> str | None:
    backend = session.backend
    if isinstance(backend, ArtifactEmissionBackend):
        content: str | None = None
        if entry.handle is not None:
            try:
                file_name = backend.get_file_name(entry.handle)
                content = take_emitted_content(graph, entry, file_name)
            except Exception as e:  # noqa: BLE001
                logger.debug("Emitted artifact lookup failed for %s: %s", entry.path, e)
        if content is None:
            content = await asyncio.to_thread(read_source, entry.path)
        return content

    if isinstance(backend, ChildBuildBackend):
        try:
            artifacts = await backend.build_child(entry, marker)
        except Exception as e:  # noqa: BLE001
            logger.warning("Failed to build %s: %s", entry.path, e)
            if backend.fallback_to_raw_file:
                return await asyncio.to_thread(read_source, entry.path)
            return None
        if not artifacts:
            return None
        # First artifact wins; nested builds are expected to yield one output.
        return artifacts[0].text

    return None


def take_emitted_content(
    graph: BuildGraph, entry: InlineEntry, file_name: str
) -> str | None:
    """Take an emitted chunk's final content out of the output set.

    Scripts use the chunk's code. Styles use the stylesheet the bundler
    extracted from the loader chunk. The consumed chunk is removed.
    """
    chunk = graph.get(file_name)
    if chunk is None or chunk.type is not ArtifactType.CHUNK:
        return None

    if entry.kind is AssetKind.SCRIPT:
        content: str | None = chunk.text
    else:
        content = extract_style_output(graph, entry, chunk)
    graph.remove(file_name)
    return content


def extract_style_output(
    graph: BuildGraph, entry: InlineEntry, loader: Artifact
) -> str | None:
    """Find and remove the stylesheet extracted for a CSS loader chunk.

    Prefers the loader's ``imported_css`` metadata; otherwise takes the first
    ``.css`` asset whose name contains the source file's base name.
    """
    for css_name in list(loader.imported_css):
        asset = graph.get(css_name)
        if asset is not None and asset.type is ArtifactType.ASSET:
            graph.remove(css_name)
            loader.imported_css.remove(css_name)
            return asset.text

    base = entry.path.name
    if base.lower().endswith(".css"):
        base = base[: -len(".css")]
    for asset in graph.style_assets():
        if base in asset.file_name:
            graph.remove(asset.file_name)
            return asset.text
    return None


def _marker_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(rf"""(["']){re.escape(marker)}\1""")


def replace_marker(graph: BuildGraph, marker: str, content: str) -> int:
    """Replace every quoted ``marker`` in every textual artifact.

    Returns the number of artifacts changed.
    """
    pattern = _marker_pattern(marker)
    literal = json.dumps(content)
    changed = 0
    for artifact in graph.text_artifacts():
        text = artifact.text
        if marker not in text:
            continue
        replaced = pattern.sub(lambda _m: literal, text)
        if replaced != text:
            artifact.content = replaced
            changed += 1
    return changed


def _report_unresolved(session: InlineSession, graph: BuildGraph) -> list[InlineEntry]:
    texts = [a.text for a in graph.text_artifacts()]
    unresolved: list[InlineEntry] = []
    for marker, entry in session.registry.items():
        if any(marker in text for text in texts):
            logger.error("Unresolved inline marker %s for %s", marker, entry.path)
            unresolved.append(entry)
    return unresolved


async def inline_markup_artifacts(graph: BuildGraph, attribute: str) -> None:
    """Inline marked tags in ``.html`` outputs from the finished artifacts."""

    def resolve(reference: str) -> str | None:
        found = graph.find_output(reference)
        if found is None or not found.is_text:
            return None
        return found.text

    for artifact in graph.markup_artifacts():
        artifact.content = await atransform_html(artifact.text, resolve, attribute)
