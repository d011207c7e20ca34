"""Pending inline requests and their placeholder markers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .paths import AssetKind

MARKER_TEMPLATE = "__INLINE_BUILD_{}__"


@dataclass
class InlineEntry:
    """One pending inline request.

    ``handle`` is the backend's reference to an emitted artifact; it is set
    at most once, during discovery, and only by emitting backends.
    """

    path: Path
    kind: AssetKind
    handle: str | None = None


class MarkerRegistry:
    """Mints per-session markers and records the entry behind each one.

    Markers are numbered from 0 and consist of word characters only, so a
    marker can sit inside any quoted string literal unchanged.
    """

    def __init__(self) -> None:
        self._entries: dict[str, InlineEntry] = {}
        self._counter = 0

    def register(self, path: Path, kind: AssetKind) -> str:
        marker = MARKER_TEMPLATE.format(self._counter)
        self._counter += 1
        self._entries[marker] = InlineEntry(path=path, kind=kind)
        return marker

    def get(self, marker: str) -> InlineEntry | None:
        return self._entries.get(marker)

    def __getitem__(self, marker: str) -> InlineEntry:
        return self._entries[marker]

    def items(self) -> list[tuple[str, InlineEntry]]:
        return list(self._entries.items())

    def __contains__(self, marker: object) -> bool:
        return marker in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
