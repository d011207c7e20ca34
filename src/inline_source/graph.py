"""In-memory view of a finished build's output set.

Backend adapters translate their bundler's output (chunks, assets, output
files) into a :class:`BuildGraph` before finalization and copy the
resulting contents back afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .paths import normalize_output_name


class ArtifactType(str, Enum):
    CHUNK = "chunk"
    ASSET = "asset"


@dataclass
class Artifact:
    """One produced file.

    ``imported_css`` lists the names of style assets the bundler extracted
    from this chunk's imports (e.g. a CSS loader chunk).
    """

    file_name: str
    type: ArtifactType
    content: str | bytes
    imported_css: list[str] = field(default_factory=list)

    @property
    def is_text(self) -> bool:
        return isinstance(self.content, str)

    @property
    def text(self) -> str:
        if isinstance(self.content, bytes):
            return self.content.decode("utf-8")
        return self.content


class BuildGraph:
    """Produced artifacts keyed by output file name, in insertion order."""

    def __init__(self, artifacts: list[Artifact] | None = None) -> None:
        self._artifacts: dict[str, Artifact] = {}
        for artifact in artifacts or []:
            self.add(artifact)

    def add(self, artifact: Artifact) -> None:
        self._artifacts[artifact.file_name] = artifact

    def get(self, file_name: str) -> Artifact | None:
        return self._artifacts.get(file_name)

    def remove(self, file_name: str) -> Artifact | None:
        return self._artifacts.pop(file_name, None)

    def text_artifacts(self) -> list[Artifact]:
        return [a for a in self._artifacts.values() if a.is_text]

    def markup_artifacts(self) -> list[Artifact]:
        return [
            a
            for a in self._artifacts.values()
            if a.is_text and a.file_name.endswith(".html")
        ]

    def style_assets(self) -> list[Artifact]:
        return [
            a
            for a in self._artifacts.values()
            if a.type is ArtifactType.ASSET and a.file_name.endswith(".css")
        ]

    def find_output(self, reference: str) -> Artifact | None:
        """Find a finished artifact by the name a markup file refers to it with.

        The reference is normalized against a leading ``./`` or ``/`` and
        matched exactly or as a suffix of the output name.
        """
        normalized = normalize_output_name(reference)
        if not normalized:
            return None
        for name, artifact in self._artifacts.items():
            if name == normalized or name.endswith(normalized):
                return artifact
        return None

    def __contains__(self, file_name: object) -> bool:
        return file_name in self._artifacts

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._artifacts))

    def __len__(self) -> int:
        return len(self._artifacts)
