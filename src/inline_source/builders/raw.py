"""Raw asset builder that returns file content as-is."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..paths import AssetKind
from .base import BaseAssetBuilder


class RawAssetBuilder(BaseAssetBuilder):
    """Pass-through builder: the inlined content is the file's own text.

    Minification, when enabled, is applied afterwards by the build pipeline.
    """

    def build(
        self,
        source: str,
        path: Path,
        kind: AssetKind,
        overrides: Mapping[str, Any],
    ) -> str:
        return source
