"""Base class for nested asset builders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..paths import AssetKind


class BaseAssetBuilder(ABC):
    """Abstract base class for asset builders.

    A builder runs one inline asset through a processing step (bundling,
    transpiling, minifying) and returns the final content.
    """

    @abstractmethod
    def build(
        self,
        source: str,
        path: Path,
        kind: AssetKind,
        overrides: Mapping[str, Any],
    ) -> str:
        """Build a single inline asset.

        Args:
            source: Raw file content.
            path: Absolute path of the asset (for tools that read it themselves).
            kind: Script or style.
            overrides: Opaque build options, passed through from configuration.

        Returns:
            Built content.

        Raises:
            BuildFailure: If the processing step fails.
        """
        ...
