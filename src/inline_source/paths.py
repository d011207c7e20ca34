"""Path resolution and asset classification for inline references."""

from __future__ import annotations

import os.path
import re
from enum import Enum
from pathlib import Path

_STYLE_EXTENSION_RE = re.compile(r"\.css$", re.IGNORECASE)
_OUTPUT_PREFIX_RE = re.compile(r"^\.?/")


class AssetKind(str, Enum):
    SCRIPT = "js"
    STYLE = "css"


def get_asset_kind(path: str | Path) -> AssetKind:
    """Classify a path by extension: ``.css`` is a style, anything else a script."""
    if _STYLE_EXTENSION_RE.search(str(path)):
        return AssetKind.STYLE
    return AssetKind.SCRIPT


def resolve_inline_path(
    reference: str,
    importer: str | None,
    root: str | Path,
) -> Path:
    """Resolve an inline reference to an absolute path.

    A reference starting with ``/`` is rooted at ``root``. Otherwise it is
    relative to the importing module's directory (query string stripped),
    or to ``root`` when there is no importer.
    """
    root_path = Path(root)
    if reference.startswith("/"):
        resolved = root_path / reference[1:]
    elif importer:
        importer_path = Path(importer.split("?", 1)[0])
        resolved = importer_path.parent / reference
    else:
        resolved = root_path / reference
    # normpath collapses ".." without resolving symlinks.
    return Path(os.path.normpath(resolved.absolute()))


def normalize_output_name(reference: str) -> str:
    """Strip a leading ``./`` or ``/`` so a reference can match an output name."""
    return _OUTPUT_PREFIX_RE.sub("", reference, count=1)
