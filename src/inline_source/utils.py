"""Build orchestration for django-inline-source.

Pipeline: Read -> Build -> Optimize
"""

from __future__ import annotations

import hashlib
import logging
import shutil
import subprocess
from collections.abc import Mapping
from importlib import import_module
from pathlib import Path
from typing import Any

from .conf import get_project_root, get_setting
from .exceptions import BuildFailure
from .paths import AssetKind

logger = logging.getLogger(__name__)


def build_asset(
    path: Path,
    kind: AssetKind,
    overrides: Mapping[str, Any] | None = None,
) -> str:
    """Main entry point: read, build, and optimize one inline asset.

    Raises:
        BuildFailure: If the file cannot be read or the builder fails.
    """
    source = read_source(path)
    if source is None:
        raise BuildFailure(f"Cannot read inline asset: {path}")

    builder_key = "CSS_BUILDER" if kind is AssetKind.STYLE else "JS_BUILDER"
    builder = get_builder(get_setting(builder_key))
    if overrides is None:
        overrides = get_setting("BUILD_OVERRIDES")
    try:
        built = builder.build(source, path, kind, overrides)
    except BuildFailure:
        raise
    except Exception as e:
        raise BuildFailure(f"{type(builder).__name__} failed for {path}: {e}") from e

    if kind is AssetKind.STYLE and get_setting("MINIFY_CSS"):
        built = _minify_css(built)
    elif kind is AssetKind.SCRIPT and get_setting("OBFUSCATE_JS"):
        built = _optimize_js(built)

    logger.info("Built inline %s asset: %s", kind.value, path)
    return built


def compute_content_hash(content: str, length: int = 8) -> str:
    """Compute a short SHA-256 hash of content for cache keys."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:length]


def read_source(path: Path) -> str | None:
    """Read a raw asset file, returning None if it is missing or unreadable."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


def _optimize_js(content: str) -> str:
    """Optimize JS content using terser (preferred) or rjsmin (fallback).

    Falls back gracefully if neither tool is available.
    """
    terser_path = _find_terser()
    if terser_path is not None:
        try:
            result = subprocess.run(  # noqa: S603
                [terser_path, *get_setting("TERSER_OPTIONS")],
                input=content,
                capture_output=True,
                text=True,
                timeout=30,
                check=True,
            )
            return result.stdout
        except (
            subprocess.CalledProcessError,
            subprocess.TimeoutExpired,
            OSError,
        ) as e:
            logger.warning("terser failed: %s. Falling back to rjsmin.", e)

    try:
        import rjsmin  # type: ignore[import-not-found, import-untyped]

        return rjsmin.jsmin(content)  # type: ignore[no-any-return]
    except ImportError:
        logger.warning(
            "Neither terser nor rjsmin is available. JS optimization skipped."
        )
        return content


def _minify_css(content: str) -> str:
    """Minify CSS content using rcssmin.

    Falls back gracefully if rcssmin is not installed.
    """
    try:
        import rcssmin  # type: ignore[import-not-found, import-untyped]

        return rcssmin.cssmin(content)  # type: ignore[no-any-return]
    except ImportError:
        logger.warning("rcssmin is not installed. CSS minification skipped.")
        return content


def _find_terser() -> str | None:
    """Find the terser CLI binary.

    Search order: TERSER_PATH setting -> node_modules/.bin/terser -> PATH.
    """
    explicit: str | None = get_setting("TERSER_PATH")
    if explicit:
        return explicit
    local = get_project_root() / "node_modules" / ".bin" / "terser"
    if local.exists():
        return str(local)
    return shutil.which("terser")


def get_builder(builder_path: str) -> Any:
    """Import and instantiate a builder class."""
    cls = import_class(builder_path)
    return cls()


def import_class(dotted_path: str) -> type:
    """Import a class from a dotted path string."""
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = import_module(module_path)
    return getattr(module, class_name)  # type: ignore[no-any-return]
