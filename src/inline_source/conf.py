"""Configuration and settings for django-inline-source."""

from pathlib import Path
from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Trigger attribute recognized on <script> and <link rel="stylesheet">
    "ATTRIBUTE": "inline",
    # Nested build processors
    "CSS_BUILDER": "inline_source.builders.raw.RawAssetBuilder",
    "JS_BUILDER": "inline_source.builders.raw.RawAssetBuilder",
    # CommandAssetBuilder settings
    "BUILD_COMMAND": ["esbuild", "{path}", "--bundle", "--minify"],
    "BUILD_TIMEOUT": 30,
    # Asset optimization
    "MINIFY_CSS": True,
    "OBFUSCATE_JS": False,
    "TERSER_PATH": None,
    "TERSER_OPTIONS": ["-c", "-m"],
    # Passed through unmodified to the nested build primitive
    "BUILD_OVERRIDES": {},
    # Child builds substitute the raw file when the nested build fails
    "FALLBACK_TO_RAW_FILE": False,
    # Project root for "/"-rooted references (BASE_DIR when unset)
    "ROOT": None,
    # Middleware content cache
    "CACHE_TIMEOUT": 300,
}


_UNSET = object()


def get_setting(key: str, default: Any = _UNSET) -> Any:
    """Get a setting from the INLINE_SOURCE dict or return default."""
    user_settings: dict[str, Any] = getattr(settings, "INLINE_SOURCE", {})
    fallback = DEFAULTS.get(key) if default is _UNSET else default
    return user_settings.get(key, fallback)


def get_project_root() -> Path:
    """Resolve the project root used for "/"-rooted inline references.

    Resolution order: ``ROOT`` setting -> ``settings.BASE_DIR`` -> cwd.
    """
    configured = get_setting("ROOT")
    if configured:
        return Path(configured)
    base_dir = getattr(settings, "BASE_DIR", None)
    if base_dir is not None:
        return Path(base_dir)
    return Path.cwd()
