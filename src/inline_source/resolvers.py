"""Content resolvers for direct-mode inlining inside a Django project."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

from django.conf import settings
from django.contrib.staticfiles import finders
from django.core.cache import cache
from django.core.exceptions import SuspiciousFileOperation

from .conf import get_project_root, get_setting
from .exceptions import BuildFailure, UnresolvableAsset
from .paths import get_asset_kind, normalize_output_name
from .utils import build_asset, compute_content_hash

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "inline-source:"


class StaticFilesResolver:
    """Resolve a ``src``/``href`` value to built asset content.

    Lookup order:
        1. Relative references against ``base_dir`` (when given)
        2. Django's staticfiles finders, with ``STATIC_URL`` stripped
        3. ``/``-rooted references against the project root

    Built content is cached per path and modification time.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def __call__(self, reference: str) -> str | None:
        try:
            path = self.find(reference)
        except UnresolvableAsset as e:
            logger.debug("%s", e)
            return None
        return self._build(path)

    def find(self, reference: str) -> Path:
        """Locate the file behind a reference.

        Raises:
            UnresolvableAsset: For remote URLs or files that cannot be found.
        """
        if "://" in reference or reference.startswith("//"):
            raise UnresolvableAsset(reference)

        name = reference.split("#", 1)[0].split("?", 1)[0]
        if not name:
            raise UnresolvableAsset(reference)

        if self.base_dir is not None and not name.startswith("/"):
            candidate = self.base_dir / name
            if candidate.is_file():
                return candidate

        static_path = urlparse(settings.STATIC_URL or "").path
        static_name = name
        if static_path and static_name.startswith(static_path):
            static_name = static_name[len(static_path) :]
        try:
            found = finders.find(normalize_output_name(static_name))
        except SuspiciousFileOperation as e:
            raise UnresolvableAsset(reference) from e
        if found:
            return Path(found)

        if name.startswith("/"):
            candidate = get_project_root() / name[1:]
            if candidate.is_file():
                return candidate

        raise UnresolvableAsset(reference)

    def _build(self, path: Path) -> str | None:
        try:
            mtime = path.stat().st_mtime_ns
        except OSError:
            return None

        cache_key = f"{CACHE_KEY_PREFIX}{compute_content_hash(f'{path}:{mtime}', 16)}"
        cached = cache.get(cache_key)
        if cached is not None:
            return cached  # type: ignore[no-any-return]

        try:
            content = build_asset(path, get_asset_kind(path))
        except BuildFailure as e:
            logger.warning("Failed to build %s: %s", path, e)
            return None

        cache.set(cache_key, content, get_setting("CACHE_TIMEOUT"))
        return content
