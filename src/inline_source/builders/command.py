"""Builder that runs an external bundler CLI (esbuild by default)."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..conf import get_setting
from ..exceptions import BuildFailure
from ..paths import AssetKind
from .base import BaseAssetBuilder

logger = logging.getLogger(__name__)


class CommandAssetBuilder(BaseAssetBuilder):
    """Bundle a single entry with a command-line bundler and read its stdout.

    ``BUILD_COMMAND`` is an argument list where ``{path}`` is replaced by the
    asset path. Each build override is appended as ``--key=value`` (or
    ``--key`` for ``True``; ``False``/``None`` are skipped), which matches
    esbuild's flag syntax.

    Requirements:
        - esbuild (or another bundler with the same CLI shape) on PATH or
          configured via ``BUILD_COMMAND``
    """

    def build(
        self,
        source: str,
        path: Path,
        kind: AssetKind,
        overrides: Mapping[str, Any],
    ) -> str:
        cmd = self._build_command(path, overrides)
        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                capture_output=True,
                text=True,
                timeout=get_setting("BUILD_TIMEOUT"),
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise BuildFailure(f"{cmd[0]} failed for {path}: {e}") from e

        if result.returncode != 0:
            raise BuildFailure(f"{cmd[0]} failed for {path}: {result.stderr.strip()}")

        if result.stderr:
            logger.warning("%s reported for %s: %s", cmd[0], path, result.stderr.strip())
        return result.stdout

    def _build_command(self, path: Path, overrides: Mapping[str, Any]) -> list[str]:
        """Build the bundler command arguments."""
        template: list[str] = get_setting("BUILD_COMMAND")
        cmd = [arg.replace("{path}", str(path)) for arg in template]
        for key, value in overrides.items():
            if value is True:
                cmd.append(f"--{key}")
            elif value is False or value is None:
                continue
            else:
                cmd.append(f"--{key}={value}")
        return cmd
