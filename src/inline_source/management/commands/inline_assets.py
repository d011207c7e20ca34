"""Management command to inline marked assets into HTML files on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError, CommandParser

from inline_source.conf import get_setting

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Inline <script inline src> and <link inline rel=stylesheet> tags in HTML files."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "paths",
            nargs="+",
            help="HTML files, or directories searched recursively for *.html.",
        )
        parser.add_argument(
            "--attribute",
            help="Trigger attribute name. Defaults to INLINE_SOURCE['ATTRIBUTE'].",
        )
        parser.add_argument(
            "--output-dir",
            help="Write results here instead of overwriting the input files.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show which files would change without writing anything.",
        )

    def handle(self, **options: object) -> None:
        from inline_source.resolvers import StaticFilesResolver
        from inline_source.transform import transform_html

        attribute = options.get("attribute") or get_setting("ATTRIBUTE")
        output_dir = options.get("output_dir")
        dry_run = options.get("dry_run")

        files = self._resolve_files(options["paths"])  # type: ignore[arg-type]
        self.stdout.write(f"Inlining assets in {len(files)} file(s)...")

        inlined = 0
        errors = 0
        for source_file, relative in files:
            try:
                html = source_file.read_text(encoding="utf-8")
                result = transform_html(
                    html, StaticFilesResolver(base_dir=source_file.parent), attribute
                )
            except Exception:
                logger.exception("Failed to inline assets in %s", source_file)
                self.stderr.write(f"  ERROR: {source_file}")
                errors += 1
                continue

            if result is html and not output_dir:
                self.stdout.write(f"  Unchanged: {source_file}")
                continue

            target = Path(output_dir) / relative if output_dir else source_file
            if dry_run:
                self.stdout.write(f"  [DRY RUN] Would write: {target}")
                inlined += 1
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result, encoding="utf-8")
            self.stdout.write(f"  Inlined: {target}")
            inlined += 1

        prefix = "[DRY RUN] " if dry_run else ""
        self.stdout.write(
            self.style.SUCCESS(f"\n{prefix}Done. Written: {inlined}, Errors: {errors}")
        )

    def _resolve_files(self, paths: list[str]) -> list[tuple[Path, Path]]:
        """Expand CLI paths into (file, path relative to its input root) pairs."""
        files: list[tuple[Path, Path]] = []
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                for html_file in sorted(path.rglob("*.html")):
                    files.append((html_file, html_file.relative_to(path)))
            elif path.is_file():
                files.append((path, Path(path.name)))
            else:
                raise CommandError(f"No such file or directory: {raw}")
        return files
