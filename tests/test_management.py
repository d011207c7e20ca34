"""Tests for the inline_assets management command.

Verifies file/directory resolution, --output-dir / --dry-run / --attribute
handling, and output messaging.
"""

from __future__ import annotations

from io import StringIO
from unittest import mock

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

SCRIPT_PAGE = '<html><script inline src="./app.js"></script></html>'
INLINED_PAGE = '<html><script>console.log("raw app");</script></html>'


@pytest.fixture
def site(asset_dir):
    """asset_dir/src with one page using a marked script and one plain page."""
    (asset_dir / "src" / "index.html").write_text(SCRIPT_PAGE, encoding="utf-8")
    (asset_dir / "src" / "plain.html").write_text("<p>plain</p>", encoding="utf-8")
    return asset_dir / "src"


def _call(*args, **options):
    stdout, stderr = StringIO(), StringIO()
    call_command("inline_assets", *args, stdout=stdout, stderr=stderr, **options)
    return stdout.getvalue(), stderr.getvalue()


class TestInlineAssetsCommand:
    def test_rewrites_file_in_place(self, site):
        """A single file argument is transformed and overwritten.

        Purpose: Verify in-place rewriting with resolution relative to the file.
        Category: Normal case
        Target: Command.handle(paths=[file])
        Technique: Equivalence partitioning
        Test data: index.html referencing ./app.js
        """
        stdout, stderr = _call(str(site / "index.html"))

        assert (site / "index.html").read_text(encoding="utf-8") == INLINED_PAGE
        assert "Inlined:" in stdout
        assert "Written: 1, Errors: 0" in stdout
        assert stderr == ""

    def test_directory_is_searched_recursively(self, site):
        nested = site / "nested"
        nested.mkdir()
        (nested / "deep.html").write_text(
            '<script inline src="../app.js"></script>', encoding="utf-8"
        )

        stdout, _ = _call(str(site))

        assert "Inlining assets in 3 file(s)" in stdout
        assert "Unchanged:" in stdout
        assert (nested / "deep.html").read_text(encoding="utf-8") == (
            '<script>console.log("raw app");</script>'
        )

    def test_unchanged_files_are_not_written(self, site):
        with mock.patch("pathlib.Path.write_text") as mock_write:
            stdout, _ = _call(str(site / "plain.html"))

        mock_write.assert_not_called()
        assert "Written: 0, Errors: 0" in stdout

    def test_output_dir_keeps_sources(self, site, tmp_path):
        """--output-dir writes every file, mirroring the input layout.

        Purpose: Verify sources are untouched and all files are emitted.
        Category: Normal case
        Target: Command.handle(paths=[dir], output_dir=...)
        Technique: Equivalence partitioning
        Test data: Directory with a marked and an unmarked page
        """
        out = tmp_path / "dist"

        stdout, _ = _call(str(site), output_dir=str(out))

        assert (site / "index.html").read_text(encoding="utf-8") == SCRIPT_PAGE
        assert (out / "index.html").read_text(encoding="utf-8") == INLINED_PAGE
        assert (out / "plain.html").read_text(encoding="utf-8") == "<p>plain</p>"
        assert "Written: 2" in stdout

    def test_dry_run_writes_nothing(self, site):
        stdout, _ = _call(str(site / "index.html"), dry_run=True)

        assert (site / "index.html").read_text(encoding="utf-8") == SCRIPT_PAGE
        assert "[DRY RUN] Would write:" in stdout
        assert "[DRY RUN] Done. Written: 1" in stdout

    def test_custom_attribute(self, site):
        (site / "custom.html").write_text(
            '<script data-inline src="./app.js"></script>', encoding="utf-8"
        )

        _call(str(site / "custom.html"), attribute="data-inline")

        assert (site / "custom.html").read_text(encoding="utf-8") == (
            '<script>console.log("raw app");</script>'
        )

    def test_missing_path_raises_command_error(self, tmp_path):
        with pytest.raises(CommandError, match="No such file or directory"):
            _call(str(tmp_path / "nope.html"))

    def test_errors_are_reported_and_counted(self, site):
        """A failing file is reported on stderr and does not stop the run.

        Purpose: Verify per-file error isolation.
        Category: Error case
        Target: Command.handle(paths=[dir])
        Technique: Error guessing
        Test data: transform_html raising for every file
        """
        with mock.patch(
            "inline_source.transform.transform_html", side_effect=RuntimeError("boom")
        ):
            stdout, stderr = _call(str(site))

        assert stderr.count("ERROR:") == 2
        assert "Written: 0, Errors: 2" in stdout
