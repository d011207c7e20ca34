"""Pytest fixtures for django-inline-source tests."""

from pathlib import Path

import pytest

from inline_source.graph import Artifact, ArtifactType, BuildGraph


@pytest.fixture
def sample_html_with_script():
    """HTML page with one marked <script>."""
    return (
        "<html><head></head><body>"
        '<script inline src="./app.js"></script>'
        "</body></html>"
    )


@pytest.fixture
def sample_html_with_link():
    """HTML page with one marked stylesheet <link>."""
    return '<html><head><link inline rel="stylesheet" href="./style.css" /></head></html>'


@pytest.fixture
def sample_html_without_markers():
    """HTML content with external assets but no trigger attribute."""
    return (
        "<html><head>"
        '<link rel="stylesheet" href="./style.css" />'
        "</head><body>"
        '<script src="./app.js"></script>'
        "</body></html>"
    )


@pytest.fixture
def resolver_for():
    """Build a dict-backed resolver that records every requested reference."""

    def factory(files):
        calls = []

        def resolve(reference):
            calls.append(reference)
            return files.get(reference)

        resolve.calls = calls
        return resolve

    return factory


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """Project directory with one script and one stylesheet."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.js").write_text('console.log("raw app");', encoding="utf-8")
    (tmp_path / "src" / "style.css").write_text("body { color: red; }", encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_graph():
    """Build a BuildGraph from (file_name, type, content) triples."""

    def factory(*artifacts):
        graph = BuildGraph()
        for file_name, artifact_type, content in artifacts:
            graph.add(Artifact(file_name, ArtifactType(artifact_type), content))
        return graph

    return factory
