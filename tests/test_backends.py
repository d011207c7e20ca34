"""Tests for inline_source.backends."""

from unittest import mock

import pytest

from inline_source.backends import (
    ArtifactEmissionBackend,
    Capability,
    ChildBuildBackend,
    DirectBackend,
    LocalChildBuildBackend,
    LocalDirectBackend,
)
from inline_source.exceptions import BuildFailure, MissingCapability
from inline_source.graph import ArtifactType
from inline_source.paths import AssetKind
from inline_source.registry import InlineEntry


class TestBackendBase:
    @pytest.mark.parametrize(
        "cls,capability",
        [
            (ArtifactEmissionBackend, Capability.ARTIFACT_EMISSION),
            (ChildBuildBackend, Capability.CHILD_BUILD),
            (DirectBackend, Capability.NONE),
        ],
    )
    def test_capability_is_static(self, cls, capability):
        assert cls.capability is capability

    def test_defaults_come_from_settings(self, settings):
        """Overrides and fallback default to BUILD_OVERRIDES / FALLBACK_TO_RAW_FILE.

        Purpose: Verify configuration is read when no explicit value is given.
        Category: Normal case
        Target: BuildBackend.__init__(overrides, fallback_to_raw_file)
        Technique: Equivalence partitioning
        Test data: Settings with both keys set
        """
        settings.INLINE_SOURCE = {
            "BUILD_OVERRIDES": {"target": "es2020"},
            "FALLBACK_TO_RAW_FILE": True,
        }

        backend = DirectBackend()

        assert backend.overrides == {"target": "es2020"}
        assert backend.fallback_to_raw_file is True

    def test_explicit_values_win(self, settings):
        settings.INLINE_SOURCE = {"FALLBACK_TO_RAW_FILE": True}

        backend = DirectBackend(overrides={"minify": True}, fallback_to_raw_file=False)

        assert backend.overrides == {"minify": True}
        assert backend.fallback_to_raw_file is False

    def test_overrides_are_copied(self):
        overrides = {"a": 1}

        backend = DirectBackend(overrides=overrides)
        overrides["b"] = 2

        assert backend.overrides == {"a": 1}

    @pytest.mark.asyncio
    async def test_direct_backend_without_primitive(self, asset_dir):
        """The base direct backend has no build primitive and returns None."""
        entry = InlineEntry(path=asset_dir / "src" / "app.js", kind=AssetKind.SCRIPT)

        assert await DirectBackend().build_file(entry) is None


class TestLocalBackends:
    @pytest.mark.asyncio
    async def test_child_build_yields_one_artifact(self, asset_dir):
        """A local nested build produces one chunk named after the marker.

        Purpose: Verify the nested build output shape.
        Category: Normal case
        Target: LocalChildBuildBackend.build_child(entry, marker)
        Technique: Equivalence partitioning
        Test data: Raw builders from test settings
        """
        entry = InlineEntry(path=asset_dir / "src" / "style.css", kind=AssetKind.STYLE)

        artifacts = await LocalChildBuildBackend().build_child(entry, "__INLINE_BUILD_0__")

        assert len(artifacts) == 1
        assert artifacts[0].file_name == "__inline_build___INLINE_BUILD_0__.css"
        assert artifacts[0].type is ArtifactType.CHUNK
        assert artifacts[0].content == "body { color: red; }"

    @pytest.mark.asyncio
    async def test_child_build_passes_overrides(self, asset_dir):
        entry = InlineEntry(path=asset_dir / "src" / "app.js", kind=AssetKind.SCRIPT)
        backend = LocalChildBuildBackend(overrides={"target": "es2018"})

        with mock.patch(
            "inline_source.backends.local.build_asset", return_value="built"
        ) as mock_build:
            await backend.build_child(entry, "__INLINE_BUILD_0__")

        mock_build.assert_called_once_with(entry.path, AssetKind.SCRIPT, {"target": "es2018"})

    @pytest.mark.asyncio
    async def test_child_build_failure_propagates(self, tmp_path):
        entry = InlineEntry(path=tmp_path / "missing.js", kind=AssetKind.SCRIPT)

        with pytest.raises(BuildFailure):
            await LocalChildBuildBackend().build_child(entry, "__INLINE_BUILD_0__")

    @pytest.mark.asyncio
    async def test_direct_build_file(self, asset_dir):
        entry = InlineEntry(path=asset_dir / "src" / "app.js", kind=AssetKind.SCRIPT)

        assert await LocalDirectBackend().build_file(entry) == 'console.log("raw app");'

    @pytest.mark.parametrize("backend_cls", [LocalChildBuildBackend, LocalDirectBackend])
    def test_check_passes_with_importable_builders(self, backend_cls):
        backend_cls().check()

    @pytest.mark.parametrize("backend_cls", [LocalChildBuildBackend, LocalDirectBackend])
    def test_check_fails_with_unimportable_builder(self, backend_cls, settings):
        """A builder that cannot be imported is a missing capability.

        Purpose: Verify check() reports unusable builder configuration.
        Category: Error case
        Target: LocalChildBuildBackend.check(), LocalDirectBackend.check()
        Technique: Error guessing
        Test data: JS_BUILDER pointing at a module that does not exist
        """
        settings.INLINE_SOURCE = {"JS_BUILDER": "nowhere.Builder"}

        with pytest.raises(MissingCapability, match="JS_BUILDER"):
            backend_cls().check()
