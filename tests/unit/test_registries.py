"""Tests for the typed material registries."""

from __future__ import annotations

import logging

import pytest

from cabinet_mfg.domain.registries import (
    DEFAULT_CORES,
    MaterialCatalog,
    MaterialRegistry,
    UnknownMaterialError,
)
from cabinet_mfg.domain.value_objects import (
    CoreMaterial,
    MaterialCategory,
    UnknownMaterialPolicy,
)


@pytest.fixture
def cores() -> MaterialRegistry[CoreMaterial]:
    return MaterialRegistry("core", DEFAULT_CORES, default_id="core-pb-16")


class TestMaterialRegistry:
    """Tests for MaterialRegistry."""

    def test_get_known_id(self, cores: MaterialRegistry[CoreMaterial]) -> None:
        assert cores.get("core-mdf-18").thickness == 18

    def test_get_unknown_id_raises(self, cores: MaterialRegistry[CoreMaterial]) -> None:
        with pytest.raises(UnknownMaterialError) as exc_info:
            cores.get("core-balsa")
        assert exc_info.value.kind == "core"
        assert exc_info.value.material_id == "core-balsa"
        assert "core-balsa" in str(exc_info.value)

    def test_strict_resolve_raises(self, cores: MaterialRegistry[CoreMaterial]) -> None:
        with pytest.raises(UnknownMaterialError):
            cores.resolve("core-balsa", UnknownMaterialPolicy.STRICT)

    def test_fallback_resolve_substitutes_default(
        self, cores: MaterialRegistry[CoreMaterial], caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="cabinet_mfg.domain.registries"):
            resolution = cores.resolve("core-balsa", UnknownMaterialPolicy.FALLBACK)
        assert resolution.substituted
        assert resolution.record.id == "core-pb-16"
        assert resolution.requested_id == "core-balsa"
        assert "core-balsa" in caplog.text

    def test_resolve_known_is_not_substituted(
        self, cores: MaterialRegistry[CoreMaterial]
    ) -> None:
        resolution = cores.resolve("core-hmr-18", UnknownMaterialPolicy.FALLBACK)
        assert not resolution.substituted
        assert resolution.record.id == "core-hmr-18"

    def test_duplicate_ids_rejected(self) -> None:
        core = CoreMaterial("core-x", "X", 16)
        with pytest.raises(ValueError, match="Duplicate"):
            MaterialRegistry("core", [core, core], default_id="core-x")

    def test_default_must_exist(self) -> None:
        with pytest.raises(ValueError, match="Default"):
            MaterialRegistry("core", DEFAULT_CORES, default_id="core-missing")

    def test_with_records_returns_new_registry(
        self, cores: MaterialRegistry[CoreMaterial]
    ) -> None:
        extra = CoreMaterial("core-granite-20", "Granite 20mm", 20, density=2700,
                             category=MaterialCategory.STONE_NATURAL)
        extended = cores.with_records([extra])
        assert "core-granite-20" in extended
        assert "core-granite-20" not in cores
        assert len(extended) == len(cores) + 1


class TestMaterialCatalog:
    """Tests for MaterialCatalog."""

    def test_default_catalogue_contents(self, catalog: MaterialCatalog) -> None:
        assert catalog.cores.default_id == "core-pb-16"
        assert catalog.surfaces.default.thickness == pytest.approx(0.3)
        assert catalog.edges.default.thickness == pytest.approx(1.0)

    def test_category_of_unknown_core_is_wood_panel(self, catalog: MaterialCatalog) -> None:
        assert catalog.category_of("core-unknown") == MaterialCategory.WOOD_PANEL


class TestMaterialValueObjects:
    """Construction checks on material records."""

    def test_core_thickness_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            CoreMaterial("core-x", "X", 0)

    def test_core_id_required(self) -> None:
        with pytest.raises(ValueError):
            CoreMaterial("", "X", 16)
