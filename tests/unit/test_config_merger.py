"""Unit tests for merging CLI options into a project configuration.

These tests verify:
- CLI args override config values when provided
- CLI args are ignored when None
- The source configuration is left unchanged
- Overrides that break the schema raise ConfigError
"""

import pytest

from cabinet_mfg.application.config import (
    CabinetConfig,
    ConfigError,
    DimensionsConfig,
    ProjectConfiguration,
    StructureConfig,
    merge_config_with_cli,
)
from cabinet_mfg.domain.value_objects import UnknownMaterialPolicy


class TestMergeConfigWithCli:
    """Tests for merge_config_with_cli function."""

    @pytest.fixture
    def base_config(self) -> ProjectConfiguration:
        """Create a base configuration for testing."""
        return ProjectConfiguration(
            schema_version="1.0",
            cabinet=CabinetConfig(
                dimensions=DimensionsConfig(width=800, height=2000, depth=580),
                structure=StructureConfig(shelf_count=3, divider_count=1),
            ),
        )

    def test_no_overrides_returns_equivalent_config(
        self, base_config: ProjectConfiguration
    ) -> None:
        """When no CLI args provided, merged config matches original."""
        assert merge_config_with_cli(base_config) == base_config

    def test_dimension_overrides(self, base_config: ProjectConfiguration) -> None:
        merged = merge_config_with_cli(base_config, width=900.0, toe_kick_height=0.0)
        dims = merged.cabinet.dimensions
        assert dims.width == 900.0
        assert dims.height == 2000
        assert dims.toe_kick_height == 0.0

    def test_structure_overrides(self, base_config: ProjectConfiguration) -> None:
        """False and zero are real values, not missing ones."""
        merged = merge_config_with_cli(base_config, shelf_count=0, has_back_panel=False)
        assert merged.cabinet.structure.shelf_count == 0
        assert merged.cabinet.structure.has_back_panel is False
        assert merged.cabinet.structure.divider_count == 1

    def test_material_overrides(self, base_config: ProjectConfiguration) -> None:
        merged = merge_config_with_cli(base_config, core="core-mdf-18", edge="edge-pvc-grey-10")
        materials = merged.cabinet.materials
        assert materials.default_core == "core-mdf-18"
        assert materials.default_surface == "surf-mel-white"
        assert materials.default_edge == "edge-pvc-grey-10"

    def test_machine_and_policy(self, base_config: ProjectConfiguration) -> None:
        merged = merge_config_with_cli(base_config, machine="kdt-1320", material_policy="fallback")
        assert merged.machine.profile == "kdt-1320"
        assert merged.material_policy == UnknownMaterialPolicy.FALLBACK

    def test_original_unchanged(self, base_config: ProjectConfiguration) -> None:
        merge_config_with_cli(base_config, width=1200.0)
        assert base_config.cabinet.dimensions.width == 800

    def test_invalid_override_raises(self, base_config: ProjectConfiguration) -> None:
        with pytest.raises(ConfigError) as exc_info:
            merge_config_with_cli(base_config, machine="shopbot")
        assert exc_info.value.error_type == "validation"
