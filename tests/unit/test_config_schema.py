"""Unit tests for project file schema models."""

import pytest
from pydantic import ValidationError

from cabinet_mfg.application.config import (
    DimensionsConfig,
    DxfOutputConfig,
    FittingAssignmentConfig,
    MachineConfig,
    ManufacturingConfig,
    OutputConfig,
    PanelOverrideConfig,
    ProjectConfiguration,
    StructureConfig,
)
from cabinet_mfg.domain.value_objects import (
    ExportFormat,
    FittingRole,
    JointType,
    UnknownMaterialPolicy,
)


class TestProjectConfiguration:
    """Tests for the root model."""

    def test_minimal_project(self) -> None:
        config = ProjectConfiguration(schema_version="1.0")
        assert config.cabinet.dimensions.width == 600.0
        assert config.cabinet.structure.shelf_count == 1
        assert config.machine.profile == "homag-centateq"
        assert config.material_policy == UnknownMaterialPolicy.STRICT
        assert config.panel_overrides == {}
        assert config.fittings == []

    def test_schema_version_required(self) -> None:
        with pytest.raises(ValidationError):
            ProjectConfiguration()  # type: ignore[call-arg]

    @pytest.mark.parametrize("version", ["1.0", "1.1", "1.7"])
    def test_supported_versions(self, version: str) -> None:
        assert ProjectConfiguration(schema_version=version).schema_version == version

    @pytest.mark.parametrize("version", ["2.0", "0.9"])
    def test_unsupported_major_version(self, version: str) -> None:
        with pytest.raises(ValidationError, match="Unsupported schema version"):
            ProjectConfiguration(schema_version=version)

    def test_malformed_version(self) -> None:
        with pytest.raises(ValidationError):
            ProjectConfiguration(schema_version="one")

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            ProjectConfiguration.model_validate({"schema_version": "1.0", "colour": "red"})

    def test_material_policy_from_string(self) -> None:
        config = ProjectConfiguration.model_validate(
            {"schema_version": "1.0", "material_policy": "fallback"}
        )
        assert config.material_policy == UnknownMaterialPolicy.FALLBACK


class TestCabinetSections:
    """Tests for the cabinet sub-models."""

    def test_out_of_range_dimensions_accepted(self) -> None:
        """Range checks belong to the design validator, not the schema."""
        assert DimensionsConfig(width=50).width == 50
        assert StructureConfig(shelf_count=-2).shelf_count == -2

    def test_joint_types(self) -> None:
        structure = StructureConfig.model_validate({"top_joint": "overlay"})
        assert structure.top_joint == JointType.OVERLAY
        assert structure.bottom_joint == JointType.INSET

    def test_invalid_joint_type(self) -> None:
        with pytest.raises(ValidationError):
            StructureConfig.model_validate({"top_joint": "dovetail"})

    def test_manufacturing_constraints(self) -> None:
        with pytest.raises(ValidationError):
            ManufacturingConfig(glue_thickness=-0.1)
        with pytest.raises(ValidationError):
            ManufacturingConfig(back_thickness=0)
        with pytest.raises(ValidationError):
            ManufacturingConfig(groove_depth=0)


class TestMachineConfig:
    """Tests for MachineConfig."""

    @pytest.mark.parametrize("profile", ["homag-centateq", "biesse-rover", "kdt-1320"])
    def test_known_profiles(self, profile: str) -> None:
        assert MachineConfig(profile=profile).profile == profile

    def test_unknown_profile(self) -> None:
        with pytest.raises(ValidationError, match="Unknown machine profile"):
            MachineConfig(profile="shopbot")


class TestPanelConfigs:
    """Tests for overrides and fitting assignments."""

    def test_override_defaults(self) -> None:
        override = PanelOverrideConfig()
        assert override.core is None
        assert override.edges is None

    def test_override_negative_load(self) -> None:
        with pytest.raises(ValidationError):
            PanelOverrideConfig(design_load_kg=-5)

    def test_fitting_assignment(self) -> None:
        fitting = FittingAssignmentConfig.model_validate(
            {"fitting_id": "hinge-clip-top-110", "panel_id": "left_side", "role": "hinge"}
        )
        assert fitting.role == FittingRole.HINGE
        assert fitting.positions == []

    def test_fitting_ids_required(self) -> None:
        with pytest.raises(ValidationError):
            FittingAssignmentConfig(fitting_id="", panel_id="shelf_1", role=FittingRole.BRACKET)


class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_defaults(self) -> None:
        output = OutputConfig()
        assert output.project_name == "cabinet"
        assert output.formats == [ExportFormat.CUT_LIST, ExportFormat.BOM, ExportFormat.MANIFEST]
        assert output.dxf.mode == "combined"

    def test_formats_from_strings(self) -> None:
        output = OutputConfig.model_validate({"formats": ["dxf", "cnc"]})
        assert output.formats == [ExportFormat.DXF, ExportFormat.CNC]

    def test_unknown_format(self) -> None:
        with pytest.raises(ValidationError):
            OutputConfig.model_validate({"formats": ["stl"]})

    def test_dxf_mode(self) -> None:
        assert DxfOutputConfig(mode="per_panel").mode == "per_panel"
        with pytest.raises(ValidationError):
            DxfOutputConfig.model_validate({"mode": "sheets"})
