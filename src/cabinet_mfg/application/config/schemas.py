"""Pydantic models for cabinet project files.

The models check types and structural constraints only. Out-of-range design
values (a 100 mm wide cabinet, a negative shelf count) are accepted here
and reported by the design validator, so an invalid design can still be
loaded and inspected.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cabinet_mfg.domain.services.constants import DEFAULT_MACHINE_PROFILE, MACHINE_PROFILES
from cabinet_mfg.domain.value_objects import (
    BackConstruction,
    ExportFormat,
    FittingRole,
    JointType,
    UnknownMaterialPolicy,
)

# Supported schema versions for project files
# Version 1.0: Initial schema
# Version 1.1: Added fittings and panel design loads
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})


class DimensionsConfig(BaseModel):
    """Overall cabinet size in mm."""

    model_config = ConfigDict(extra="forbid")

    width: float = 600.0
    height: float = 720.0
    depth: float = 560.0
    toe_kick_height: float = 100.0


class StructureConfig(BaseModel):
    """Shelves, dividers, back panel and joints."""

    model_config = ConfigDict(extra="forbid")

    shelf_count: int = Field(default=1, description="Shelves per bay")
    divider_count: int = 0
    has_back_panel: bool = True
    top_joint: JointType = JointType.INSET
    bottom_joint: JointType = JointType.INSET


class MaterialsConfig(BaseModel):
    """Default material ids. ``null`` leaves the slot unassigned."""

    model_config = ConfigDict(extra="forbid")

    default_core: str | None = "core-pb-16"
    default_surface: str | None = "surf-mel-white"
    default_edge: str | None = "edge-pvc-white-10"


class CabinetConfig(BaseModel):
    """Cabinet design intent."""

    model_config = ConfigDict(extra="forbid")

    dimensions: DimensionsConfig = Field(default_factory=DimensionsConfig)
    structure: StructureConfig = Field(default_factory=StructureConfig)
    materials: MaterialsConfig = Field(default_factory=MaterialsConfig)


class ManufacturingConfig(BaseModel):
    """Process constants, all in mm."""

    model_config = ConfigDict(extra="forbid")

    glue_thickness: float = Field(default=0.1, ge=0)
    groove_depth: float = Field(default=8.0, gt=0)
    shelf_front_setback: float = Field(default=20.0, ge=0)
    shelf_back_setback: float = Field(default=2.0, ge=0)
    back_construction: BackConstruction = BackConstruction.INSET
    back_void: float = Field(default=20.0, ge=0)
    back_thickness: float = Field(default=6.0, gt=0)
    back_core: str = "core-mdf-6"


class MachineConfig(BaseModel):
    """Target machine."""

    model_config = ConfigDict(extra="forbid")

    profile: str = DEFAULT_MACHINE_PROFILE

    @field_validator("profile")
    @classmethod
    def validate_profile(cls, v: str) -> str:
        if v not in MACHINE_PROFILES:
            raise ValueError(
                f"Unknown machine profile '{v}'. Available: {sorted(MACHINE_PROFILES)}"
            )
        return v


class FacesConfig(BaseModel):
    """Surface ids for both faces of one panel."""

    model_config = ConfigDict(extra="forbid")

    face_a: str | None = None
    face_b: str | None = None


class EdgesConfig(BaseModel):
    """Edge band ids per side of one panel."""

    model_config = ConfigDict(extra="forbid")

    top: str | None = None
    bottom: str | None = None
    left: str | None = None
    right: str | None = None


class PanelOverrideConfig(BaseModel):
    """Per-panel override. Omitted fields keep the decomposed default.

    Attributes:
        core: Core material id.
        faces: Replaces both face assignments.
        edges: Replaces the whole edge assignment.
        position: Shelf height above the inside of the carcass base, in mm.
        design_load_kg: Load the panel carries in use.
    """

    model_config = ConfigDict(extra="forbid")

    core: str | None = None
    faces: FacesConfig | None = None
    edges: EdgesConfig | None = None
    position: float | None = None
    design_load_kg: float | None = Field(default=None, ge=0)


class FittingAssignmentConfig(BaseModel):
    """A fitting placed on a panel."""

    model_config = ConfigDict(extra="forbid")

    fitting_id: str = Field(..., min_length=1)
    panel_id: str = Field(..., min_length=1)
    role: FittingRole
    positions: list[float] = Field(
        default_factory=list, description="Placement offsets along the panel in mm"
    )


class DxfOutputConfig(BaseModel):
    """DXF export options.

    Attributes:
        mode: "per_panel" writes one file per panel, "combined" one job file.
    """

    model_config = ConfigDict(extra="forbid")

    mode: Literal["per_panel", "combined"] = "combined"


class OutputConfig(BaseModel):
    """Export options."""

    model_config = ConfigDict(extra="forbid")

    project_name: str = Field(default="cabinet", min_length=1)
    formats: list[ExportFormat] = Field(
        default_factory=lambda: [ExportFormat.CUT_LIST, ExportFormat.BOM, ExportFormat.MANIFEST]
    )
    output_dir: str | None = None
    dxf: DxfOutputConfig = Field(default_factory=DxfOutputConfig)


class ProjectConfiguration(BaseModel):
    """Root model of a project file.

    Example:
        >>> config = ProjectConfiguration(
        ...     schema_version="1.0",
        ...     cabinet=CabinetConfig(dimensions=DimensionsConfig(width=900)),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    cabinet: CabinetConfig = Field(default_factory=CabinetConfig)
    manufacturing: ManufacturingConfig = Field(default_factory=ManufacturingConfig)
    machine: MachineConfig = Field(default_factory=MachineConfig)
    panel_overrides: dict[str, PanelOverrideConfig] = Field(default_factory=dict)
    fittings: list[FittingAssignmentConfig] = Field(default_factory=list)
    material_policy: UnknownMaterialPolicy = UnknownMaterialPolicy.STRICT
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v
        major = int(v.split(".")[0])
        if major in {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}:
            return v
        raise ValueError(
            f"Unsupported schema version '{v}'. Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
