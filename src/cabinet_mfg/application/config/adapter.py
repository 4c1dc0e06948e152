"""Conversion from a validated project configuration to domain values."""

from __future__ import annotations

from cabinet_mfg.domain.entities import CabinetIntent
from cabinet_mfg.domain.value_objects import (
    CabinetDimensions,
    CabinetStructure,
    EdgeAssignment,
    FaceAssignment,
    FittingAssignment,
    ManufacturingParameters,
    MaterialAssignment,
    PanelOverride,
)

from .schemas import PanelOverrideConfig, ProjectConfiguration


def config_to_parameters(config: ProjectConfiguration) -> ManufacturingParameters:
    """Build manufacturing parameters from the ``manufacturing`` section."""
    m = config.manufacturing
    return ManufacturingParameters(
        glue_thickness=m.glue_thickness,
        groove_depth=m.groove_depth,
        shelf_front_setback=m.shelf_front_setback,
        shelf_back_setback=m.shelf_back_setback,
        back_construction=m.back_construction,
        back_void=m.back_void,
        back_thickness=m.back_thickness,
        back_core=m.back_core,
    )


def config_to_fittings(config: ProjectConfiguration) -> tuple[FittingAssignment, ...]:
    """Build fitting assignments from the ``fittings`` list."""
    return tuple(
        FittingAssignment(
            fitting_id=f.fitting_id,
            panel_id=f.panel_id,
            role=f.role,
            positions=tuple(f.positions),
        )
        for f in config.fittings
    )


def _override(cfg: PanelOverrideConfig) -> PanelOverride:
    faces = FaceAssignment(cfg.faces.face_a, cfg.faces.face_b) if cfg.faces else None
    edges = (
        EdgeAssignment(cfg.edges.top, cfg.edges.bottom, cfg.edges.left, cfg.edges.right)
        if cfg.edges
        else None
    )
    return PanelOverride(
        core_material_id=cfg.core,
        faces=faces,
        edges=edges,
        position=cfg.position,
        design_load_kg=cfg.design_load_kg,
    )


def config_to_overrides(config: ProjectConfiguration) -> dict[str, PanelOverride]:
    """Build the per-panel override map, keyed by panel id."""
    return {panel_id: _override(cfg) for panel_id, cfg in config.panel_overrides.items()}


def config_to_intent(config: ProjectConfiguration) -> CabinetIntent:
    """Build the complete design intent from a project configuration.

    Example:
        >>> config = load_config(Path("kitchen-base.json"))
        >>> cabinet = recompute(config_to_intent(config))
    """
    cab = config.cabinet
    dims, structure, materials = cab.dimensions, cab.structure, cab.materials
    return CabinetIntent(
        dimensions=CabinetDimensions(
            width=dims.width,
            height=dims.height,
            depth=dims.depth,
            toe_kick_height=dims.toe_kick_height,
        ),
        structure=CabinetStructure(
            shelf_count=structure.shelf_count,
            divider_count=structure.divider_count,
            has_back_panel=structure.has_back_panel,
            top_joint=structure.top_joint,
            bottom_joint=structure.bottom_joint,
        ),
        materials=MaterialAssignment(
            default_core=materials.default_core,
            default_surface=materials.default_surface,
            default_edge=materials.default_edge,
        ),
        parameters=config_to_parameters(config),
        overrides=config_to_overrides(config),
        fittings=config_to_fittings(config),
        machine_profile_id=config.machine.profile,
        material_policy=config.material_policy,
    )
