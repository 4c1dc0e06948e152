"""Material stack arithmetic.

Composite thickness, finish-to-cut conversion, safe internal depth, and the
derived area, weight, cost and CO2 figures of a panel. All functions are pure
and operate on millimeters without rounding.
"""

from __future__ import annotations

from typing import Mapping

from cabinet_mfg.domain.value_objects import (
    CoreMaterial,
    EdgeMaterial,
    EdgeSide,
    ManufacturingParameters,
    PanelComputed,
    SurfaceMaterial,
)


def total_thickness(
    core: float,
    surface_a: float | None = None,
    surface_b: float | None = None,
    glue: float = 0.1,
) -> float:
    """Real thickness of a core with optional bonded faces.

    Each present face adds its own thickness plus one glue line; a bare
    core contributes only its own thickness.

    Example:
        total_thickness(16, 0.8, 0.8, 0.1)  # 17.8
    """
    thickness = core
    for surface in (surface_a, surface_b):
        if surface is not None:
            thickness += surface + glue
    return thickness


def internal_depth(depth: float, params: ManufacturingParameters) -> float:
    """Safe depth for shelves and dividers.

    Cabinet depth minus the back panel, its groove offset, and the front and
    back setbacks. The value is returned unclamped; a result at or below zero
    is reported by the design validator.
    """
    return (
        depth
        - params.back_thickness
        - params.groove_offset
        - params.shelf_front_setback
        - params.shelf_back_setback
    )


def cut_dimension(finish: float, *edge_thicknesses: float) -> float:
    """Substrate cutting size after deducting edge bands on one axis."""
    return finish - sum(edge_thicknesses)


def edge_thickness(edges: Mapping[EdgeSide, EdgeMaterial], side: EdgeSide) -> float:
    edge = edges.get(side)
    return edge.thickness if edge is not None else 0.0


def compute_panel(
    finish_width: float,
    finish_height: float,
    core: CoreMaterial,
    surface_a: SurfaceMaterial | None,
    surface_b: SurfaceMaterial | None,
    edges: Mapping[EdgeSide, EdgeMaterial],
    glue: float,
) -> PanelComputed:
    """Derive every computed field of a panel from its finish size and materials.

    Args:
        finish_width: As-installed width, including left/right edge bands.
        finish_height: As-installed height, including top/bottom edge bands.
        core: Resolved core material.
        surface_a: Resolved face-A surface, or None for a bare face.
        surface_b: Resolved face-B surface, or None for a bare face.
        edges: Resolved edge band per banded side.
        glue: Glue line thickness per bonded face.

    Returns:
        PanelComputed with thickness, cut sizes, areas, weight, cost and CO2.
    """
    real = total_thickness(
        core.thickness,
        surface_a.thickness if surface_a else None,
        surface_b.thickness if surface_b else None,
        glue,
    )
    cut_width = cut_dimension(
        finish_width,
        edge_thickness(edges, EdgeSide.LEFT),
        edge_thickness(edges, EdgeSide.RIGHT),
    )
    cut_height = cut_dimension(
        finish_height,
        edge_thickness(edges, EdgeSide.TOP),
        edge_thickness(edges, EdgeSide.BOTTOM),
    )

    area = max(finish_width, 0.0) * max(finish_height, 0.0) / 1_000_000
    edge_length = 0.0
    edge_cost = 0.0
    for side, edge in edges.items():
        length = finish_height if side in (EdgeSide.LEFT, EdgeSide.RIGHT) else finish_width
        meters = max(length, 0.0) / 1000
        edge_length += meters
        edge_cost += meters * edge.cost_per_meter

    cost = area * core.cost_per_sqm + edge_cost
    co2 = area * core.co2_per_sqm
    for surface in (surface_a, surface_b):
        if surface is not None:
            cost += area * surface.cost_per_sqm
            co2 += area * surface.co2_per_sqm

    return PanelComputed(
        real_thickness=real,
        cut_width=cut_width,
        cut_height=cut_height,
        area=area,
        surface_area=2 * area,
        edge_length=edge_length,
        weight_kg=area * (real / 1000) * core.density,
        cost=cost,
        co2=co2,
        cut_offset_x=edge_thickness(edges, EdgeSide.LEFT),
        cut_offset_y=edge_thickness(edges, EdgeSide.BOTTOM),
    )


def saw_dimension(cut: float, pre_mill: float, edged_sides: int) -> float:
    """Saw size including the pre-milling trim taken off banded edges."""
    return cut + pre_mill * edged_sides
