"""Tolerance engine.

Injects material-behavior-aware gaps into open formulas before they become
dimensions. Every lookup is a pure, total function of its inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from cabinet_mfg.domain.value_objects import MaterialCategory, OperationKind

from .constants import HEAVY_PANEL_KG, VERY_HEAVY_PANEL_KG


class InstallMethod(str, Enum):
    """How a panel is fixed in place."""

    GLUE = "glue"
    MECHANICAL = "mechanical"
    FLOATING = "floating"


@dataclass(frozen=True)
class MaterialBehavior:
    """Physical behavior of a material category.

    Attributes:
        thermal_expansion: mm per meter per degree C.
        humidity_expansion: mm per meter per 100% RH change.
        min_joint_gap: Smallest joint gap the material tolerates (mm).
        grout_width: Grout line between pieces (mm), zero for non-tiled materials.
        edge_banding_allowance: Pre-mill trim per banded edge (mm).
        chip_out_risk: Whether the material chips when sawn.
        density: kg/m3.
        flexural_strength: MPa.
    """

    thermal_expansion: float
    humidity_expansion: float
    min_joint_gap: float
    grout_width: float
    edge_banding_allowance: float
    chip_out_risk: bool
    density: float
    flexural_strength: float


MATERIAL_BEHAVIORS: dict[MaterialCategory, MaterialBehavior] = {
    MaterialCategory.WOOD_PANEL: MaterialBehavior(0.005, 0.3, 0.0, 0.0, 0.5, True, 700, 30),
    MaterialCategory.SOLID_WOOD: MaterialBehavior(0.003, 2.5, 1.0, 0.0, 0.0, True, 600, 80),
    MaterialCategory.STONE_NATURAL: MaterialBehavior(0.008, 0.01, 2.0, 2.0, 0.0, True, 2700, 15),
    MaterialCategory.STONE_ENGINEERED: MaterialBehavior(0.01, 0.001, 1.0, 1.5, 0.0, False, 2400, 40),
    MaterialCategory.METAL_SHEET: MaterialBehavior(0.024, 0.0, 0.5, 0.0, 0.0, False, 2700, 200),
    MaterialCategory.GLASS: MaterialBehavior(0.009, 0.0, 3.0, 0.0, 0.0, False, 2500, 40),
    MaterialCategory.ACRYLIC: MaterialBehavior(0.07, 0.3, 2.0, 0.0, 0.0, False, 1200, 70),
}

# Minimum gap per formula slot, raised to the material's own joint gap
_KIND_BASE: dict[OperationKind, float] = {
    OperationKind.JOINT_GAP: 0.0,
    OperationKind.SHELF_CLEARANCE: 1.0,
    OperationKind.BACK_PANEL_GROOVE: 0.5,
    OperationKind.HINGE_CUP: 0.5,
    OperationKind.EDGE_BANDING: 0.0,
    OperationKind.GROUT: 0.0,
}

FLOATING_MIN_GAP: float = 8.0
EXTERIOR_FACTOR: float = 1.5


def round_up_half(value: float) -> float:
    """Round up to the next 0.5 mm step."""
    return math.ceil(round(value * 2, 9)) / 2


def tolerance(category: MaterialCategory, kind: OperationKind) -> float:
    """Gap in mm to inject for a material category and formula slot.

    Total over every (category, kind) pair; slots that do not apply to a
    material return 0.

    Args:
        category: Behavioral material category.
        kind: The formula slot being filled.

    Returns:
        Gap in mm, rounded up to 0.5 mm.
    """
    behavior = MATERIAL_BEHAVIORS[category]
    if kind == OperationKind.EDGE_BANDING:
        value = behavior.edge_banding_allowance
    elif kind == OperationKind.GROUT:
        value = behavior.grout_width
    else:
        value = max(_KIND_BASE[kind], behavior.min_joint_gap)
    return round_up_half(value)


@dataclass(frozen=True)
class ToleranceContext:
    """Environment and installation context for an expansion-aware gap."""

    material: MaterialCategory
    length_mm: float
    width_mm: float
    temp_variation: float = 10.0
    humidity_variation: float = 20.0
    is_exterior: bool = False
    install_method: InstallMethod = InstallMethod.MECHANICAL


@dataclass(frozen=True)
class ToleranceResult:
    """Gaps and adjusted sizes for one piece."""

    length_gap: float
    width_gap: float
    grout_allowance: float
    pre_mill: float
    adjusted_length: float
    adjusted_width: float
    warnings: tuple[str, ...] = field(default_factory=tuple)


def _expansion_gap(behavior: MaterialBehavior, size_mm: float, context: ToleranceContext) -> float:
    meters = size_mm / 1000
    thermal = meters * behavior.thermal_expansion * context.temp_variation
    humidity = meters * behavior.humidity_expansion * (context.humidity_variation / 100)
    return max(behavior.min_joint_gap, thermal + humidity)


def semantic_tolerance(context: ToleranceContext) -> ToleranceResult:
    """Expansion-aware joint gaps for a piece of the given size.

    The gap is the larger of the material's minimum joint gap and its
    thermal plus humidity movement, widened for exterior use, held open to
    8 mm for floating installs, and rounded up to 0.5 mm.
    """
    behavior = MATERIAL_BEHAVIORS[context.material]
    warnings: list[str] = []

    length_gap = _expansion_gap(behavior, context.length_mm, context)
    width_gap = _expansion_gap(behavior, context.width_mm, context)

    if context.is_exterior:
        length_gap *= EXTERIOR_FACTOR
        width_gap *= EXTERIOR_FACTOR
        warnings.append("Exterior installation: tolerances increased by 50%")

    if context.install_method == InstallMethod.FLOATING:
        length_gap = max(length_gap, FLOATING_MIN_GAP)
        width_gap = max(width_gap, FLOATING_MIN_GAP)
        warnings.append("Floating installation: minimum 8mm perimeter gap")

    length_gap = round_up_half(length_gap)
    width_gap = round_up_half(width_gap)

    if behavior.grout_width > 0:
        warnings.append(
            f"Stone material: {behavior.grout_width}mm grout line required between pieces"
        )
    if behavior.chip_out_risk:
        warnings.append("Material prone to chip-out: use climb-cut or scoring saw")
    if behavior.thermal_expansion > 0.05 or behavior.humidity_expansion > 1:
        warnings.append("High expansion material: ensure adequate expansion gaps")

    return ToleranceResult(
        length_gap=length_gap,
        width_gap=width_gap,
        grout_allowance=behavior.grout_width,
        pre_mill=behavior.edge_banding_allowance,
        adjusted_length=context.length_mm - 2 * length_gap,
        adjusted_width=context.width_mm - 2 * width_gap,
        warnings=tuple(warnings),
    )


def heavy_panel_warnings(weight_kg: float) -> list[str]:
    """Handling warnings for a panel of the given weight, mildest first."""
    warnings: list[str] = []
    if weight_kg > HEAVY_PANEL_KG:
        warnings.append(f"Heavy panel: {weight_kg:.1f}kg - verify hardware load rating")
    if weight_kg > VERY_HEAVY_PANEL_KG:
        warnings.append(
            f"Very heavy panel: {weight_kg:.1f}kg - may require heavy-duty hinges or lifts"
        )
    return warnings


@dataclass(frozen=True)
class PanelWeight:
    """Weight estimate with advisory warnings."""

    weight_kg: float
    warnings: tuple[str, ...] = ()


def panel_weight(
    length_mm: float,
    width_mm: float,
    thickness_mm: float,
    category: MaterialCategory,
    density: float | None = None,
) -> PanelWeight:
    """Estimate a panel's weight from its volume.

    Args:
        length_mm: Panel length.
        width_mm: Panel width.
        thickness_mm: Panel thickness.
        category: Material category, supplying the default density.
        density: Explicit density in kg/m3, overriding the category's.
    """
    rho = density if density is not None else MATERIAL_BEHAVIORS[category].density
    volume_m3 = (length_mm / 1000) * (width_mm / 1000) * (thickness_mm / 1000)
    weight = max(volume_m3, 0.0) * rho

    warnings = heavy_panel_warnings(weight)
    if category in (MaterialCategory.STONE_NATURAL, MaterialCategory.STONE_ENGINEERED):
        warnings.append("Stone panel: ensure substrate and adhesive can support weight")
    return PanelWeight(weight, tuple(warnings))


class ToleranceEngine:
    """Facade over the tolerance table for a fixed material category."""

    def __init__(self, category: MaterialCategory = MaterialCategory.WOOD_PANEL) -> None:
        self.category = category

    def gap(self, kind: OperationKind) -> float:
        """Gap for one formula slot."""
        return tolerance(self.category, kind)

    @property
    def shelf_clearance(self) -> float:
        """Per-side clearance between a shelf and the panels beside it."""
        return self.gap(OperationKind.SHELF_CLEARANCE)

    @property
    def groove_play(self) -> float:
        """Extra groove width over the back panel thickness."""
        return self.gap(OperationKind.BACK_PANEL_GROOVE)

    @property
    def pre_mill(self) -> float:
        """Trim allowance per banded edge."""
        return self.gap(OperationKind.EDGE_BANDING)
