"""Design validation.

Rules for the dimension, structure and machine categories. Material
findings come from decomposition, safety findings from the structural check
and fitting assessment. Every rule returns structured results; nothing here
raises for out-of-range input.
"""

from __future__ import annotations

import logging
from typing import Callable

from cabinet_mfg.domain.value_objects import (
    CabinetDimensions,
    CabinetPanel,
    CabinetStructure,
    MachineProfile,
    PanelRole,
    Severity,
    ValidationCategory,
    ValidationResult,
)

from .constants import (
    BACKLESS_HEIGHT_LIMIT,
    LARGE_PANEL_COUNT,
    MAX_SHELF_COUNT,
    MAX_SHELF_SPAN,
    MAX_STANDARD_DEPTH,
    MAX_STANDARD_HEIGHT,
    MAX_STANDARD_WIDTH,
    MIN_DEPTH,
    MIN_HEIGHT,
    MIN_SHELF_SPACING,
    MIN_WIDTH,
)
from .decomposer import DecompositionResult
from .tolerance import heavy_panel_warnings

logger = logging.getLogger(__name__)

_DIMENSION_LIMITS: tuple[tuple[str, float, float], ...] = (
    ("width", MIN_WIDTH, MAX_STANDARD_WIDTH),
    ("height", MIN_HEIGHT, MAX_STANDARD_HEIGHT),
    ("depth", MIN_DEPTH, MAX_STANDARD_DEPTH),
)


def _result(
    code: str,
    category: ValidationCategory,
    severity: Severity,
    message: str,
    panel_id: str | None = None,
    **details: object,
) -> ValidationResult:
    return ValidationResult(code, category, severity, message, panel_id, dict(details))


class DesignValidator:
    """Validates a decomposed cabinet against dimension, structure and machine rules.

    Example:
        validator = DesignValidator(MACHINE_PROFILES["homag-centateq"])
        results = validator.validate(dimensions, structure, decomposition)
        errors = [r for r in results if r.is_error]
    """

    def __init__(self, machine: MachineProfile) -> None:
        self.machine = machine

    def validate(
        self,
        dimensions: CabinetDimensions,
        structure: CabinetStructure,
        decomposition: DecompositionResult,
    ) -> list[ValidationResult]:
        """Run every rule and return the findings in rule order."""
        rules: list[Callable[[], list[ValidationResult]]] = [
            lambda: self.check_dimensions(dimensions),
            lambda: self.check_structure(dimensions, structure, decomposition),
            lambda: self.check_machine(decomposition.panels),
        ]
        results: list[ValidationResult] = []
        for rule in rules:
            results.extend(rule())
        logger.debug(f"Design validation produced {len(results)} findings")
        return results

    def check_dimensions(self, dimensions: CabinetDimensions) -> list[ValidationResult]:
        """Range checks on the overall cabinet size."""
        dim = ValidationCategory.DIMENSION
        results: list[ValidationResult] = []

        for name, minimum, maximum in _DIMENSION_LIMITS:
            value = getattr(dimensions, name)
            if value <= 0:
                results.append(
                    _result(
                        f"dim-{name}-nonpositive",
                        dim,
                        Severity.ERROR,
                        f"Cabinet {name} must be positive, got {value:g}mm",
                        value=value,
                    )
                )
            elif value < minimum:
                results.append(
                    _result(
                        f"dim-{name}-min",
                        dim,
                        Severity.ERROR,
                        f"Cabinet {name} {value:g}mm is below minimum {minimum:g}mm",
                        value=value,
                        limit=minimum,
                    )
                )
            elif value > maximum:
                results.append(
                    _result(
                        f"dim-{name}-max",
                        dim,
                        Severity.WARNING,
                        f"Cabinet {name} {value:g}mm exceeds standard maximum {maximum:g}mm",
                        value=value,
                        limit=maximum,
                    )
                )

        toe = dimensions.toe_kick_height
        if toe < 0 or (dimensions.height > 0 and toe >= dimensions.height):
            results.append(
                _result(
                    "dim-toe-kick",
                    dim,
                    Severity.ERROR,
                    f"Toe kick height {toe:g}mm must be between 0 and the cabinet height",
                    value=toe,
                )
            )
        return results

    def check_structure(
        self,
        dimensions: CabinetDimensions,
        structure: CabinetStructure,
        decomposition: DecompositionResult,
    ) -> list[ValidationResult]:
        """Collision, spacing and span checks on the decomposed layout."""
        cat = ValidationCategory.STRUCTURE
        results: list[ValidationResult] = []

        for name in ("shelf_count", "divider_count"):
            value = getattr(structure, name)
            if value < 0:
                label = name.replace("_", " ")
                results.append(
                    _result(
                        f"str-{name.replace('_', '-')}-negative",
                        cat,
                        Severity.ERROR,
                        f"{label.capitalize()} cannot be negative, got {value}; treated as 0",
                        value=value,
                    )
                )

        depth = decomposition.internal_depth
        if depth <= 0:
            results.append(
                _result(
                    "str-internal-depth",
                    cat,
                    Severity.ERROR,
                    f"Internal depth {depth:g}mm leaves no room for shelves; "
                    "reduce setbacks or increase cabinet depth",
                    value=depth,
                )
            )

        if decomposition.bay_width <= 0:
            results.append(
                _result(
                    "str-bay-width",
                    cat,
                    Severity.ERROR,
                    f"Bay width {decomposition.bay_width:g}mm: too many dividers for the width",
                    value=decomposition.bay_width,
                )
            )
        elif decomposition.shelf_count > 0 and decomposition.bay_width > MAX_SHELF_SPAN:
            results.append(
                _result(
                    "str-shelf-span",
                    cat,
                    Severity.WARNING,
                    f"Shelf span {decomposition.bay_width:.0f}mm exceeds {MAX_SHELF_SPAN:g}mm; "
                    "add a divider to prevent sagging",
                    value=decomposition.bay_width,
                    limit=MAX_SHELF_SPAN,
                )
            )

        if decomposition.shelf_count > MAX_SHELF_COUNT:
            results.append(
                _result(
                    "str-shelf-count",
                    cat,
                    Severity.WARNING,
                    f"{decomposition.shelf_count} shelves per bay exceeds the usual {MAX_SHELF_COUNT}",
                    value=decomposition.shelf_count,
                )
            )

        spacing = self._min_shelf_spacing(decomposition.panels)
        if spacing is not None and spacing < 0:
            results.append(
                _result(
                    "str-shelf-collision",
                    cat,
                    Severity.ERROR,
                    f"Shelves overlap each other or the top/bottom by {-spacing:.1f}mm",
                    value=round(spacing, 3),
                )
            )
        elif spacing is not None and spacing < MIN_SHELF_SPACING:
            results.append(
                _result(
                    "str-shelf-spacing",
                    cat,
                    Severity.WARNING,
                    f"Shelf spacing {spacing:.0f}mm is below {MIN_SHELF_SPACING:g}mm",
                    value=round(spacing, 3),
                    limit=MIN_SHELF_SPACING,
                )
            )

        if not structure.has_back_panel and dimensions.height > BACKLESS_HEIGHT_LIMIT:
            results.append(
                _result(
                    "str-backless-tall",
                    cat,
                    Severity.WARNING,
                    f"Cabinet taller than {BACKLESS_HEIGHT_LIMIT:g}mm without a back panel "
                    "may rack; add a back or bracing",
                    value=dimensions.height,
                )
            )
        return results

    @staticmethod
    def _min_shelf_spacing(panels: tuple[CabinetPanel, ...]) -> float | None:
        """Smallest clear gap between shelves, bottom and top in any bay."""
        by_role: dict[PanelRole, list[CabinetPanel]] = {}
        for panel in panels:
            by_role.setdefault(panel.role, []).append(panel)
        shelves = by_role.get(PanelRole.SHELF, [])
        bottom = next(iter(by_role.get(PanelRole.BOTTOM, [])), None)
        top = next(iter(by_role.get(PanelRole.TOP, [])), None)
        if not shelves or bottom is None or top is None:
            return None

        floor = bottom.position[1] + bottom.thickness
        ceiling = top.position[1]
        bays: dict[int | None, list[CabinetPanel]] = {}
        for shelf in shelves:
            bays.setdefault(shelf.bay, []).append(shelf)

        smallest: float | None = None
        for bay_shelves in bays.values():
            level = floor
            for shelf in sorted(bay_shelves, key=lambda p: p.position[1]):
                gap = shelf.position[1] - level
                smallest = gap if smallest is None else min(smallest, gap)
                level = shelf.position[1] + shelf.thickness
            gap = ceiling - level
            smallest = gap if smallest is None else min(smallest, gap)
        return smallest

    def check_machine(self, panels: tuple[CabinetPanel, ...]) -> list[ValidationResult]:
        """Envelope and thickness checks against the selected machine profile."""
        cat = ValidationCategory.MACHINE
        machine = self.machine
        results: list[ValidationResult] = []

        for panel in panels:
            cut_w, cut_h = panel.computed.cut_width, panel.computed.cut_height
            if not machine.fits(cut_w, cut_h):
                results.append(
                    _result(
                        "mach-oversize",
                        cat,
                        Severity.ERROR,
                        f"{panel.name} {cut_w:.1f}x{cut_h:.1f}mm exceeds {machine.name} "
                        f"envelope {machine.max_width:g}x{machine.max_height:g}mm",
                        panel.id,
                        machine=machine.id,
                    )
                )
            if panel.thickness > machine.max_thickness:
                results.append(
                    _result(
                        "mach-too-thick",
                        cat,
                        Severity.ERROR,
                        f"{panel.name} {panel.thickness:g}mm is thicker than {machine.name} "
                        f"maximum {machine.max_thickness:g}mm",
                        panel.id,
                        machine=machine.id,
                    )
                )
            elif panel.thickness < machine.min_thickness:
                results.append(
                    _result(
                        "mach-too-thin",
                        cat,
                        Severity.WARNING,
                        f"{panel.name} {panel.thickness:g}mm is below {machine.name} clamping "
                        f"minimum {machine.min_thickness:g}mm; saw only",
                        panel.id,
                        machine=machine.id,
                    )
                )
            handling = heavy_panel_warnings(panel.computed.weight_kg)
            if handling:
                results.append(
                    _result(
                        "mach-heavy-panel",
                        cat,
                        Severity.WARNING,
                        f"{panel.name}: {handling[-1]}",
                        panel.id,
                        weight_kg=round(panel.computed.weight_kg, 3),
                    )
                )

        if len(panels) > LARGE_PANEL_COUNT:
            results.append(
                _result(
                    "mach-panel-count",
                    cat,
                    Severity.INFO,
                    f"{len(panels)} panels; consider batching the job",
                    value=len(panels),
                )
            )
        return results
