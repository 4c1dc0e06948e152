"""Structural load check.

Compares the load on every panel that carries assigned hardware with the
hardware's rated capacity. Purely advisory: panels are never modified.
"""

from __future__ import annotations

import logging
from typing import Iterable

from cabinet_mfg.domain.value_objects import (
    CabinetPanel,
    FittingAssignment,
    Severity,
    ValidationCategory,
    ValidationResult,
)

from .constants import LOAD_WARNING_RATIO
from .fittings import FittingCatalogue

logger = logging.getLogger(__name__)


class StructuralCheck:
    """Validates panel load against hardware load ratings.

    Policy: a load above 100% of rated capacity is an error (it blocks the
    gate); above 80% is a warning.
    """

    def __init__(self, catalogue: FittingCatalogue) -> None:
        self.catalogue = catalogue

    def check(
        self,
        panels: Iterable[CabinetPanel],
        assignments: Iterable[FittingAssignment],
    ) -> list[ValidationResult]:
        """Check every load-rated assignment.

        Assignments to unknown panels or fittings are skipped here; the
        fitting assessment reports those.

        Returns:
            One safety finding per overloaded or near-capacity assignment.
        """
        by_id = {panel.id: panel for panel in panels}
        results: list[ValidationResult] = []

        for assignment in assignments:
            panel = by_id.get(assignment.panel_id)
            if panel is None or assignment.fitting_id not in self.catalogue:
                continue
            fitting = self.catalogue.get(assignment.fitting_id)
            capacity = fitting.weight_capacity
            if not capacity:
                continue

            load = panel.total_load_kg
            ratio = load / capacity
            details = {
                "fitting_id": fitting.id,
                "load_kg": round(load, 3),
                "capacity_kg": capacity,
                "load_percent": round(ratio * 100, 1),
            }
            if ratio > 1:
                results.append(
                    ValidationResult(
                        code="safety-overload",
                        category=ValidationCategory.SAFETY,
                        severity=Severity.ERROR,
                        message=(
                            f"{panel.name} load {load:.1f}kg exceeds {fitting.name} "
                            f"rating {capacity:g}kg"
                        ),
                        panel_id=panel.id,
                        details=details,
                    )
                )
            elif ratio > LOAD_WARNING_RATIO:
                results.append(
                    ValidationResult(
                        code="safety-load-high",
                        category=ValidationCategory.SAFETY,
                        severity=Severity.WARNING,
                        message=(
                            f"{panel.name} load at {ratio:.0%} of {fitting.name} "
                            f"rating {capacity:g}kg"
                        ),
                        panel_id=panel.id,
                        details=details,
                    )
                )

        if results:
            logger.debug(f"Structural check produced {len(results)} findings")
        return results
