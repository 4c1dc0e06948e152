"""Tests for the tolerance engine."""

from __future__ import annotations

import itertools

import pytest

from cabinet_mfg.domain.services import (
    InstallMethod,
    ToleranceContext,
    ToleranceEngine,
    heavy_panel_warnings,
    panel_weight,
    semantic_tolerance,
    tolerance,
)
from cabinet_mfg.domain.value_objects import MaterialCategory, OperationKind


class TestTolerance:
    """Tests for tolerance()."""

    def test_total_over_every_pair(self) -> None:
        """Every (category, kind) pair yields a non-negative 0.5 mm multiple."""
        for category, kind in itertools.product(MaterialCategory, OperationKind):
            gap = tolerance(category, kind)
            assert gap >= 0
            assert (gap * 2) == int(gap * 2)

    def test_wood_panel_shelf_clearance(self) -> None:
        assert tolerance(MaterialCategory.WOOD_PANEL, OperationKind.SHELF_CLEARANCE) == 1.0

    def test_wood_panel_edge_banding_pre_mill(self) -> None:
        assert tolerance(MaterialCategory.WOOD_PANEL, OperationKind.EDGE_BANDING) == 0.5

    def test_grout_only_for_stone(self) -> None:
        assert tolerance(MaterialCategory.STONE_NATURAL, OperationKind.GROUT) == 2.0
        assert tolerance(MaterialCategory.WOOD_PANEL, OperationKind.GROUT) == 0.0

    def test_material_joint_gap_raises_slot_minimum(self) -> None:
        """Glass needs a 3 mm joint even where the slot minimum is lower."""
        assert tolerance(MaterialCategory.GLASS, OperationKind.JOINT_GAP) == 3.0
        assert tolerance(MaterialCategory.GLASS, OperationKind.SHELF_CLEARANCE) == 3.0


class TestSemanticTolerance:
    """Tests for semantic_tolerance()."""

    def test_solid_wood_humidity_movement(self) -> None:
        """1.2 m of solid wood moves 0.036 + 0.6 mm; rounded up to 1.0 mm."""
        result = semantic_tolerance(
            ToleranceContext(MaterialCategory.SOLID_WOOD, length_mm=1200, width_mm=300)
        )
        assert result.length_gap == 1.0
        assert result.width_gap == 1.0
        assert result.adjusted_length == pytest.approx(1198)
        assert result.adjusted_width == pytest.approx(298)

    def test_exterior_increases_gap(self) -> None:
        indoor = semantic_tolerance(
            ToleranceContext(MaterialCategory.SOLID_WOOD, length_mm=2000, width_mm=300)
        )
        outdoor = semantic_tolerance(
            ToleranceContext(
                MaterialCategory.SOLID_WOOD, length_mm=2000, width_mm=300, is_exterior=True
            )
        )
        assert outdoor.length_gap > indoor.length_gap
        assert any("Exterior" in w for w in outdoor.warnings)

    def test_floating_install_minimum_gap(self) -> None:
        result = semantic_tolerance(
            ToleranceContext(
                MaterialCategory.WOOD_PANEL,
                length_mm=600,
                width_mm=400,
                install_method=InstallMethod.FLOATING,
            )
        )
        assert result.length_gap == 8.0
        assert result.width_gap == 8.0

    def test_stone_reports_grout(self) -> None:
        result = semantic_tolerance(
            ToleranceContext(MaterialCategory.STONE_NATURAL, length_mm=600, width_mm=600)
        )
        assert result.grout_allowance == 2.0
        assert any("grout" in w for w in result.warnings)

    def test_wood_panel_pre_mill_and_chip_out(self) -> None:
        result = semantic_tolerance(
            ToleranceContext(MaterialCategory.WOOD_PANEL, length_mm=600, width_mm=400)
        )
        assert result.pre_mill == 0.5
        assert any("chip-out" in w for w in result.warnings)

    def test_high_expansion_warning(self) -> None:
        result = semantic_tolerance(
            ToleranceContext(MaterialCategory.ACRYLIC, length_mm=1000, width_mm=500)
        )
        assert any("High expansion" in w for w in result.warnings)


class TestPanelWeight:
    """Tests for panel_weight()."""

    def test_weight_from_volume(self) -> None:
        result = panel_weight(1000, 1000, 18, MaterialCategory.WOOD_PANEL)
        assert result.weight_kg == pytest.approx(12.6)
        assert result.warnings == ()

    def test_explicit_density(self) -> None:
        result = panel_weight(1000, 1000, 10, MaterialCategory.WOOD_PANEL, density=1000)
        assert result.weight_kg == pytest.approx(10)

    def test_heavy_panel_warnings(self) -> None:
        result = panel_weight(1000, 1000, 20, MaterialCategory.STONE_NATURAL)
        assert result.weight_kg == pytest.approx(54)
        assert len(result.warnings) == 3

    @pytest.mark.parametrize("weight, count", [(15, 0), (20, 1), (30, 2)])
    def test_heavy_panel_thresholds(self, weight: float, count: int) -> None:
        warnings = heavy_panel_warnings(weight)
        assert len(warnings) == count
        if count == 2:
            assert warnings[-1].startswith("Very heavy panel: 30.0kg")


class TestToleranceEngine:
    """Tests for the ToleranceEngine facade."""

    def test_wood_panel_properties(self) -> None:
        engine = ToleranceEngine()
        assert engine.shelf_clearance == 1.0
        assert engine.groove_play == 0.5
        assert engine.pre_mill == 0.5

    def test_category_changes_gaps(self) -> None:
        engine = ToleranceEngine(MaterialCategory.GLASS)
        assert engine.gap(OperationKind.HINGE_CUP) == 3.0
