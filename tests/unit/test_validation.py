"""Tests for design validation rules."""

from __future__ import annotations

import pytest

from cabinet_mfg.application import CabinetPipeline
from cabinet_mfg.domain import Cabinet, CabinetIntent
from cabinet_mfg.domain.services import DesignValidator
from cabinet_mfg.domain.value_objects import (
    CabinetDimensions,
    CabinetStructure,
    MachineProfile,
    PanelOverride,
    Severity,
    ValidationCategory,
    ValidationResult,
    count_errors,
    count_warnings,
)


def codes(
    pipeline: CabinetPipeline,
    dimensions: CabinetDimensions | None = None,
    structure: CabinetStructure | None = None,
    **intent_fields: object,
) -> dict[str, Severity]:
    intent = CabinetIntent(
        dimensions=dimensions or CabinetDimensions(),
        structure=structure or CabinetStructure(),
        **intent_fields,  # type: ignore[arg-type]
    )
    return {r.code: r.severity for r in pipeline.compute(intent).validation}


class TestDefaultCabinet:
    """The default cabinet's findings."""

    def test_only_the_thin_back_is_reported(self, cabinet: Cabinet) -> None:
        """The 6 mm back is below the CENTATEQ clamping minimum."""
        assert len(cabinet.validation) == 1
        finding = cabinet.validation[0]
        assert finding.code == "mach-too-thin"
        assert finding.severity == Severity.WARNING
        assert finding.panel_id == "back"
        assert cabinet.error_count == 0
        assert cabinet.warning_count == 1


class TestDimensionRules:
    """Dimension range checks."""

    def test_width_below_minimum(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, CabinetDimensions(width=100))
        assert found["dim-width-min"] == Severity.ERROR

    def test_zero_width(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, CabinetDimensions(width=0))
        assert found["dim-width-nonpositive"] == Severity.ERROR
        assert "dim-width-min" not in found

    def test_wide_cabinet_warns(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, CabinetDimensions(width=1500))
        assert found["dim-width-max"] == Severity.WARNING
        assert found["str-shelf-span"] == Severity.WARNING

    def test_toe_kick_taller_than_cabinet(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, CabinetDimensions(toe_kick_height=720))
        assert found["dim-toe-kick"] == Severity.ERROR

    def test_shallow_cabinet_has_no_internal_depth(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, CabinetDimensions(depth=40))
        assert found["str-internal-depth"] == Severity.ERROR
        assert found["dim-depth-min"] == Severity.ERROR


class TestStructureRules:
    """Structure checks."""

    def test_negative_shelf_count(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, structure=CabinetStructure(shelf_count=-1))
        assert found["str-shelf-count-negative"] == Severity.ERROR

    def test_negative_divider_count(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, structure=CabinetStructure(divider_count=-3))
        assert found["str-divider-count-negative"] == Severity.ERROR

    def test_too_many_shelves(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, structure=CabinetStructure(shelf_count=6))
        assert found["str-shelf-count"] == Severity.WARNING
        assert found["str-shelf-spacing"] == Severity.WARNING

    def test_shelf_resting_on_bottom_is_not_a_collision(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, overrides={"shelf_1": PanelOverride(position=0)})
        assert "str-shelf-collision" not in found
        assert found["str-shelf-spacing"] == Severity.WARNING

    def test_shelf_through_the_top_is_a_collision(self, pipeline: CabinetPipeline) -> None:
        """586.4 mm of interior cannot hold a 16.8 mm shelf placed at 580 mm."""
        cabinet = pipeline.compute(
            CabinetIntent(overrides={"shelf_1": PanelOverride(position=580)})
        )
        collision = next(r for r in cabinet.validation if r.code == "str-shelf-collision")
        assert collision.severity == Severity.ERROR
        assert collision.category == ValidationCategory.STRUCTURE
        assert collision.details["value"] == pytest.approx(-10.4)
        assert "str-shelf-spacing" not in {r.code for r in cabinet.validation}

    def test_too_many_dividers(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, structure=CabinetStructure(divider_count=40))
        assert found["str-bay-width"] == Severity.ERROR

    def test_tall_backless_cabinet(self, pipeline: CabinetPipeline) -> None:
        found = codes(
            pipeline,
            CabinetDimensions(height=1200),
            CabinetStructure(has_back_panel=False),
        )
        assert found["str-backless-tall"] == Severity.WARNING

    def test_many_panels_is_info(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, structure=CabinetStructure(shelf_count=5, divider_count=4))
        assert found["mach-panel-count"] == Severity.INFO


class TestMachineRules:
    """Machine envelope checks."""

    def test_oversize_panels(self, cabinet: Cabinet, pipeline: CabinetPipeline) -> None:
        validator = DesignValidator(MachineProfile("tiny", "Tiny", 500, 500, 3, 60))
        results = validator.check_machine(cabinet.panels)
        oversize = {r.panel_id for r in results if r.code == "mach-oversize"}
        assert {"left_side", "right_side", "top", "bottom", "back", "shelf_1"} == oversize
        assert all(r.category == ValidationCategory.MACHINE for r in results)

    def test_too_thick(self, cabinet: Cabinet) -> None:
        validator = DesignValidator(MachineProfile("thin", "Thin", 3000, 3000, 3, 10))
        results = validator.check_machine(cabinet.panels)
        assert count_errors(results) == 5

    def test_heavy_panels_warn(self, pipeline: CabinetPipeline) -> None:
        """2300 x 800 mm sides in 16.8 mm particle board weigh about 20 kg."""
        cabinet = pipeline.compute(
            CabinetIntent(dimensions=CabinetDimensions(height=2400, depth=800))
        )
        heavy = [r for r in cabinet.validation if r.code == "mach-heavy-panel"]
        assert {r.panel_id for r in heavy} >= {"left_side", "right_side"}
        assert all(r.severity == Severity.WARNING for r in heavy)
        assert all("Heavy panel" in r.message for r in heavy)

    def test_default_panels_are_not_heavy(self, cabinet: Cabinet) -> None:
        assert "mach-heavy-panel" not in {r.code for r in cabinet.validation}

    def test_unknown_machine_profile(self, pipeline: CabinetPipeline) -> None:
        found = codes(pipeline, machine_profile_id="no-such-machine")
        assert found["mach-unknown-profile"] == Severity.ERROR

    def test_machine_fits_rotated(self) -> None:
        machine = MachineProfile("m", "M", 3000, 1500, 8, 60)
        assert machine.fits(1400, 2900)
        assert not machine.fits(1600, 3100)

    def test_profile_rejects_inverted_thickness(self) -> None:
        with pytest.raises(ValueError):
            MachineProfile("m", "M", 3000, 1500, 60, 8)


class TestValidationResult:
    """Tests for the ValidationResult value object."""

    def test_formatted_message(self) -> None:
        result = ValidationResult(
            "mach-too-thin", ValidationCategory.MACHINE, Severity.WARNING, "Too thin", "back"
        )
        assert result.formatted_message == "[WARN] machine: Too thin (back)"

    def test_code_required(self) -> None:
        with pytest.raises(ValueError):
            ValidationResult("", ValidationCategory.MACHINE, Severity.ERROR, "x")

    def test_counts(self) -> None:
        results = [
            ValidationResult("a", ValidationCategory.DIMENSION, Severity.ERROR, "a"),
            ValidationResult("b", ValidationCategory.DIMENSION, Severity.WARNING, "b"),
            ValidationResult("c", ValidationCategory.DIMENSION, Severity.INFO, "c"),
        ]
        assert count_errors(results) == 1
        assert count_warnings(results) == 1

    def test_details_do_not_affect_equality(self) -> None:
        a = ValidationResult("a", ValidationCategory.SAFETY, Severity.ERROR, "a", details={"x": 1})
        b = ValidationResult("a", ValidationCategory.SAFETY, Severity.ERROR, "a", details={"x": 2})
        assert a == b
