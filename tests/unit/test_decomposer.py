"""Tests for PanelDecomposer."""

from __future__ import annotations

import pytest

from cabinet_mfg.domain.registries import MaterialCatalog
from cabinet_mfg.domain.services import DecompositionResult, PanelDecomposer, front_edge_sides
from cabinet_mfg.domain.value_objects import (
    CabinetDimensions,
    CabinetStructure,
    EdgeAssignment,
    EdgeSide,
    FaceAssignment,
    JointType,
    MaterialAssignment,
    PanelOverride,
    PanelRole,
    Severity,
    UnknownMaterialPolicy,
)


def decompose(
    catalog: MaterialCatalog,
    dimensions: CabinetDimensions | None = None,
    structure: CabinetStructure | None = None,
    materials: MaterialAssignment | None = None,
    overrides: dict[str, PanelOverride] | None = None,
    policy: UnknownMaterialPolicy = UnknownMaterialPolicy.STRICT,
) -> DecompositionResult:
    decomposer = PanelDecomposer(catalog, policy=policy)
    return decomposer.decompose(
        dimensions or CabinetDimensions(),
        structure or CabinetStructure(),
        materials or MaterialAssignment(),
        overrides,
    )


class TestDefaultCabinet:
    """Decomposition of the 600 x 720 x 560 default cabinet."""

    @pytest.fixture
    def result(self, catalog: MaterialCatalog) -> DecompositionResult:
        return decompose(catalog)

    def test_panel_ids_in_canonical_order(self, result: DecompositionResult) -> None:
        assert [p.id for p in result.panels] == [
            "left_side",
            "right_side",
            "top",
            "bottom",
            "back",
            "shelf_1",
        ]

    def test_no_findings(self, result: DecompositionResult) -> None:
        assert result.findings == ()

    def test_side_sizes(self, result: DecompositionResult) -> None:
        """Sides are full depth by body height, banded front, top and bottom."""
        side = result.get("left_side")
        assert side is not None
        assert side.finish_width == pytest.approx(560)
        assert side.finish_height == pytest.approx(620)
        assert side.computed.cut_width == pytest.approx(559)
        assert side.computed.cut_height == pytest.approx(618)
        assert side.thickness == pytest.approx(16.8)
        assert side.position == pytest.approx((0.0, 100.0, 0.0))

    def test_right_side_position(self, result: DecompositionResult) -> None:
        side = result.get("right_side")
        assert side is not None
        assert side.position[0] == pytest.approx(583.2)

    def test_inset_top_fits_between_sides(self, result: DecompositionResult) -> None:
        top = result.get("top")
        assert top is not None
        assert top.finish_width == pytest.approx(566.4)
        assert top.finish_height == pytest.approx(534)
        assert top.computed.cut_height == pytest.approx(533)
        assert top.position == pytest.approx((16.8, 703.2, 0.0))

    def test_back_panel(self, result: DecompositionResult) -> None:
        """The back is bare 6 mm MDF covering the full width and body height."""
        back = result.get("back")
        assert back is not None
        assert back.core_material_id == "core-mdf-6"
        assert back.thickness == pytest.approx(6)
        assert back.finish_width == pytest.approx(600)
        assert back.finish_height == pytest.approx(620)
        assert back.faces == FaceAssignment()
        assert back.edges.edged_count == 0
        assert back.position[2] == pytest.approx(534)

    def test_shelf_geometry(self, result: DecompositionResult) -> None:
        """The shelf takes clearance on both sides and sits mid-interior."""
        shelf = result.get("shelf_1")
        assert shelf is not None
        assert shelf.finish_width == pytest.approx(564.4)
        assert shelf.finish_height == pytest.approx(512)
        assert shelf.computed.cut_height == pytest.approx(511)
        assert shelf.position == pytest.approx((17.8, 410.0, 20.0))
        assert shelf.bay == 1
        assert shelf.computed.weight_kg == pytest.approx(
            0.5644 * 0.512 * 0.0168 * 650, rel=1e-6
        )

    def test_layout_figures(self, result: DecompositionResult) -> None:
        assert result.internal_depth == pytest.approx(512)
        assert result.bay_width == pytest.approx(566.4)
        assert result.interior_height == pytest.approx(586.4)


class TestStructureVariants:
    """Joint, divider and back panel variations."""

    def test_overlay_top_spans_full_width(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, structure=CabinetStructure(top_joint=JointType.OVERLAY))
        top = result.get("top")
        side = result.get("left_side")
        assert top is not None and side is not None
        assert top.finish_width == pytest.approx(600)
        assert side.finish_height == pytest.approx(620 - 16.8)
        assert EdgeSide.TOP not in dict(side.edges.items())

    def test_no_back_panel(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, structure=CabinetStructure(has_back_panel=False))
        assert result.get("back") is None
        top = result.get("top")
        assert top is not None
        assert top.finish_height == pytest.approx(560)

    def test_divider_creates_two_bays(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, structure=CabinetStructure(shelf_count=1, divider_count=1))
        ids = [p.id for p in result.panels]
        assert ids == [
            "left_side",
            "right_side",
            "top",
            "bottom",
            "back",
            "divider_1",
            "shelf_1",
            "shelf_2",
        ]
        assert result.bay_width == pytest.approx((566.4 - 16.8) / 2)

        divider = result.get("divider_1")
        shelf_2 = result.get("shelf_2")
        assert divider is not None and shelf_2 is not None
        assert divider.position[0] == pytest.approx(16.8 + 274.8)
        assert divider.finish_width == pytest.approx(512)
        assert shelf_2.bay == 2
        assert shelf_2.position[0] == pytest.approx(291.6 + 16.8 + 1.0)
        assert shelf_2.name == "Shelf 1 (Bay 2)"

    def test_shelves_evenly_spaced(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, structure=CabinetStructure(shelf_count=3))
        heights = [p.position[1] for p in result.panels if p.role == PanelRole.SHELF]
        step = 586.4 / 4
        assert heights == pytest.approx([116.8 + step, 116.8 + 2 * step, 116.8 + 3 * step])

    def test_negative_counts_clamped(self, catalog: MaterialCatalog) -> None:
        result = decompose(
            catalog, structure=CabinetStructure(shelf_count=-2, divider_count=-1)
        )
        assert result.shelf_count == 0
        assert result.divider_count == 0
        assert len(result.panels) == 5

    def test_impossible_geometry_does_not_raise(self, catalog: MaterialCatalog) -> None:
        """A tiny cabinet still decomposes; the validator reports the problems."""
        result = decompose(catalog, dimensions=CabinetDimensions(width=20, depth=30))
        assert result.internal_depth < 0
        assert result.bay_width < 0


class TestOverrides:
    """Per-panel overrides."""

    def test_shelf_position_override(self, catalog: MaterialCatalog) -> None:
        """The position is measured from the inside of the carcass base."""
        result = decompose(catalog, overrides={"shelf_1": PanelOverride(position=200)})
        shelf = result.get("shelf_1")
        assert shelf is not None
        assert shelf.position[1] == pytest.approx(100 + 16.8 + 200)

    def test_zero_position_rests_on_the_bottom(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, overrides={"shelf_1": PanelOverride(position=0)})
        bottom, shelf = result.get("bottom"), result.get("shelf_1")
        assert bottom is not None and shelf is not None
        assert shelf.position[1] == pytest.approx(bottom.position[1] + bottom.thickness)

    def test_core_override(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, overrides={"shelf_1": PanelOverride(core_material_id="core-pb-18")})
        shelf = result.get("shelf_1")
        assert shelf is not None
        assert shelf.core_material_id == "core-pb-18"
        assert shelf.thickness == pytest.approx(18.8)

    def test_edges_override_replaces_assignment(self, catalog: MaterialCatalog) -> None:
        edges = EdgeAssignment(bottom="edge-pvc-white-20", top="edge-pvc-white-20")
        result = decompose(catalog, overrides={"shelf_1": PanelOverride(edges=edges)})
        shelf = result.get("shelf_1")
        assert shelf is not None
        assert shelf.edges == edges
        assert shelf.computed.cut_height == pytest.approx(508)

    def test_design_load(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, overrides={"shelf_1": PanelOverride(design_load_kg=9)})
        shelf = result.get("shelf_1")
        assert shelf is not None
        assert shelf.design_load_kg == 9
        assert shelf.total_load_kg == pytest.approx(shelf.computed.weight_kg + 9)

    def test_unknown_panel_override_is_warned(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, overrides={"shelf_9": PanelOverride(position=100)})
        codes = [(f.code, f.severity) for f in result.findings]
        assert codes == [("str-override-unknown-panel", Severity.WARNING)]


class TestMaterialPolicy:
    """Unknown and missing material handling."""

    def test_strict_unknown_core_is_an_error(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, materials=MaterialAssignment(default_core="core-xyz"))
        findings = [f for f in result.findings if f.code == "mat-unknown-core"]
        assert len(findings) == 1
        assert findings[0].severity == Severity.ERROR
        assert findings[0].details["panels"] == [
            "left_side",
            "right_side",
            "top",
            "bottom",
            "shelf_1",
        ]

    def test_fallback_unknown_core_is_a_warning(self, catalog: MaterialCatalog) -> None:
        result = decompose(
            catalog,
            materials=MaterialAssignment(default_core="core-xyz"),
            policy=UnknownMaterialPolicy.FALLBACK,
        )
        findings = [f for f in result.findings if f.code == "mat-unknown-core"]
        assert len(findings) == 1
        assert findings[0].severity == Severity.WARNING
        assert "default used" in findings[0].message

    def test_unknown_core_still_produces_panels(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, materials=MaterialAssignment(default_core="core-xyz"))
        side = result.get("left_side")
        assert side is not None
        assert side.core_material_id == "core-pb-16"

    def test_missing_core_is_an_error(self, catalog: MaterialCatalog) -> None:
        result = decompose(catalog, materials=MaterialAssignment(default_core=None))
        codes = [f.code for f in result.findings]
        assert "mat-core-missing" in codes

    def test_unknown_edge_names_single_panel(self, catalog: MaterialCatalog) -> None:
        edges = EdgeAssignment(bottom="edge-nope")
        result = decompose(catalog, overrides={"shelf_1": PanelOverride(edges=edges)})
        assert len(result.findings) == 1
        assert result.findings[0].code == "mat-unknown-edge"
        assert result.findings[0].panel_id == "shelf_1"


class TestFrontEdgeSides:
    """Tests for front_edge_sides()."""

    def test_inset_sides_band_exposed_ends(self) -> None:
        sides = front_edge_sides(PanelRole.LEFT_SIDE, CabinetStructure())
        assert sides == (EdgeSide.LEFT, EdgeSide.TOP, EdgeSide.BOTTOM)

    def test_overlay_sides_band_front_only(self) -> None:
        structure = CabinetStructure(top_joint=JointType.OVERLAY, bottom_joint=JointType.OVERLAY)
        assert front_edge_sides(PanelRole.RIGHT_SIDE, structure) == (EdgeSide.LEFT,)

    @pytest.mark.parametrize("role", [PanelRole.TOP, PanelRole.BOTTOM, PanelRole.SHELF])
    def test_horizontal_panels_band_front(self, role: PanelRole) -> None:
        assert front_edge_sides(role, CabinetStructure()) == (EdgeSide.BOTTOM,)

    def test_back_is_not_banded(self) -> None:
        assert front_edge_sides(PanelRole.BACK, CabinetStructure()) == ()
