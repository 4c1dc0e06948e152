"""Panel decomposition.

Turns cabinet dimensions, structure and material choices into the ordered
list of physical panels. Formulas are deterministic per panel role and never
raise for out-of-range input; impossible geometry is left in the output for
the design validator to report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, assert_never

from cabinet_mfg.domain.registries import MaterialCatalog, UnknownMaterialError
from cabinet_mfg.domain.value_objects import (
    CabinetDimensions,
    CabinetPanel,
    CabinetStructure,
    CoreMaterial,
    EdgeAssignment,
    EdgeMaterial,
    EdgeSide,
    FaceAssignment,
    JointType,
    ManufacturingParameters,
    MaterialAssignment,
    PanelOverride,
    PanelRole,
    Severity,
    SurfaceMaterial,
    UnknownMaterialPolicy,
    ValidationCategory,
    ValidationResult,
)

from .material_stack import compute_panel, internal_depth, total_thickness
from .tolerance import ToleranceEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecompositionResult:
    """Panels plus the layout figures the validator checks.

    Attributes:
        panels: Panels in canonical order (sides, top, bottom, back,
            dividers, shelves).
        findings: Material resolution findings raised while building them.
        internal_depth: Safe depth for shelves and dividers (unclamped).
        bay_width: Clear width of each bay between sides and dividers.
        interior_height: Clear height between bottom and top.
        shelf_count: Shelves per bay after clamping negative input.
        divider_count: Dividers after clamping negative input.
    """

    panels: tuple[CabinetPanel, ...]
    findings: tuple[ValidationResult, ...] = ()
    internal_depth: float = 0.0
    bay_width: float = 0.0
    interior_height: float = 0.0
    shelf_count: int = 0
    divider_count: int = 0

    def get(self, panel_id: str) -> CabinetPanel | None:
        for panel in self.panels:
            if panel.id == panel_id:
                return panel
        return None


def front_edge_sides(role: PanelRole, structure: CabinetStructure) -> tuple[EdgeSide, ...]:
    """Edges that receive banding for a role.

    Only front edges are banded. Sides also band an end that stays exposed
    because the top or bottom sits inside them.
    """
    match role:
        case PanelRole.LEFT_SIDE | PanelRole.RIGHT_SIDE:
            sides = [EdgeSide.LEFT]
            if structure.top_joint == JointType.INSET:
                sides.append(EdgeSide.TOP)
            if structure.bottom_joint == JointType.INSET:
                sides.append(EdgeSide.BOTTOM)
            return tuple(sides)
        case PanelRole.TOP | PanelRole.BOTTOM | PanelRole.SHELF:
            return (EdgeSide.BOTTOM,)
        case PanelRole.DIVIDER:
            return (EdgeSide.LEFT,)
        case PanelRole.BACK:
            return ()
        case _:
            assert_never(role)


def has_surfaces(role: PanelRole) -> bool:
    """Whether a role carries the default surface on both faces."""
    match role:
        case (
            PanelRole.LEFT_SIDE
            | PanelRole.RIGHT_SIDE
            | PanelRole.TOP
            | PanelRole.BOTTOM
            | PanelRole.SHELF
            | PanelRole.DIVIDER
        ):
            return True
        case PanelRole.BACK:
            return False
        case _:
            assert_never(role)


@dataclass(frozen=True)
class _PanelMaterials:
    core: CoreMaterial
    surface_a: SurfaceMaterial | None
    surface_b: SurfaceMaterial | None
    edges: dict[EdgeSide, EdgeMaterial]
    core_id: str
    face_ids: FaceAssignment
    edge_ids: EdgeAssignment

    @property
    def thickness_terms(self) -> tuple[float, float | None, float | None]:
        return (
            self.core.thickness,
            self.surface_a.thickness if self.surface_a else None,
            self.surface_b.thickness if self.surface_b else None,
        )


@dataclass
class _MaterialResolver:
    """Resolves material ids under the active policy and collects findings."""

    catalog: MaterialCatalog
    policy: UnknownMaterialPolicy
    _misses: dict[tuple[str, str | None], list[str]] = field(default_factory=dict)
    _missing_core: list[str] = field(default_factory=list)

    def core(self, core_id: str | None, panel_id: str) -> CoreMaterial:
        if core_id is None:
            self._missing_core.append(panel_id)
            return self.catalog.cores.default
        return self._resolve(self.catalog.cores, core_id, panel_id)

    def surface(self, surface_id: str | None, panel_id: str) -> SurfaceMaterial | None:
        if surface_id is None:
            return None
        return self._resolve(self.catalog.surfaces, surface_id, panel_id)

    def edge(self, edge_id: str | None, panel_id: str) -> EdgeMaterial | None:
        if edge_id is None:
            return None
        return self._resolve(self.catalog.edges, edge_id, panel_id)

    def _resolve(self, registry, material_id: str, panel_id: str):
        try:
            resolution = registry.resolve(material_id, self.policy)
        except UnknownMaterialError:
            self._misses.setdefault((registry.kind, material_id), []).append(panel_id)
            return registry.default
        if resolution.substituted:
            self._misses.setdefault((registry.kind, material_id), []).append(panel_id)
        return resolution.record

    def findings(self) -> list[ValidationResult]:
        results: list[ValidationResult] = []
        if self._missing_core:
            results.append(
                ValidationResult(
                    code="mat-core-missing",
                    category=ValidationCategory.MATERIAL,
                    severity=Severity.ERROR,
                    message="No core material assigned",
                    details={"panels": list(self._missing_core)},
                )
            )
        severity = (
            Severity.ERROR if self.policy == UnknownMaterialPolicy.STRICT else Severity.WARNING
        )
        for (kind, material_id), panel_ids in self._misses.items():
            suffix = "" if severity == Severity.ERROR else ", default used"
            results.append(
                ValidationResult(
                    code=f"mat-unknown-{kind}",
                    category=ValidationCategory.MATERIAL,
                    severity=severity,
                    message=f"Unknown {kind} material '{material_id}'{suffix}",
                    panel_id=panel_ids[0] if len(panel_ids) == 1 else None,
                    details={"material_id": material_id, "panels": list(panel_ids)},
                )
            )
        return results


class PanelDecomposer:
    """Builds the panel list for a cabinet.

    Example:
        decomposer = PanelDecomposer(default_catalog(), ManufacturingParameters())
        result = decomposer.decompose(dims, structure, materials)
        for panel in result.panels:
            print(panel.id, panel.finish_width, panel.finish_height)
    """

    def __init__(
        self,
        catalog: MaterialCatalog,
        params: ManufacturingParameters | None = None,
        policy: UnknownMaterialPolicy = UnknownMaterialPolicy.STRICT,
    ) -> None:
        self.catalog = catalog
        self.params = params or ManufacturingParameters()
        self.policy = policy

    def decompose(
        self,
        dimensions: CabinetDimensions,
        structure: CabinetStructure,
        materials: MaterialAssignment,
        overrides: Mapping[str, PanelOverride] | None = None,
    ) -> DecompositionResult:
        """Decompose a cabinet into panels.

        Args:
            dimensions: Overall cabinet size.
            structure: Shelf/divider counts, back panel and joint choices.
            materials: Default material ids.
            overrides: Per-panel overrides keyed by panel id.

        Returns:
            DecompositionResult with panels in canonical order.
        """
        overrides = dict(overrides or {})
        resolver = _MaterialResolver(self.catalog, self.policy)
        params = self.params

        shelf_count = max(structure.shelf_count, 0)
        divider_count = max(structure.divider_count, 0)
        bays = divider_count + 1

        # Ids in canonical order, needed up front to resolve per-panel stacks
        roles: dict[str, PanelRole] = {
            "left_side": PanelRole.LEFT_SIDE,
            "right_side": PanelRole.RIGHT_SIDE,
            "top": PanelRole.TOP,
            "bottom": PanelRole.BOTTOM,
        }
        if structure.has_back_panel:
            roles["back"] = PanelRole.BACK
        for i in range(1, divider_count + 1):
            roles[f"divider_{i}"] = PanelRole.DIVIDER
        for i in range(1, shelf_count * bays + 1):
            roles[f"shelf_{i}"] = PanelRole.SHELF

        stacks = {
            panel_id: self._materials(panel_id, role, structure, materials, overrides, resolver)
            for panel_id, role in roles.items()
        }

        def thickness(panel_id: str) -> float:
            return total_thickness(*stacks[panel_id].thickness_terms, glue=params.glue_thickness)

        width, depth = dimensions.width, dimensions.depth
        body = dimensions.body_height
        toe = dimensions.toe_kick_height
        t_left, t_right = thickness("left_side"), thickness("right_side")
        t_top, t_bottom = thickness("top"), thickness("bottom")
        divider_ids = [f"divider_{i}" for i in range(1, divider_count + 1)]
        divider_thicknesses = [thickness(d) for d in divider_ids]

        top_overlay = structure.top_joint == JointType.OVERLAY
        bottom_overlay = structure.bottom_joint == JointType.OVERLAY

        inner_width = width - t_left - t_right
        bay_width = (inner_width - sum(divider_thicknesses)) / bays
        interior_height = body - t_top - t_bottom
        safe_depth = internal_depth(depth, params)
        horizontal_depth = depth - params.back_allowance if structure.has_back_panel else depth
        side_height = body - (t_top if top_overlay else 0.0) - (t_bottom if bottom_overlay else 0.0)
        side_y = toe + (t_bottom if bottom_overlay else 0.0)

        engine = ToleranceEngine(self.catalog.category_of(materials.default_core or ""))
        clearance = engine.shelf_clearance

        panels: list[CabinetPanel] = []

        def add(
            panel_id: str,
            name: str,
            finish_width: float,
            finish_height: float,
            position: tuple[float, float, float],
            bay: int | None = None,
        ) -> None:
            stack = stacks[panel_id]
            override = overrides.get(panel_id)
            computed = compute_panel(
                finish_width,
                finish_height,
                stack.core,
                stack.surface_a,
                stack.surface_b,
                stack.edges,
                params.glue_thickness,
            )
            panels.append(
                CabinetPanel(
                    id=panel_id,
                    role=roles[panel_id],
                    name=name,
                    finish_width=finish_width,
                    finish_height=finish_height,
                    core_material_id=stack.core_id,
                    computed=computed,
                    edges=stack.edge_ids,
                    faces=stack.face_ids,
                    position=position,
                    bay=bay,
                    design_load_kg=(
                        override.design_load_kg
                        if override and override.design_load_kg is not None
                        else 0.0
                    ),
                )
            )

        add("left_side", "Left Side", depth, side_height, (0.0, side_y, 0.0))
        add("right_side", "Right Side", depth, side_height, (width - t_right, side_y, 0.0))
        add(
            "top",
            "Top",
            width if top_overlay else inner_width,
            horizontal_depth,
            (0.0 if top_overlay else t_left, toe + body - t_top, 0.0),
        )
        add(
            "bottom",
            "Bottom",
            width if bottom_overlay else inner_width,
            horizontal_depth,
            (0.0 if bottom_overlay else t_left, toe, 0.0),
        )
        if structure.has_back_panel:
            add("back", "Back Panel", width, body, (0.0, toe, depth - params.back_allowance))

        # Divider i sits after i bays and the i-1 dividers before it
        bay_starts = [t_left]
        for i, divider_id in enumerate(divider_ids, start=1):
            x = t_left + i * bay_width + sum(divider_thicknesses[: i - 1])
            add(
                divider_id,
                f"Divider {i}",
                safe_depth,
                interior_height,
                (x, toe + t_bottom, params.shelf_front_setback),
            )
            bay_starts.append(x + divider_thicknesses[i - 1])

        shelf_width = bay_width - 2 * clearance
        number = 0
        for bay in range(1, bays + 1):
            for i in range(1, shelf_count + 1):
                number += 1
                shelf_id = f"shelf_{number}"
                override = overrides.get(shelf_id)
                if override and override.position is not None:
                    height = t_bottom + override.position
                else:
                    height = t_bottom + i * interior_height / (shelf_count + 1)
                name = f"Shelf {i}" if bays == 1 else f"Shelf {i} (Bay {bay})"
                add(
                    shelf_id,
                    name,
                    shelf_width,
                    safe_depth,
                    (bay_starts[bay - 1] + clearance, toe + height, params.shelf_front_setback),
                    bay=bay,
                )

        findings = resolver.findings()
        for panel_id in sorted(set(overrides) - set(roles)):
            findings.append(
                ValidationResult(
                    code="str-override-unknown-panel",
                    category=ValidationCategory.STRUCTURE,
                    severity=Severity.WARNING,
                    message=f"Override for '{panel_id}' matches no panel and was ignored",
                    details={"panel_id": panel_id},
                )
            )

        logger.debug(
            f"Decomposed {width}x{dimensions.height}x{depth} cabinet into {len(panels)} panels"
        )
        return DecompositionResult(
            panels=tuple(panels),
            findings=tuple(findings),
            internal_depth=safe_depth,
            bay_width=bay_width,
            interior_height=interior_height,
            shelf_count=shelf_count,
            divider_count=divider_count,
        )

    def _materials(
        self,
        panel_id: str,
        role: PanelRole,
        structure: CabinetStructure,
        materials: MaterialAssignment,
        overrides: Mapping[str, PanelOverride],
        resolver: _MaterialResolver,
    ) -> _PanelMaterials:
        override = overrides.get(panel_id) or PanelOverride()

        if role == PanelRole.BACK:
            core_id: str | None = self.params.back_core
        else:
            core_id = materials.default_core
        if override.core_material_id is not None:
            core_id = override.core_material_id

        if override.faces is not None:
            faces = override.faces
        elif has_surfaces(role):
            faces = FaceAssignment(materials.default_surface, materials.default_surface)
        else:
            faces = FaceAssignment()

        if override.edges is not None:
            edge_ids = override.edges
        elif materials.default_edge:
            banded = front_edge_sides(role, structure)
            edge_ids = EdgeAssignment(
                **{side.value: materials.default_edge for side in banded}
            )
        else:
            edge_ids = EdgeAssignment()

        core = resolver.core(core_id, panel_id)
        edges: dict[EdgeSide, EdgeMaterial] = {}
        for side, edge_id in edge_ids.items():
            edge = resolver.edge(edge_id, panel_id)
            if edge is not None:
                edges[side] = edge

        return _PanelMaterials(
            core=core,
            surface_a=resolver.surface(faces.face_a, panel_id),
            surface_b=resolver.surface(faces.face_b, panel_id),
            edges=edges,
            core_id=core.id,
            face_ids=faces,
            edge_ids=edge_ids,
        )
