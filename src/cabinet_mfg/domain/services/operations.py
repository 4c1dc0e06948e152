"""Machine operation graph.

Builds the ordered, machine-neutral list of drilling and grooving operations
for every panel. Operations are placed in the panel's cut frame; face-B
operations use the same frame as face A and are mirrored only when a
machine format is written.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Iterable, Sequence

from cabinet_mfg.domain.value_objects import (
    BackConstruction,
    CabinetPanel,
    CabinetStructure,
    DrillHorizontal,
    DrillingPattern,
    DrillVertical,
    EdgeSide,
    Face,
    FittingAssignment,
    FittingRole,
    Groove,
    GrooveAxis,
    HingeCup,
    JointType,
    MachineOperation,
    ManufacturingParameters,
    PanelOperations,
    PanelRole,
    SafetyStatus,
)

from .constants import (
    CONFIRMAT_CLEARANCE_DIAMETER,
    CONFIRMAT_EDGE_DEPTH,
    CONFIRMAT_END_OFFSET,
    CONFIRMAT_LONG_JOINT,
    CONFIRMAT_PILOT_DIAMETER,
    CONFIRMAT_SHORT_JOINT,
    HINGE_CUP_CENTER_INSET,
    HINGE_CUP_DIAMETER,
    HINGE_END_OFFSET,
    HINGE_THIRD_HINGE_HEIGHT,
    SYSTEM_32_BACK_OFFSET,
    SYSTEM_32_FACE_B_STAGGER,
    SYSTEM_32_FRONT_OFFSET,
    SYSTEM_32_HOLE_DEPTH,
    SYSTEM_32_HOLE_DIAMETER,
    SYSTEM_32_PITCH,
    SYSTEM_32_START,
)
from .fittings import FittingCatalogue
from .tolerance import ToleranceEngine

logger = logging.getLogger(__name__)


def system_32_rows(height: float, start: float = SYSTEM_32_START) -> list[float]:
    """Hole heights at 32 mm pitch, keeping ``start`` clear at both ends."""
    span = height - start - SYSTEM_32_START
    if span < 0:
        return []
    count = math.floor(span / SYSTEM_32_PITCH + 1e-9) + 1
    return [start + i * SYSTEM_32_PITCH for i in range(count)]


def confirmat_positions(length: float) -> list[float]:
    """Connector positions along a joint of the given length.

    Short joints take two connectors at the quarter points, medium joints
    one 50 mm in from each end, long joints an extra one in the middle.
    """
    if length <= 0:
        return []
    if length < CONFIRMAT_SHORT_JOINT:
        return [length * 0.25, length * 0.75]
    end = CONFIRMAT_END_OFFSET
    if length < CONFIRMAT_LONG_JOINT:
        return [end, length - end]
    return [end, length / 2, length - end]


def hinge_positions(height: float) -> list[float]:
    """Default hinge heights: 100 mm from each end, plus the middle on tall panels."""
    positions = [HINGE_END_OFFSET, height - HINGE_END_OFFSET]
    if height > HINGE_THIRD_HINGE_HEIGHT:
        positions.insert(1, height / 2)
    return positions


class OperationGraphBuilder:
    """Generates machine operations for decomposed panels.

    Example:
        builder = OperationGraphBuilder(params, FittingCatalogue())
        graph = builder.build(panels, structure, assignments)
    """

    def __init__(
        self,
        params: ManufacturingParameters,
        catalogue: FittingCatalogue,
        tolerance: ToleranceEngine | None = None,
    ) -> None:
        self.params = params
        self.catalogue = catalogue
        self.tolerance = tolerance or ToleranceEngine()

    def build(
        self,
        panels: Sequence[CabinetPanel],
        structure: CabinetStructure,
        assignments: Iterable[FittingAssignment] = (),
    ) -> tuple[PanelOperations, ...]:
        """Build the operation graph, one entry per panel in panel order."""
        by_id = {panel.id: panel for panel in panels}
        dividers = [p for p in panels if p.role == PanelRole.DIVIDER]
        fittings_by_panel: dict[str, list[FittingAssignment]] = {}
        for assignment in assignments:
            fittings_by_panel.setdefault(assignment.panel_id, []).append(assignment)

        graph: list[PanelOperations] = []
        for panel in panels:
            ops: list[MachineOperation] = []
            match panel.role:
                case PanelRole.LEFT_SIDE | PanelRole.RIGHT_SIDE:
                    ops.extend(self._side(panel, structure, by_id))
                case PanelRole.TOP | PanelRole.BOTTOM:
                    ops.extend(self._horizontal(panel, structure, by_id, dividers))
                case PanelRole.DIVIDER:
                    ops.extend(self._divider(panel, structure, by_id))
                case PanelRole.SHELF | PanelRole.BACK:
                    pass
            for assignment in fittings_by_panel.get(panel.id, ()):
                ops.extend(self._fitting(panel, assignment))

            numbered = tuple(
                dataclasses.replace(op, op_id=f"{panel.id}-{i:03d}")
                for i, op in enumerate(ops, start=1)
            )
            graph.append(
                PanelOperations(
                    panel_id=panel.id,
                    cut_width=panel.computed.cut_width,
                    cut_height=panel.computed.cut_height,
                    thickness=panel.thickness,
                    operations=numbered,
                )
            )

        total = sum(len(entry.operations) for entry in graph)
        logger.debug(f"Built operation graph: {total} operations on {len(graph)} panels")
        return tuple(graph)

    # ------------------------------------------------------------------
    # Carcass panels
    # ------------------------------------------------------------------

    def _shelf_pin_rows(
        self, panel: CabinetPanel, face: Face, start: float = SYSTEM_32_START
    ) -> list[MachineOperation]:
        width = panel.computed.cut_width
        ops: list[MachineOperation] = []
        for x in (SYSTEM_32_FRONT_OFFSET, width - SYSTEM_32_BACK_OFFSET):
            for y in system_32_rows(panel.computed.cut_height, start):
                ops.append(
                    DrillVertical(
                        x=x,
                        y=y,
                        diameter=SYSTEM_32_HOLE_DIAMETER,
                        depth=SYSTEM_32_HOLE_DEPTH,
                        face=face,
                    )
                )
        return ops

    def _side(
        self,
        panel: CabinetPanel,
        structure: CabinetStructure,
        by_id: dict[str, CabinetPanel],
    ) -> list[MachineOperation]:
        params = self.params
        cut_w, cut_h = panel.computed.cut_width, panel.computed.cut_height
        ops: list[MachineOperation] = []

        if structure.shelf_count > 0:
            ops.extend(self._shelf_pin_rows(panel, Face.A))

        # Collapsed sides (toe kick at or above the height) carry no groove
        if (
            structure.has_back_panel
            and params.back_construction == BackConstruction.INSET
            and cut_h > 0
        ):
            ops.append(
                Groove(
                    axis=GrooveAxis.Y,
                    position=cut_w - params.back_void - params.back_thickness / 2,
                    start=0.0,
                    length=cut_h,
                    width=params.back_thickness + self.tolerance.groove_play,
                    depth=params.groove_depth,
                    face=Face.A,
                )
            )

        for panel_id, joint, at_top in (
            ("bottom", structure.bottom_joint, False),
            ("top", structure.top_joint, True),
        ):
            mate = by_id.get(panel_id)
            if mate is None:
                continue
            t = mate.thickness
            xs = [p - panel.computed.cut_offset_x for p in confirmat_positions(mate.finish_height)]
            if joint == JointType.INSET:
                # Through the outer face into the end of the top/bottom
                y_finish = panel.finish_height - t / 2 if at_top else t / 2
                y = y_finish - panel.computed.cut_offset_y
                for x in xs:
                    ops.append(
                        DrillVertical(
                            x=x,
                            y=y,
                            diameter=CONFIRMAT_CLEARANCE_DIAMETER,
                            depth=panel.thickness,
                            face=Face.B,
                            through=True,
                        )
                    )
            else:
                for x in xs:
                    ops.append(
                        DrillHorizontal(
                            x=x,
                            y=cut_h if at_top else 0.0,
                            z=panel.thickness / 2,
                            diameter=CONFIRMAT_PILOT_DIAMETER,
                            depth=CONFIRMAT_EDGE_DEPTH,
                            side=EdgeSide.TOP if at_top else EdgeSide.BOTTOM,
                        )
                    )
        return ops

    def _horizontal(
        self,
        panel: CabinetPanel,
        structure: CabinetStructure,
        by_id: dict[str, CabinetPanel],
        dividers: list[CabinetPanel],
    ) -> list[MachineOperation]:
        joint = structure.top_joint if panel.role == PanelRole.TOP else structure.bottom_joint
        cut_w = panel.computed.cut_width
        offset_x, offset_y = panel.computed.cut_offset_x, panel.computed.cut_offset_y
        ys = [p - offset_y for p in confirmat_positions(panel.finish_height)]
        ops: list[MachineOperation] = []

        for side_id, on_left in (("left_side", True), ("right_side", False)):
            side = by_id.get(side_id)
            if side is None:
                continue
            if joint == JointType.INSET:
                for y in ys:
                    ops.append(
                        DrillHorizontal(
                            x=0.0 if on_left else cut_w,
                            y=y,
                            z=panel.thickness / 2,
                            diameter=CONFIRMAT_PILOT_DIAMETER,
                            depth=CONFIRMAT_EDGE_DEPTH,
                            side=EdgeSide.LEFT if on_left else EdgeSide.RIGHT,
                        )
                    )
            else:
                # Overlay tops rest on the side ends; the connector goes down into them
                x_finish = side.thickness / 2 if on_left else panel.finish_width - side.thickness / 2
                for y in ys:
                    ops.append(
                        DrillVertical(
                            x=x_finish - offset_x,
                            y=y,
                            diameter=CONFIRMAT_CLEARANCE_DIAMETER,
                            depth=panel.thickness,
                            face=Face.B,
                            through=True,
                        )
                    )

        for divider in dividers:
            center = divider.position[0] + divider.thickness / 2 - panel.position[0]
            front = divider.position[2] - panel.position[2]
            for p in confirmat_positions(divider.finish_width):
                ops.append(
                    DrillVertical(
                        x=center - offset_x,
                        y=front + p - offset_y,
                        diameter=CONFIRMAT_CLEARANCE_DIAMETER,
                        depth=panel.thickness,
                        face=Face.B,
                        through=True,
                    )
                )
        return ops

    def _divider(
        self,
        panel: CabinetPanel,
        structure: CabinetStructure,
        by_id: dict[str, CabinetPanel],
    ) -> list[MachineOperation]:
        ops: list[MachineOperation] = []
        if structure.shelf_count > 0:
            ops.extend(self._shelf_pin_rows(panel, Face.A))
            ops.extend(
                self._shelf_pin_rows(panel, Face.B, SYSTEM_32_START + SYSTEM_32_FACE_B_STAGGER)
            )

        xs = [p - panel.computed.cut_offset_x for p in confirmat_positions(panel.finish_width)]
        for mate_id, at_top in (("bottom", False), ("top", True)):
            if mate_id not in by_id:
                continue
            for x in xs:
                ops.append(
                    DrillHorizontal(
                        x=x,
                        y=panel.computed.cut_height if at_top else 0.0,
                        z=panel.thickness / 2,
                        diameter=CONFIRMAT_PILOT_DIAMETER,
                        depth=CONFIRMAT_EDGE_DEPTH,
                        side=EdgeSide.TOP if at_top else EdgeSide.BOTTOM,
                    )
                )
        return ops

    # ------------------------------------------------------------------
    # Hardware
    # ------------------------------------------------------------------

    def _fitting(
        self, panel: CabinetPanel, assignment: FittingAssignment
    ) -> list[MachineOperation]:
        if assignment.fitting_id not in self.catalogue:
            return []
        if assignment.status == SafetyStatus.INCOMPATIBLE:
            logger.debug(f"Skipping drilling for incompatible fitting {assignment.fitting_id}")
            return []
        fitting = self.catalogue.get(assignment.fitting_id)
        pattern = self.catalogue.pattern_for(fitting)
        if pattern is None:
            logger.debug(
                f"No drilling pattern {fitting.drilling_pattern_id} for {fitting.id}, "
                f"nothing drilled on {panel.id}"
            )
            return []

        height = panel.computed.cut_height
        ops: list[MachineOperation] = []
        match assignment.role:
            case FittingRole.HINGE:
                for pos in assignment.positions or hinge_positions(height):
                    ops.extend(
                        self._place_pattern(pattern, HINGE_CUP_CENTER_INSET, pos, along_y=True)
                    )
            case FittingRole.RAIL:
                for pos in assignment.positions or (height / 2,):
                    ops.extend(self._place_pattern(pattern, 0.0, pos, along_y=False))
            case FittingRole.BRACKET:
                pass
        return ops

    def _place_pattern(
        self, pattern: DrillingPattern, origin_x: float, origin_y: float, along_y: bool
    ) -> list[MachineOperation]:
        """Place pattern holes around an origin.

        Hinge patterns run along the hinge edge (y); rail patterns run from
        the front edge into the panel (x).
        """
        ops: list[MachineOperation] = []
        for hole in pattern.holes:
            if along_y:
                x, y = origin_x + hole.inward, origin_y + hole.along
            else:
                x, y = origin_x + hole.along, origin_y + hole.inward
            if hole.diameter >= HINGE_CUP_DIAMETER:
                ops.append(HingeCup(x=x, y=y, diameter=hole.diameter, depth=hole.depth))
            else:
                ops.append(DrillVertical(x=x, y=y, diameter=hole.diameter, depth=hole.depth))
        return ops
