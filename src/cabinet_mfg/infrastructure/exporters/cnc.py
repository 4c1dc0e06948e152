"""CNC operation-graph JSON exporter.

Writes the neutral operation graph in machine coordinates: every Face-B
operation has its x coordinates mirrored across the panel width, exactly
once, here. The result is a program description for a CAM post-processor,
not G-code.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from cabinet_mfg.domain.value_objects import (
    DrillHorizontal,
    DrillVertical,
    Face,
    Groove,
    HingeCup,
    MachineOperation,
    PanelOperations,
    Pocket,
    mirror_x,
)
from cabinet_mfg.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cabinet_mfg.domain.entities import Cabinet


logger = logging.getLogger(__name__)


def machine_operation(op: MachineOperation, panel_width: float) -> dict[str, Any]:
    """Serialize one operation in machine coordinates."""
    mirrored = op.face == Face.B

    def mx(x: float) -> float:
        return mirror_x(x, panel_width) if mirrored else x

    data: dict[str, Any] = {
        "op_id": op.op_id,
        "type": op.op_type,
        "face": op.face.value,
        "mirrored": mirrored,
    }
    match op:
        case DrillVertical():
            data.update(
                x=mx(op.x), y=op.y, diameter=op.diameter, depth=op.depth, through=op.through
            )
        case DrillHorizontal():
            data.update(
                x=mx(op.x),
                y=op.y,
                z=op.z,
                diameter=op.diameter,
                depth=op.depth,
                side=op.side.value,
            )
        case Groove():
            (sx, sy), (ex, ey) = op.endpoints
            data.update(
                start=[mx(sx), sy],
                end=[mx(ex), ey],
                width=op.width,
                depth=op.depth,
            )
        case Pocket():
            data.update(x=mx(op.x), y=op.y, width=op.width, height=op.height, depth=op.depth)
        case HingeCup():
            data.update(x=mx(op.x), y=op.y, diameter=op.diameter, depth=op.depth)
    return data


def machine_program(panel_ops: PanelOperations) -> dict[str, Any]:
    """Serialize one panel's operations in machine coordinates."""
    return {
        "panel_id": panel_ops.panel_id,
        "cut_width": panel_ops.cut_width,
        "cut_height": panel_ops.cut_height,
        "thickness": panel_ops.thickness,
        "operations": [
            machine_operation(op, panel_ops.cut_width) for op in panel_ops.operations
        ],
    }


@ExporterRegistry.register("cnc")
class CncProgramExporter:
    """Exports the operation graph as machine-coordinate JSON.

    Attributes:
        format_name: "cnc"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "cnc"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, cabinet: Cabinet, path: Path) -> None:
        content = self.export_string(cabinet)
        path.write_text(content)
        logger.info(f"Exported CNC program to {path}")

    def export_string(self, cabinet: Cabinet) -> str:
        data = {
            "revision": cabinet.revision,
            "state": cabinet.state.value,
            "panels": [machine_program(entry) for entry in cabinet.operations],
        }
        return json.dumps(data, indent=self.indent)
