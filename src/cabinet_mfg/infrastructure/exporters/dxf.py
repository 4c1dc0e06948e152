"""DXF format exporter for CNC machining.

Generates 2D DXF files (R2010, millimeters) from the operation graph, one
document per panel or one combined job document.

Layer convention:
    CUT_OUT                      Panel cut outline
    DRILL_V_{diameter}_D{depth}  Face drilling (through holes +1 mm)
    DRILL_H_{diameter}_Z{z}_D{depth}  Edge drilling
    SAW_GROOVE_D{depth}          Groove centerline
    POCKET_D{depth}              Pocket outline
    HINGE_CUP_35                 Concealed hinge cups
    ANNOTATION                   Non-cutting text

Face-B operations have their x coordinate mirrored (``panel_width - x``)
when they are drawn. This is the only place the mirror is applied.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Iterator

import ezdxf
from ezdxf import units

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
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from cabinet_mfg.domain.entities import Cabinet


logger = logging.getLogger(__name__)


LAYER_CUT_OUT = "CUT_OUT"
LAYER_ANNOTATION = "ANNOTATION"
LAYER_HINGE_CUP = "HINGE_CUP_35"

# AutoCAD color index per layer prefix
LAYER_COLORS = {
    "CUT_OUT": 7,  # White - cutting
    "DRILL_V": 1,  # Red - face drilling
    "DRILL_H": 3,  # Green - edge drilling
    "SAW_GROOVE": 5,  # Blue - grooving
    "POCKET": 4,  # Cyan - pocket milling
    "HINGE_CUP": 6,  # Magenta - hinge cups
    "ANNOTATION": 8,  # Grey - annotations
}

# Extra depth on through holes so the drill exits cleanly
THROUGH_HOLE_OVERRUN = 1.0

LABEL_HEIGHT = 5.0
DIMENSION_TEXT_HEIGHT = 3.0


def _num(value: float) -> str:
    return f"{value:g}"


def layer_for(op: MachineOperation) -> str:
    """Layer name an operation is drawn on."""
    match op:
        case DrillVertical():
            depth = op.depth + THROUGH_HOLE_OVERRUN if op.through else op.depth
            return f"DRILL_V_{_num(op.diameter)}_D{_num(depth)}"
        case DrillHorizontal():
            return f"DRILL_H_{_num(op.diameter)}_Z{_num(op.z)}_D{_num(op.depth)}"
        case Groove():
            return f"SAW_GROOVE_D{_num(op.depth)}"
        case Pocket():
            return f"POCKET_D{_num(op.depth)}"
        case HingeCup():
            return LAYER_HINGE_CUP
    raise TypeError(f"Unsupported operation type: {type(op).__name__}")


def layer_color(layer: str) -> int:
    for prefix, color in LAYER_COLORS.items():
        if layer.startswith(prefix):
            return color
    return 7


@contextmanager
def _fixed_metadata() -> Iterator[None]:
    """Write fixed header timestamps and GUIDs so output is byte-stable."""
    previous = ezdxf.options.write_fixed_meta_data_for_testing
    ezdxf.options.write_fixed_meta_data_for_testing = True
    try:
        yield
    finally:
        ezdxf.options.write_fixed_meta_data_for_testing = previous


def _safe_filename(text: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", text).strip("_")


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports the cabinet operation graph to DXF.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(
        self,
        mode: str = "combined",
        panel_spacing: float = 50.0,
        annotate: bool = True,
    ) -> None:
        """Initialize the DXF exporter.

        Args:
            mode: Output mode - "combined" for all panels in one file,
                  "per_panel" for separate files per panel.
            panel_spacing: Gap between panels in combined mode, in mm.
            annotate: Whether to add name and dimension text.
        """
        if mode not in ("combined", "per_panel"):
            raise ValueError(f"Invalid mode: {mode}. Must be 'combined' or 'per_panel'")
        self.mode = mode
        self.panel_spacing = panel_spacing
        self.annotate = annotate

    def export(self, cabinet: Cabinet, path: Path) -> Path | None:
        """Export the cabinet to DXF file(s).

        In combined mode, writes one file with all panels side by side. In
        per-panel mode, writes ``{panel_id}_{thickness}mm.dxf`` for every
        panel into a directory named after ``path`` without its suffix, and
        returns that directory.
        """
        if not cabinet.operations:
            logger.warning("No panels to export")
            return None

        if self.mode == "per_panel":
            directory = path.with_suffix("")
            directory.mkdir(parents=True, exist_ok=True)
            self.export_panels(cabinet, directory)
            return directory

        doc = self.job_document(cabinet)
        with _fixed_metadata():
            doc.saveas(path)
        logger.info(f"Exported combined DXF to {path}")
        return None

    def export_panels(self, cabinet: Cabinet, directory: Path) -> list[Path]:
        """Write one DXF document per panel and return the written paths."""
        written: list[Path] = []
        for panel_ops in cabinet.operations:
            label = self._label(cabinet, panel_ops)
            doc = self.panel_document(panel_ops, label)
            filename = f"{_safe_filename(panel_ops.panel_id)}_{_num(panel_ops.thickness)}mm.dxf"
            panel_path = directory / filename
            with _fixed_metadata():
                doc.saveas(panel_path)
            logger.info(f"Exported panel DXF to {panel_path}")
            written.append(panel_path)
        return written

    def export_string(self, cabinet: Cabinet) -> str:
        """Export the combined job document as a DXF string."""
        if not cabinet.operations:
            return ""
        return self.to_string(self.job_document(cabinet))

    @staticmethod
    def to_string(doc: Drawing) -> str:
        stream = StringIO()
        with _fixed_metadata():
            doc.write(stream)
        return stream.getvalue()

    def panel_document(self, panel_ops: PanelOperations, label: str | None = None) -> Drawing:
        """Build a document with a single panel at the origin."""
        doc = self._create_document()
        self._draw_panel(doc, panel_ops, 0.0, label or panel_ops.panel_id)
        return doc

    def job_document(self, cabinet: Cabinet) -> Drawing:
        """Build one document with every panel laid out left to right."""
        doc = self._create_document()
        offset_x = 0.0
        for panel_ops in cabinet.operations:
            self._draw_panel(doc, panel_ops, offset_x, self._label(cabinet, panel_ops))
            offset_x += panel_ops.cut_width + self.panel_spacing
        return doc

    @staticmethod
    def _label(cabinet: Cabinet, panel_ops: PanelOperations) -> str:
        try:
            panel = cabinet.panel(panel_ops.panel_id)
        except KeyError:
            return panel_ops.panel_id
        return f"{panel.name} ({panel.id})"

    @staticmethod
    def _create_document() -> Drawing:
        doc = ezdxf.new("R2010", units=units.MM)
        doc.layers.add(LAYER_CUT_OUT, color=layer_color(LAYER_CUT_OUT))
        doc.layers.add(LAYER_ANNOTATION, color=layer_color(LAYER_ANNOTATION))
        return doc

    def _draw_panel(
        self, doc: Drawing, panel_ops: PanelOperations, offset_x: float, label: str
    ) -> None:
        msp = doc.modelspace()
        width, height = panel_ops.cut_width, panel_ops.cut_height

        msp.add_lwpolyline(
            [
                (offset_x, 0.0),
                (offset_x + width, 0.0),
                (offset_x + width, height),
                (offset_x, height),
            ],
            close=True,
            dxfattribs={"layer": LAYER_CUT_OUT},
        )

        for op in panel_ops.operations:
            layer = layer_for(op)
            if layer not in doc.layers:
                doc.layers.add(layer, color=layer_color(layer))
            self._draw_operation(msp, op, width, offset_x, layer)

        if self.annotate:
            self._draw_annotations(msp, panel_ops, offset_x, label)

    @staticmethod
    def _draw_operation(
        msp: Modelspace,
        op: MachineOperation,
        panel_width: float,
        offset_x: float,
        layer: str,
    ) -> None:
        """Draw one operation, mirroring Face-B x coordinates."""
        mirrored = op.face == Face.B

        def mx(x: float) -> float:
            return offset_x + (mirror_x(x, panel_width) if mirrored else x)

        attribs = {"layer": layer}
        match op:
            case DrillVertical() | DrillHorizontal() | HingeCup():
                msp.add_circle((mx(op.x), op.y), radius=op.diameter / 2, dxfattribs=attribs)
            case Groove():
                (sx, sy), (ex, ey) = op.endpoints
                msp.add_line((mx(sx), sy), (mx(ex), ey), dxfattribs=attribs)
            case Pocket():
                cx, half_w, half_h = mx(op.x), op.width / 2, op.height / 2
                msp.add_lwpolyline(
                    [
                        (cx - half_w, op.y - half_h),
                        (cx + half_w, op.y - half_h),
                        (cx + half_w, op.y + half_h),
                        (cx - half_w, op.y + half_h),
                    ],
                    close=True,
                    dxfattribs=attribs,
                )

    @staticmethod
    def _draw_annotations(
        msp: Modelspace, panel_ops: PanelOperations, offset_x: float, label: str
    ) -> None:
        width, height = panel_ops.cut_width, panel_ops.cut_height
        texts = [
            (label, offset_x + 10, height + 10, LABEL_HEIGHT),
            (
                f"T={_num(round(panel_ops.thickness, 2))}mm",
                offset_x + 10,
                height + 20,
                DIMENSION_TEXT_HEIGHT,
            ),
            (f"{width:.1f}mm", offset_x + width / 2, -15, DIMENSION_TEXT_HEIGHT),
            (f"{height:.1f}mm", offset_x - 15, height / 2, DIMENSION_TEXT_HEIGHT),
        ]
        for text, x, y, text_height in texts:
            msp.add_text(
                text,
                height=text_height,
                dxfattribs={"layer": LAYER_ANNOTATION, "insert": (x, y)},
            )
