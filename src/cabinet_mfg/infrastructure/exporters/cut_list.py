"""Cut list CSV exporter.

One row per panel with finish, cut and saw sizes. Saw sizes add the
pre-milling trim the edge bander takes off every banded edge, using the
tolerance of the panel's core category.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cabinet_mfg.domain.registries import MaterialCatalog, default_catalog
from cabinet_mfg.domain.services.material_stack import saw_dimension
from cabinet_mfg.domain.services.tolerance import ToleranceEngine
from cabinet_mfg.domain.value_objects import CabinetPanel
from cabinet_mfg.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cabinet_mfg.domain.entities import Cabinet


logger = logging.getLogger(__name__)

COLUMNS = [
    "panel_id",
    "name",
    "role",
    "core",
    "thickness",
    "finish_width",
    "finish_height",
    "cut_width",
    "cut_height",
    "saw_width",
    "saw_height",
    "edge_top",
    "edge_bottom",
    "edge_left",
    "edge_right",
    "face_a",
    "face_b",
    "area_m2",
    "weight_kg",
]


def _mm(value: float) -> str:
    return f"{value:.2f}"


@ExporterRegistry.register("cutlist")
class CutListExporter:
    """Exports the panel cut list as CSV.

    Attributes:
        format_name: "cutlist"
        file_extension: "csv"
    """

    format_name: ClassVar[str] = "cutlist"
    file_extension: ClassVar[str] = "csv"

    def __init__(self, catalog: MaterialCatalog | None = None) -> None:
        self.catalog = catalog or default_catalog()

    def export(self, cabinet: Cabinet, path: Path) -> None:
        content = self.export_string(cabinet)
        path.write_text(content, newline="")
        logger.info(f"Exported cut list to {path}")

    def export_string(self, cabinet: Cabinet) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(COLUMNS)
        for panel in cabinet.panels:
            writer.writerow(self._row(panel))
        return output.getvalue()

    def _row(self, panel: CabinetPanel) -> list[str]:
        computed = panel.computed
        pre_mill = ToleranceEngine(self.catalog.category_of(panel.core_material_id)).pre_mill
        edges = panel.edges
        horizontal_edges = sum(1 for e in (edges.left, edges.right) if e)
        vertical_edges = sum(1 for e in (edges.top, edges.bottom) if e)
        return [
            panel.id,
            panel.name,
            panel.role.value,
            panel.core_material_id,
            _mm(computed.real_thickness),
            _mm(panel.finish_width),
            _mm(panel.finish_height),
            _mm(computed.cut_width),
            _mm(computed.cut_height),
            _mm(saw_dimension(computed.cut_width, pre_mill, horizontal_edges)),
            _mm(saw_dimension(computed.cut_height, pre_mill, vertical_edges)),
            edges.top or "",
            edges.bottom or "",
            edges.left or "",
            edges.right or "",
            panel.faces.face_a or "",
            panel.faces.face_b or "",
            f"{computed.area:.4f}",
            f"{computed.weight_kg:.2f}",
        ]
