"""Bill of Materials (BOM) generator for computed cabinets.

Generates material lists including:
- Core board: area and panel count per core material
- Surfaces: laminated area per surface material
- Edge banding: linear meters per edge material
- Fittings: hardware quantities from the fitting assignments
- Cost and embodied CO2 totals

Output formats: csv, json
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from cabinet_mfg.domain.registries import MaterialCatalog, default_catalog
from cabinet_mfg.domain.services.fittings import FittingCatalogue
from cabinet_mfg.domain.services.operations import hinge_positions
from cabinet_mfg.domain.value_objects import (
    CabinetPanel,
    EdgeSide,
    FittingAssignment,
    FittingRole,
)
from cabinet_mfg.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cabinet_mfg.domain.entities import Cabinet


logger = logging.getLogger(__name__)

# Supports per shelf when a bracket assignment lists no positions
DEFAULT_BRACKETS_PER_SHELF = 4


@dataclass(frozen=True)
class CoreItem:
    material_id: str
    name: str
    thickness: float
    panel_count: int
    area_m2: float
    unit_cost: float

    @property
    def total_cost(self) -> float:
        return self.area_m2 * self.unit_cost


@dataclass(frozen=True)
class SurfaceItem:
    material_id: str
    name: str
    area_m2: float
    unit_cost: float

    @property
    def total_cost(self) -> float:
        return self.area_m2 * self.unit_cost


@dataclass(frozen=True)
class EdgeItem:
    material_id: str
    name: str
    code: str
    length_m: float
    unit_cost: float

    @property
    def total_cost(self) -> float:
        return self.length_m * self.unit_cost


@dataclass(frozen=True)
class FittingItem:
    fitting_id: str
    name: str
    vendor: str
    factory_code: str
    quantity: int
    unit_price: float

    @property
    def total_cost(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class BillOfMaterials:
    """Complete bill of materials for one cabinet.

    Attributes:
        cores: Core board lines, one per core material.
        surfaces: Surface lines, one per surface material.
        edges: Edge band lines, one per edge material.
        fittings: Hardware lines, one per fitting id.
        co2: Embodied CO2 of all panels in kg.
    """

    cores: tuple[CoreItem, ...]
    surfaces: tuple[SurfaceItem, ...]
    edges: tuple[EdgeItem, ...]
    fittings: tuple[FittingItem, ...]
    co2: float = 0.0

    @property
    def material_cost(self) -> float:
        return (
            sum(item.total_cost for item in self.cores)
            + sum(item.total_cost for item in self.surfaces)
            + sum(item.total_cost for item in self.edges)
        )

    @property
    def fittings_cost(self) -> float:
        return sum(item.total_cost for item in self.fittings)

    @property
    def total_cost(self) -> float:
        return self.material_cost + self.fittings_cost


@ExporterRegistry.register("bom")
class BomGenerator:
    """Bill of Materials generator for computed cabinets.

    Attributes:
        format_name: "bom"
        file_extension: "csv" or "json" based on output_format
    """

    format_name: ClassVar[str] = "bom"

    def __init__(
        self,
        output_format: str = "csv",
        include_costs: bool = True,
        catalog: MaterialCatalog | None = None,
        fittings: FittingCatalogue | None = None,
    ) -> None:
        """Initialize the BOM generator.

        Args:
            output_format: Output format - "csv" or "json".
            include_costs: Whether to include cost columns in output.
            catalog: Material catalogue for names and unit costs.
            fittings: Fitting catalogue for names and prices.
        """
        if output_format not in ("csv", "json"):
            raise ValueError(f"Invalid output_format: {output_format}. Must be 'csv' or 'json'")
        self.output_format = output_format
        self.include_costs = include_costs
        self.catalog = catalog or default_catalog()
        self.fittings = fittings or FittingCatalogue()

    @property
    def file_extension(self) -> str:
        return self.output_format

    def generate(self, cabinet: Cabinet) -> BillOfMaterials:
        """Aggregate the cabinet's panels and fittings into a BOM."""
        return BillOfMaterials(
            cores=tuple(self._cores(cabinet.panels)),
            surfaces=tuple(self._surfaces(cabinet.panels)),
            edges=tuple(self._edges(cabinet.panels)),
            fittings=tuple(self._fittings(cabinet)),
            co2=sum(p.computed.co2 for p in cabinet.panels),
        )

    def export(self, cabinet: Cabinet, path: Path) -> None:
        content = self.export_string(cabinet)
        path.write_text(content, newline="")
        logger.info(f"Exported BOM to {path}")

    def export_string(self, cabinet: Cabinet) -> str:
        bom = self.generate(cabinet)
        if self.output_format == "json":
            return self.format_json(bom)
        return self.format_csv(bom)

    def format_csv(self, bom: BillOfMaterials) -> str:
        """Format BOM as CSV.

        Args:
            bom: Bill of materials to format.

        Returns:
            CSV formatted string.
        """
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")

        header = ["Category", "Item", "Id", "Quantity", "Unit"]
        if self.include_costs:
            header += ["Unit Cost", "Total Cost"]
        writer.writerow(header)

        def row(category: str, item: str, item_id: str, qty: str, unit: str,
                unit_cost: float, total: float) -> None:
            values = [category, item, item_id, qty, unit]
            if self.include_costs:
                values += [f"{unit_cost:.2f}", f"{total:.2f}"]
            writer.writerow(values)

        for core in bom.cores:
            row("Core", f"{core.name} ({core.panel_count} panels)", core.material_id,
                f"{core.area_m2:.3f}", "m2", core.unit_cost, core.total_cost)
        for surface in bom.surfaces:
            row("Surface", surface.name, surface.material_id,
                f"{surface.area_m2:.3f}", "m2", surface.unit_cost, surface.total_cost)
        for edge in bom.edges:
            row("Edge Banding", edge.name, edge.material_id,
                f"{edge.length_m:.2f}", "m", edge.unit_cost, edge.total_cost)
        for fitting in bom.fittings:
            row("Fitting", f"{fitting.vendor} {fitting.name}", fitting.fitting_id,
                str(fitting.quantity), "pcs", fitting.unit_price, fitting.total_cost)

        if self.include_costs:
            writer.writerow([])
            writer.writerow(["Total", "", "", "", "", "", f"{bom.total_cost:.2f}"])
        return output.getvalue()

    def format_json(self, bom: BillOfMaterials) -> str:
        """Format BOM as JSON.

        Args:
            bom: Bill of materials to format.

        Returns:
            JSON formatted string.
        """

        def costed(item: Any, data: dict[str, Any], unit_cost: float) -> dict[str, Any]:
            if self.include_costs:
                data["unit_cost"] = unit_cost
                data["total_cost"] = round(item.total_cost, 2)
            return data

        data: dict[str, Any] = {
            "cores": [
                costed(c, {
                    "material_id": c.material_id,
                    "name": c.name,
                    "thickness": c.thickness,
                    "panel_count": c.panel_count,
                    "area_m2": round(c.area_m2, 4),
                }, c.unit_cost)
                for c in bom.cores
            ],
            "surfaces": [
                costed(s, {
                    "material_id": s.material_id,
                    "name": s.name,
                    "area_m2": round(s.area_m2, 4),
                }, s.unit_cost)
                for s in bom.surfaces
            ],
            "edge_banding": [
                costed(e, {
                    "material_id": e.material_id,
                    "name": e.name,
                    "code": e.code,
                    "length_m": round(e.length_m, 3),
                }, e.unit_cost)
                for e in bom.edges
            ],
            "fittings": [
                costed(f, {
                    "fitting_id": f.fitting_id,
                    "name": f.name,
                    "vendor": f.vendor,
                    "factory_code": f.factory_code,
                    "quantity": f.quantity,
                }, f.unit_price)
                for f in bom.fittings
            ],
            "co2_kg": round(bom.co2, 3),
        }
        if self.include_costs:
            data["cost_summary"] = {
                "materials": round(bom.material_cost, 2),
                "fittings": round(bom.fittings_cost, 2),
                "total": round(bom.total_cost, 2),
            }
        return json.dumps(data, indent=2)

    def _cores(self, panels: tuple[CabinetPanel, ...]) -> list[CoreItem]:
        area: dict[str, float] = defaultdict(float)
        count: dict[str, int] = defaultdict(int)
        for panel in panels:
            area[panel.core_material_id] += panel.computed.area
            count[panel.core_material_id] += 1

        items = []
        for material_id in sorted(area):
            registry = self.catalog.cores
            core = registry.get(material_id) if material_id in registry else None
            items.append(
                CoreItem(
                    material_id=material_id,
                    name=core.name if core else material_id,
                    thickness=core.thickness if core else 0.0,
                    panel_count=count[material_id],
                    area_m2=area[material_id],
                    unit_cost=core.cost_per_sqm if core else 0.0,
                )
            )
        return items

    def _surfaces(self, panels: tuple[CabinetPanel, ...]) -> list[SurfaceItem]:
        area: dict[str, float] = defaultdict(float)
        for panel in panels:
            for surface_id in (panel.faces.face_a, panel.faces.face_b):
                if surface_id:
                    area[surface_id] += panel.computed.area

        items = []
        registry = self.catalog.surfaces
        for material_id in sorted(area):
            surface = registry.get(material_id) if material_id in registry else None
            items.append(
                SurfaceItem(
                    material_id=material_id,
                    name=surface.name if surface else material_id,
                    area_m2=area[material_id],
                    unit_cost=surface.cost_per_sqm if surface else 0.0,
                )
            )
        return items

    def _edges(self, panels: tuple[CabinetPanel, ...]) -> list[EdgeItem]:
        length: dict[str, float] = defaultdict(float)
        for panel in panels:
            for side, edge_id in panel.edges.items():
                along = (
                    panel.finish_height
                    if side in (EdgeSide.LEFT, EdgeSide.RIGHT)
                    else panel.finish_width
                )
                length[edge_id] += max(along, 0.0) / 1000

        items = []
        registry = self.catalog.edges
        for material_id in sorted(length):
            edge = registry.get(material_id) if material_id in registry else None
            items.append(
                EdgeItem(
                    material_id=material_id,
                    name=edge.name if edge else material_id,
                    code=edge.code if edge else "",
                    length_m=length[material_id],
                    unit_cost=edge.cost_per_meter if edge else 0.0,
                )
            )
        return items

    def _fittings(self, cabinet: Cabinet) -> list[FittingItem]:
        quantities: dict[str, int] = defaultdict(int)
        for assignment in cabinet.fittings:
            if assignment.fitting_id not in self.fittings:
                logger.warning(f"Fitting {assignment.fitting_id} not in catalogue, left off BOM")
                continue
            quantities[assignment.fitting_id] += self._quantity(cabinet, assignment)

        items = []
        for fitting_id in sorted(quantities):
            spec = self.fittings.get(fitting_id)
            items.append(
                FittingItem(
                    fitting_id=fitting_id,
                    name=spec.name,
                    vendor=spec.vendor,
                    factory_code=spec.factory_code,
                    quantity=quantities[fitting_id],
                    unit_price=spec.price,
                )
            )
        return items

    @staticmethod
    def _quantity(cabinet: Cabinet, assignment: FittingAssignment) -> int:
        if assignment.positions:
            return len(assignment.positions)
        match assignment.role:
            case FittingRole.HINGE:
                try:
                    panel = cabinet.panel(assignment.panel_id)
                except KeyError:
                    return 1
                return len(hinge_positions(panel.computed.cut_height))
            case FittingRole.BRACKET:
                return DEFAULT_BRACKETS_PER_SHELF
            case _:
                return 1
