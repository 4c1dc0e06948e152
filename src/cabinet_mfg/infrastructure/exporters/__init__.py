"""Exporter framework for computed cabinets.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates gate-checked multi-format export

Registered exporters:
- cutlist: CSV cut list with finish, cut and saw sizes
- bom: Bill of Materials (CSV or JSON)
- manifest: Full cabinet snapshot as JSON
- dxf: DXF drawings for CNC machining (ezdxf)
- cnc: Operation graph in machine coordinates as JSON

Usage:
    from cabinet_mfg.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()

    manager = ExportManager(output_dir=Path("./output"))
    results = manager.export_all(["cutlist", "bom"], cabinet, project_name="kitchen")
"""

from cabinet_mfg.infrastructure.exporters.base import (
    ExportBlockedError,
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from cabinet_mfg.infrastructure.exporters.bom import (
    BillOfMaterials,
    BomGenerator,
    CoreItem,
    EdgeItem,
    FittingItem,
    SurfaceItem,
)
from cabinet_mfg.infrastructure.exporters.cnc import (
    CncProgramExporter,
    machine_operation,
    machine_program,
)
from cabinet_mfg.infrastructure.exporters.cut_list import CutListExporter
from cabinet_mfg.infrastructure.exporters.dxf import DxfExporter, layer_for
from cabinet_mfg.infrastructure.exporters.manifest import ManifestExporter

__all__ = [
    # Framework
    "ExportBlockedError",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    # Registered exporters
    "BillOfMaterials",
    "BomGenerator",
    "CncProgramExporter",
    "CoreItem",
    "CutListExporter",
    "DxfExporter",
    "EdgeItem",
    "FittingItem",
    "ManifestExporter",
    "SurfaceItem",
    # Helpers
    "layer_for",
    "machine_operation",
    "machine_program",
]
