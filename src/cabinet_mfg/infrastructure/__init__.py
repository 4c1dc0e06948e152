"""Infrastructure layer - exporters, console formatters and logging setup."""

from .formatters import (
    PanelTableFormatter,
    ValidationFormatter,
    format_gate,
    format_ranking,
    format_tolerance,
)
from .logging_config import configure_logging

# Exporter framework from exporters/ package
from .exporters import (
    BomGenerator,
    CncProgramExporter,
    CutListExporter,
    DxfExporter,
    ExportBlockedError,
    Exporter,
    ExporterRegistry,
    ExportManager,
    ManifestExporter,
)

__all__ = [
    "BomGenerator",
    "CncProgramExporter",
    "CutListExporter",
    "DxfExporter",
    "ExportBlockedError",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "ManifestExporter",
    "PanelTableFormatter",
    "ValidationFormatter",
    "configure_logging",
    "format_gate",
    "format_ranking",
    "format_tolerance",
]
