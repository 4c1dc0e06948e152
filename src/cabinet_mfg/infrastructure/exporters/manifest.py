"""Manifest JSON exporter.

A complete, deterministic snapshot of a computed cabinet: intent, panels
with every computed field, fitting assignments, validation findings, gate
status and job totals. The output carries no timestamps, so identical
cabinets produce identical files.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from cabinet_mfg.domain.value_objects import CabinetPanel, FittingAssignment, ValidationResult
from cabinet_mfg.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cabinet_mfg.domain.entities import Cabinet


logger = logging.getLogger(__name__)

# Current schema version for manifest output
SCHEMA_VERSION = "1.0"


@ExporterRegistry.register("manifest")
class ManifestExporter:
    """Exports a full cabinet snapshot as JSON.

    Attributes:
        format_name: "manifest"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "manifest"
    file_extension: ClassVar[str] = "json"

    def __init__(self, include_validation: bool = True, indent: int = 2) -> None:
        """Initialize the manifest exporter.

        Args:
            include_validation: Whether to include validation findings.
            indent: JSON indentation level (default 2 spaces).
        """
        self.include_validation = include_validation
        self.indent = indent

    def export(self, cabinet: Cabinet, path: Path) -> None:
        content = self.export_string(cabinet)
        path.write_text(content)
        logger.info(f"Exported manifest to {path}")

    def export_string(self, cabinet: Cabinet) -> str:
        data = self.build(cabinet)
        return json.dumps(data, indent=self.indent, default=str)

    def build(self, cabinet: Cabinet) -> dict[str, Any]:
        """Build the manifest as a JSON-ready dictionary."""
        intent = cabinet.intent
        gate = cabinet.gate
        data: dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "revision": cabinet.revision,
            "gate": {
                "state": gate.state.value,
                "error_count": gate.error_count,
                "warning_count": gate.warning_count,
                "can_freeze": gate.can_freeze,
                "can_release": gate.can_release,
            },
            "intent": {
                "dimensions": asdict(intent.dimensions),
                "structure": _enum_values(asdict(intent.structure)),
                "materials": asdict(intent.materials),
                "parameters": _enum_values(asdict(intent.parameters)),
                "machine_profile": intent.machine_profile_id,
                "material_policy": intent.material_policy.value,
            },
            "panels": [self._panel(p, cabinet) for p in cabinet.panels],
            "fittings": [self._fitting(f) for f in cabinet.fittings],
            "totals": asdict(cabinet.totals),
        }
        if self.include_validation:
            data["validation"] = [self._finding(r) for r in cabinet.validation]
        return data

    @staticmethod
    def _panel(panel: CabinetPanel, cabinet: Cabinet) -> dict[str, Any]:
        try:
            operation_count = len(cabinet.operations_for(panel.id).operations)
        except KeyError:
            operation_count = 0
        return {
            "id": panel.id,
            "role": panel.role.value,
            "name": panel.name,
            "bay": panel.bay,
            "core": panel.core_material_id,
            "faces": asdict(panel.faces),
            "edges": asdict(panel.edges),
            "finish": {"width": panel.finish_width, "height": panel.finish_height},
            "position": list(panel.position),
            "design_load_kg": panel.design_load_kg,
            "computed": asdict(panel.computed),
            "operation_count": operation_count,
        }

    @staticmethod
    def _fitting(assignment: FittingAssignment) -> dict[str, Any]:
        return {
            "fitting_id": assignment.fitting_id,
            "panel_id": assignment.panel_id,
            "role": assignment.role.value,
            "status": assignment.status.value if assignment.status else None,
            "positions": list(assignment.positions),
        }

    @staticmethod
    def _finding(result: ValidationResult) -> dict[str, Any]:
        return {
            "code": result.code,
            "category": result.category.value,
            "severity": result.severity.value,
            "message": result.message,
            "panel_id": result.panel_id,
            "details": result.details,
        }


def _enum_values(data: dict[str, Any]) -> dict[str, Any]:
    return {k: getattr(v, "value", v) for k, v in data.items()}
