"""Gate states and export formats."""

from __future__ import annotations

from enum import Enum


class SpecState(str, Enum):
    """Release state of a cabinet specification."""

    DRAFT = "draft"
    FROZEN = "frozen"
    RELEASED = "released"

    @property
    def rank(self) -> int:
        """Ordering used for export permission checks."""
        return _STATE_RANK[self]


_STATE_RANK = {SpecState.DRAFT: 0, SpecState.FROZEN: 1, SpecState.RELEASED: 2}


class ExportFormat(str, Enum):
    """Export artifacts the gate controls."""

    CUT_LIST = "cutlist"
    BOM = "bom"
    MANIFEST = "manifest"
    DXF = "dxf"
    CNC = "cnc"
