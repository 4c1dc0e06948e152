"""Value objects for the cabinet manufacturing domain.

All classes are immutable and re-exported from the private sub-modules.
"""

from __future__ import annotations

# Design intent
from ._cabinet import (
    BackConstruction,
    CabinetDimensions,
    CabinetStructure,
    JointType,
    ManufacturingParameters,
    MaterialAssignment,
)

# Fittings
from ._fittings import (
    BrandTier,
    DoorSizeRange,
    DrillHole,
    DrillingPattern,
    FittingAssignment,
    FittingCategory,
    FittingRole,
    FittingSpec,
    SafetyStatus,
    ThicknessRange,
)

# Gate
from ._gate import ExportFormat, SpecState

# Materials
from ._materials import (
    CoreMaterial,
    EdgeMaterial,
    MaterialCategory,
    OperationKind,
    SurfaceMaterial,
    SurfaceType,
    UnknownMaterialPolicy,
)

# Machine envelope
from ._machine import MachineProfile

# Machine operations
from ._operations import (
    DrillHorizontal,
    DrillVertical,
    Groove,
    GrooveAxis,
    HingeCup,
    MachineOperation,
    PanelOperations,
    Pocket,
    mirror_x,
)

# Panels
from ._panels import (
    CabinetPanel,
    EdgeAssignment,
    EdgeSide,
    Face,
    FaceAssignment,
    PanelComputed,
    PanelOverride,
    PanelRole,
)

# Validation
from ._validation import (
    Severity,
    ValidationCategory,
    ValidationResult,
    count_errors,
    count_warnings,
)

__all__ = [
    "BackConstruction",
    "BrandTier",
    "CabinetDimensions",
    "CabinetPanel",
    "CabinetStructure",
    "CoreMaterial",
    "DoorSizeRange",
    "DrillHole",
    "DrillHorizontal",
    "DrillVertical",
    "DrillingPattern",
    "EdgeAssignment",
    "EdgeMaterial",
    "EdgeSide",
    "ExportFormat",
    "Face",
    "FaceAssignment",
    "FittingAssignment",
    "FittingCategory",
    "FittingRole",
    "FittingSpec",
    "Groove",
    "GrooveAxis",
    "HingeCup",
    "JointType",
    "MachineOperation",
    "MachineProfile",
    "ManufacturingParameters",
    "MaterialAssignment",
    "MaterialCategory",
    "OperationKind",
    "PanelComputed",
    "PanelOperations",
    "PanelOverride",
    "PanelRole",
    "Pocket",
    "SafetyStatus",
    "Severity",
    "SpecState",
    "SurfaceMaterial",
    "SurfaceType",
    "ThicknessRange",
    "UnknownMaterialPolicy",
    "ValidationCategory",
    "ValidationResult",
    "count_errors",
    "count_warnings",
    "mirror_x",
]
