"""Pure domain services of the design-to-manufacturing pipeline.

This package provides:
- Material stack arithmetic (thickness, cut sizes, internal depth)
- Panel decomposition
- The tolerance engine
- Fitting catalogue, compatibility and ranking
- The structural load check
- The machine operation graph builder
- Design validation
- The gate state machine
"""

from __future__ import annotations

from .constants import DEFAULT_MACHINE_PROFILE, MACHINE_PROFILES
from .decomposer import DecompositionResult, PanelDecomposer, front_edge_sides
from .fittings import (
    DRILLING_PATTERNS,
    FITTING_CATALOGUE,
    AssignmentAssessment,
    CompatibilityResult,
    FittingCatalogue,
    PanelContext,
    RankedFitting,
    RankingResult,
    RejectedFitting,
    UnknownFittingError,
    assess_assignments,
    check_compatibility,
    rank_fittings,
)
from .gate import (
    EXPORT_MIN_STATE,
    ExportPermission,
    GateAction,
    GateStateMachine,
    TransitionResult,
    can_export,
)
from .material_stack import (
    compute_panel,
    cut_dimension,
    internal_depth,
    saw_dimension,
    total_thickness,
)
from .operations import (
    OperationGraphBuilder,
    confirmat_positions,
    hinge_positions,
    system_32_rows,
)
from .structural import StructuralCheck
from .tolerance import (
    MATERIAL_BEHAVIORS,
    InstallMethod,
    MaterialBehavior,
    PanelWeight,
    ToleranceContext,
    ToleranceEngine,
    ToleranceResult,
    heavy_panel_warnings,
    panel_weight,
    semantic_tolerance,
    tolerance,
)
from .validation import DesignValidator

__all__ = [
    "AssignmentAssessment",
    "CompatibilityResult",
    "DEFAULT_MACHINE_PROFILE",
    "DRILLING_PATTERNS",
    "DecompositionResult",
    "DesignValidator",
    "EXPORT_MIN_STATE",
    "ExportPermission",
    "FITTING_CATALOGUE",
    "FittingCatalogue",
    "GateAction",
    "GateStateMachine",
    "InstallMethod",
    "MACHINE_PROFILES",
    "MATERIAL_BEHAVIORS",
    "MaterialBehavior",
    "OperationGraphBuilder",
    "PanelContext",
    "PanelDecomposer",
    "PanelWeight",
    "RankedFitting",
    "RankingResult",
    "RejectedFitting",
    "StructuralCheck",
    "ToleranceContext",
    "ToleranceEngine",
    "ToleranceResult",
    "TransitionResult",
    "UnknownFittingError",
    "assess_assignments",
    "can_export",
    "check_compatibility",
    "compute_panel",
    "confirmat_positions",
    "cut_dimension",
    "front_edge_sides",
    "heavy_panel_warnings",
    "hinge_positions",
    "internal_depth",
    "panel_weight",
    "rank_fittings",
    "saw_dimension",
    "semantic_tolerance",
    "system_32_rows",
    "tolerance",
    "total_thickness",
]
