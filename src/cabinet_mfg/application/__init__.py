"""Application layer - intents, the reducer pipeline, and configuration."""

from .intents import (
    AssignFitting,
    ClearPanelOverride,
    DesignIntent,
    Freeze,
    GateIntent,
    Intent,
    Release,
    RemoveFitting,
    SetDimensions,
    SetMachineProfile,
    SetMaterialPolicy,
    SetMaterials,
    SetPanelOverride,
    SetParameters,
    SetStructure,
    StartRevision,
    Unfreeze,
)
from .pipeline import CabinetPipeline, DesignSession, apply_intent, recompute, reduce

__all__ = [
    "AssignFitting",
    "CabinetPipeline",
    "ClearPanelOverride",
    "DesignIntent",
    "DesignSession",
    "Freeze",
    "GateIntent",
    "Intent",
    "Release",
    "RemoveFitting",
    "SetDimensions",
    "SetMachineProfile",
    "SetMaterialPolicy",
    "SetMaterials",
    "SetPanelOverride",
    "SetParameters",
    "SetStructure",
    "StartRevision",
    "Unfreeze",
    "apply_intent",
    "recompute",
    "reduce",
]
