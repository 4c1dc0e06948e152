"""Design intents: the only way a cabinet changes.

Design intents edit what the designer controls and trigger a full
recomputation. Gate intents move the specification between states.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from cabinet_mfg.domain.value_objects import (
    CabinetDimensions,
    CabinetStructure,
    FittingAssignment,
    ManufacturingParameters,
    MaterialAssignment,
    PanelOverride,
    UnknownMaterialPolicy,
)


@dataclass(frozen=True)
class SetDimensions:
    dimensions: CabinetDimensions


@dataclass(frozen=True)
class SetStructure:
    structure: CabinetStructure


@dataclass(frozen=True)
class SetMaterials:
    materials: MaterialAssignment


@dataclass(frozen=True)
class SetParameters:
    parameters: ManufacturingParameters


@dataclass(frozen=True)
class SetPanelOverride:
    """Replace the override for one panel."""

    panel_id: str
    override: PanelOverride


@dataclass(frozen=True)
class ClearPanelOverride:
    panel_id: str


@dataclass(frozen=True)
class AssignFitting:
    """Add a fitting assignment, replacing any with the same fitting and panel."""

    assignment: FittingAssignment


@dataclass(frozen=True)
class RemoveFitting:
    fitting_id: str
    panel_id: str


@dataclass(frozen=True)
class SetMachineProfile:
    profile_id: str


@dataclass(frozen=True)
class SetMaterialPolicy:
    policy: UnknownMaterialPolicy


@dataclass(frozen=True)
class Freeze:
    pass


@dataclass(frozen=True)
class Release:
    pass


@dataclass(frozen=True)
class Unfreeze:
    pass


@dataclass(frozen=True)
class StartRevision:
    """Open a new draft revision from a released cabinet."""


DesignIntent = Union[
    SetDimensions,
    SetStructure,
    SetMaterials,
    SetParameters,
    SetPanelOverride,
    ClearPanelOverride,
    AssignFitting,
    RemoveFitting,
    SetMachineProfile,
    SetMaterialPolicy,
]

GateIntent = Union[Freeze, Release, Unfreeze, StartRevision]

Intent = Union[DesignIntent, GateIntent]
