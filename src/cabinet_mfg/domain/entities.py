"""Domain aggregates: the design intent and the computed cabinet."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .services.constants import DEFAULT_MACHINE_PROFILE
from .services.gate import TransitionResult
from .value_objects import (
    CabinetDimensions,
    CabinetPanel,
    CabinetStructure,
    FittingAssignment,
    ManufacturingParameters,
    MaterialAssignment,
    PanelOperations,
    PanelOverride,
    SpecState,
    UnknownMaterialPolicy,
    ValidationResult,
    count_errors,
    count_warnings,
)


@dataclass(frozen=True)
class CabinetIntent:
    """Everything the designer controls. Derived state is a pure function of this.

    Attributes:
        dimensions: Overall size.
        structure: Shelves, dividers, back panel and joints.
        materials: Default material ids.
        parameters: Manufacturing process constants.
        overrides: Per-panel overrides keyed by panel id.
        fittings: Hardware assignments as requested (without status).
        machine_profile_id: Machine whose envelope the panels must fit.
        material_policy: Response to unknown material ids.
    """

    dimensions: CabinetDimensions = field(default_factory=CabinetDimensions)
    structure: CabinetStructure = field(default_factory=CabinetStructure)
    materials: MaterialAssignment = field(default_factory=MaterialAssignment)
    parameters: ManufacturingParameters = field(default_factory=ManufacturingParameters)
    overrides: Mapping[str, PanelOverride] = field(default_factory=dict)
    fittings: tuple[FittingAssignment, ...] = ()
    machine_profile_id: str = DEFAULT_MACHINE_PROFILE
    material_policy: UnknownMaterialPolicy = UnknownMaterialPolicy.STRICT

    def __post_init__(self) -> None:
        # Freeze the override map so a snapshot cannot change under its owner
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))


@dataclass(frozen=True)
class GateStatus:
    """Gate state together with the counts that guard its transitions."""

    state: SpecState
    error_count: int
    warning_count: int

    @property
    def can_freeze(self) -> bool:
        return self.state == SpecState.DRAFT and self.error_count == 0

    @property
    def can_release(self) -> bool:
        return self.state == SpecState.FROZEN and self.error_count == 0


@dataclass(frozen=True)
class CabinetTotals:
    """Job-level sums over all panels."""

    panel_count: int
    area: float
    edge_length: float
    weight_kg: float
    cost: float
    co2: float


@dataclass(frozen=True)
class Cabinet:
    """A fully computed cabinet snapshot.

    Every field other than ``intent``, ``state``, ``revision`` and
    ``last_transition`` is derived from the intent by the pipeline and is
    replaced wholesale on each recomputation.
    """

    intent: CabinetIntent
    panels: tuple[CabinetPanel, ...] = ()
    operations: tuple[PanelOperations, ...] = ()
    validation: tuple[ValidationResult, ...] = ()
    fittings: tuple[FittingAssignment, ...] = ()
    state: SpecState = SpecState.DRAFT
    revision: int = 1
    last_transition: TransitionResult | None = None

    @property
    def error_count(self) -> int:
        return count_errors(self.validation)

    @property
    def warning_count(self) -> int:
        return count_warnings(self.validation)

    @property
    def gate(self) -> GateStatus:
        return GateStatus(self.state, self.error_count, self.warning_count)

    @property
    def errors(self) -> list[ValidationResult]:
        return [r for r in self.validation if r.is_error]

    def panel(self, panel_id: str) -> CabinetPanel:
        """Look up a panel by id.

        Raises:
            KeyError: If no panel has the id.
        """
        for panel in self.panels:
            if panel.id == panel_id:
                return panel
        raise KeyError(panel_id)

    def operations_for(self, panel_id: str) -> PanelOperations:
        for entry in self.operations:
            if entry.panel_id == panel_id:
                return entry
        raise KeyError(panel_id)

    @property
    def totals(self) -> CabinetTotals:
        return CabinetTotals(
            panel_count=len(self.panels),
            area=sum(p.computed.area for p in self.panels),
            edge_length=sum(p.computed.edge_length for p in self.panels),
            weight_kg=sum(p.computed.weight_kg for p in self.panels),
            cost=sum(p.computed.cost for p in self.panels),
            co2=sum(p.computed.co2 for p in self.panels),
        )
