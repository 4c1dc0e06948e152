"""The pure design-to-manufacturing pipeline and its reducer.

``reduce(cabinet, intent)`` is the single entry point for change: design
intents re-run the whole pipeline from the new intent, gate intents move
the specification state. No step keeps state between calls.
"""

from __future__ import annotations

import dataclasses
import logging

from cabinet_mfg.domain.entities import Cabinet, CabinetIntent
from cabinet_mfg.domain.registries import MaterialCatalog, default_catalog
from cabinet_mfg.domain.services import (
    DEFAULT_MACHINE_PROFILE,
    MACHINE_PROFILES,
    DesignValidator,
    FittingCatalogue,
    GateStateMachine,
    OperationGraphBuilder,
    PanelDecomposer,
    StructuralCheck,
    ToleranceEngine,
    TransitionResult,
    assess_assignments,
)
from cabinet_mfg.domain.value_objects import (
    FittingAssignment,
    Severity,
    SpecState,
    ValidationCategory,
    ValidationResult,
)

from .intents import (
    AssignFitting,
    ClearPanelOverride,
    DesignIntent,
    Freeze,
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

logger = logging.getLogger(__name__)


class CabinetPipeline:
    """Runs decomposition, validation and operation graph generation.

    The material and fitting catalogues are read-only collaborators; the
    pipeline itself holds no per-cabinet state.
    """

    def __init__(
        self,
        catalog: MaterialCatalog | None = None,
        fittings: FittingCatalogue | None = None,
        gate: GateStateMachine | None = None,
    ) -> None:
        self.catalog = catalog or default_catalog()
        self.fittings = fittings or FittingCatalogue()
        self.gate = gate or GateStateMachine()

    def compute(
        self,
        intent: CabinetIntent,
        state: SpecState = SpecState.DRAFT,
        revision: int = 1,
        last_transition: TransitionResult | None = None,
    ) -> Cabinet:
        """Compute a complete cabinet snapshot from design intent.

        Args:
            intent: Design intent.
            state: Gate state carried into the snapshot.
            revision: Revision number carried into the snapshot.
            last_transition: Gate transition to record on the snapshot.

        Returns:
            A fully derived Cabinet; never raises for out-of-range input.
        """
        findings: list[ValidationResult] = []

        machine = MACHINE_PROFILES.get(intent.machine_profile_id)
        if machine is None:
            findings.append(
                ValidationResult(
                    code="mach-unknown-profile",
                    category=ValidationCategory.MACHINE,
                    severity=Severity.ERROR,
                    message=(
                        f"Unknown machine profile '{intent.machine_profile_id}'; "
                        f"available: {', '.join(sorted(MACHINE_PROFILES))}"
                    ),
                )
            )
            machine = MACHINE_PROFILES[DEFAULT_MACHINE_PROFILE]

        decomposer = PanelDecomposer(self.catalog, intent.parameters, intent.material_policy)
        decomposition = decomposer.decompose(
            intent.dimensions, intent.structure, intent.materials, intent.overrides
        )
        panels = decomposition.panels

        findings.extend(
            DesignValidator(machine).validate(intent.dimensions, intent.structure, decomposition)
        )
        findings.extend(decomposition.findings)

        assessment = assess_assignments(panels, intent.fittings, self.fittings)
        findings.extend(StructuralCheck(self.fittings).check(panels, assessment.assignments))
        findings.extend(assessment.findings)

        tolerance = ToleranceEngine(self.catalog.category_of(intent.materials.default_core or ""))
        operations = OperationGraphBuilder(intent.parameters, self.fittings, tolerance).build(
            panels, intent.structure, assessment.assignments
        )

        cabinet = Cabinet(
            intent=intent,
            panels=panels,
            operations=operations,
            validation=tuple(findings),
            fittings=assessment.assignments,
            state=state,
            revision=revision,
            last_transition=last_transition,
        )
        logger.debug(
            f"Recomputed cabinet rev {revision} ({state.value}): {len(panels)} panels, "
            f"{cabinet.error_count} errors, {cabinet.warning_count} warnings"
        )
        return cabinet

    def reduce(self, cabinet: Cabinet, intent: Intent) -> Cabinet:
        """Apply one intent and return the next cabinet snapshot.

        The input cabinet is never modified. A refused action returns the
        same design data with the refusal recorded in ``last_transition``.
        """
        gate = self.gate
        match intent:
            case Freeze():
                transition = gate.freeze(cabinet.state, cabinet.validation)
            case Release():
                transition = gate.release(cabinet.state, cabinet.validation)
            case Unfreeze():
                transition = gate.unfreeze(cabinet.state)
            case StartRevision():
                transition = gate.start_revision(cabinet.state)
                if transition.success:
                    return self.compute(
                        cabinet.intent, transition.to_state, cabinet.revision + 1, transition
                    )
            case _:
                transition = gate.edit(cabinet.state)
                if transition.success:
                    return self.compute(
                        apply_intent(cabinet.intent, intent),
                        cabinet.state,
                        cabinet.revision,
                        transition,
                    )

        if not transition.success:
            logger.warning(
                f"Gate refused {transition.action.value}: {'; '.join(transition.reasons)}"
            )
        return dataclasses.replace(cabinet, state=transition.to_state, last_transition=transition)


def apply_intent(current: CabinetIntent, intent: DesignIntent) -> CabinetIntent:
    """Return a new design intent with one change applied."""
    replace = dataclasses.replace
    match intent:
        case SetDimensions(dimensions=dimensions):
            return replace(current, dimensions=dimensions)
        case SetStructure(structure=structure):
            return replace(current, structure=structure)
        case SetMaterials(materials=materials):
            return replace(current, materials=materials)
        case SetParameters(parameters=parameters):
            return replace(current, parameters=parameters)
        case SetPanelOverride(panel_id=panel_id, override=override):
            return replace(current, overrides={**current.overrides, panel_id: override})
        case ClearPanelOverride(panel_id=panel_id):
            overrides = {k: v for k, v in current.overrides.items() if k != panel_id}
            return replace(current, overrides=overrides)
        case AssignFitting(assignment=assignment):
            kept = _without(current.fittings, assignment.fitting_id, assignment.panel_id)
            return replace(current, fittings=kept + (assignment,))
        case RemoveFitting(fitting_id=fitting_id, panel_id=panel_id):
            return replace(current, fittings=_without(current.fittings, fitting_id, panel_id))
        case SetMachineProfile(profile_id=profile_id):
            return replace(current, machine_profile_id=profile_id)
        case SetMaterialPolicy(policy=policy):
            return replace(current, material_policy=policy)
    raise TypeError(f"Not a design intent: {intent!r}")


def _without(
    fittings: tuple[FittingAssignment, ...], fitting_id: str, panel_id: str
) -> tuple[FittingAssignment, ...]:
    return tuple(
        f for f in fittings if not (f.fitting_id == fitting_id and f.panel_id == panel_id)
    )


def recompute(intent: CabinetIntent, pipeline: CabinetPipeline | None = None) -> Cabinet:
    """Compute a fresh DRAFT cabinet from design intent."""
    return (pipeline or CabinetPipeline()).compute(intent)


def reduce(cabinet: Cabinet, intent: Intent, pipeline: CabinetPipeline | None = None) -> Cabinet:
    """Pure reducer: ``(Cabinet, Intent) -> Cabinet``."""
    return (pipeline or CabinetPipeline()).reduce(cabinet, intent)


class DesignSession:
    """Holds the latest cabinet snapshot and dispatches intents to the reducer.

    Example:
        session = DesignSession()
        session.dispatch(SetDimensions(CabinetDimensions(width=900)))
        session.dispatch(Freeze())
        print(session.cabinet.state)
    """

    def __init__(
        self,
        intent: CabinetIntent | None = None,
        pipeline: CabinetPipeline | None = None,
    ) -> None:
        self.pipeline = pipeline or CabinetPipeline()
        self._cabinet = self.pipeline.compute(intent or CabinetIntent())

    @property
    def cabinet(self) -> Cabinet:
        """The latest snapshot."""
        return self._cabinet

    def dispatch(self, intent: Intent) -> Cabinet:
        """Apply an intent and return the new snapshot."""
        self._cabinet = self.pipeline.reduce(self._cabinet, intent)
        return self._cabinet
