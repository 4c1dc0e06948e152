"""Gate state machine.

Turns accumulated validation results into guarded DRAFT -> FROZEN ->
RELEASED transitions and decides which export formats are permitted.

Transition policy:
- DRAFT -> FROZEN: no error-severity results.
- FROZEN -> RELEASED: still FROZEN and no error-severity results.
- FROZEN -> DRAFT: always allowed.
- RELEASED -> DRAFT: never. A released cabinet is immutable; editing
  continues on a new revision started from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from cabinet_mfg.domain.value_objects import ExportFormat, SpecState, ValidationResult

EXPORT_MIN_STATE: dict[ExportFormat, SpecState] = {
    ExportFormat.CUT_LIST: SpecState.DRAFT,
    ExportFormat.BOM: SpecState.DRAFT,
    ExportFormat.MANIFEST: SpecState.DRAFT,
    ExportFormat.DXF: SpecState.FROZEN,
    ExportFormat.CNC: SpecState.RELEASED,
}


class GateAction(str, Enum):
    """Explicit actions a designer can take on the gate."""

    FREEZE = "freeze"
    RELEASE = "release"
    UNFREEZE = "unfreeze"
    START_REVISION = "start_revision"
    EDIT = "edit"


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a gate action."""

    action: GateAction
    from_state: SpecState
    to_state: SpecState
    success: bool
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExportPermission:
    """Whether a format may be exported, and what blocks it if not."""

    format: ExportFormat
    allowed: bool
    current_state: SpecState
    required_state: SpecState
    blocking_messages: tuple[str, ...] = ()


def _error_messages(results: Iterable[ValidationResult]) -> tuple[str, ...]:
    return tuple(r.formatted_message for r in results if r.is_error)


class GateStateMachine:
    """Guarded transitions between specification states.

    Stateless: every method takes the current state and the validation
    results of the current geometry, and returns a TransitionResult.
    """

    def freeze(self, state: SpecState, results: Iterable[ValidationResult]) -> TransitionResult:
        if state != SpecState.DRAFT:
            return self._refuse(GateAction.FREEZE, state, f"Cannot freeze from {state.value}")
        errors = _error_messages(results)
        if errors:
            return TransitionResult(GateAction.FREEZE, state, state, False, errors)
        return TransitionResult(GateAction.FREEZE, state, SpecState.FROZEN, True)

    def release(self, state: SpecState, results: Iterable[ValidationResult]) -> TransitionResult:
        if state != SpecState.FROZEN:
            return self._refuse(
                GateAction.RELEASE, state, f"Release requires frozen state, not {state.value}"
            )
        errors = _error_messages(results)
        if errors:
            return TransitionResult(GateAction.RELEASE, state, state, False, errors)
        return TransitionResult(GateAction.RELEASE, state, SpecState.RELEASED, True)

    def unfreeze(self, state: SpecState) -> TransitionResult:
        if state == SpecState.FROZEN:
            return TransitionResult(GateAction.UNFREEZE, state, SpecState.DRAFT, True)
        if state == SpecState.DRAFT:
            return TransitionResult(GateAction.UNFREEZE, state, state, True)
        return self._refuse(
            GateAction.UNFREEZE,
            state,
            "Released specifications cannot return to draft; start a revision",
        )

    def start_revision(self, state: SpecState) -> TransitionResult:
        if state != SpecState.RELEASED:
            return self._refuse(
                GateAction.START_REVISION, state, "Only released specifications start a revision"
            )
        return TransitionResult(GateAction.START_REVISION, state, SpecState.DRAFT, True)

    def edit(self, state: SpecState) -> TransitionResult:
        """Check whether design intent may change in the current state."""
        if state == SpecState.RELEASED:
            return self._refuse(
                GateAction.EDIT, state, "Released specifications are read-only; start a revision"
            )
        return TransitionResult(GateAction.EDIT, state, state, True)

    @staticmethod
    def _refuse(action: GateAction, state: SpecState, reason: str) -> TransitionResult:
        return TransitionResult(action, state, state, False, (reason,))


def can_export(
    export_format: ExportFormat,
    state: SpecState,
    results: Iterable[ValidationResult] = (),
) -> ExportPermission:
    """Check an export against the current state and validation results.

    A format is allowed when the state has reached the format's minimum
    state and no error-severity result is present.
    """
    required = EXPORT_MIN_STATE[export_format]
    blocking = list(_error_messages(results))
    if state.rank < required.rank:
        blocking.insert(
            0,
            f"{export_format.value} export requires {required.value} state "
            f"(current: {state.value})",
        )
    return ExportPermission(
        format=export_format,
        allowed=not blocking,
        current_state=state,
        required_state=required,
        blocking_messages=tuple(blocking),
    )
