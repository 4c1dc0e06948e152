"""Validation result types shared by every checking stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class ValidationCategory(str, Enum):
    """What part of the design a finding concerns."""

    DIMENSION = "dimension"
    STRUCTURE = "structure"
    MATERIAL = "material"
    MACHINE = "machine"
    SAFETY = "safety"


class Severity(str, Enum):
    """Finding severity. Only ERROR blocks gate transitions and exports."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationResult:
    """A single structured finding.

    Attributes:
        code: Stable identifier for the rule (e.g., "dim-width-min").
        category: Area of the design the finding concerns.
        severity: Error, warning, or info.
        message: Human-readable description.
        panel_id: Panel the finding refers to, if any.
        details: Additional structured data (measured values, limits).
    """

    code: str
    category: ValidationCategory
    severity: Severity
    message: str
    panel_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("code must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")

    @property
    def is_error(self) -> bool:
        """Check if this finding blocks the gate."""
        return self.severity == Severity.ERROR

    @property
    def is_warning(self) -> bool:
        """Check if this finding is a warning."""
        return self.severity == Severity.WARNING

    @property
    def formatted_message(self) -> str:
        """Message with a severity and category prefix."""
        prefix = {
            Severity.ERROR: "[ERROR]",
            Severity.WARNING: "[WARN]",
            Severity.INFO: "[INFO]",
        }
        target = f" ({self.panel_id})" if self.panel_id else ""
        return f"{prefix[self.severity]} {self.category.value}: {self.message}{target}"


def count_errors(results: Iterable[ValidationResult]) -> int:
    """Number of error-severity findings."""
    return sum(1 for result in results if result.is_error)


def count_warnings(results: Iterable[ValidationResult]) -> int:
    """Number of warning-severity findings."""
    return sum(1 for result in results if result.is_warning)
