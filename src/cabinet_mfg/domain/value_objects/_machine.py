"""CNC machine envelope."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MachineProfile:
    """Working envelope of a panel saw or CNC machining center, in mm."""

    id: str
    name: str
    max_width: float
    max_height: float
    min_thickness: float
    max_thickness: float

    def __post_init__(self) -> None:
        if self.max_width <= 0 or self.max_height <= 0:
            raise ValueError("Machine envelope must be positive")
        if self.min_thickness > self.max_thickness:
            raise ValueError("min_thickness must not exceed max_thickness")

    def fits(self, width: float, height: float) -> bool:
        """Check whether a cut panel fits in either orientation."""
        return (width <= self.max_width and height <= self.max_height) or (
            height <= self.max_width and width <= self.max_height
        )

    def accepts_thickness(self, thickness: float) -> bool:
        return self.min_thickness <= thickness <= self.max_thickness
