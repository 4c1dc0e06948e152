"""Design-intent value objects: dimensions, structure, and material choices."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class JointType(str, Enum):
    """How a top or bottom panel meets the sides.

    OVERLAY: the horizontal panel rests on the side ends and spans the full width.
    INSET: the horizontal panel fits between the sides.
    """

    OVERLAY = "overlay"
    INSET = "inset"


class BackConstruction(str, Enum):
    """How the back panel is held in the carcass.

    INSET: back sits in side grooves, held forward of the rear by a void.
    OVERLAY: back is fixed flat across the rear of the carcass.
    """

    INSET = "inset"
    OVERLAY = "overlay"


@dataclass(frozen=True)
class CabinetDimensions:
    """Overall cabinet size in mm.

    Values are not range-checked here; out-of-range input is reported by
    the design validator so that an invalid cabinet can still be inspected.
    """

    width: float = 600.0
    height: float = 720.0
    depth: float = 560.0
    toe_kick_height: float = 100.0

    @property
    def body_height(self) -> float:
        """Carcass height above the toe kick."""
        return self.height - self.toe_kick_height


@dataclass(frozen=True)
class CabinetStructure:
    """Internal layout choices for the carcass."""

    shelf_count: int = 1
    divider_count: int = 0
    has_back_panel: bool = True
    top_joint: JointType = JointType.INSET
    bottom_joint: JointType = JointType.INSET

    @property
    def bay_count(self) -> int:
        """Number of vertical bays formed by the dividers."""
        return max(self.divider_count, 0) + 1


@dataclass(frozen=True)
class MaterialAssignment:
    """Default material ids applied to every panel unless overridden."""

    default_core: str | None = "core-pb-16"
    default_surface: str | None = "surf-mel-white"
    default_edge: str | None = "edge-pvc-white-10"


@dataclass(frozen=True)
class ManufacturingParameters:
    """Process constants for the material stack and back-panel logic.

    All values are in mm.

    Attributes:
        glue_thickness: Glue line per bonded surface.
        groove_depth: Back-panel groove depth in the sides.
        shelf_front_setback: Shelf and divider setback from the front plane.
        shelf_back_setback: Safety gap kept in front of the back panel.
        back_construction: INSET (grooved, with rear void) or OVERLAY.
        back_void: Distance from the rear plane to the back panel.
        back_thickness: Back panel board thickness.
        back_core: Core material id used for the back panel.
    """

    glue_thickness: float = 0.1
    groove_depth: float = 8.0
    shelf_front_setback: float = 20.0
    shelf_back_setback: float = 2.0
    back_construction: BackConstruction = BackConstruction.INSET
    back_void: float = 20.0
    back_thickness: float = 6.0
    back_core: str = "core-mdf-6"

    def __post_init__(self) -> None:
        for name in (
            "glue_thickness",
            "shelf_front_setback",
            "shelf_back_setback",
            "back_void",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        for name in ("groove_depth", "back_thickness"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def groove_offset(self) -> float:
        """Distance from the rear plane to the back panel's rear face."""
        if self.back_construction == BackConstruction.INSET:
            return self.back_void
        return 0.0

    @property
    def back_allowance(self) -> float:
        """Depth consumed at the rear by the back panel and its void."""
        return self.groove_offset + self.back_thickness
