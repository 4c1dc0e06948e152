"""Hardware fitting value objects: catalogue entries, drilling patterns, assignments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FittingCategory(str, Enum):
    """Catalogue category of a fitting."""

    HINGE = "hinge"
    SLIDE = "slide"
    LIFT = "lift"
    SHELF_SUPPORT = "shelf_support"
    CONNECTOR = "connector"
    HANDLE = "handle"
    LEG = "leg"
    OTHER = "other"


class FittingRole(str, Enum):
    """Role a fitting plays on the panel it is assigned to."""

    HINGE = "hinge"
    BRACKET = "bracket"
    RAIL = "rail"


class BrandTier(str, Enum):
    """Vendor quality tier."""

    PREMIUM = "premium"
    MID = "mid"
    BUDGET = "budget"
    UNKNOWN = "unknown"


class SafetyStatus(str, Enum):
    """Outcome of a fitting compatibility check."""

    COMPATIBLE = "compatible"
    LOW_CONFIDENCE = "low_confidence"
    INCOMPATIBLE = "incompatible"


@dataclass(frozen=True)
class ThicknessRange:
    """Panel thickness range a fitting is rated for, in mm."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError("Thickness range min must not exceed max")

    def contains(self, thickness: float) -> bool:
        return self.min <= thickness <= self.max


@dataclass(frozen=True)
class DoorSizeRange:
    """Door or flap size range a fitting is rated for, in mm."""

    min_width: float
    max_width: float
    min_height: float
    max_height: float


@dataclass(frozen=True)
class DrillHole:
    """One hole of a drilling pattern.

    ``along`` runs parallel to the mounting edge, ``inward`` runs away
    from it into the panel, both relative to the pattern origin.
    """

    along: float
    inward: float
    diameter: float
    depth: float


@dataclass(frozen=True)
class DrillingPattern:
    """Named hole pattern a fitting requires."""

    id: str
    name: str
    system: str
    holes: tuple[DrillHole, ...]


@dataclass(frozen=True)
class FittingSpec:
    """Catalogue entry for a piece of hardware.

    Attributes:
        id: Catalogue identifier.
        factory_code: Vendor part number used on the BOM.
        name: Display name.
        vendor: Manufacturer.
        category: Catalogue category.
        brand_tier: Vendor quality tier.
        reliability_score: 0-100 field reliability.
        thickness_range: Panel thickness the fitting accepts.
        weight_capacity: Rated load in kg (None if not load-rated).
        drilling_pattern_id: Pattern id in the drilling library.
        price: Unit price.
        door_size_range: Door size limits for hinges and lifts.
        certified: False for heuristic entries not certified by the vendor.
        description: Free text.
    """

    id: str
    factory_code: str
    name: str
    vendor: str
    category: FittingCategory
    brand_tier: BrandTier
    reliability_score: float
    thickness_range: ThicknessRange
    weight_capacity: float | None
    drilling_pattern_id: str
    price: float = 0.0
    door_size_range: DoorSizeRange | None = None
    certified: bool = True
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Fitting id must not be empty")
        if not 0 <= self.reliability_score <= 100:
            raise ValueError("reliability_score must be between 0 and 100")
        if self.weight_capacity is not None and self.weight_capacity <= 0:
            raise ValueError("weight_capacity must be positive")


@dataclass(frozen=True)
class FittingAssignment:
    """A fitting placed on a panel.

    ``status`` is filled in by the pipeline from the compatibility check;
    an assignment coming straight from design intent carries None.
    ``positions`` are placement offsets along the panel (mm); empty means
    the role's default placement.
    """

    fitting_id: str
    panel_id: str
    role: FittingRole
    status: SafetyStatus | None = None
    positions: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if not self.fitting_id:
            raise ValueError("fitting_id must not be empty")
        if not self.panel_id:
            raise ValueError("panel_id must not be empty")
