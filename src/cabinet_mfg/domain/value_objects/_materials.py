"""Material value objects: core substrates, surface laminates, and edge bands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SurfaceType(str, Enum):
    """Face covering applied over a core substrate."""

    MELAMINE = "melamine"
    HPL = "hpl"
    VENEER = "veneer"
    LACQUER = "lacquer"


class MaterialCategory(str, Enum):
    """Behavioral class of a material, used by the tolerance engine.

    The category determines expansion coefficients, minimum joint gaps,
    machining risks, and density for weight estimates.
    """

    WOOD_PANEL = "wood_panel"
    SOLID_WOOD = "solid_wood"
    STONE_NATURAL = "stone_natural"
    STONE_ENGINEERED = "stone_engineered"
    METAL_SHEET = "metal_sheet"
    GLASS = "glass"
    ACRYLIC = "acrylic"


class OperationKind(str, Enum):
    """Formula slot the tolerance engine supplies a gap for."""

    JOINT_GAP = "joint_gap"
    SHELF_CLEARANCE = "shelf_clearance"
    BACK_PANEL_GROOVE = "back_panel_groove"
    HINGE_CUP = "hinge_cup"
    EDGE_BANDING = "edge_banding"
    GROUT = "grout"


class UnknownMaterialPolicy(str, Enum):
    """How registries respond to an id they do not know.

    STRICT raises an explicit error; FALLBACK substitutes the registry
    default and reports a warning.
    """

    STRICT = "strict"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class CoreMaterial:
    """Substrate board a panel is cut from.

    Attributes:
        id: Registry identifier (e.g., "core-pb-16").
        name: Display name.
        thickness: Board thickness in mm.
        cost_per_sqm: Cost per square meter of board.
        co2_per_sqm: Embodied CO2 (kg) per square meter.
        density: Density in kg/m3 for weight estimates.
        category: Behavioral class for tolerances.
    """

    id: str
    name: str
    thickness: float
    cost_per_sqm: float = 0.0
    co2_per_sqm: float = 0.0
    density: float = 700.0
    category: MaterialCategory = MaterialCategory.WOOD_PANEL

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Core material id must not be empty")
        if self.thickness <= 0:
            raise ValueError("Core thickness must be positive")
        if self.density <= 0:
            raise ValueError("Core density must be positive")


@dataclass(frozen=True)
class SurfaceMaterial:
    """Laminate or finish bonded onto one face of a core.

    The texture reference is carried as an opaque string; nothing in the
    manufacturing pipeline interprets it.
    """

    id: str
    name: str
    thickness: float
    surface_type: SurfaceType = SurfaceType.MELAMINE
    color: str = "#FFFFFF"
    cost_per_sqm: float = 0.0
    co2_per_sqm: float = 0.0
    texture_ref: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Surface material id must not be empty")
        if self.thickness < 0:
            raise ValueError("Surface thickness must be non-negative")


@dataclass(frozen=True)
class EdgeMaterial:
    """Edge banding tape.

    Attributes:
        id: Registry identifier (e.g., "edge-pvc-white-10").
        name: Display name.
        thickness: Band thickness in mm, deducted from finish size.
        height: Tape height in mm.
        cost_per_meter: Cost per linear meter.
        code: Supplier code.
        color: Display color.
    """

    id: str
    name: str
    thickness: float
    height: float = 23.0
    cost_per_meter: float = 0.0
    code: str = ""
    color: str = "#FFFFFF"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Edge material id must not be empty")
        if self.thickness < 0:
            raise ValueError("Edge thickness must be non-negative")
        if self.height <= 0:
            raise ValueError("Edge height must be positive")
