"""Panel value objects: roles, edge/face assignments, and computed geometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class PanelRole(str, Enum):
    """Closed set of panel roles produced by decomposition."""

    LEFT_SIDE = "left_side"
    RIGHT_SIDE = "right_side"
    TOP = "top"
    BOTTOM = "bottom"
    BACK = "back"
    SHELF = "shelf"
    DIVIDER = "divider"

    @property
    def is_vertical(self) -> bool:
        """Sides and dividers stand upright; everything else lies flat or hangs at the rear."""
        return self in (PanelRole.LEFT_SIDE, PanelRole.RIGHT_SIDE, PanelRole.DIVIDER)

    @property
    def bears_load(self) -> bool:
        """Shelves and the bottom carry stored items."""
        return self in (PanelRole.SHELF, PanelRole.BOTTOM)


class EdgeSide(str, Enum):
    """Panel edge in panel-local coordinates."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class Face(str, Enum):
    """Panel face. A is the inner/visible face, B the outer face."""

    A = "A"
    B = "B"


@dataclass(frozen=True)
class EdgeAssignment:
    """Optional edge-band material id per panel edge."""

    top: str | None = None
    bottom: str | None = None
    left: str | None = None
    right: str | None = None

    def get(self, side: EdgeSide) -> str | None:
        """Edge material id assigned to one side."""
        return getattr(self, side.value)

    def items(self) -> Iterator[tuple[EdgeSide, str]]:
        """Yield (side, edge id) for every banded side."""
        for side in EdgeSide:
            edge_id = self.get(side)
            if edge_id:
                yield side, edge_id

    @property
    def edged_count(self) -> int:
        """Number of banded sides."""
        return sum(1 for _ in self.items())


@dataclass(frozen=True)
class FaceAssignment:
    """Surface material ids for the two panel faces."""

    face_a: str | None = None
    face_b: str | None = None

    def get(self, face: Face) -> str | None:
        """Surface id on one face."""
        return self.face_a if face == Face.A else self.face_b


@dataclass(frozen=True)
class PanelComputed:
    """Derived manufacturing values for a panel.

    Attributes:
        real_thickness: Core plus bonded surfaces plus glue lines, in mm.
        cut_width: Finish width minus left/right edge thickness.
        cut_height: Finish height minus top/bottom edge thickness.
        area: One-face area in m2.
        surface_area: Both-face area in m2.
        edge_length: Banded edge length in m.
        weight_kg: Estimated panel weight.
        cost: Material cost estimate.
        co2: Embodied CO2 estimate in kg.
        cut_offset_x: Left edge thickness; where the cut outline starts
            inside the finish outline along x.
        cut_offset_y: Bottom edge thickness, the same along y.
    """

    real_thickness: float
    cut_width: float
    cut_height: float
    area: float
    surface_area: float
    edge_length: float
    weight_kg: float
    cost: float = 0.0
    co2: float = 0.0
    cut_offset_x: float = 0.0
    cut_offset_y: float = 0.0


@dataclass(frozen=True)
class CabinetPanel:
    """One physical panel of the cabinet.

    Finish sizes are the as-installed dimensions including edge banding.
    Position is the panel origin in cabinet coordinates (x from the left
    outer face, y from the floor, z from the front plane).
    """

    id: str
    role: PanelRole
    name: str
    finish_width: float
    finish_height: float
    core_material_id: str
    computed: PanelComputed
    edges: EdgeAssignment = field(default_factory=EdgeAssignment)
    faces: FaceAssignment = field(default_factory=FaceAssignment)
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    bay: int | None = None
    design_load_kg: float = 0.0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Panel id must not be empty")
        if self.design_load_kg < 0:
            raise ValueError("design_load_kg must be non-negative")

    @property
    def thickness(self) -> float:
        """Real panel thickness in mm."""
        return self.computed.real_thickness

    @property
    def total_load_kg(self) -> float:
        """Self weight plus any design load placed on the panel."""
        return self.computed.weight_kg + self.design_load_kg


@dataclass(frozen=True)
class PanelOverride:
    """Per-panel replacement of defaulted values.

    Any field left as None keeps the decomposed default. ``edges`` and
    ``faces`` replace the whole assignment when given.
    """

    core_material_id: str | None = None
    faces: FaceAssignment | None = None
    edges: EdgeAssignment | None = None
    position: float | None = None
    design_load_kg: float | None = None

    def __post_init__(self) -> None:
        if self.design_load_kg is not None and self.design_load_kg < 0:
            raise ValueError("design_load_kg must be non-negative")
