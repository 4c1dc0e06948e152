"""Machine operation value objects.

Operations are stored in panel-local cut coordinates with the origin at the
bottom-left corner of the panel as seen from the face the operation is
machined from. Face-B coordinates are never rewritten here; mirroring for
the machine happens once, at code generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from ._panels import EdgeSide, Face


class GrooveAxis(str, Enum):
    """Direction a groove runs in."""

    X = "x"
    Y = "y"


def mirror_x(x: float, panel_width: float) -> float:
    """Mirror an x coordinate across the panel's vertical centerline.

    Applying the mirror twice returns the original coordinate.
    """
    return panel_width - x


def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive")


@dataclass(frozen=True)
class DrillVertical:
    """Hole drilled perpendicular to a face (shelf pins, confirmat clearance)."""

    op_type: ClassVar[str] = "drill_vertical"

    x: float
    y: float
    diameter: float
    depth: float
    face: Face = Face.A
    through: bool = False
    op_id: str = ""

    def __post_init__(self) -> None:
        _require_positive(diameter=self.diameter, depth=self.depth)


@dataclass(frozen=True)
class DrillHorizontal:
    """Hole drilled into a panel edge.

    (x, y) locates the hole on the edge; ``z`` is the hole center measured
    from face A into the panel thickness.
    """

    op_type: ClassVar[str] = "drill_horizontal"

    x: float
    y: float
    z: float
    diameter: float
    depth: float
    side: EdgeSide
    face: Face = Face.A
    op_id: str = ""

    def __post_init__(self) -> None:
        _require_positive(diameter=self.diameter, depth=self.depth)
        if self.z < 0:
            raise ValueError("z must be non-negative")


@dataclass(frozen=True)
class Groove:
    """Saw or router groove along one axis."""

    op_type: ClassVar[str] = "groove"

    axis: GrooveAxis
    position: float
    start: float
    length: float
    width: float
    depth: float
    face: Face = Face.A
    op_id: str = ""

    def __post_init__(self) -> None:
        _require_positive(length=self.length, width=self.width, depth=self.depth)

    @property
    def endpoints(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Centerline start and end points in panel coordinates."""
        if self.axis == GrooveAxis.X:
            return (self.start, self.position), (self.start + self.length, self.position)
        return (self.position, self.start), (self.position, self.start + self.length)


@dataclass(frozen=True)
class Pocket:
    """Rectangular pocket centered on (x, y)."""

    op_type: ClassVar[str] = "pocket"

    x: float
    y: float
    width: float
    height: float
    depth: float
    face: Face = Face.A
    op_id: str = ""

    def __post_init__(self) -> None:
        _require_positive(width=self.width, height=self.height, depth=self.depth)


@dataclass(frozen=True)
class HingeCup:
    """Concealed-hinge cup bore."""

    op_type: ClassVar[str] = "hinge_cup"

    x: float
    y: float
    diameter: float = 35.0
    depth: float = 13.0
    face: Face = Face.A
    op_id: str = ""

    def __post_init__(self) -> None:
        _require_positive(diameter=self.diameter, depth=self.depth)


MachineOperation = Union[DrillVertical, DrillHorizontal, Groove, Pocket, HingeCup]


@dataclass(frozen=True)
class PanelOperations:
    """Ordered operations for one panel, with the cut outline they apply to."""

    panel_id: str
    cut_width: float
    cut_height: float
    thickness: float
    operations: tuple[MachineOperation, ...] = ()

    def on_face(self, face: Face) -> tuple[MachineOperation, ...]:
        """Operations machined from one face."""
        return tuple(op for op in self.operations if op.face == face)
