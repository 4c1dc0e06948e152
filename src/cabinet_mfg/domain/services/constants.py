"""Manufacturing constants, validation thresholds, and machine profiles.

All lengths are in millimeters and all weights in kilograms.
"""

from __future__ import annotations

from cabinet_mfg.domain.value_objects import MachineProfile

# ==============================================================================
# System-32 Shelf Pin Drilling
# ==============================================================================

SYSTEM_32_PITCH: float = 32.0
SYSTEM_32_HOLE_DIAMETER: float = 5.0
SYSTEM_32_HOLE_DEPTH: float = 13.0
SYSTEM_32_FRONT_OFFSET: float = 37.0
SYSTEM_32_BACK_OFFSET: float = 50.0
SYSTEM_32_START: float = 64.0

# Face-B rows on dividers are staggered so blind holes never meet
SYSTEM_32_FACE_B_STAGGER: float = 16.0


# ==============================================================================
# Confirmat Connectors
# ==============================================================================

CONFIRMAT_PILOT_DIAMETER: float = 5.0
CONFIRMAT_CLEARANCE_DIAMETER: float = 8.0
CONFIRMAT_EDGE_DEPTH: float = 50.0
CONFIRMAT_END_OFFSET: float = 50.0
CONFIRMAT_SHORT_JOINT: float = 300.0
CONFIRMAT_LONG_JOINT: float = 800.0


# ==============================================================================
# Hinges
# ==============================================================================

HINGE_END_OFFSET: float = 100.0
HINGE_THIRD_HINGE_HEIGHT: float = 1200.0
HINGE_CUP_DIAMETER: float = 35.0
HINGE_CUP_EDGE_DISTANCE: float = 3.0
HINGE_CUP_CENTER_INSET: float = HINGE_CUP_EDGE_DISTANCE + HINGE_CUP_DIAMETER / 2


# ==============================================================================
# Dimension Limits
# ==============================================================================

MIN_WIDTH: float = 200.0
MAX_STANDARD_WIDTH: float = 1200.0
MIN_HEIGHT: float = 300.0
MAX_STANDARD_HEIGHT: float = 2400.0
MIN_DEPTH: float = 200.0
MAX_STANDARD_DEPTH: float = 800.0


# ==============================================================================
# Structure Limits
# ==============================================================================

MIN_SHELF_SPACING: float = 150.0
MAX_SHELF_SPAN: float = 800.0
MAX_SHELF_COUNT: int = 5
BACKLESS_HEIGHT_LIMIT: float = 1000.0
LARGE_PANEL_COUNT: int = 20


# ==============================================================================
# Structural Load Thresholds
# ==============================================================================

# Fraction of rated capacity above which a load is reported as a warning
LOAD_WARNING_RATIO: float = 0.8
HEAVY_PANEL_KG: float = 15.0
VERY_HEAVY_PANEL_KG: float = 25.0


# ==============================================================================
# Machine Profiles
# ==============================================================================

MACHINE_PROFILES: dict[str, MachineProfile] = {
    "homag-centateq": MachineProfile(
        id="homag-centateq",
        name="Homag CENTATEQ P-110",
        max_width=3000.0,
        max_height=1500.0,
        min_thickness=8.0,
        max_thickness=60.0,
    ),
    "biesse-rover": MachineProfile(
        id="biesse-rover",
        name="Biesse Rover A",
        max_width=3660.0,
        max_height=1830.0,
        min_thickness=3.0,
        max_thickness=80.0,
    ),
    "kdt-1320": MachineProfile(
        id="kdt-1320",
        name="KDT-1320",
        max_width=2800.0,
        max_height=1300.0,
        min_thickness=6.0,
        max_thickness=50.0,
    ),
}

DEFAULT_MACHINE_PROFILE: str = "homag-centateq"
