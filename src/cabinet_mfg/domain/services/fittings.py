"""Hardware fitting catalogue, compatibility checking and ranking.

Ranking priority, each tier strictly before the next:
1. Compatible + preferred brand tier + factory preference
2. Compatible, cheapest first
3. Compatible but low confidence (unknown drilling pattern, uncertified
   entry, or load close to capacity)
Incompatible fittings never appear in the ranking; they are returned in a
separate rejected list with the reasons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

from cabinet_mfg.domain.value_objects import (
    BrandTier,
    CabinetPanel,
    DoorSizeRange,
    DrillHole,
    DrillingPattern,
    FittingAssignment,
    FittingCategory,
    FittingSpec,
    SafetyStatus,
    Severity,
    ThicknessRange,
    ValidationCategory,
    ValidationResult,
)

from .constants import LOAD_WARNING_RATIO

logger = logging.getLogger(__name__)


class UnknownFittingError(KeyError):
    """Raised when a fitting id is not in the catalogue."""

    def __init__(self, fitting_id: str) -> None:
        self.fitting_id = fitting_id
        super().__init__(f"Unknown fitting: {fitting_id!r}")

    def __str__(self) -> str:
        return self.args[0]


# ==============================================================================
# Drilling pattern library
# ==============================================================================

DRILLING_PATTERNS: dict[str, DrillingPattern] = {
    "BLUM_CLIP_35MM": DrillingPattern(
        id="BLUM_CLIP_35MM",
        name="Blum CLIP 35mm Cup",
        system="SYSTEM_32",
        holes=(
            DrillHole(along=0, inward=0, diameter=35, depth=13),
            DrillHole(along=-24, inward=0, diameter=8, depth=11),
            DrillHole(along=24, inward=0, diameter=8, depth=11),
        ),
    ),
    "BLUM_LEGRABOX": DrillingPattern(
        id="BLUM_LEGRABOX",
        name="Blum LEGRABOX Side Mount",
        system="SYSTEM_32",
        holes=(
            DrillHole(along=37, inward=0, diameter=5, depth=12),
            DrillHole(along=69, inward=0, diameter=5, depth=12),
            DrillHole(along=101, inward=0, diameter=5, depth=12),
        ),
    ),
    "SYSTEM_32_5MM": DrillingPattern(
        id="SYSTEM_32_5MM",
        name="System 32 - 5mm Pin",
        system="SYSTEM_32",
        holes=(DrillHole(along=0, inward=0, diameter=5, depth=12),),
    ),
}


# ==============================================================================
# Built-in catalogue
# ==============================================================================

_HINGE_16_19 = ThicknessRange(16, 19)

FITTING_CATALOGUE: tuple[FittingSpec, ...] = (
    FittingSpec(
        id="hinge-clip-top-110",
        factory_code="BLUM-71B3550",
        name="CLIP top 110°",
        vendor="Blum",
        category=FittingCategory.HINGE,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=95,
        thickness_range=_HINGE_16_19,
        weight_capacity=8,
        drilling_pattern_id="BLUM_CLIP_35MM",
        price=150,
        door_size_range=DoorSizeRange(300, 600, 300, 1200),
        description="Soft-close hinge, 110° opening",
    ),
    FittingSpec(
        id="hinge-clip-top-155",
        factory_code="BLUM-79B9550",
        name="CLIP top 155° Wide Angle",
        vendor="Blum",
        category=FittingCategory.HINGE,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=93,
        thickness_range=_HINGE_16_19,
        weight_capacity=6,
        drilling_pattern_id="BLUM_CLIP_35MM",
        price=180,
        door_size_range=DoorSizeRange(300, 500, 300, 900),
        description="Wide angle hinge for corner cabinets",
    ),
    FittingSpec(
        id="hinge-heavy-duty",
        factory_code="BLUM-71T6550",
        name="CLIP top BLUMOTION Heavy Duty",
        vendor="Blum",
        category=FittingCategory.HINGE,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=98,
        thickness_range=ThicknessRange(18, 25),
        weight_capacity=15,
        drilling_pattern_id="BLUM_CLIP_35MM",
        price=350,
        door_size_range=DoorSizeRange(400, 900, 400, 2400),
        description="Heavy duty hinge for large doors",
    ),
    FittingSpec(
        id="hinge-generic-110",
        factory_code="GEN-H110",
        name="Generic 110° Hinge",
        vendor="Generic",
        category=FittingCategory.HINGE,
        brand_tier=BrandTier.BUDGET,
        reliability_score=60,
        thickness_range=ThicknessRange(16, 18),
        weight_capacity=5,
        drilling_pattern_id="GENERIC_35MM",
        price=45,
        door_size_range=DoorSizeRange(250, 450, 250, 800),
        certified=False,
        description="Economy hinge, basic soft-close",
    ),
    FittingSpec(
        id="slide-legrabox-30kg",
        factory_code="BLUM-770C3002S",
        name="LEGRABOX pure 30kg",
        vendor="Blum",
        category=FittingCategory.SLIDE,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=97,
        thickness_range=_HINGE_16_19,
        weight_capacity=30,
        drilling_pattern_id="BLUM_LEGRABOX",
        price=800,
        description="Premium drawer system, 30kg capacity",
    ),
    FittingSpec(
        id="slide-legrabox-50kg",
        factory_code="BLUM-770C5002S",
        name="LEGRABOX pure 50kg",
        vendor="Blum",
        category=FittingCategory.SLIDE,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=97,
        thickness_range=_HINGE_16_19,
        weight_capacity=50,
        drilling_pattern_id="BLUM_LEGRABOX",
        price=1200,
        description="Premium drawer system, 50kg capacity",
    ),
    FittingSpec(
        id="slide-legrabox-70kg",
        factory_code="BLUM-770C7002S",
        name="LEGRABOX pure 70kg",
        vendor="Blum",
        category=FittingCategory.SLIDE,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=96,
        thickness_range=ThicknessRange(18, 19),
        weight_capacity=70,
        drilling_pattern_id="BLUM_LEGRABOX_HD",
        price=2000,
        description="Heavy duty drawer system",
    ),
    FittingSpec(
        id="lift-aventos-hk-xs",
        factory_code="BLUM-20K2C00",
        name="AVENTOS HK-XS",
        vendor="Blum",
        category=FittingCategory.LIFT,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=94,
        thickness_range=_HINGE_16_19,
        weight_capacity=5.25,
        drilling_pattern_id="BLUM_AVENTOS_HK",
        price=1800,
        door_size_range=DoorSizeRange(200, 600, 200, 400),
        description="Compact lift system for small cabinets",
    ),
    FittingSpec(
        id="lift-aventos-hf",
        factory_code="BLUM-20F2200",
        name="AVENTOS HF Bi-Fold",
        vendor="Blum",
        category=FittingCategory.LIFT,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=92,
        thickness_range=_HINGE_16_19,
        weight_capacity=13,
        drilling_pattern_id="BLUM_AVENTOS_HF",
        price=3800,
        door_size_range=DoorSizeRange(300, 1800, 300, 600),
        description="Bi-fold lift system",
    ),
    FittingSpec(
        id="shelf-support-15kg",
        factory_code="BLUM-282.3100",
        name="Shelf Support 15kg",
        vendor="Blum",
        category=FittingCategory.SHELF_SUPPORT,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=90,
        thickness_range=_HINGE_16_19,
        weight_capacity=15,
        drilling_pattern_id="SYSTEM_32_5MM",
        price=5,
        description="Standard shelf support pin",
    ),
    FittingSpec(
        id="shelf-support-50kg",
        factory_code="BLUM-282.3500",
        name="Heavy Duty Shelf Support 50kg",
        vendor="Blum",
        category=FittingCategory.SHELF_SUPPORT,
        brand_tier=BrandTier.PREMIUM,
        reliability_score=92,
        thickness_range=ThicknessRange(18, 25),
        weight_capacity=50,
        drilling_pattern_id="SYSTEM_32_8MM",
        price=45,
        description="Heavy duty shelf support",
    ),
)


class FittingCatalogue:
    """Read-only fitting catalogue with its drilling pattern library."""

    def __init__(
        self,
        fittings: Iterable[FittingSpec] = FITTING_CATALOGUE,
        patterns: Mapping[str, DrillingPattern] | None = None,
    ) -> None:
        self._fittings: dict[str, FittingSpec] = {}
        for fitting in fittings:
            if fitting.id in self._fittings:
                raise ValueError(f"Duplicate fitting id: {fitting.id}")
            self._fittings[fitting.id] = fitting
        self.patterns: dict[str, DrillingPattern] = dict(
            DRILLING_PATTERNS if patterns is None else patterns
        )

    def __contains__(self, fitting_id: object) -> bool:
        return fitting_id in self._fittings

    def __iter__(self) -> Iterator[FittingSpec]:
        return iter(self._fittings.values())

    def __len__(self) -> int:
        return len(self._fittings)

    def get(self, fitting_id: str) -> FittingSpec:
        """Look up a fitting.

        Raises:
            UnknownFittingError: If the id is not in the catalogue.
        """
        try:
            return self._fittings[fitting_id]
        except KeyError:
            raise UnknownFittingError(fitting_id) from None

    def pattern_for(self, fitting: FittingSpec) -> DrillingPattern | None:
        """Drilling pattern of a fitting, or None when the library lacks it."""
        return self.patterns.get(fitting.drilling_pattern_id)

    def by_category(self, category: FittingCategory) -> list[FittingSpec]:
        return [f for f in self._fittings.values() if f.category == category]

    def with_fittings(self, fittings: Iterable[FittingSpec]) -> "FittingCatalogue":
        """Return a new catalogue with extra fittings added or replaced."""
        merged = dict(self._fittings)
        for fitting in fittings:
            merged[fitting.id] = fitting
        return FittingCatalogue(merged.values(), self.patterns)


# ==============================================================================
# Compatibility
# ==============================================================================


@dataclass(frozen=True)
class PanelContext:
    """Panel a fitting is being matched against.

    Attributes:
        thickness: Real panel thickness in mm.
        width: Panel width in mm.
        height: Panel height in mm.
        load_kg: Load the fitting must carry (self weight plus design load).
        is_door: Apply door-size limits of hinges and lifts.
    """

    thickness: float
    width: float
    height: float
    load_kg: float = 0.0
    is_door: bool = False

    @classmethod
    def from_panel(cls, panel: CabinetPanel, is_door: bool = False) -> "PanelContext":
        return cls(
            thickness=panel.thickness,
            width=panel.computed.cut_width,
            height=panel.computed.cut_height,
            load_kg=panel.total_load_kg,
            is_door=is_door,
        )


@dataclass(frozen=True)
class CompatibilityResult:
    """Outcome of matching one fitting against one panel context.

    ``fit_errors`` and ``warnings`` cover physical fit and catalogue
    confidence. Load findings are carried only as the ``overloaded`` and
    ``near_capacity`` flags so the structural check can report them once.
    """

    fitting_id: str
    status: SafetyStatus
    fit_errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    load_ratio: float | None = None
    overloaded: bool = False
    near_capacity: bool = False

    @property
    def is_compatible(self) -> bool:
        return self.status != SafetyStatus.INCOMPATIBLE

    @property
    def errors(self) -> tuple[str, ...]:
        """Every reason the fitting is incompatible."""
        if self.overloaded:
            return self.fit_errors + (f"Load exceeds capacity ({self.load_ratio:.0%})",)
        return self.fit_errors

    @property
    def cautions(self) -> tuple[str, ...]:
        """Every reason the match is low confidence."""
        if self.near_capacity:
            return self.warnings + (f"Load near capacity ({self.load_ratio:.0%})",)
        return self.warnings


def check_compatibility(
    fitting: FittingSpec,
    context: PanelContext,
    patterns: Mapping[str, DrillingPattern] = DRILLING_PATTERNS,
) -> CompatibilityResult:
    """Check a fitting against a panel context.

    INCOMPATIBLE when the thickness or door size is out of range or the load
    exceeds capacity. LOW_CONFIDENCE when the load is above 80% of capacity,
    the drilling pattern is missing from the library, or the entry is not
    vendor-certified.
    """
    fit_errors: list[str] = []
    warnings: list[str] = []

    rng = fitting.thickness_range
    if context.thickness < rng.min:
        fit_errors.append(
            f"Panel thickness {context.thickness:g}mm is below minimum {rng.min:g}mm"
        )
    if context.thickness > rng.max:
        fit_errors.append(
            f"Panel thickness {context.thickness:g}mm exceeds maximum {rng.max:g}mm"
        )

    door = fitting.door_size_range
    if (
        context.is_door
        and door is not None
        and fitting.category in (FittingCategory.HINGE, FittingCategory.LIFT)
    ):
        if not door.min_width <= context.width <= door.max_width:
            fit_errors.append(
                f"Door width {context.width:g}mm outside {door.min_width:g}-{door.max_width:g}mm"
            )
        if not door.min_height <= context.height <= door.max_height:
            fit_errors.append(
                f"Door height {context.height:g}mm outside {door.min_height:g}-{door.max_height:g}mm"
            )

    load_ratio = None
    if fitting.weight_capacity:
        load_ratio = context.load_kg / fitting.weight_capacity
    overloaded = load_ratio is not None and load_ratio > 1
    near_capacity = not overloaded and load_ratio is not None and load_ratio > LOAD_WARNING_RATIO

    if fitting.drilling_pattern_id not in patterns:
        warnings.append(f"Drilling pattern {fitting.drilling_pattern_id} not in machine library")
    if not fitting.certified:
        warnings.append("Heuristic catalogue entry, not vendor-certified")

    if fit_errors or overloaded:
        status = SafetyStatus.INCOMPATIBLE
    elif warnings or near_capacity:
        status = SafetyStatus.LOW_CONFIDENCE
    else:
        status = SafetyStatus.COMPATIBLE

    return CompatibilityResult(
        fitting_id=fitting.id,
        status=status,
        fit_errors=tuple(fit_errors),
        warnings=tuple(warnings),
        load_ratio=load_ratio,
        overloaded=overloaded,
        near_capacity=near_capacity,
    )


# ==============================================================================
# Ranking
# ==============================================================================


@dataclass(frozen=True)
class RankedFitting:
    """A ranked candidate. ``tier`` is 1, 2 or 3; ``rank`` is 1-based overall."""

    fitting: FittingSpec
    tier: int
    rank: int
    compatibility: CompatibilityResult


@dataclass(frozen=True)
class RejectedFitting:
    """An incompatible candidate and why it was rejected."""

    fitting: FittingSpec
    reasons: tuple[str, ...]


@dataclass(frozen=True)
class RankingResult:
    ranked: tuple[RankedFitting, ...] = ()
    rejected: tuple[RejectedFitting, ...] = ()

    @property
    def best(self) -> RankedFitting | None:
        return self.ranked[0] if self.ranked else None


DEFAULT_PREFERRED_VENDORS: frozenset[str] = frozenset({"Blum"})


def rank_fittings(
    catalogue: FittingCatalogue,
    context: PanelContext,
    category: FittingCategory | None = None,
    preferred_tier: BrandTier = BrandTier.PREMIUM,
    preferred_vendors: frozenset[str] = DEFAULT_PREFERRED_VENDORS,
) -> RankingResult:
    """Rank catalogue fittings for a panel context.

    Args:
        catalogue: Fittings to rank.
        context: Panel being fitted.
        category: Restrict candidates to one category.
        preferred_tier: Brand tier that qualifies for tier 1.
        preferred_vendors: Factory-preferred vendors that qualify for tier 1.

    Returns:
        RankingResult with ranked candidates and rejections.
    """
    tiers: dict[int, list[tuple[FittingSpec, CompatibilityResult]]] = {1: [], 2: [], 3: []}
    rejected: list[RejectedFitting] = []

    for fitting in catalogue:
        if category is not None and fitting.category != category:
            continue
        result = check_compatibility(fitting, context, catalogue.patterns)
        if result.status == SafetyStatus.INCOMPATIBLE:
            rejected.append(RejectedFitting(fitting, result.errors))
        elif result.status == SafetyStatus.LOW_CONFIDENCE:
            tiers[3].append((fitting, result))
        elif fitting.brand_tier == preferred_tier and fitting.vendor in preferred_vendors:
            tiers[1].append((fitting, result))
        else:
            tiers[2].append((fitting, result))

    tiers[1].sort(key=lambda item: (-item[0].reliability_score, item[0].id))
    tiers[2].sort(key=lambda item: (item[0].price, -item[0].reliability_score, item[0].id))
    tiers[3].sort(key=lambda item: (-item[0].reliability_score, item[0].id))

    ranked: list[RankedFitting] = []
    for tier in (1, 2, 3):
        for fitting, result in tiers[tier]:
            ranked.append(RankedFitting(fitting, tier, len(ranked) + 1, result))

    rejected.sort(key=lambda r: r.fitting.id)
    return RankingResult(tuple(ranked), tuple(rejected))


# ==============================================================================
# Assignment assessment
# ==============================================================================


@dataclass(frozen=True)
class AssignmentAssessment:
    """Assignments with their safety status filled in, plus findings."""

    assignments: tuple[FittingAssignment, ...]
    findings: tuple[ValidationResult, ...] = field(default_factory=tuple)


def assess_assignments(
    panels: Iterable[CabinetPanel],
    assignments: Iterable[FittingAssignment],
    catalogue: FittingCatalogue,
) -> AssignmentAssessment:
    """Stamp each assignment with its compatibility status.

    Unknown fittings or panels and physical-fit failures are safety errors.
    Low-confidence matches are warnings. Overload is left to the structural
    check so it is reported once.
    """
    by_id = {panel.id: panel for panel in panels}
    stamped: list[FittingAssignment] = []
    findings: list[ValidationResult] = []

    for assignment in assignments:
        panel = by_id.get(assignment.panel_id)
        if assignment.fitting_id not in catalogue:
            findings.append(
                ValidationResult(
                    code="safety-unknown-fitting",
                    category=ValidationCategory.SAFETY,
                    severity=Severity.ERROR,
                    message=f"Fitting '{assignment.fitting_id}' is not in the catalogue",
                    panel_id=assignment.panel_id,
                )
            )
            stamped.append(_with_status(assignment, SafetyStatus.INCOMPATIBLE))
            continue
        if panel is None:
            findings.append(
                ValidationResult(
                    code="safety-unknown-panel",
                    category=ValidationCategory.SAFETY,
                    severity=Severity.ERROR,
                    message=(
                        f"Fitting '{assignment.fitting_id}' is assigned to missing panel "
                        f"'{assignment.panel_id}'"
                    ),
                    panel_id=assignment.panel_id,
                )
            )
            stamped.append(_with_status(assignment, SafetyStatus.INCOMPATIBLE))
            continue

        fitting = catalogue.get(assignment.fitting_id)
        result = check_compatibility(fitting, PanelContext.from_panel(panel), catalogue.patterns)
        stamped.append(_with_status(assignment, result.status))

        for reason in result.fit_errors:
            findings.append(
                ValidationResult(
                    code="safety-fitting-incompatible",
                    category=ValidationCategory.SAFETY,
                    severity=Severity.ERROR,
                    message=f"{fitting.name}: {reason}",
                    panel_id=panel.id,
                    details={"fitting_id": fitting.id},
                )
            )
        if result.warnings:
            findings.append(
                ValidationResult(
                    code="safety-fitting-low-confidence",
                    category=ValidationCategory.SAFETY,
                    severity=Severity.WARNING,
                    message=f"{fitting.name}: {'; '.join(result.warnings)}",
                    panel_id=panel.id,
                    details={"fitting_id": fitting.id},
                )
            )

    logger.debug(f"Assessed {len(stamped)} fitting assignments")
    return AssignmentAssessment(tuple(stamped), tuple(findings))


def _with_status(assignment: FittingAssignment, status: SafetyStatus) -> FittingAssignment:
    return FittingAssignment(
        fitting_id=assignment.fitting_id,
        panel_id=assignment.panel_id,
        role=assignment.role,
        status=status,
        positions=assignment.positions,
    )
