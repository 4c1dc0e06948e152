"""Typed material registries.

Registries resolve material ids to strongly-typed records at the boundary
of the pipeline. An unknown id is either an explicit error or, under the
FALLBACK policy, the registry default with a logged warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Protocol, TypeVar

from cabinet_mfg.domain.value_objects import (
    CoreMaterial,
    EdgeMaterial,
    MaterialCategory,
    SurfaceMaterial,
    SurfaceType,
    UnknownMaterialPolicy,
)

logger = logging.getLogger(__name__)


class _HasId(Protocol):
    id: str


T = TypeVar("T", bound=_HasId)


class UnknownMaterialError(KeyError):
    """Raised when a material id is not present in its registry.

    Attributes:
        kind: Registry kind ("core", "surface", "edge").
        material_id: The id that failed to resolve.
    """

    def __init__(self, kind: str, material_id: str | None) -> None:
        self.kind = kind
        self.material_id = material_id
        super().__init__(f"Unknown {kind} material: {material_id!r}")

    def __str__(self) -> str:
        return self.args[0]


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """Outcome of resolving an id: the record used and whether it was substituted."""

    record: T
    requested_id: str | None
    substituted: bool = False


class MaterialRegistry(Generic[T]):
    """Id-to-record mapping with a mandatory default.

    Example:
        cores = MaterialRegistry("core", DEFAULT_CORES, default_id="core-pb-16")
        core = cores.resolve("core-mdf-18").record
    """

    def __init__(self, kind: str, records: Iterable[T], default_id: str) -> None:
        self.kind = kind
        self._records: dict[str, T] = {}
        for record in records:
            if record.id in self._records:
                raise ValueError(f"Duplicate {kind} material id: {record.id}")
            self._records[record.id] = record
        if default_id not in self._records:
            raise ValueError(
                f"Default {kind} material '{default_id}' is not in the registry"
            )
        self.default_id = default_id

    def __contains__(self, material_id: object) -> bool:
        return material_id in self._records

    def __iter__(self) -> Iterator[T]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    @property
    def default(self) -> T:
        """The registry's default record."""
        return self._records[self.default_id]

    def get(self, material_id: str) -> T:
        """Look up a record by id.

        Raises:
            UnknownMaterialError: If the id is not registered.
        """
        try:
            return self._records[material_id]
        except KeyError:
            raise UnknownMaterialError(self.kind, material_id) from None

    def resolve(
        self,
        material_id: str | None,
        policy: UnknownMaterialPolicy = UnknownMaterialPolicy.STRICT,
    ) -> Resolution[T]:
        """Resolve an id according to the unknown-material policy.

        Args:
            material_id: Id to resolve.
            policy: STRICT raises on a miss; FALLBACK substitutes the default.

        Returns:
            The resolution, flagged as substituted when the default was used.

        Raises:
            UnknownMaterialError: On a miss under the STRICT policy.
        """
        if material_id is not None and material_id in self._records:
            return Resolution(self._records[material_id], material_id)
        if policy == UnknownMaterialPolicy.STRICT:
            raise UnknownMaterialError(self.kind, material_id)
        logger.warning(
            f"Unknown {self.kind} material {material_id!r}, using default '{self.default_id}'"
        )
        return Resolution(self.default, material_id, substituted=True)

    def with_records(self, records: Iterable[T]) -> "MaterialRegistry[T]":
        """Return a new registry with extra records added or replaced."""
        merged = dict(self._records)
        for record in records:
            merged[record.id] = record
        return MaterialRegistry(self.kind, merged.values(), self.default_id)


# ==============================================================================
# Built-in catalogue
# ==============================================================================

DEFAULT_CORES: tuple[CoreMaterial, ...] = (
    CoreMaterial("core-pb-16", "Particle Board 16mm", 16, 250, 8.2, density=650),
    CoreMaterial("core-pb-18", "Particle Board 18mm", 18, 280, 9.0, density=650),
    CoreMaterial("core-mdf-6", "MDF 6mm (Backing)", 6, 180, 5.0, density=750),
    CoreMaterial("core-mdf-16", "MDF 16mm", 16, 320, 9.5, density=750),
    CoreMaterial("core-mdf-18", "MDF 18mm", 18, 360, 10.2, density=750),
    CoreMaterial("core-hmr-16", "HMR Green 16mm", 16, 420, 9.8, density=700),
    CoreMaterial("core-hmr-18", "HMR Green 18mm", 18, 450, 10.2, density=700),
    CoreMaterial("core-ply-18", "Marine Plywood 18mm", 18, 850, 12.5, density=600),
)

DEFAULT_SURFACES: tuple[SurfaceMaterial, ...] = (
    SurfaceMaterial("surf-mel-white", "Melamine White", 0.3, SurfaceType.MELAMINE, "#F5F5F5", 120, 0.5),
    SurfaceMaterial("surf-mel-grey", "Melamine Grey", 0.3, SurfaceType.MELAMINE, "#6B6B6B", 140, 0.5),
    SurfaceMaterial("surf-mel-black", "Melamine Black", 0.3, SurfaceType.MELAMINE, "#1A1A1A", 140, 0.5),
    SurfaceMaterial("surf-hpl-grey-oak", "HPL Grey Oak", 0.8, SurfaceType.HPL, "#7A7A72", 550, 1.2),
    SurfaceMaterial("surf-hpl-natural-walnut", "HPL Natural Walnut", 0.8, SurfaceType.HPL, "#9A856D", 520, 1.2),
    SurfaceMaterial("surf-hpl-teak", "HPL Teak", 0.8, SurfaceType.HPL, "#9A7A5A", 650, 1.2),
    SurfaceMaterial("surf-veneer-oak", "Oak Veneer", 0.6, SurfaceType.VENEER, "#B08D57", 700, 0.8),
    SurfaceMaterial("surf-lacquer-white", "White Lacquer", 0.2, SurfaceType.LACQUER, "#FFFFFF", 900, 1.5),
)

DEFAULT_EDGES: tuple[EdgeMaterial, ...] = (
    EdgeMaterial("edge-pvc-white-04", "PVC White 0.4mm", 0.4, 23, 5, "PVC-W-0.4"),
    EdgeMaterial("edge-pvc-white-05", "PVC White 0.5mm", 0.5, 23, 6, "PVC-W-0.5"),
    EdgeMaterial("edge-pvc-white-10", "PVC White 1.0mm", 1.0, 23, 12, "PVC-W-1.0"),
    EdgeMaterial("edge-pvc-white-20", "PVC White 2.0mm", 2.0, 23, 22, "PVC-W-2.0"),
    EdgeMaterial("edge-pvc-grey-10", "PVC Grey 1.0mm", 1.0, 23, 12, "PVC-G-1.0", "#6B6B6B"),
    EdgeMaterial("edge-pvc-black-10", "PVC Black 1.0mm", 1.0, 23, 14, "PVC-B-1.0", "#1A1A1A"),
    EdgeMaterial("edge-abs-mel-white-10", "ABS Melamine White 1.0mm", 1.0, 23, 15, "ABS-MW-1.0", "#F5F5F5"),
)


@dataclass(frozen=True)
class MaterialCatalog:
    """The three registries a cabinet's materials resolve against."""

    cores: MaterialRegistry[CoreMaterial]
    surfaces: MaterialRegistry[SurfaceMaterial]
    edges: MaterialRegistry[EdgeMaterial]

    def category_of(self, core_id: str) -> MaterialCategory:
        """Behavioral category of a core, defaulting to wood panel for unknown ids."""
        if core_id in self.cores:
            return self.cores.get(core_id).category
        return MaterialCategory.WOOD_PANEL


def default_catalog() -> MaterialCatalog:
    """Build the built-in material catalogue."""
    return MaterialCatalog(
        cores=MaterialRegistry("core", DEFAULT_CORES, default_id="core-pb-16"),
        surfaces=MaterialRegistry("surface", DEFAULT_SURFACES, default_id="surf-mel-white"),
        edges=MaterialRegistry("edge", DEFAULT_EDGES, default_id="edge-pvc-white-10"),
    )
