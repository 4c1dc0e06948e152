"""Domain layer - cabinet model, registries and manufacturing services."""

from .entities import Cabinet, CabinetIntent, CabinetTotals, GateStatus
from .registries import (
    MaterialCatalog,
    MaterialRegistry,
    UnknownMaterialError,
    default_catalog,
)

__all__ = [
    "Cabinet",
    "CabinetIntent",
    "CabinetTotals",
    "GateStatus",
    "MaterialCatalog",
    "MaterialRegistry",
    "UnknownMaterialError",
    "default_catalog",
]
