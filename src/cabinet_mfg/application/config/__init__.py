"""Project file schema, loading and conversion.

Public API:
    - ProjectConfiguration: Root configuration model
    - load_config: Load a project from a JSON file
    - load_config_from_dict: Validate a project held in memory
    - ConfigError: Exception for configuration errors
    - merge_config_with_cli: Apply CLI overrides
    - config_to_intent: Convert a project to design intent

Example:
    >>> from pathlib import Path
    >>> from cabinet_mfg.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen-base.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from .adapter import (
    config_to_fittings,
    config_to_intent,
    config_to_overrides,
    config_to_parameters,
)
from .loader import ConfigError, load_config, load_config_from_dict
from .merger import merge_config_with_cli
from .schemas import (
    SUPPORTED_VERSIONS,
    CabinetConfig,
    DimensionsConfig,
    DxfOutputConfig,
    EdgesConfig,
    FacesConfig,
    FittingAssignmentConfig,
    MachineConfig,
    ManufacturingConfig,
    MaterialsConfig,
    OutputConfig,
    PanelOverrideConfig,
    ProjectConfiguration,
    StructureConfig,
)

__all__ = [
    "CabinetConfig",
    "ConfigError",
    "DimensionsConfig",
    "DxfOutputConfig",
    "EdgesConfig",
    "FacesConfig",
    "FittingAssignmentConfig",
    "MachineConfig",
    "ManufacturingConfig",
    "MaterialsConfig",
    "OutputConfig",
    "PanelOverrideConfig",
    "ProjectConfiguration",
    "SUPPORTED_VERSIONS",
    "StructureConfig",
    "config_to_fittings",
    "config_to_intent",
    "config_to_overrides",
    "config_to_parameters",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
]
