"""Merging of CLI options into a project configuration.

Precedence: CLI args > config values > defaults. Only non-None CLI
arguments override configuration values.
"""

from __future__ import annotations

from typing import Any

from .loader import load_config_from_dict
from .schemas import ProjectConfiguration


def merge_config_with_cli(
    config: ProjectConfiguration,
    *,
    width: float | None = None,
    height: float | None = None,
    depth: float | None = None,
    toe_kick_height: float | None = None,
    shelf_count: int | None = None,
    divider_count: int | None = None,
    has_back_panel: bool | None = None,
    core: str | None = None,
    surface: str | None = None,
    edge: str | None = None,
    machine: str | None = None,
    material_policy: str | None = None,
) -> ProjectConfiguration:
    """Return a new configuration with CLI overrides applied.

    Raises:
        ConfigError: If an override makes the configuration invalid.

    Example:
        >>> merged = merge_config_with_cli(config, width=900.0)
        >>> merged.cabinet.dimensions.width
        900.0
    """
    data: dict[str, Any] = config.model_dump(mode="json")
    cabinet = data["cabinet"]

    _apply(
        cabinet["dimensions"],
        width=width,
        height=height,
        depth=depth,
        toe_kick_height=toe_kick_height,
    )
    _apply(
        cabinet["structure"],
        shelf_count=shelf_count,
        divider_count=divider_count,
        has_back_panel=has_back_panel,
    )
    _apply(cabinet["materials"], default_core=core, default_surface=surface, default_edge=edge)
    _apply(data["machine"], profile=machine)
    _apply(data, material_policy=material_policy)

    return load_config_from_dict(data)


def _apply(target: dict[str, Any], **overrides: Any) -> None:
    for key, value in overrides.items():
        if value is not None:
            target[key] = value
