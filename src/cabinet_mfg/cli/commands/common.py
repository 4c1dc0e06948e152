"""Project loading and error display shared by CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from cabinet_mfg.application.config import (
    ConfigError,
    ProjectConfiguration,
    load_config,
    load_config_from_dict,
    merge_config_with_cli,
)


def load_project(config_file: Path | None, **overrides: Any) -> ProjectConfiguration:
    """Load a project file, or the defaults, and apply CLI overrides.

    Raises:
        typer.Exit: With code 1 if the project cannot be loaded.
    """
    try:
        if config_file is not None:
            config = load_config(config_file)
        else:
            config = load_config_from_dict({"schema_version": "1.0"})
        return merge_config_with_cli(config, **overrides)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)
