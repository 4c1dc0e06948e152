"""Validate command for checking a cabinet design.

Loads a project file, runs the full pipeline, and reports every validation
finding. The exit code tells scripts whether the design can be frozen.
"""

from pathlib import Path
from typing import Annotated

import typer

from cabinet_mfg.application import recompute
from cabinet_mfg.application.config import config_to_intent
from cabinet_mfg.cli.commands.common import load_project
from cabinet_mfg.infrastructure import ValidationFormatter, format_gate


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file to validate"),
    ],
) -> None:
    """Validate a cabinet project file.

    Checks the project file for:
    - JSON syntax and schema errors
    - Dimension, structure, material and machine findings
    - Fitting compatibility and structural overload

    Exit codes:
        0 - Design is valid with no warnings
        1 - Design has errors (cannot be frozen)
        2 - Design is valid but has warnings

    Example:
        cabinet-mfg validate kitchen-base.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    config = load_project(config_file)
    cabinet = recompute(config_to_intent(config))

    if cabinet.validation:
        typer.echo(ValidationFormatter().format(cabinet.validation))
        typer.echo()
    typer.echo(format_gate(cabinet))

    if cabinet.error_count:
        typer.echo(
            f"Validation failed: {cabinet.error_count} error(s), "
            f"{cabinet.warning_count} warning(s)",
            err=True,
        )
        raise typer.Exit(code=1)
    if cabinet.warning_count:
        typer.echo(f"Validation passed with {cabinet.warning_count} warning(s)")
        raise typer.Exit(code=2)
    typer.echo("Validation passed. Design is valid.")
