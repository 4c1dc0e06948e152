"""Typer CLI for cabinet design-to-manufacturing."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from cabinet_mfg.application import DesignSession, Freeze, Release, recompute
from cabinet_mfg.application.config import config_to_intent
from cabinet_mfg.cli.commands import validate_command
from cabinet_mfg.cli.commands.common import load_project
from cabinet_mfg.domain.services import (
    FittingCatalogue,
    InstallMethod,
    PanelContext,
    ToleranceContext,
    rank_fittings,
    semantic_tolerance,
    tolerance,
)
from cabinet_mfg.domain.value_objects import (
    BrandTier,
    FittingCategory,
    MaterialCategory,
    OperationKind,
    UnknownMaterialPolicy,
)
from cabinet_mfg.infrastructure import (
    ExportBlockedError,
    ExporterRegistry,
    ExportManager,
    PanelTableFormatter,
    ValidationFormatter,
    configure_logging,
    format_gate,
    format_ranking,
    format_tolerance,
)

app = typer.Typer(
    name="cabinet-mfg",
    help="Turn a parametric cabinet design into panels, operations and exports.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Cabinet design-to-manufacturing pipeline."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def generate(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON project file"),
    ] = None,
    width: Annotated[
        float | None,
        typer.Option("--width", "-w", help="Cabinet width in mm"),
    ] = None,
    height: Annotated[
        float | None,
        typer.Option("--height", "-h", help="Cabinet height in mm"),
    ] = None,
    depth: Annotated[
        float | None,
        typer.Option("--depth", "-d", help="Cabinet depth in mm"),
    ] = None,
    toe_kick: Annotated[
        float | None,
        typer.Option("--toe-kick", help="Toe kick height in mm"),
    ] = None,
    shelves: Annotated[
        int | None,
        typer.Option("--shelves", "-s", help="Shelves per bay"),
    ] = None,
    dividers: Annotated[
        int | None,
        typer.Option("--dividers", help="Number of vertical dividers"),
    ] = None,
    back: Annotated[
        bool | None,
        typer.Option("--back/--no-back", help="Include a back panel"),
    ] = None,
    core: Annotated[
        str | None,
        typer.Option("--core", help="Default core material id"),
    ] = None,
    surface: Annotated[
        str | None,
        typer.Option("--surface", help="Default surface material id"),
    ] = None,
    edge: Annotated[
        str | None,
        typer.Option("--edge", help="Default edge band id"),
    ] = None,
    machine: Annotated[
        str | None,
        typer.Option("--machine", "-m", help="Machine profile id"),
    ] = None,
    policy: Annotated[
        UnknownMaterialPolicy | None,
        typer.Option("--material-policy", help="Response to unknown material ids"),
    ] = None,
) -> None:
    """Compute a cabinet and print its panels, findings and gate state.

    You can describe the cabinet via CLI options or a JSON project file.
    When using --config, CLI options override file values.

    Examples:
        cabinet-mfg generate --width 600 --height 720 --depth 560
        cabinet-mfg generate --config kitchen-base.json --shelves 2
    """
    config = load_project(
        config_file,
        width=width,
        height=height,
        depth=depth,
        toe_kick_height=toe_kick,
        shelf_count=shelves,
        divider_count=dividers,
        has_back_panel=back,
        core=core,
        surface=surface,
        edge=edge,
        machine=machine,
        material_policy=policy.value if policy else None,
    )
    cabinet = recompute(config_to_intent(config))

    typer.echo(PanelTableFormatter().format(cabinet))
    typer.echo()
    typer.echo(ValidationFormatter().format(cabinet.validation))
    typer.echo()
    typer.echo(format_gate(cabinet))


@app.command()
def export(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON project file"),
    ] = None,
    formats: Annotated[
        str | None,
        typer.Option(
            "--formats",
            "-f",
            help="Comma-separated formats: cutlist,bom,manifest,dxf,cnc (or 'all')",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory for exported files"),
    ] = None,
    project_name: Annotated[
        str | None,
        typer.Option("--project-name", help="Project name for output file naming"),
    ] = None,
    dxf_mode: Annotated[
        str | None,
        typer.Option("--dxf-mode", help="DXF output: combined or per_panel"),
    ] = None,
    freeze: Annotated[
        bool,
        typer.Option("--freeze", help="Freeze the design before exporting"),
    ] = False,
    release: Annotated[
        bool,
        typer.Option("--release", help="Freeze and release the design before exporting"),
    ] = False,
    skip_blocked: Annotated[
        bool,
        typer.Option("--skip-blocked", help="Skip formats the gate blocks instead of failing"),
    ] = False,
) -> None:
    """Export gate-checked manufacturing files.

    Cut list, BOM and manifest are available in DRAFT. DXF needs a frozen
    design and the CNC program a released one; use --freeze or --release
    to attempt those transitions first.

    Examples:
        cabinet-mfg export --config kitchen-base.json --formats cutlist,bom
        cabinet-mfg export --config kitchen-base.json --formats dxf --freeze -o ./out
    """
    config = load_project(config_file)

    if formats is None:
        format_list = [f.value for f in config.output.formats]
    elif formats.lower() == "all":
        format_list = ExporterRegistry.available_formats()
    else:
        format_list = [f.strip().lower() for f in formats.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in format_list if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    if not format_list:
        typer.echo("No formats to export.", err=True)
        raise typer.Exit(code=1)

    mode = dxf_mode or config.output.dxf.mode
    if mode not in ("combined", "per_panel"):
        typer.echo(f"Invalid --dxf-mode: {mode}. Use combined or per_panel", err=True)
        raise typer.Exit(code=1)

    session = DesignSession(config_to_intent(config))
    gate_actions = []
    if freeze or release:
        gate_actions.append(Freeze())
    if release:
        gate_actions.append(Release())
    for action in gate_actions:
        cabinet = session.dispatch(action)
        transition = cabinet.last_transition
        if transition is not None and not transition.success:
            typer.echo(f"{transition.action.value.capitalize()} refused:", err=True)
            for reason in transition.reasons:
                typer.echo(f"  {reason}", err=True)
            break

    cabinet = session.cabinet
    typer.echo(format_gate(cabinet))

    out_dir = output_dir or Path(config.output.output_dir or ".")
    manager = ExportManager(out_dir, {"dxf": {"mode": mode}})
    try:
        files = manager.export_all(
            format_list,
            cabinet,
            project_name or config.output.project_name,
            skip_blocked=skip_blocked,
        )
    except ExportBlockedError as e:
        typer.echo(f"Export blocked for {e.permission.format.value}:", err=True)
        for message in e.permission.blocking_messages:
            typer.echo(f"  {message}", err=True)
        raise typer.Exit(code=1)

    if not files:
        typer.echo("Nothing exported.", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")


@app.command()
def fittings(
    thickness: Annotated[
        float,
        typer.Option("--thickness", "-t", help="Panel thickness in mm"),
    ] = 18.0,
    width: Annotated[float, typer.Option("--width", "-w", help="Panel width in mm")] = 600.0,
    height: Annotated[float, typer.Option("--height", "-h", help="Panel height in mm")] = 720.0,
    load: Annotated[float, typer.Option("--load", help="Load on the fitting in kg")] = 0.0,
    door: Annotated[bool, typer.Option("--door", help="The panel is a door")] = False,
    category: Annotated[
        FittingCategory | None,
        typer.Option("--category", help="Restrict to one fitting category"),
    ] = None,
    tier: Annotated[
        BrandTier,
        typer.Option("--tier", help="Preferred brand tier"),
    ] = BrandTier.PREMIUM,
) -> None:
    """Rank catalogue fittings for a panel.

    Example:
        cabinet-mfg fittings --category hinge --thickness 18 --width 500 --height 700 --door
    """
    context = PanelContext(
        thickness=thickness, width=width, height=height, load_kg=load, is_door=door
    )
    ranking = rank_fittings(FittingCatalogue(), context, category, preferred_tier=tier)
    typer.echo(format_ranking(ranking))
    if ranking.best is None:
        typer.echo("No compatible fittings.", err=True)
        raise typer.Exit(code=1)


@app.command(name="tolerance")
def tolerance_command(
    material: Annotated[
        MaterialCategory,
        typer.Option("--material", help="Material category"),
    ] = MaterialCategory.WOOD_PANEL,
    length: Annotated[float, typer.Option("--length", "-l", help="Piece length in mm")] = 600.0,
    width: Annotated[float, typer.Option("--width", "-w", help="Piece width in mm")] = 400.0,
    temp: Annotated[
        float, typer.Option("--temp", help="Expected temperature swing in C")
    ] = 10.0,
    humidity: Annotated[
        float, typer.Option("--humidity", help="Expected humidity swing in %RH")
    ] = 20.0,
    exterior: Annotated[bool, typer.Option("--exterior", help="Outdoor installation")] = False,
    install: Annotated[
        InstallMethod,
        typer.Option("--install", help="Installation method"),
    ] = InstallMethod.MECHANICAL,
) -> None:
    """Show the gaps and adjusted size for a piece of material.

    Example:
        cabinet-mfg tolerance --material solid_wood --length 1200 --width 300
    """
    context = ToleranceContext(
        material=material,
        length_mm=length,
        width_mm=width,
        temp_variation=temp,
        humidity_variation=humidity,
        is_exterior=exterior,
        install_method=install,
    )
    typer.echo(format_tolerance(semantic_tolerance(context)))
    typer.echo()
    typer.echo(f"Formula gaps for {material.value}:")
    for kind in OperationKind:
        typer.echo(f"  {kind.value:<20} {tolerance(material, kind):.1f} mm")


if __name__ == "__main__":
    app()
