"""Console formatters for computed cabinets."""

from __future__ import annotations

from typing import Iterable

from cabinet_mfg.domain.entities import Cabinet
from cabinet_mfg.domain.services.fittings import RankingResult
from cabinet_mfg.domain.services.tolerance import ToleranceResult
from cabinet_mfg.domain.value_objects import Severity, ValidationResult


class PanelTableFormatter:
    """Formats the panel list of a cabinet as a table."""

    def format(self, cabinet: Cabinet) -> str:
        if not cabinet.panels:
            return "No panels."

        lines = [
            "PANELS",
            "=" * 92,
            f"{'Id':<16} {'Name':<22} {'T':>6} {'Finish W x H':>17} {'Cut W x H':>17} {'kg':>8}",
            "-" * 92,
        ]
        for panel in cabinet.panels:
            c = panel.computed
            finish = f"{panel.finish_width:.1f} x {panel.finish_height:.1f}"
            cut = f"{c.cut_width:.1f} x {c.cut_height:.1f}"
            lines.append(
                f"{panel.id:<16} {panel.name[:22]:<22} {c.real_thickness:>6.1f} "
                f"{finish:>17} {cut:>17} {c.weight_kg:>8.2f}"
            )

        totals = cabinet.totals
        lines.append("-" * 92)
        lines.append(
            f"{'TOTAL':<16} {totals.panel_count} panels, {totals.area:.2f} m2, "
            f"{totals.edge_length:.2f} m edge, {totals.weight_kg:.1f} kg, "
            f"cost {totals.cost:.2f}, CO2 {totals.co2:.1f} kg"
        )
        return "\n".join(lines)


class ValidationFormatter:
    """Formats validation findings grouped by severity."""

    def format(self, results: Iterable[ValidationResult]) -> str:
        results = list(results)
        if not results:
            return "No validation findings."

        lines: list[str] = []
        for severity, title in (
            (Severity.ERROR, "Errors:"),
            (Severity.WARNING, "Warnings:"),
            (Severity.INFO, "Info:"),
        ):
            group = [r for r in results if r.severity == severity]
            if not group:
                continue
            lines.append(title)
            for result in group:
                target = f" [{result.panel_id}]" if result.panel_id else ""
                lines.append(f"  {result.code}{target}: {result.message}")
        return "\n".join(lines)


def format_gate(cabinet: Cabinet) -> str:
    gate = cabinet.gate
    return (
        f"Gate: {gate.state.value.upper()} (revision {cabinet.revision}) - "
        f"{gate.error_count} error(s), {gate.warning_count} warning(s)"
    )


def format_ranking(ranking: RankingResult) -> str:
    """Format a fitting ranking with its rejections."""
    lines = [f"{'#':>3} {'Tier':>4} {'Fitting':<24} {'Vendor':<10} {'Price':>9} {'Load':>7}"]
    for entry in ranking.ranked:
        fitting = entry.fitting
        load = entry.compatibility.load_ratio
        load_text = f"{load:.0%}" if load is not None else "-"
        lines.append(
            f"{entry.rank:>3} {entry.tier:>4} {fitting.id:<24} {fitting.vendor:<10} "
            f"{fitting.price:>9.2f} {load_text:>7}"
        )
        for caution in entry.compatibility.cautions:
            lines.append(f"{'':>9}! {caution}")
    if ranking.rejected:
        lines.append("")
        lines.append("Rejected:")
        for rejected in ranking.rejected:
            lines.append(f"  {rejected.fitting.id}: {'; '.join(rejected.reasons)}")
    return "\n".join(lines)


def format_tolerance(result: ToleranceResult) -> str:
    lines = [
        f"Length gap:     {result.length_gap:.1f} mm",
        f"Width gap:      {result.width_gap:.1f} mm",
        f"Grout:          {result.grout_allowance:.1f} mm",
        f"Pre-mill:       {result.pre_mill:.1f} mm",
        f"Adjusted size:  {result.adjusted_length:.1f} x {result.adjusted_width:.1f} mm",
    ]
    for warning in result.warnings:
        lines.append(f"  Warning: {warning}")
    return "\n".join(lines)
