"""Rich tables for plot summaries and the marker legend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from swimmer_plot.models.geometry import LegendEntry
    from swimmer_plot.models.patient import CohortGroup, PlotSummary


def summary_table(summary: PlotSummary) -> Table:
    """Headline numbers: patients, cohorts, max duration."""
    table = Table(title="Swimmer Plot Summary", show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total Patients", str(summary.total_patients))
    table.add_row("Cohorts", str(summary.cohort_count))
    table.add_row("Max Duration (mo)", f"{summary.max_duration_months:.0f}")
    return table


def cohort_table(groups: Sequence[CohortGroup]) -> Table:
    """Per-group patient counts and longest duration, in display order."""
    table = Table(title="Cohorts", show_header=True, header_style="bold")
    table.add_column("Cohort", style="cyan")
    table.add_column("Patients", justify="right")
    table.add_column("Longest (mo)", justify="right")
    table.add_column("Events", justify="right")
    for group in groups:
        longest = max((p.duration_months for p in group.patients), default=0.0)
        events = sum(len(p.events) for p in group.patients)
        table.add_row(group.label, str(len(group.patients)), f"{longest:.1f}", str(events))
    return table


def legend_table(entries: Sequence[LegendEntry]) -> Table:
    table = Table(title="Legend", show_header=False)
    table.add_column("Marker")
    table.add_column("Meaning")
    for entry in entries:
        glyph = "◆" if entry.shape == "diamond" else "●"
        table.add_row(f"[{entry.fill}]{glyph}[/]", entry.label)
    return table


def show_summary(
    console: Console,
    summary: PlotSummary,
    groups: Sequence[CohortGroup],
    legend: Sequence[LegendEntry] = (),
) -> None:
    """Print the summary, cohort breakdown, and (optionally) the legend."""
    console.print()
    console.print(summary_table(summary))
    console.print(cohort_table(groups))
    if legend:
        console.print(legend_table(legend))
    if summary.total_patients == 0:
        console.print(
            "[yellow]Warning:[/yellow] no rows had a usable C1D1 date; "
            "the plot is empty."
        )
    console.print()
