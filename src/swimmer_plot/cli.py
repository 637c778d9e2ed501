"""Typer CLI entry point for swimmer-plot."""

from datetime import UTC, datetime
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from dotenv import load_dotenv

if TYPE_CHECKING:
    from rich.console import Console

    from swimmer_plot.config import Settings

load_dotenv()

app = typer.Typer(
    name="swimmer-plot",
    help="Swimmer plots of per-patient treatment duration and response",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    SVG = "svg"
    PNG = "png"
    BOTH = "both"


class SortBy(StrEnum):
    DURATION = "duration"
    ID = "id"


_input_argument = typer.Argument(
    ...,
    help="Patient intake file (.csv, .xlsx, .xls)",
    exists=True,
    dir_okay=False,
)

_config_option = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration YAML file",
    exists=True,
    dir_okay=False,
)

_log_dir_option = typer.Option(
    None,
    "--log-dir",
    help="Directory for JSONL run logs (overrides config log_dir)",
)


def _load_settings(config: Path | None, **plot_overrides: object) -> "Settings":
    """Load settings from YAML (or defaults) and apply CLI plot overrides."""
    from swimmer_plot.config import PlotSettings, Settings, clamp_bar_height

    settings = Settings.from_yaml(config) if config is not None else Settings()
    overrides = {k: v for k, v in plot_overrides.items() if v is not None}
    if "bar_height" in overrides:
        overrides["bar_height"] = clamp_bar_height(overrides["bar_height"])
    if "sort_by" in overrides:
        overrides["sort_by"] = str(overrides["sort_by"])
    if not overrides:
        return settings
    plot = PlotSettings.model_validate({**settings.plot.model_dump(), **overrides})
    return settings.model_copy(update={"plot": plot})


def _fail(console: "Console", error: Exception) -> None:
    from swimmer_plot.display.error_display import ErrorDisplay

    stage, error_class, message, suggestion = ErrorDisplay.format_error(error)
    ErrorDisplay(console).show_error(stage, error_class, message, suggestion)
    raise typer.Exit(code=1) from None


def _start_run(settings: "Settings", log_dir: Path | None, console: "Console") -> str:
    from swimmer_plot.pipeline.logging import setup_logging

    run_id = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    setup_logging(log_dir or Path(settings.log_dir), run_id, console=console)
    return run_id


@app.command()
def render(
    input_file: Path = _input_argument,
    config: Path = _config_option,
    output_dir: Path = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for swimmer_plot.svg/png (overrides config output_dir)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.SVG, "--format", "-f", help="Image format to write"
    ),
    sort_by: SortBy = typer.Option(None, "--sort-by", help="Patient order"),
    group_by_cohort: bool = typer.Option(
        None, "--group/--no-group", help="Group patients by cohort"
    ),
    show_grid: bool = typer.Option(None, "--grid/--no-grid", help="Draw month grid"),
    bar_height: int = typer.Option(
        None, "--bar-height", help="Bar height in px (clamped to 12-32)"
    ),
    bar_gap: int = typer.Option(None, "--bar-gap", help="Gap between bars in px"),
    log_dir: Path = _log_dir_option,
) -> None:
    """Render a swimmer plot from an intake file."""
    from rich.console import Console

    from swimmer_plot.display.summary_display import show_summary
    from swimmer_plot.ingest.reader import read_rows
    from swimmer_plot.pipeline.logging import log_stage
    from swimmer_plot.pipeline.session import PlotSession
    from swimmer_plot.render.png import render_png
    from swimmer_plot.render.svg import write_svg

    console = Console(stderr=True)
    try:
        settings = _load_settings(
            config,
            sort_by=sort_by,
            group_by_cohort=group_by_cohort,
            show_grid=show_grid,
            bar_height=bar_height,
            bar_gap=bar_gap,
        )
        _start_run(settings, log_dir, console)
        rows = read_rows(input_file)
        log_stage(
            "ingest", "Read {rows} rows from {path}", rows=len(rows), path=str(input_file)
        )

        session = PlotSession(settings.plot, settings.palette, settings.cohort_labels)
        session.load_rows(rows)
        result = session.render()

        out_dir = output_dir or Path(settings.output_dir)
        written: list[Path] = []
        if output_format in (OutputFormat.SVG, OutputFormat.BOTH):
            written.append(write_svg(result.geometry, out_dir / "swimmer_plot.svg"))
        if output_format in (OutputFormat.PNG, OutputFormat.BOTH):
            written.append(render_png(result.geometry, out_dir / "swimmer_plot.png"))
        for path in written:
            log_stage("render", "Wrote {path}", path=str(path))
    except Exception as e:
        _fail(console, e)

    show_summary(console, result.summary, result.groups, result.geometry.legend)
    for path in written:
        console.print(f"[green]Plot written to {path}[/green]")


@app.command()
def summary(
    input_file: Path = _input_argument,
    config: Path = _config_option,
    sort_by: SortBy = typer.Option(None, "--sort-by", help="Patient order"),
    group_by_cohort: bool = typer.Option(
        None, "--group/--no-group", help="Group patients by cohort"
    ),
    log_dir: Path = _log_dir_option,
) -> None:
    """Print patient and cohort counts without writing an image."""
    from rich.console import Console

    from swimmer_plot.display.summary_display import show_summary
    from swimmer_plot.ingest.reader import read_rows
    from swimmer_plot.pipeline.session import PlotSession

    console = Console(stderr=True)
    try:
        settings = _load_settings(
            config, sort_by=sort_by, group_by_cohort=group_by_cohort
        )
        _start_run(settings, log_dir, console)
        rows = read_rows(input_file)
        session = PlotSession(settings.plot, settings.palette, settings.cohort_labels)
        session.load_rows(rows)
        result = session.render()
    except Exception as e:
        _fail(console, e)

    show_summary(console, result.summary, result.groups)


@app.command()
def template(
    output: Path = typer.Argument(
        Path("swimmer_template.csv"), help="Where to write the blank CSV template"
    ),
) -> None:
    """Write a blank intake CSV with the expected column headers."""
    from rich.console import Console

    from swimmer_plot.ingest.reader import write_template

    console = Console(stderr=True)
    try:
        write_template(output)
    except OSError as e:
        _fail(console, e)
    console.print(f"[green]Template written to {output}[/green]")


if __name__ == "__main__":
    app()
