"""Structured logging for swimmer-plot runs.

Provides dual-sink logging via loguru:

- **Console sink**: Human-readable, colorized, shows the pipeline stage.
  When a shared Rich ``Console`` is provided, output routes through it so
  log lines and Rich tables interleave cleanly.
- **File sink**: JSON-structured JSONL written to
  ``{log_dir}/{run_id}/swimmer_plot.jsonl`` for audit trails, including the
  DEBUG records of every discarded row and dropped response slot.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def setup_logging(
    log_dir: Path,
    run_id: str,
    console: Console | None = None,
    level: str = "INFO",
) -> Path:
    """Configure loguru sinks for one run.

    Removes all existing handlers first to avoid duplicate output.

    Args:
        log_dir: Root directory for log storage.
        run_id: Unique identifier for this run.
        console: Optional shared Rich Console for output routing.
        level: Minimum level for the console sink.

    Returns:
        Path of the JSONL log file.
    """
    logger.remove()

    if console is not None:
        logger.add(
            lambda msg: console.print(msg, end="", highlight=False, markup=False),
            format="{time:HH:mm:ss} | {level: <8} | {message}",
            level=level,
            colorize=False,
        )
    else:
        # Stage-contextualized records
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level>"
                " | <cyan>{extra[stage]}</cyan> | {message}"
            ),
            level=level,
            filter=lambda record: "stage" in record["extra"],
        )
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level>"
                " | {message}"
            ),
            level=level,
            filter=lambda record: "stage" not in record["extra"],
        )

    log_file = log_dir / run_id / "swimmer_plot.jsonl"
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(log_file),
        format="{message}",
        serialize=True,
        level="DEBUG",
    )
    return log_file


def log_stage(stage: str, message: str, **fields: object) -> None:
    """Log a stage-level INFO record with structured fields.

    Args:
        stage: Pipeline stage name (``ingest``, ``render`` ...).
        message: loguru format string; ``fields`` fill its placeholders.
    """
    with logger.contextualize(stage=stage):
        logger.info(message, **fields)
