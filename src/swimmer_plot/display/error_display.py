"""Rich error panels for CLI failures.

Every failure the CLI catches is classified by ``ErrorDisplay.format_error``
into a stage and kind, then printed as one red panel with a hint on how to
fix the input, config, or output location.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError
from rich.panel import Panel
from rich.text import Text

from swimmer_plot.ingest.reader import EXCEL_SUFFIXES, IngestionError

if TYPE_CHECKING:
    from rich.console import Console

# Fix suggestions keyed by error kind.
ERROR_SUGGESTIONS: dict[str, str] = {
    "ingestion": (
        "Check that the file is a .csv or Excel workbook with a header row "
        "(Patient_ID, Cohort, C1D1, Resp_date1, Response1, ...). "
        "Run `swimmer-plot template` for an empty example."
    ),
    "config": "Fix the listed settings in the config file or command-line flags.",
    "environment": "Set the referenced environment variable or edit the config file.",
    "output": (
        "Point --output-dir (or output_dir in the config) at a writable "
        "directory, not an existing file."
    ),
    "unknown": "Check the run log for the full stack trace.",
}

_FIELDS = ("Stage", "Error Class", "Message", "Suggestion")


class ErrorDisplay:
    """Prints classified CLI failures on the shared console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def show_error(
        self,
        stage: str,
        error_class: str,
        message: str,
        suggestion: str,
    ) -> None:
        """Print one failure as a red ``swimmer-plot error`` panel.

        The message is cut at 500 characters so a huge parser error does not
        bury the suggestion.
        """
        values = (stage, error_class, message[:500], suggestion)
        width = max(len(name) for name in _FIELDS) + 2
        body = Text()
        for i, (name, value) in enumerate(zip(_FIELDS, values)):
            body.append(f"{name + ':':<{width}}", style="bold")
            body.append(value if i == len(values) - 1 else f"{value}\n")
        self.console.print(Panel(body, border_style="red", title="swimmer-plot error"))

    @staticmethod
    def format_error(error: Exception) -> tuple[str, str, str, str]:
        """Classify *error* into ``(stage, error_class, message, suggestion)``."""
        if isinstance(error, IngestionError):
            suggestion = ERROR_SUGGESTIONS["ingestion"]
            if error.path.suffix.lower() in EXCEL_SUFFIXES:
                suggestion += " Re-save the workbook as .xlsx if it was exported by another tool."
            return ("ingest", "ingestion", str(error), suggestion)

        if isinstance(error, ValidationError):
            issues = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in error.errors()
            )
            return ("config", "invalid_settings", issues, ERROR_SUGGESTIONS["config"])

        if isinstance(error, ValueError) and "Environment variable" in str(error):
            return ("config", "environment", str(error), ERROR_SUGGESTIONS["environment"])

        if isinstance(error, OSError):
            return ("render", "output", str(error), ERROR_SUGGESTIONS["output"])

        return (
            "unknown",
            type(error).__name__,
            str(error)[:500],
            ERROR_SUGGESTIONS["unknown"],
        )
