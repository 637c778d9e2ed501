"""Terminal display for summaries and errors."""

from swimmer_plot.display.error_display import ErrorDisplay
from swimmer_plot.display.summary_display import show_summary

__all__ = ["ErrorDisplay", "show_summary"]
