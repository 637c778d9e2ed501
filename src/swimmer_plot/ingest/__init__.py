"""Intake file reading."""

from swimmer_plot.ingest.reader import IngestionError, read_rows, write_template

__all__ = ["IngestionError", "read_rows", "write_template"]
