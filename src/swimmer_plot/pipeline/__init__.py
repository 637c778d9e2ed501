"""Normalization and layout pipeline."""

from swimmer_plot.pipeline.axis import FALLBACK_DOMAIN_MAX, plan_axis, summarize
from swimmer_plot.pipeline.cohorts import group_patients, organize, sort_patients
from swimmer_plot.pipeline.dates import months_between, resolve_date
from swimmer_plot.pipeline.layout import layout
from swimmer_plot.pipeline.logging import log_stage, setup_logging
from swimmer_plot.pipeline.normalizer import normalize_row, normalize_rows
from swimmer_plot.pipeline.session import PlotSession, RenderResult

__all__ = [
    "FALLBACK_DOMAIN_MAX",
    "PlotSession",
    "RenderResult",
    "group_patients",
    "layout",
    "log_stage",
    "months_between",
    "normalize_row",
    "normalize_rows",
    "organize",
    "plan_axis",
    "resolve_date",
    "setup_logging",
    "sort_patients",
    "summarize",
]
