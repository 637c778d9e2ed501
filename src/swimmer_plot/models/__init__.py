"""Data models for patients, axis plans, and plot geometry."""

from swimmer_plot.models.geometry import (
    Bar,
    GroupBracket,
    LegendEntry,
    Line,
    Marker,
    MarkerShape,
    PlotGeometry,
    TextLabel,
    Tick,
)
from swimmer_plot.models.patient import (
    AxisPlan,
    CohortGroup,
    NormalizedPatient,
    PlotSummary,
    RawRow,
    ResponseEvent,
    ResponseSlot,
)

__all__ = [
    "AxisPlan",
    "Bar",
    "CohortGroup",
    "GroupBracket",
    "LegendEntry",
    "Line",
    "Marker",
    "MarkerShape",
    "NormalizedPatient",
    "PlotGeometry",
    "PlotSummary",
    "RawRow",
    "ResponseEvent",
    "ResponseSlot",
    "TextLabel",
    "Tick",
]
