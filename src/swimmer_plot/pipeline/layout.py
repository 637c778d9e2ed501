"""Layout engine: map months and patient rank onto the drawing canvas.

Horizontal: month ``m`` -> ``X0 + m / domain_max * PLOT_WIDTH``.
Vertical: patients stack top to bottom in group order starting at ``Y0``,
one ``bar_height + bar_gap`` row each, with ``GROUP_PADDING`` after every
group.

``layout`` is a pure function: the same groups, axis, and settings always
produce an identical ``PlotGeometry``. Negative month offsets (assessments
before C1D1) are mapped as-is and land left of ``X0``.
"""

from collections.abc import Mapping, Sequence

from swimmer_plot.config import DEFAULT_COHORT_LABELS, Palette, PlotSettings
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
from swimmer_plot.models.patient import AxisPlan, CohortGroup, NormalizedPatient

CANVAS_WIDTH = 900.0
X0 = 100.0
PLOT_WIDTH = 700.0
Y0 = 50.0
GROUP_PADDING = 40.0
# Vertical room above the first bar and below the last group for the axis.
FRAME_HEIGHT = 80.0
AXIS_MARGIN = 40.0
GRID_TOP = 40.0
TICK_LENGTH = 5.0

MARKER_RADIUS = 6.0
DIAMOND_HALF_SIZE = 7.0
BRACKET_X = 70.0
BRACKET_SPINE_X = 75.0
GROUP_LABEL_X = 50.0

AXIS_TITLE = "Time on treatment (months)"

LEGEND_LABELS: dict[str, str] = {
    "CR": "CR (Complete Response)",
    "PR": "PR (Partial Response)",
    "SD": "SD (Stable Disease)",
    "PD": "PD (Progressive Disease)",
}


def canvas_height(groups: Sequence[CohortGroup], settings: PlotSettings) -> float:
    """Total canvas height for the given groups and row metrics."""
    row = settings.bar_height + settings.bar_gap
    return FRAME_HEIGHT + sum(len(g.patients) * row + GROUP_PADDING for g in groups)


def month_to_x(month: float, axis: AxisPlan) -> float:
    return X0 + (month / axis.domain_max) * PLOT_WIDTH


def _axis_parts(
    axis: AxisPlan,
    height: float,
    show_grid: bool,
) -> tuple[list[Tick], list[Line], Line, TextLabel]:
    baseline_y = height - AXIS_MARGIN
    ticks: list[Tick] = []
    grid: list[Line] = []
    for month in axis.tick_values:
        x = month_to_x(month, axis)
        if show_grid:
            grid.append(
                Line(
                    x1=x,
                    y1=GRID_TOP,
                    x2=x,
                    y2=baseline_y,
                    stroke="#e0e0e0",
                    dash="4,4",
                )
            )
        ticks.append(
            Tick(
                month=month,
                mark=Line(x1=x, y1=baseline_y, x2=x, y2=baseline_y + TICK_LENGTH),
                label=TextLabel(x=x, y=height - 20, text=f"{month:g}"),
            )
        )

    axis_line = Line(x1=X0, y1=baseline_y, x2=X0 + PLOT_WIDTH, y2=baseline_y)
    title = TextLabel(
        x=CANVAS_WIDTH / 2,
        y=height - 2,
        text=AXIS_TITLE,
        font_size=13,
        font_weight="500",
    )
    return ticks, grid, axis_line, title


def _patient_shapes(
    patient: NormalizedPatient,
    y: float,
    axis: AxisPlan,
    settings: PlotSettings,
    palette: Palette,
) -> tuple[Bar, list[Marker]]:
    bar = Bar(
        patient_id=patient.id,
        x=X0,
        y=y,
        width=(patient.duration_months / axis.domain_max) * PLOT_WIDTH,
        height=settings.bar_height,
        fill=palette.bar,
    )
    center_y = y + settings.bar_height / 2
    markers = [
        Marker(
            patient_id=patient.id,
            shape=MarkerShape.CIRCLE,
            category=event.category,
            cx=month_to_x(event.month_offset, axis),
            cy=center_y,
            size=MARKER_RADIUS,
            fill=palette.color_for(event.category),
        )
        for event in patient.events
    ]
    if patient.asct_month_offset is not None:
        markers.append(
            Marker(
                patient_id=patient.id,
                shape=MarkerShape.DIAMOND,
                category="ASCT",
                cx=month_to_x(patient.asct_month_offset, axis),
                cy=center_y,
                size=DIAMOND_HALF_SIZE,
                fill=palette.ASCT,
            )
        )
    return bar, markers


def _bracket(
    group: CohortGroup,
    start: float,
    span: float,
    settings: PlotSettings,
    cohort_labels: Mapping[str, str],
) -> GroupBracket:
    bottom = start + span - settings.bar_gap
    middle = start + span / 2
    return GroupBracket(
        label=group.label,
        path=[
            (BRACKET_X, start),
            (BRACKET_SPINE_X, start),
            (BRACKET_SPINE_X, bottom),
            (BRACKET_X, bottom),
        ],
        text=TextLabel(
            x=GROUP_LABEL_X,
            y=middle,
            text=cohort_labels.get(group.label, group.label),
            font_size=14,
            font_weight="600",
            rotation=-90.0,
        ),
    )


def legend_entries(palette: Palette) -> list[LegendEntry]:
    """Fixed legend: the four response codes, then ASCT."""
    entries = [
        LegendEntry(
            key=code,
            label=label,
            shape=MarkerShape.CIRCLE,
            fill=palette.color_for(code),
        )
        for code, label in LEGEND_LABELS.items()
    ]
    entries.append(
        LegendEntry(
            key="ASCT", label="ASCT", shape=MarkerShape.DIAMOND, fill=palette.ASCT
        )
    )
    return entries


def layout(
    groups: Sequence[CohortGroup],
    axis: AxisPlan,
    settings: PlotSettings,
    palette: Palette | None = None,
    cohort_labels: Mapping[str, str] | None = None,
) -> PlotGeometry:
    """Compute the full plot geometry.

    Args:
        groups: Ordered cohort groups from ``organize``.
        axis: Shared axis plan for the whole patient set.
        settings: Display settings (bar metrics, grid, grouping).
        palette: Fill colours; defaults to ``Palette()``.
        cohort_labels: Display text for cohort labels on brackets; labels
            not in the mapping are shown unchanged.

    Returns:
        A new ``PlotGeometry``.
    """
    palette = palette or Palette()
    if cohort_labels is None:
        cohort_labels = DEFAULT_COHORT_LABELS

    height = canvas_height(groups, settings)
    ticks, grid, axis_line, title = _axis_parts(axis, height, settings.show_grid)

    row = settings.bar_height + settings.bar_gap
    draw_brackets = settings.group_by_cohort and len(groups) > 1

    bars: list[Bar] = []
    markers: list[Marker] = []
    brackets: list[GroupBracket] = []
    y_offset = Y0
    for group in groups:
        for idx, patient in enumerate(group.patients):
            bar, patient_markers = _patient_shapes(
                patient, y_offset + idx * row, axis, settings, palette
            )
            bars.append(bar)
            markers.extend(patient_markers)

        span = len(group.patients) * row
        if draw_brackets:
            brackets.append(_bracket(group, y_offset, span, settings, cohort_labels))
        y_offset += span + GROUP_PADDING

    return PlotGeometry(
        canvas_width=CANVAS_WIDTH,
        canvas_height=height,
        ticks=ticks,
        grid_lines=grid,
        axis_line=axis_line,
        axis_title=title,
        bars=bars,
        markers=markers,
        group_brackets=brackets,
        legend=legend_entries(palette),
    )
