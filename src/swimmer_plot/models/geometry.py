"""Renderer-agnostic plot geometry in canvas pixel coordinates.

The origin is the top-left corner of the canvas and y grows downwards,
matching SVG. Renderers own a ``PlotGeometry`` only for one draw and never
mutate it.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class MarkerShape(StrEnum):
    """Marker glyphs a renderer has to support."""

    CIRCLE = "circle"
    DIAMOND = "diamond"


class _Shape(BaseModel):
    model_config = ConfigDict(frozen=True)


class Line(_Shape):
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = "#333333"
    dash: str | None = None


class TextLabel(_Shape):
    x: float
    y: float
    text: str
    font_size: float = 12
    font_weight: str = "normal"
    rotation: float = 0.0  # degrees, around (x, y)
    anchor: str = "middle"
    fill: str = "#333333"


class Tick(_Shape):
    """Axis tick mark with its month label."""

    month: float
    mark: Line
    label: TextLabel


class Bar(_Shape):
    """Time-on-treatment rectangle for one patient."""

    patient_id: str
    x: float
    y: float
    width: float
    height: float
    fill: str
    corner_radius: float = 3.0
    opacity: float = 0.85


class Marker(_Shape):
    """Point event on a bar: a response circle or an ASCT diamond."""

    patient_id: str
    shape: MarkerShape
    category: str
    cx: float
    cy: float
    size: float  # circle radius, or half-diagonal of the diamond
    fill: str
    stroke: str = "#ffffff"

    @property
    def points(self) -> list[tuple[float, float]]:
        """Polygon vertices (top, right, bottom, left) for diamonds."""
        s = self.size
        return [
            (self.cx, self.cy - s),
            (self.cx + s, self.cy),
            (self.cx, self.cy + s),
            (self.cx - s, self.cy),
        ]


class GroupBracket(_Shape):
    """Bracket left of a cohort's bars plus its rotated label."""

    label: str
    path: list[tuple[float, float]]
    text: TextLabel
    stroke: str = "#666666"


class LegendEntry(_Shape):
    key: str
    label: str
    shape: MarkerShape
    fill: str


class PlotGeometry(_Shape):
    """Everything a renderer needs to draw one swimmer plot."""

    canvas_width: float
    canvas_height: float
    ticks: list[Tick]
    grid_lines: list[Line]
    axis_line: Line
    axis_title: TextLabel
    bars: list[Bar]
    markers: list[Marker]
    group_brackets: list[GroupBracket]
    legend: list[LegendEntry]
