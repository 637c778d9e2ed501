"""Raster export of ``PlotGeometry`` with matplotlib.

The figure is sized so one canvas unit maps to ``scale`` output pixels and
the y axis is inverted, so geometry coordinates are used as-is.
"""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.patches import Circle, FancyBboxPatch, Polygon  # noqa: E402

from swimmer_plot.models.geometry import (  # noqa: E402
    Line,
    MarkerShape,
    PlotGeometry,
    TextLabel,
)

BASE_DPI = 100
# Canvas pixels -> typographic points at BASE_DPI.
PX_TO_PT = 72 / BASE_DPI


def _draw_line(ax, line: Line) -> None:
    style = "-"
    if line.dash:
        on, off = (float(part) * PX_TO_PT for part in line.dash.split(","))
        style = (0, (on, off))
    ax.plot(
        [line.x1, line.x2],
        [line.y1, line.y2],
        color=line.stroke,
        linewidth=PX_TO_PT,
        linestyle=style,
        zorder=1,
    )


def _draw_text(ax, label: TextLabel) -> None:
    ha = {"middle": "center", "start": "left", "end": "right"}.get(label.anchor, "center")
    weight = "bold" if label.font_weight in ("600", "700", "bold") else "normal"
    ax.text(
        label.x,
        label.y,
        label.text,
        ha=ha,
        va="baseline",
        rotation=-label.rotation,
        rotation_mode="anchor",
        fontsize=label.font_size * PX_TO_PT,
        fontweight=weight,
        color=label.fill,
        zorder=4,
    )


def render_png(geometry: PlotGeometry, path: Path, scale: int = 2) -> Path:
    """Rasterize the geometry to a PNG file on a white background.

    Args:
        geometry: Plot geometry to draw.
        path: Destination file.
        scale: Output pixels per canvas unit (2 gives an 1800 px wide image).

    Returns:
        The written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    width, height = geometry.canvas_width, geometry.canvas_height
    fig = plt.figure(
        figsize=(width / BASE_DPI, height / BASE_DPI),
        dpi=BASE_DPI * scale,
        facecolor="white",
    )
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.axis("off")

    try:
        for line in geometry.grid_lines:
            _draw_line(ax, line)
        _draw_line(ax, geometry.axis_line)
        for tick in geometry.ticks:
            _draw_line(ax, tick.mark)
            _draw_text(ax, tick.label)
        _draw_text(ax, geometry.axis_title)

        for bracket in geometry.group_brackets:
            xs, ys = zip(*bracket.path)
            ax.plot(xs, ys, color=bracket.stroke, linewidth=PX_TO_PT, zorder=1)
            _draw_text(ax, bracket.text)

        for bar in geometry.bars:
            ax.add_patch(
                FancyBboxPatch(
                    (bar.x, bar.y),
                    bar.width,
                    bar.height,
                    boxstyle=f"round,pad=0,rounding_size={bar.corner_radius}",
                    facecolor=bar.fill,
                    edgecolor="none",
                    alpha=bar.opacity,
                    zorder=2,
                )
            )

        for marker in geometry.markers:
            if marker.shape == MarkerShape.DIAMOND:
                patch = Polygon(marker.points, closed=True)
            else:
                patch = Circle((marker.cx, marker.cy), marker.size)
            patch.set_facecolor(marker.fill)
            patch.set_edgecolor(marker.stroke)
            patch.set_linewidth(PX_TO_PT)
            patch.set_zorder(3)
            ax.add_patch(patch)

        fig.savefig(path, dpi=BASE_DPI * scale, facecolor="white")
    finally:
        plt.close(fig)
    return path
