"""Renderers that turn ``PlotGeometry`` into image files."""

from swimmer_plot.render.png import render_png
from swimmer_plot.render.svg import render_svg, write_svg

__all__ = ["render_png", "render_svg", "write_svg"]
