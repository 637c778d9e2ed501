"""SVG serialization of ``PlotGeometry`` via a Jinja2 template."""

from functools import cache
from pathlib import Path

from jinja2 import Environment, PackageLoader

from swimmer_plot.models.geometry import PlotGeometry

TEMPLATE_NAME = "swimmer_plot.svg.j2"


def _num(value: float) -> str:
    """Compact coordinate text: at most two decimals, no trailing zeros."""
    text = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


@cache
def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("swimmer_plot.render", "templates"),
        autoescape=True,
        keep_trailing_newline=True,
    )
    env.filters["num"] = _num
    return env


def render_svg(geometry: PlotGeometry) -> str:
    """Render the geometry as a standalone SVG document."""
    return _environment().get_template(TEMPLATE_NAME).render(g=geometry)


def write_svg(geometry: PlotGeometry, path: Path) -> Path:
    """Write the SVG document to *path* and return it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_svg(geometry), encoding="utf-8")
    return path
