"""Pydantic settings models for all configuration."""

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

MIN_BAR_HEIGHT = 12
MAX_BAR_HEIGHT = 32


def clamp_bar_height(value: int) -> int:
    """Clamp a requested bar height into the supported pixel range.

    The layout engine trusts ``PlotSettings.bar_height``; callers that take
    free-form input (CLI flags, sliders) clamp before building settings.
    """
    return max(MIN_BAR_HEIGHT, min(MAX_BAR_HEIGHT, int(value)))


class PlotSettings(BaseModel):
    """Display settings consumed by the cohort organizer and layout engine.

    Immutable: a settings change produces a new value and a full
    recomputation, never an in-place edit.
    """

    model_config = ConfigDict(frozen=True)

    sort_by: Literal["duration", "id"] = "duration"
    group_by_cohort: bool = True
    show_grid: bool = True
    bar_height: int = Field(default=20, ge=MIN_BAR_HEIGHT, le=MAX_BAR_HEIGHT)
    bar_gap: int = Field(default=8, ge=0)


class Palette(BaseModel):
    """Fill colours for bars and markers.

    Response categories are looked up by their exact code; anything not
    listed falls back to ``fallback``.
    """

    model_config = ConfigDict(frozen=True)

    CR: str = "#2E9B6F"
    PR: str = "#F5C342"
    SD: str = "#7FBADC"
    PD: str = "#8B8B8B"
    ASCT: str = "#9B59B6"
    bar: str = "#87CEEB"
    fallback: str = "#999999"

    def color_for(self, category: str) -> str:
        """Return the marker fill for a response category code."""
        if category in RESPONSE_CATEGORIES:
            return getattr(self, category)
        return self.fallback


# Response codes with a dedicated colour, in legend order.
RESPONSE_CATEGORIES: tuple[str, ...] = ("CR", "PR", "SD", "PD")

DEFAULT_COHORT_LABELS: dict[str, str] = {"A": "Arm A", "B": "Arm B"}


class Settings(BaseModel):
    """Root configuration model for swimmer-plot."""

    plot: PlotSettings = PlotSettings()
    palette: Palette = Palette()
    cohort_labels: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_COHORT_LABELS)
    )
    output_dir: str = "./output"
    log_dir: str = "./logs"

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Build settings from a YAML file; an empty file yields the defaults.

        String values written as ``$NAME`` are replaced by the environment
        variable ``NAME`` before validation, so output and log locations can
        differ per machine without editing the file.

        Raises:
            ValueError: If a ``$NAME`` reference has no matching variable.
            pydantic.ValidationError: If a value is out of range.
        """
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(_resolve_env_vars(raw))


def _resolve_env_vars(data: object) -> object:
    """Swap ``$NAME`` strings anywhere in parsed YAML for ``os.environ[NAME]``."""
    if isinstance(data, dict):
        return {key: _resolve_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_resolve_env_vars(value) for value in data]
    if not (isinstance(data, str) and data.startswith("$")):
        return data

    name = data.removeprefix("$")
    if name not in os.environ:
        raise ValueError(
            f"Environment variable '{name}' is not set "
            f"(referenced as '{data}' in config)"
        )
    return os.environ[name]
