"""Tests for settings models and YAML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from swimmer_plot.config import (
    DEFAULT_COHORT_LABELS,
    Palette,
    PlotSettings,
    Settings,
    clamp_bar_height,
)


class TestPlotSettings:
    def test_defaults(self) -> None:
        plot = PlotSettings()
        assert plot.sort_by == "duration"
        assert plot.group_by_cohort is True
        assert plot.show_grid is True
        assert (plot.bar_height, plot.bar_gap) == (20, 8)

    @pytest.mark.parametrize("height", [11, 33])
    def test_bar_height_out_of_range(self, height: int) -> None:
        with pytest.raises(ValidationError):
            PlotSettings(bar_height=height)

    def test_negative_gap_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlotSettings(bar_gap=-1)

    def test_unknown_sort_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlotSettings(sort_by="name")

    def test_frozen(self) -> None:
        plot = PlotSettings()
        with pytest.raises(ValidationError):
            plot.bar_height = 30


@pytest.mark.parametrize(
    ("requested", "expected"),
    [(4, 12), (12, 12), (25, 25), (32, 32), (99, 32)],
)
def test_clamp_bar_height(requested: int, expected: int) -> None:
    assert clamp_bar_height(requested) == expected


class TestPalette:
    def test_known_categories(self) -> None:
        palette = Palette()
        assert palette.color_for("CR") == "#2E9B6F"
        assert palette.color_for("PD") == "#8B8B8B"

    def test_unknown_category_uses_fallback(self) -> None:
        palette = Palette()
        assert palette.color_for("XX") == "#999999"
        # lookup is by exact code
        assert palette.color_for("cr") == "#999999"
        assert palette.color_for("ASCT") == "#999999"


class TestSettingsFromYaml:
    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        settings = Settings.from_yaml(path)
        assert settings.plot == PlotSettings()
        assert settings.cohort_labels == DEFAULT_COHORT_LABELS

    def test_nested_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "plot:\n"
            "  sort_by: id\n"
            "  bar_height: 16\n"
            "palette:\n"
            "  CR: '#00FF00'\n"
            "cohort_labels:\n"
            "  A: Arm A (low dose)\n"
        )
        settings = Settings.from_yaml(path)
        assert settings.plot.sort_by == "id"
        assert settings.plot.bar_height == 16
        assert settings.palette.CR == "#00FF00"
        assert settings.palette.PR == "#F5C342"
        assert settings.cohort_labels == {"A": "Arm A (low dose)"}

    def test_env_var_substitution(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SWIMMER_OUT", "/data/plots")
        path = tmp_path / "config.yaml"
        path.write_text("output_dir: $SWIMMER_OUT\n")
        assert Settings.from_yaml(path).output_dir == "/data/plots"

    def test_missing_env_var(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SWIMMER_MISSING", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("log_dir: $SWIMMER_MISSING\n")
        with pytest.raises(ValueError, match="SWIMMER_MISSING"):
            Settings.from_yaml(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("plot:\n  bar_gap: -4\n")
        with pytest.raises(ValidationError):
            Settings.from_yaml(path)
