"""Tests for the swimmer-plot command line."""

from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from swimmer_plot.cli import _load_settings, app
from swimmer_plot.pipeline.normalizer import EXPECTED_COLUMNS

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()


def _args(tmp_path: Path, *extra: str) -> list[str]:
    return [
        *extra,
        "--log-dir",
        str(tmp_path / "logs"),
    ]


class TestRender:
    def test_writes_svg(self, tmp_path: Path, intake_csv: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app, ["render", str(intake_csv), "-o", str(out), *_args(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        svg = (out / "swimmer_plot.svg").read_text(encoding="utf-8")
        assert svg.count("<rect ") == 3
        assert not (out / "swimmer_plot.png").exists()
        assert list((tmp_path / "logs").glob("*/swimmer_plot.jsonl"))

    def test_writes_both_formats(self, tmp_path: Path, intake_csv: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["render", str(intake_csv), "-o", str(out), "-f", "both", *_args(tmp_path)],
        )
        assert result.exit_code == 0, result.output
        assert (out / "swimmer_plot.svg").exists()
        assert (out / "swimmer_plot.png").read_bytes()[:4] == b"\x89PNG"

    def test_no_grid_flag(self, tmp_path: Path, intake_csv: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["render", str(intake_csv), "-o", str(out), "--no-grid", *_args(tmp_path)],
        )
        assert result.exit_code == 0, result.output
        assert "stroke-dasharray" not in (out / "swimmer_plot.svg").read_text()

    def test_unsupported_input_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "intake.json"
        path.write_text("{}")
        result = runner.invoke(
            app,
            ["render", str(path), "-o", str(tmp_path / "out"), *_args(tmp_path)],
        )
        assert result.exit_code == 1
        assert "swimmer-plot error" in result.output
        assert not (tmp_path / "out").exists()

    def test_output_dir_that_is_a_file_fails_cleanly(
        self, tmp_path: Path, intake_csv: Path
    ) -> None:
        blocker = tmp_path / "taken"
        blocker.write_text("not a directory")
        result = runner.invoke(
            app, ["render", str(intake_csv), "-o", str(blocker), *_args(tmp_path)]
        )
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "swimmer-plot error" in result.output
        assert blocker.read_text() == "not a directory"

    def test_missing_input_rejected(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["render", str(tmp_path / "nope.csv")])
        assert result.exit_code != 0


def test_summary_command(tmp_path: Path, intake_csv: Path) -> None:
    result = runner.invoke(app, ["summary", str(intake_csv), *_args(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "Total Patients" in result.output


def test_template_command(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["template"])
    assert result.exit_code == 0, result.output
    header = (tmp_path / "swimmer_template.csv").read_text().splitlines()[0]
    assert header.split(",") == list(EXPECTED_COLUMNS)


class TestLoadSettings:
    def test_bar_height_is_clamped(self) -> None:
        assert _load_settings(None, bar_height=99).plot.bar_height == 32
        assert _load_settings(None, bar_height=2).plot.bar_height == 12

    def test_none_overrides_keep_config(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("plot:\n  show_grid: false\n")
        settings = _load_settings(path, show_grid=None, sort_by="id")
        assert settings.plot.show_grid is False
        assert settings.plot.sort_by == "id"
