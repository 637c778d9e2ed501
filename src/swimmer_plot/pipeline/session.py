"""Recomputation holder tying the pipeline stages together.

A ``PlotSession`` keeps two immutable inputs -- the normalized patient
snapshot and the current ``PlotSettings`` -- and rebuilds the geometry from
scratch on every ``render()``. Each input change bumps ``revision``; a
caller holding a ``RenderResult`` from an older revision should drop it in
favour of a fresh render (last writer wins).
"""

from collections.abc import Iterable, Mapping

from loguru import logger
from pydantic import BaseModel

from swimmer_plot.config import DEFAULT_COHORT_LABELS, Palette, PlotSettings
from swimmer_plot.models.geometry import PlotGeometry
from swimmer_plot.models.patient import (
    AxisPlan,
    CohortGroup,
    NormalizedPatient,
    PlotSummary,
    RawRow,
)
from swimmer_plot.pipeline.axis import plan_axis, summarize
from swimmer_plot.pipeline.cohorts import organize
from swimmer_plot.pipeline.layout import layout
from swimmer_plot.pipeline.normalizer import normalize_rows


class RenderResult(BaseModel):
    """Output of one full pipeline run."""

    revision: int
    groups: list[CohortGroup]
    axis: AxisPlan
    geometry: PlotGeometry
    summary: PlotSummary


class PlotSession:
    """Holds the current row snapshot and display settings."""

    def __init__(
        self,
        settings: PlotSettings | None = None,
        palette: Palette | None = None,
        cohort_labels: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings or PlotSettings()
        self._palette = palette or Palette()
        self._cohort_labels = dict(
            DEFAULT_COHORT_LABELS if cohort_labels is None else cohort_labels
        )
        self._patients: tuple[NormalizedPatient, ...] = ()
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def settings(self) -> PlotSettings:
        return self._settings

    @property
    def patients(self) -> tuple[NormalizedPatient, ...]:
        return self._patients

    def load_rows(self, rows: Iterable[RawRow]) -> int:
        """Replace the patient snapshot with a fresh normalization of *rows*.

        Returns:
            Number of patients kept.
        """
        self._patients = tuple(normalize_rows(rows))
        self._revision += 1
        return len(self._patients)

    def update_settings(self, **changes: object) -> PlotSettings:
        """Swap in a new settings value with *changes* applied.

        Changes are validated by building a new ``PlotSettings``.

        Raises:
            pydantic.ValidationError: If a change is out of range.
        """
        merged = {**self._settings.model_dump(), **changes}
        self._settings = PlotSettings.model_validate(merged)
        self._revision += 1
        logger.debug(
            "Settings updated (revision {rev}): {changes}",
            rev=self._revision,
            changes=changes,
        )
        return self._settings

    def render(self) -> RenderResult:
        """Run organize -> plan -> layout over the current snapshot."""
        settings = self._settings
        groups = organize(self._patients, settings.sort_by, settings.group_by_cohort)
        axis = plan_axis(self._patients)
        geometry = layout(groups, axis, settings, self._palette, self._cohort_labels)
        summary = summarize(groups, axis)
        logger.info(
            "Rendered {patients} patients in {cohorts} group(s), domain 0-{domain:g} months",
            patients=summary.total_patients,
            cohorts=summary.cohort_count,
            domain=axis.domain_max,
        )
        return RenderResult(
            revision=self._revision,
            groups=groups,
            axis=axis,
            geometry=geometry,
            summary=summary,
        )

    def is_current(self, result: RenderResult) -> bool:
        """Whether *result* reflects the latest rows and settings."""
        return result.revision == self._revision
