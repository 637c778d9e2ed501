"""Normalized patient records and the ordered structures built from them."""

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

# One decoded spreadsheet/CSV row: column name -> scalar cell value.
RawRow = Mapping[str, object]


class ResponseSlot(BaseModel):
    """One of the fixed ``(Resp_date{i}, Response{i})`` column pairs.

    ``None`` on either side means the cell was blank.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    date: object | None = None
    category: str | None = None

    @property
    def is_filled(self) -> bool:
        return self.date is not None and self.category is not None


class ResponseEvent(BaseModel):
    """A response assessment placed on the patient's timeline."""

    model_config = ConfigDict(frozen=True)

    month_offset: float  # signed months from the reference date
    category: str


class NormalizedPatient(BaseModel):
    """A patient row that survived normalization.

    ``duration_months`` is ``max(1, last event offset, ASCT offset)``.
    Rows without a resolvable reference date never become a
    ``NormalizedPatient``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    cohort: str
    duration_months: float = Field(ge=1)
    events: tuple[ResponseEvent, ...] = ()
    asct_month_offset: float | None = None


class CohortGroup(BaseModel):
    """An ordered partition of patients sharing a cohort label."""

    model_config = ConfigDict(frozen=True)

    label: str
    patients: tuple[NormalizedPatient, ...] = ()


class AxisPlan(BaseModel):
    """Shared time axis: ``[0, domain_max]`` months with evenly spaced ticks."""

    model_config = ConfigDict(frozen=True)

    domain_max: float
    tick_values: tuple[float, ...]


class PlotSummary(BaseModel):
    """Headline numbers shown alongside the plot."""

    total_patients: int
    cohort_count: int
    max_duration_months: float
