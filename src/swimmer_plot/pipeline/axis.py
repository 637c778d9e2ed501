"""Time-axis planning and headline summary numbers."""

import math
from collections.abc import Sequence

from swimmer_plot.models.patient import (
    AxisPlan,
    CohortGroup,
    NormalizedPatient,
    PlotSummary,
)

TICK_STEP = 3
# Domain used when there are no patients, so the axis never collapses to 0.
FALLBACK_DOMAIN_MAX = 21.0


def _ticks(domain_max: float) -> tuple[float, ...]:
    count = math.floor(domain_max / TICK_STEP) + 1
    return tuple(float(i * TICK_STEP) for i in range(count))


def plan_axis(patients: Sequence[NormalizedPatient]) -> AxisPlan:
    """Derive the shared month domain and tick values.

    The domain is the longest duration rounded up to a multiple of three,
    plus one extra three-month step, so the longest bar stops short of the
    right edge.
    """
    if not patients:
        return AxisPlan(
            domain_max=FALLBACK_DOMAIN_MAX,
            tick_values=_ticks(FALLBACK_DOMAIN_MAX),
        )

    raw_max = max(p.duration_months for p in patients)
    domain_max = float(math.ceil(raw_max / TICK_STEP) * TICK_STEP + TICK_STEP)
    return AxisPlan(domain_max=domain_max, tick_values=_ticks(domain_max))


def summarize(groups: Sequence[CohortGroup], axis: AxisPlan) -> PlotSummary:
    """Count patients and cohorts and report the padded max duration."""
    return PlotSummary(
        total_patients=sum(len(g.patients) for g in groups),
        cohort_count=len(groups),
        max_duration_months=axis.domain_max - TICK_STEP,
    )
