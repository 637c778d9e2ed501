"""Patient ordering and cohort partitioning.

Ordering is two explicit phases composed by ``organize``:

1. ``sort_patients`` -- global order by the active sort key.
2. ``group_patients`` -- partition by cohort, keeping phase-1 order inside
   each group, then order the groups by label.

Running them in this order is what keeps patients sorted by duration (or id)
within each cohort even though the cohort is the outer structure.
"""

from collections.abc import Sequence
from typing import Literal

from swimmer_plot.models.patient import CohortGroup, NormalizedPatient

SortKey = Literal["duration", "id"]
ALL_GROUP_LABEL = "All"


def sort_patients(
    patients: Sequence[NormalizedPatient],
    sort_by: SortKey,
) -> list[NormalizedPatient]:
    """Return patients in display order.

    ``duration`` sorts longest first; ``id`` sorts ascending. Both sorts are
    stable, so ties keep their input order.

    Raises:
        ValueError: If *sort_by* is not a known sort key.
    """
    if sort_by == "duration":
        return sorted(patients, key=lambda p: p.duration_months, reverse=True)
    if sort_by == "id":
        return sorted(patients, key=lambda p: p.id)
    msg = f"Unknown sort key: {sort_by!r} (expected 'duration' or 'id')"
    raise ValueError(msg)


def group_patients(
    patients: Sequence[NormalizedPatient],
    group_by_cohort: bool,
) -> list[CohortGroup]:
    """Partition already-sorted patients into ordered cohort groups."""
    if not group_by_cohort:
        return [CohortGroup(label=ALL_GROUP_LABEL, patients=tuple(patients))]

    buckets: dict[str, list[NormalizedPatient]] = {}
    for patient in patients:
        buckets.setdefault(patient.cohort, []).append(patient)

    return [
        CohortGroup(label=label, patients=tuple(buckets[label]))
        for label in sorted(buckets)
    ]


def organize(
    patients: Sequence[NormalizedPatient],
    sort_by: SortKey,
    group_by_cohort: bool,
) -> list[CohortGroup]:
    """Sort, then group, the normalized patient set."""
    return group_patients(sort_patients(patients, sort_by), group_by_cohort)
