"""Row normalization: raw intake rows to ``NormalizedPatient`` records.

Column contract (case-sensitive):

- ``Patient_ID`` (optional) -- defaulted to ``Patient {n}``
- ``Cohort`` (optional) -- defaulted to ``Unknown``
- ``C1D1`` (required) -- treatment start; rows without it are dropped
- ``Resp_date1..10`` / ``Response1..10`` (optional, paired)
- ``ASCT_date`` (optional)

Missing or unparseable dates are expected in real intake sheets, so every
failure here is a silent filter rather than an exception.
"""

import math
import numbers
from collections.abc import Iterable

from loguru import logger

from swimmer_plot.models.patient import (
    NormalizedPatient,
    RawRow,
    ResponseEvent,
    ResponseSlot,
)
from swimmer_plot.pipeline.dates import is_blank, months_between, resolve_date

ID_COLUMN = "Patient_ID"
COHORT_COLUMN = "Cohort"
REFERENCE_COLUMN = "C1D1"
ASCT_COLUMN = "ASCT_date"
RESPONSE_SLOTS = 10
UNKNOWN_COHORT = "Unknown"

RESPONSE_DATE_COLUMNS: tuple[str, ...] = tuple(
    f"Resp_date{i}" for i in range(1, RESPONSE_SLOTS + 1)
)
RESPONSE_CODE_COLUMNS: tuple[str, ...] = tuple(
    f"Response{i}" for i in range(1, RESPONSE_SLOTS + 1)
)

# Full column list in template order.
EXPECTED_COLUMNS: tuple[str, ...] = (
    COHORT_COLUMN,
    ID_COLUMN,
    REFERENCE_COLUMN,
    *(
        col
        for pair in zip(RESPONSE_DATE_COLUMNS, RESPONSE_CODE_COLUMNS)
        for col in pair
    ),
    ASCT_COLUMN,
)


def cell_text(value: object) -> str | None:
    """Render a cell as trimmed text, or ``None`` when blank.

    Integral floats (``101.0`` from a spreadsheet) lose their fraction.
    """
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if float(value).is_integer():
            return str(int(value))
        return str(value)
    text = str(value).strip()
    return text or None


def response_slots(row: RawRow) -> tuple[ResponseSlot, ...]:
    """Collect the ten fixed response column pairs of a row."""
    slots = []
    for i, (date_col, code_col) in enumerate(
        zip(RESPONSE_DATE_COLUMNS, RESPONSE_CODE_COLUMNS), start=1
    ):
        raw_date = row.get(date_col)
        slots.append(
            ResponseSlot(
                index=i,
                date=None if is_blank(raw_date) else raw_date,
                category=cell_text(row.get(code_col)),
            )
        )
    return tuple(slots)


def normalize_row(row: RawRow, index: int) -> NormalizedPatient | None:
    """Normalize one intake row.

    Args:
        row: Column name -> cell value mapping.
        index: Zero-based position of the row in its source, used for the
            default patient id.

    Returns:
        The normalized patient, or ``None`` when ``C1D1`` cannot be resolved.
    """
    reference = resolve_date(row.get(REFERENCE_COLUMN))
    if reference is None:
        logger.debug("Row {index}: no resolvable C1D1, discarded", index=index)
        return None

    events: list[ResponseEvent] = []
    for slot in response_slots(row):
        if not slot.is_filled:
            continue
        assessed = resolve_date(slot.date)
        if assessed is None:
            logger.debug(
                "Row {index}: Resp_date{slot} unresolvable, slot dropped",
                index=index,
                slot=slot.index,
            )
            continue
        events.append(
            ResponseEvent(
                month_offset=months_between(reference, assessed),
                category=slot.category,
            )
        )

    asct_offset: float | None = None
    asct_date = resolve_date(row.get(ASCT_COLUMN))
    if asct_date is not None:
        asct_offset = months_between(reference, asct_date)

    last_event = max((e.month_offset for e in events), default=0.0)
    duration = max(1.0, last_event, asct_offset or 0.0)

    return NormalizedPatient(
        id=cell_text(row.get(ID_COLUMN)) or f"Patient {index + 1}",
        cohort=cell_text(row.get(COHORT_COLUMN)) or UNKNOWN_COHORT,
        duration_months=duration,
        events=tuple(events),
        asct_month_offset=asct_offset,
    )


def normalize_rows(rows: Iterable[RawRow]) -> list[NormalizedPatient]:
    """Normalize every row, silently dropping those without a reference date."""
    patients: list[NormalizedPatient] = []
    total = 0
    for index, row in enumerate(rows):
        total += 1
        patient = normalize_row(row, index)
        if patient is not None:
            patients.append(patient)

    discarded = total - len(patients)
    logger.info(
        "Normalized {kept}/{total} rows ({discarded} without C1D1 discarded)",
        kept=len(patients),
        total=total,
        discarded=discarded,
    )
    return patients
