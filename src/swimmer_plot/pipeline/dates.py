"""Date resolution for heterogeneous spreadsheet cells.

Intake sheets mix native dates (Excel cells read by pandas), spreadsheet
day serials (numbers), and free text. ``resolve_date`` folds all three into
a naive ``datetime`` or ``None``; it never raises.
"""

import math
import numbers
from datetime import UTC, date, datetime, timedelta

from dateutil import parser as date_parser

# Day serial of 1970-01-01 in the spreadsheet epoch (1899-12-30).
SERIAL_EPOCH_OFFSET = 25569
SECONDS_PER_DAY = 86400
DAYS_PER_MONTH = 30.44

_UNIX_EPOCH = datetime(1970, 1, 1)
# Fills fields missing from partial text dates ("2023-05" -> 2023-05-01).
_PARTIAL_DATE_DEFAULT = datetime(2000, 1, 1)


def is_blank(value: object) -> bool:
    """True for cells that count as absent: None, blank text, NaN, zero."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return value == 0
    return False


def resolve_date(value: object) -> datetime | None:
    """Normalize a cell value into a naive datetime.

    Args:
        value: A ``datetime``/``date``, a spreadsheet serial number, or text.

    Returns:
        The resolved instant, or ``None`` when the value is blank or cannot
        be interpreted as a date.
    """
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        return _from_serial(float(value))
    return _parse_text(str(value))


def _from_serial(serial: float) -> datetime | None:
    if not math.isfinite(serial):
        return None
    seconds = (serial - SERIAL_EPOCH_OFFSET) * SECONDS_PER_DAY
    try:
        return _UNIX_EPOCH + timedelta(seconds=seconds)
    except OverflowError:
        return None


def _parse_text(text: str) -> datetime | None:
    try:
        parsed = date_parser.parse(text.strip(), default=_PARTIAL_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def months_between(reference: datetime, instant: datetime) -> float:
    """Signed months from *reference* to *instant* using 30.44-day months."""
    days = (instant - reference).total_seconds() / SECONDS_PER_DAY
    return days / DAYS_PER_MONTH
