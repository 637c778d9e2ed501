"""Intake file decoding: CSV and Excel sheets into row mappings.

CSV cells arrive as strings. Excel cells keep their native types, so date
cells come through as ``datetime`` and numeric serials as numbers; both are
handled downstream by the date resolver.
"""

import csv
import math
from pathlib import Path

import pandas as pd

from swimmer_plot.pipeline.normalizer import EXPECTED_COLUMNS

CSV_SUFFIXES = frozenset({".csv"})
EXCEL_SUFFIXES = frozenset({".xlsx", ".xls"})


class IngestionError(Exception):
    """Raised when an intake file cannot be read.

    ``str(error)`` is the single user-facing message.

    Attributes:
        path: The file that failed.
        reason: Short description of what went wrong.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path.name}: {reason}")


def _read_csv(path: Path) -> list[dict[str, object]]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        rows: list[dict[str, object]] = []
        for row in reader:
            # DictReader puts overflow cells under the None key
            cleaned = {k: v for k, v in row.items() if k is not None}
            if not any((v or "").strip() for v in cleaned.values()):
                continue
            rows.append(cleaned)
        return rows


def _excel_cell(value: object) -> object:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, float) and math.isnan(value):
        return None
    if hasattr(value, "item"):  # numpy scalar
        return value.item()
    return value


def _read_excel(path: Path) -> list[dict[str, object]]:
    frame = pd.read_excel(path, sheet_name=0, dtype=object)
    frame = frame.dropna(how="all")
    frame.columns = [str(c).strip() for c in frame.columns]
    return [
        {col: _excel_cell(val) for col, val in record.items()}
        for record in frame.to_dict(orient="records")
    ]


def read_rows(path: Path) -> list[dict[str, object]]:
    """Decode an intake file into one mapping per patient row.

    Args:
        path: A ``.csv``, ``.xlsx`` or ``.xls`` file.

    Returns:
        Rows in file order; fully blank rows are skipped.

    Raises:
        IngestionError: If the file is missing, has an unsupported
            extension, or cannot be decoded.
    """
    path = Path(path)
    if not path.exists():
        raise IngestionError(path, "file not found")

    suffix = path.suffix.lower()
    if suffix in CSV_SUFFIXES:
        try:
            return _read_csv(path)
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise IngestionError(path, str(exc)) from exc

    if suffix in EXCEL_SUFFIXES:
        try:
            return _read_excel(path)
        except Exception as exc:
            msg = f"not a readable Excel workbook ({exc})"
            raise IngestionError(path, msg) from exc

    supported = ", ".join(sorted(CSV_SUFFIXES | EXCEL_SUFFIXES))
    msg = f"unsupported file type '{suffix or path.name}' (expected {supported})"
    raise IngestionError(path, msg)


def write_template(path: Path) -> Path:
    """Write an empty CSV with the expected intake columns as its header."""
    path = Path(path)
    with open(path, "w", newline="") as f:
        csv.writer(f).writerow(EXPECTED_COLUMNS)
    return path

