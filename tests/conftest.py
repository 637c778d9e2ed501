"""Shared pytest fixtures for the swimmer-plot test suite."""

import csv
from datetime import datetime
from pathlib import Path

import pytest

from swimmer_plot.models.patient import NormalizedPatient, ResponseEvent


@pytest.fixture
def intake_rows() -> list[dict]:
    """Intake rows as a CSV reader would return them (all strings)."""
    return [
        {
            "Cohort": "B",
            "Patient_ID": "P-003",
            "C1D1": "2023-01-01",
            "Resp_date1": "2023-04-01",
            "Response1": "PR",
            "Resp_date2": "2023-07-01",
            "Response2": "CR",
            "ASCT_date": "",
        },
        {
            "Cohort": "A",
            "Patient_ID": "P-001",
            "C1D1": "2023-02-01",
            "Resp_date1": "2023-03-01",
            "Response1": "SD",
            "ASCT_date": "2023-06-15",
        },
        {
            "Cohort": "A",
            "Patient_ID": "P-002",
            "C1D1": "",
            "Resp_date1": "2023-03-01",
            "Response1": "PD",
        },
        {
            "Cohort": "",
            "Patient_ID": "",
            "C1D1": "2023-01-10",
        },
    ]


@pytest.fixture
def excel_rows() -> list[dict]:
    """Intake rows with native Excel cell types (dates and serials)."""
    return [
        {
            "Cohort": "A",
            "Patient_ID": 101,
            "C1D1": datetime(2023, 1, 1),
            "Resp_date1": 44927 + 90,  # serial for 2023-04-01
            "Response1": "CR",
            "ASCT_date": None,
        },
    ]


def make_patient(
    patient_id: str,
    duration: float,
    cohort: str = "A",
    events: tuple[tuple[float, str], ...] = (),
    asct: float | None = None,
) -> NormalizedPatient:
    """Build a NormalizedPatient directly, bypassing row normalization."""
    return NormalizedPatient(
        id=patient_id,
        cohort=cohort,
        duration_months=duration,
        events=tuple(ResponseEvent(month_offset=m, category=c) for m, c in events),
        asct_month_offset=asct,
    )


@pytest.fixture
def patients() -> list[NormalizedPatient]:
    """Five patients across two cohorts, with a duration tie in cohort A."""
    return [
        make_patient("P-05", 4.0, cohort="B", events=((2.0, "PR"), (4.0, "PD"))),
        make_patient("P-02", 9.5, cohort="A", events=((3.0, "CR"),), asct=6.0),
        make_patient("P-04", 4.0, cohort="A"),
        make_patient("P-01", 12.2, cohort="B", events=((11.0, "XX"),)),
        make_patient("P-03", 4.0, cohort="A", events=((-0.5, "SD"),)),
    ]


@pytest.fixture
def intake_csv(tmp_path: Path, intake_rows: list[dict]) -> Path:
    """Write ``intake_rows`` to a CSV file and return its path."""
    path = tmp_path / "intake.csv"
    fieldnames: list[str] = []
    for row in intake_rows:
        for key in row:
            if key not in fieldnames:
                fieldnames.append(key)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(intake_rows)
    return path


@pytest.fixture
def patient_factory():
    """Expose ``make_patient`` to tests that build their own patient sets."""
    return make_patient
