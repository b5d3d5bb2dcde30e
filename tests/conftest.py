# Shared pytest fixtures
from __future__ import annotations

import csv
from pathlib import Path
from typing import Callable, Dict, List

import pytest

from ot_core import data as data_module
from ot_core.records import Record, normalize_row

HEADER = [
    "Shift Date",
    "Staff No",
    "Staff Name",
    "Shift Start Time",
    "Shift End Time",
    "Clock In Time",
    "Clock Out Time",
    "ShiftTT",
    "ClockTT",
    "Delta",
    "reporting_officer_name",
    "Age",
    "OT Status",
]


@pytest.fixture()
def make_row() -> Callable[..., Dict[str, str]]:
    def _make(**overrides: str) -> Dict[str, str]:
        row = {
            "Shift Date": "01-07-25",
            "Staff No": "S1",
            "Staff Name": "Alice",
            "Shift Start Time": "08:00",
            "Shift End Time": "16:00",
            "Clock In Time": "07:50",
            "Clock Out Time": "16:30",
            "ShiftTT": "8:00",
            "ClockTT": "8:40",
            "Delta": "0:40",
            "reporting_officer_name": "Officer A",
            "Age": "30",
            "OT Status": "",
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture()
def make_record(make_row) -> Callable[..., Record]:
    def _make(**overrides: str) -> Record:
        return normalize_row(make_row(**overrides))

    return _make


@pytest.fixture()
def sample_records(make_record) -> List[Record]:
    return [
        make_record(**{"Shift Date": "01-07-25", "Staff Name": "Alice", "Delta": "1:00", "OT Status": "A", "reporting_officer_name": "Officer A"}),
        make_record(**{"Shift Date": "02-07-25", "Staff Name": "Bob", "Delta": "-0:30", "OT Status": "A", "reporting_officer_name": "Officer B"}),
        make_record(**{"Shift Date": "03-07-25", "Staff Name": "Alice", "Delta": "2:00", "OT Status": "B", "reporting_officer_name": "Officer A",
                       "Shift Start Time": "16:00", "Shift End Time": "00:00"}),
        make_record(**{"Shift Date": "03-07-25", "Staff Name": "Cara", "Delta": "", "OT Status": "", "reporting_officer_name": "Officer B",
                       "Shift Start Time": "00:00", "Shift End Time": "08:00"}),
    ]


@pytest.fixture()
def write_csv(tmp_path: Path) -> Callable[[List[Dict[str, str]]], Path]:
    def _write(rows: List[Dict[str, str]], name: str = "timesheet.csv") -> Path:
        path = tmp_path / name
        with path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=HEADER)
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
        return path

    return _write


@pytest.fixture(autouse=True)
def clear_load_cache():
    data_module._load_dashboard_data_cached.cache_clear()
    yield
    data_module._load_dashboard_data_cached.cache_clear()
