from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

import ot_core
from ot_core.data import load_dashboard_data, prepare_context, read_raw_rows, records_frame
from ot_core.errors import SourceLoadError
from ot_core.filters import FilterCriteria
from ot_core.settings import DashboardSettings


def test_read_raw_rows_keeps_blank_strings(write_csv, make_row):
    path = write_csv([make_row(Delta="", **{"OT Status": ""})])
    rows = read_raw_rows(path)
    assert rows[0]["Delta"] == ""
    assert rows[0]["OT Status"] == ""
    assert rows[0]["Age"] == "30"


def test_missing_file_is_source_load_error(tmp_path):
    with pytest.raises(SourceLoadError):
        load_dashboard_data(tmp_path / "nope.csv")


def test_empty_file_is_source_load_error(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(SourceLoadError):
        read_raw_rows(path)


def test_header_only_file_is_source_load_error(write_csv):
    with pytest.raises(SourceLoadError):
        read_raw_rows(write_csv([]))


def test_missing_required_column_is_source_load_error(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("Staff Name,Delta\nAlice,1:00\n", encoding="utf-8")
    with pytest.raises(SourceLoadError, match="missing columns"):
        read_raw_rows(path)


def test_all_rows_invalid_is_source_load_error(write_csv, make_row):
    path = write_csv([make_row(**{"Shift Date": "bad"})])
    with pytest.raises(SourceLoadError):
        load_dashboard_data(path)


def test_load_dashboard_data_skips_bad_rows(write_csv, make_row):
    path = write_csv([make_row(), make_row(**{"Shift Date": "bad"}), make_row(**{"Shift Date": "05-07-25"})])
    data_ctx = load_dashboard_data(path)

    assert len(data_ctx["records"]) == 2
    assert data_ctx["raw_row_count"] == 3
    assert [s.row_number for s in data_ctx["skipped"]] == [2]
    assert data_ctx["options"].min_date == date(2025, 7, 1)
    assert data_ctx["options"].max_date == date(2025, 7, 5)


def test_load_dashboard_data_uses_env_path(write_csv, make_row, monkeypatch):
    path = write_csv([make_row()])
    monkeypatch.setenv("OT_DASHBOARD_DATA", str(path))
    assert load_dashboard_data()["source"] == path.name


def test_prepare_context_from_raw_filters(write_csv, make_row):
    path = write_csv([make_row(), make_row(**{"Shift Date": "05-07-25", "Staff Name": "Bob"})])
    data_ctx = load_dashboard_data(path)

    ctx = prepare_context({"staff": "Bob"}, data_ctx)

    assert isinstance(ctx["filters"], FilterCriteria)
    assert ctx["filters"].start_date == date(2025, 7, 1)
    assert [r.staff_name for r in ctx["filtered"]] == ["Bob"]
    assert len(ctx["records"]) == 2


def test_records_frame(sample_records):
    df = records_frame(sample_records)
    assert len(df) == 4
    assert df["shift_type"].tolist() == ["Day", "Day", "Evening", "Night"]
    assert records_frame([]).empty


def test_records_frame_shift_type_is_plain_label(sample_records):
    df = records_frame(sample_records)
    assert all(type(v) is str for v in df["shift_type"])
    assert df.loc[0, "date"] == date(2025, 7, 1)


def test_default_source_is_packaged_sample(monkeypatch):
    monkeypatch.delenv("OT_DASHBOARD_DATA", raising=False)
    settings = DashboardSettings.from_env()
    assert settings.data_path.name == "mock_data.csv"
    assert settings.data_path.parent == Path(ot_core.__file__).resolve().parent
    assert settings.data_path.exists()
    assert len(load_dashboard_data()["records"]) > 0


def test_threshold_setting_drives_potential_overtime(write_csv, make_row, monkeypatch):
    path = write_csv([make_row(Delta="0:45"), make_row(Delta="1:30")])

    assert [r.is_potential_overtime for r in load_dashboard_data(path)["records"]] == [True, True]

    monkeypatch.setenv("OT_DASHBOARD_OT_THRESHOLD", "1.0")
    data_ctx = load_dashboard_data(path)
    assert data_ctx["potential_ot_threshold"] == 1.0
    assert [r.is_potential_overtime for r in data_ctx["records"]] == [False, True]


def test_top_n_setting_is_the_filter_default(write_csv, make_row, monkeypatch):
    monkeypatch.setenv("OT_DASHBOARD_TOP_N", "3")
    data_ctx = load_dashboard_data(write_csv([make_row()]))

    assert prepare_context({}, data_ctx)["filters"].top_n == 3
    assert prepare_context({"top_n": 10}, data_ctx)["filters"].top_n == 10
