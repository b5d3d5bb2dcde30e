from __future__ import annotations

from datetime import date

from ot_core.filters import ALL, FilterCriteria, apply_filter, filter_options, normalize_filters


def test_all_constraints_and_full_range_returns_input(sample_records):
    criteria = FilterCriteria(start_date=date(2025, 7, 1), end_date=date(2025, 7, 3))
    assert apply_filter(sample_records, criteria) == sample_records


def test_open_ended_range_returns_input(sample_records):
    assert apply_filter(sample_records, FilterCriteria()) == sample_records


def test_date_range_is_inclusive(sample_records):
    criteria = FilterCriteria(start_date=date(2025, 7, 2), end_date=date(2025, 7, 3))
    result = apply_filter(sample_records, criteria)
    assert [r.date for r in result] == [date(2025, 7, 2), date(2025, 7, 3), date(2025, 7, 3)]


def test_categorical_constraints_exact_match(sample_records):
    assert [r.staff_name for r in apply_filter(sample_records, FilterCriteria(officer="Officer A"))] == ["Alice", "Alice"]
    assert apply_filter(sample_records, FilterCriteria(officer="Officer")) == []
    assert len(apply_filter(sample_records, FilterCriteria(status="A", staff="Bob"))) == 1


def test_filter_is_idempotent_and_stable(sample_records):
    criteria = FilterCriteria(officer="Officer B")
    once = apply_filter(sample_records, criteria)
    twice = apply_filter(once, criteria)
    assert once == twice
    assert [r.staff_name for r in once] == ["Bob", "Cara"]


def test_filter_returns_same_record_objects(sample_records):
    result = apply_filter(sample_records, FilterCriteria(staff="Bob"))
    assert result[0] is sample_records[1]


def test_no_match_is_empty_not_error(sample_records):
    assert apply_filter(sample_records, FilterCriteria(start_date=date(2030, 1, 1))) == []


def test_normalize_filters_defaults_to_data_bounds():
    bounds = (date(2025, 7, 1), date(2025, 7, 31))
    criteria = normalize_filters({"officer": "", "status": None, "staff": "all"}, date_bounds=bounds)
    assert criteria.start_date == date(2025, 7, 1)
    assert criteria.end_date == date(2025, 7, 31)
    assert criteria.officer == ALL
    assert criteria.status == ALL
    assert criteria.staff == ALL


def test_normalize_filters_coerces_and_swaps_reversed_range():
    criteria = normalize_filters({"start_date": "2025-07-10", "end_date": date(2025, 7, 2), "top_n": "500"})
    assert criteria.start_date == date(2025, 7, 2)
    assert criteria.end_date == date(2025, 7, 10)
    assert criteria.top_n == 50


def test_normalize_filters_bad_top_n_falls_back():
    assert normalize_filters({"top_n": "many"}).top_n == 8


def test_filter_options(sample_records):
    options = filter_options(sample_records)
    assert options.officers == ["Officer A", "Officer B"]
    assert options.statuses == ["A", "B"]
    assert options.staff == ["Alice", "Bob", "Cara"]
    assert options.min_date == date(2025, 7, 1)
    assert options.max_date == date(2025, 7, 3)


def test_filter_options_empty():
    options = filter_options([])
    assert options.officers == []
    assert options.min_date is None


def test_normalize_filters_only_exact_sentinel_means_all():
    criteria = normalize_filters({"officer": "All", "staff": "ALL", "status": "all"})
    assert criteria.officer == "All"
    assert criteria.staff == "ALL"
    assert criteria.status == ALL


def test_value_spelled_all_filters_exactly(make_record):
    records = [
        make_record(reporting_officer_name="All"),
        make_record(reporting_officer_name="Officer B"),
    ]
    result = apply_filter(records, normalize_filters({"officer": "All"}))
    assert [r.reporting_officer for r in result] == ["All"]


def test_normalize_filters_default_top_n():
    assert normalize_filters({}, default_top_n=3).top_n == 3
    assert normalize_filters({"top_n": None}, default_top_n=3).top_n == 3
    assert normalize_filters({"top_n": "oops"}, default_top_n=3).top_n == 3
    assert normalize_filters({"top_n": 5}, default_top_n=3).top_n == 5
