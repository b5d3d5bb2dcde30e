from __future__ import annotations

import pytest

from ot_core.insights import NOT_AVAILABLE, compute_insights, compute_summary, most_common_status


def test_insights_on_empty_set():
    insights = compute_insights([])
    assert insights.max_delta == 0
    assert insights.avg_delta == 0
    assert insights.total_potential_hours == 0
    assert insights.most_common_status == NOT_AVAILABLE


def test_insights_values(sample_records):
    insights = compute_insights(sample_records)
    assert insights.max_delta == 2.0
    assert insights.most_common_status == "A"
    assert insights.total_potential_hours == pytest.approx(3.0)
    assert insights.avg_delta == pytest.approx((1.0 - 0.5 + 2.0 + 0.0) / 4)


def test_max_delta_all_negative(make_record):
    records = [make_record(Delta="-1:00"), make_record(Delta="-0:15")]
    assert compute_insights(records).max_delta == -0.25


def test_most_common_status_tie_goes_to_first_seen(make_record):
    records = [
        make_record(**{"OT Status": "Later"}),
        make_record(**{"OT Status": "Earlier"}),
        make_record(**{"OT Status": "Earlier"}),
        make_record(**{"OT Status": "Later"}),
    ]
    assert most_common_status(records) == "Later"


def test_most_common_status_counts_no_status(make_record):
    records = [make_record(), make_record(), make_record(**{"OT Status": "A"})]
    assert most_common_status(records) == "No Status"


def test_summary(sample_records):
    summary = compute_summary(sample_records)
    assert summary.total_records == 4
    assert summary.potential_ot_count == 2
    assert compute_summary([]).avg_delta == 0.0
