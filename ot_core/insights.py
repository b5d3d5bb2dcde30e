from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ot_core.aggregate import GroupKey, SortOrder, group_by
from ot_core.records import Record

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class Insights:
    max_delta: float
    most_common_status: str
    total_potential_hours: float
    avg_delta: float


@dataclass(frozen=True)
class SummaryStats:
    total_records: int
    avg_delta: float
    potential_ot_count: int


def _mean_delta(records: Sequence[Record]) -> float:
    if not records:
        return 0.0
    return sum(r.delta for r in records) / len(records)


def most_common_status(records: Sequence[Record]) -> str:
    """Status label with the highest count.

    Ties go to the status that appears first in ``records``; the status
    grouping iterates in first-seen order and its count sort is stable.
    """
    groups = group_by(records, GroupKey.STATUS, order=SortOrder.COUNT_DESC)
    if not groups:
        return NOT_AVAILABLE
    return str(next(iter(groups)))


def compute_insights(records: Sequence[Record]) -> Insights:
    if not records:
        return Insights(max_delta=0.0, most_common_status=NOT_AVAILABLE, total_potential_hours=0.0, avg_delta=0.0)
    return Insights(
        max_delta=max(r.delta for r in records),
        most_common_status=most_common_status(records),
        total_potential_hours=sum(r.delta for r in records if r.is_potential_overtime),
        avg_delta=_mean_delta(records),
    )


def compute_summary(records: Sequence[Record]) -> SummaryStats:
    return SummaryStats(
        total_records=len(records),
        avg_delta=_mean_delta(records),
        potential_ot_count=sum(1 for r in records if r.is_potential_overtime),
    )
