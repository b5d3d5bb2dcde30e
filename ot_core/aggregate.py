"""Grouping and per-group statistics over normalized records.

Every chart on the dashboard is a view of ``group_by`` with a different key,
statistic selection and ordering. Truncation to a top-N is left to callers
via ``top_n``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, Optional, Sequence, Union

import pandas as pd

from ot_core.records import Record

NO_STATUS_LABEL = "No Status"

KeyFn = Callable[[Record], Hashable]


def status_label(record: Record) -> str:
    return record.ot_status or NO_STATUS_LABEL


class GroupKey(Enum):
    STATUS = "status"
    STAFF = "staff"
    SHIFT_TYPE = "shift_type"
    OFFICER = "officer"
    DAY = "day"

    def key_fn(self) -> KeyFn:
        return _KEY_FUNCTIONS[self]


_KEY_FUNCTIONS: Dict[GroupKey, KeyFn] = {
    GroupKey.STATUS: status_label,
    GroupKey.STAFF: lambda r: r.staff_name,
    GroupKey.SHIFT_TYPE: lambda r: r.shift_type.value,
    GroupKey.OFFICER: lambda r: r.reporting_officer,
    GroupKey.DAY: lambda r: r.date,
}


class Stat(Enum):
    COUNT = "count"
    MEAN_DELTA = "mean_delta"
    POSITIVE_DELTA_SUM = "positive_delta_sum"
    POTENTIAL_OT_COUNT = "potential_ot_count"


class SortOrder(Enum):
    FIRST_SEEN = "first_seen"
    COUNT_DESC = "count_desc"
    KEY_ASC = "key_asc"
    MEAN_DELTA_DESC = "mean_delta_desc"


ALL_STATS = (Stat.COUNT, Stat.MEAN_DELTA, Stat.POSITIVE_DELTA_SUM, Stat.POTENTIAL_OT_COUNT)


@dataclass(frozen=True)
class AggregateRow:
    key: Hashable
    count: int
    mean_delta: Optional[float] = None
    positive_delta_sum: Optional[float] = None
    potential_ot_count: Optional[int] = None


def _resolve_key(key: Union[GroupKey, KeyFn]) -> KeyFn:
    if isinstance(key, GroupKey):
        return key.key_fn()
    if callable(key):
        return key
    raise TypeError(f"Unsupported group key: {key!r}")


def _stats_frame(records: Sequence[Record], key_fn: KeyFn) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "key": pd.Series([key_fn(r) for r in records], dtype=object),
            "delta": [float(r.delta) for r in records],
            "positive_delta": [max(0.0, float(r.delta)) for r in records],
            "potential_ot": [bool(r.is_potential_overtime) for r in records],
        }
    )


def group_by(
    records: Sequence[Record],
    key: Union[GroupKey, KeyFn],
    *,
    stats: Iterable[Stat] = (Stat.COUNT,),
    order: SortOrder = SortOrder.FIRST_SEEN,
) -> Dict[Hashable, AggregateRow]:
    """Group records by ``key`` and compute the requested statistics.

    The returned dict is ordered per ``order``; ties (and ``FIRST_SEEN``) keep
    the order in which each key first appears in ``records``. ``count`` is
    always present; the other statistics are None unless requested.
    """
    key_fn = _resolve_key(key)
    wanted = set(stats)
    if not records:
        return {}

    frame = _stats_frame(records, key_fn)
    agg = (
        frame.groupby("key", sort=False, dropna=False)
        .agg(
            count=("delta", "size"),
            mean_delta=("delta", "mean"),
            positive_delta_sum=("positive_delta", "sum"),
            potential_ot_count=("potential_ot", "sum"),
        )
    )
    agg["mean_delta"] = agg["mean_delta"].fillna(0.0)

    if order is SortOrder.COUNT_DESC:
        agg = agg.sort_values("count", ascending=False, kind="stable")
    elif order is SortOrder.KEY_ASC:
        agg = agg.sort_index(kind="stable")
    elif order is SortOrder.MEAN_DELTA_DESC:
        agg = agg.sort_values("mean_delta", ascending=False, kind="stable")

    out: Dict[Hashable, AggregateRow] = {}
    for group_key, row in agg.iterrows():
        out[group_key] = AggregateRow(
            key=group_key,
            count=int(row["count"]),
            mean_delta=float(row["mean_delta"]) if Stat.MEAN_DELTA in wanted else None,
            positive_delta_sum=float(row["positive_delta_sum"]) if Stat.POSITIVE_DELTA_SUM in wanted else None,
            potential_ot_count=int(row["potential_ot_count"]) if Stat.POTENTIAL_OT_COUNT in wanted else None,
        )
    return out


def top_n(groups: Dict[Hashable, AggregateRow], n: int) -> Dict[Hashable, AggregateRow]:
    if n <= 0:
        return {}
    return dict(list(groups.items())[:n])


def aggregate_frame(groups: Dict[Hashable, AggregateRow]) -> pd.DataFrame:
    """Flatten an aggregate mapping into a DataFrame (one row per group)."""
    columns = ["key", "count", "mean_delta", "positive_delta_sum", "potential_ot_count"]
    if not groups:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame([asdict(row) for row in groups.values()], columns=columns)
    return df.dropna(axis=1, how="all")
