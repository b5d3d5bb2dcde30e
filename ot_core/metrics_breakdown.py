from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from ot_core.aggregate import ALL_STATS, GroupKey, SortOrder, aggregate_frame, group_by, top_n
from ot_core.charts import officer_chart, shift_chart, staff_chart, to_vega_spec
from ot_core.filters import FilterCriteria
from ot_core.parsing import truncate_text
from ot_core.records import Record
from ot_core.shifts import SHIFT_ORDER

STAFF_LABEL_LENGTH = 12
OFFICER_LABEL_LENGTH = 15


def _labelled(groups, max_length: int):
    df = aggregate_frame(groups)
    df["label"] = df["key"].astype(str).map(lambda s: truncate_text(s, max_length))
    return df


def compute_breakdown(filters: FilterCriteria, ctx: Dict[str, Any]) -> Dict[str, Any]:
    filtered: List[Record] = ctx.get("filtered", [])
    if not filtered:
        return {"filters": asdict(filters), "staff": [], "shift": [], "officer": [], "charts": {}}

    staff = top_n(group_by(filtered, GroupKey.STAFF, stats=ALL_STATS, order=SortOrder.MEAN_DELTA_DESC), filters.top_n)
    officers = top_n(group_by(filtered, GroupKey.OFFICER, stats=ALL_STATS, order=SortOrder.COUNT_DESC), filters.top_n)
    shift_groups = group_by(filtered, GroupKey.SHIFT_TYPE, stats=ALL_STATS)
    shifts = {s.value: shift_groups[s.value] for s in SHIFT_ORDER if s.value in shift_groups}

    return {
        "filters": asdict(filters),
        "staff": [asdict(row) for row in staff.values()],
        "shift": [asdict(row) for row in shifts.values()],
        "officer": [asdict(row) for row in officers.values()],
        "charts": {
            "staff": to_vega_spec(staff_chart(_labelled(staff, STAFF_LABEL_LENGTH))),
            "shift": to_vega_spec(shift_chart(aggregate_frame(shifts))),
            "officer": to_vega_spec(officer_chart(_labelled(officers, OFFICER_LABEL_LENGTH))),
        },
    }
