from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from ot_core.aggregate import GroupKey, SortOrder, aggregate_frame, group_by
from ot_core.charts import status_donut, to_vega_spec
from ot_core.filters import FilterCriteria
from ot_core.insights import compute_insights, compute_summary
from ot_core.palette import status_color
from ot_core.records import Record


def compute_overview(filters: FilterCriteria, ctx: Dict[str, Any]) -> Dict[str, Any]:
    filtered: List[Record] = ctx.get("filtered", [])
    summary = compute_summary(filtered)
    insights = compute_insights(filtered)

    groups = group_by(filtered, GroupKey.STATUS, order=SortOrder.COUNT_DESC)
    total = len(filtered)
    status_rows = [
        {
            "status": str(row.key),
            "count": row.count,
            "share": (row.count / total) if total else 0.0,
            "color": status_color(str(row.key), i),
        }
        for i, row in enumerate(groups.values())
    ]

    charts: Dict[str, Any] = {}
    if groups:
        status_df = aggregate_frame(groups)
        status_df["share"] = status_df["count"] / total
        charts["status"] = to_vega_spec(status_donut(status_df))

    return {
        "filters": asdict(filters),
        "summary": asdict(summary),
        "insights": asdict(insights),
        "status": status_rows,
        "charts": charts,
    }
