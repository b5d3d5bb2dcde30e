from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import pandas as pd

from ot_core.aggregate import ALL_STATS, GroupKey, SortOrder, aggregate_frame, group_by
from ot_core.charts import daily_trend_chart, delta_histogram_chart, to_vega_spec
from ot_core.filters import FilterCriteria
from ot_core.histogram import delta_histogram
from ot_core.parsing import format_clock_duration
from ot_core.records import Record


def compute_trend(filters: FilterCriteria, ctx: Dict[str, Any], *, bins: int = 12) -> Dict[str, Any]:
    filtered: List[Record] = ctx.get("filtered", [])
    if not filtered:
        return {"filters": asdict(filters), "daily": [], "histogram": [], "charts": {}}

    daily = group_by(filtered, GroupKey.DAY, stats=ALL_STATS, order=SortOrder.KEY_ASC)
    daily_rows = [
        {
            "date": row.key.isoformat(),
            "count": row.count,
            "positive_delta_sum": row.positive_delta_sum,
            "potential_ot_count": row.potential_ot_count,
            "mean_delta": row.mean_delta,
        }
        for row in daily.values()
    ]
    daily_df = aggregate_frame(daily).rename(columns={"key": "date"})
    daily_df["date"] = pd.to_datetime(daily_df["date"])

    hist = delta_histogram(filtered, bins=bins)
    hist_rows = [
        {**asdict(b), "range": f"{format_clock_duration(b.lower)} to {format_clock_duration(b.upper)}"}
        for b in hist
    ]

    charts: Dict[str, Any] = {"daily": to_vega_spec(daily_trend_chart(daily_df))}
    if hist_rows:
        charts["delta_histogram"] = to_vega_spec(delta_histogram_chart(pd.DataFrame(hist_rows)))

    return {
        "filters": asdict(filters),
        "daily": daily_rows,
        "histogram": hist_rows,
        "charts": charts,
    }
