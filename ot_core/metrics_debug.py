from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from ot_core.filters import FilterCriteria


def compute_debug(filters: FilterCriteria, ctx: Dict[str, Any]) -> Dict[str, Any]:
    records = ctx.get("records", ())
    filtered = ctx.get("filtered", [])
    skipped = ctx.get("skipped", ())
    payload: Dict[str, Any] = {
        "filters": asdict(filters),
        "row_counts": {
            "raw_rows": int(ctx.get("raw_row_count", len(records)) or 0),
            "records": len(records),
            "filtered_records": len(filtered),
            "skipped_rows": len(skipped),
        },
        "skipped": [asdict(s) for s in skipped],
        "date_coverage": {},
    }
    if records:
        dates = sorted({r.date for r in records})
        payload["date_coverage"] = {
            "min_date": dates[0].isoformat(),
            "max_date": dates[-1].isoformat(),
            "days_present": len(dates),
        }
    return payload
