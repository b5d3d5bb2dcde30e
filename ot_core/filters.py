from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from ot_core.records import Record
from ot_core.settings import DEFAULT_TOP_N

ALL = "all"


@dataclass(frozen=True)
class FilterCriteria:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    officer: str = ALL
    status: str = ALL
    staff: str = ALL
    top_n: int = DEFAULT_TOP_N


@dataclass(frozen=True)
class FilterOptions:
    officers: List[str] = field(default_factory=list)
    statuses: List[str] = field(default_factory=list)
    staff: List[str] = field(default_factory=list)
    min_date: Optional[date] = None
    max_date: Optional[date] = None


def _as_date(value: object) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def _as_choice(value: object) -> str:
    if value is None:
        return ALL
    s = str(value)
    if not s.strip() or s == ALL:
        return ALL
    return s


def normalize_filters(
    raw: dict,
    *,
    date_bounds: Optional[Tuple[Optional[date], Optional[date]]] = None,
    default_top_n: int = DEFAULT_TOP_N,
) -> FilterCriteria:
    min_date, max_date = date_bounds or (None, None)

    start_date = _as_date(raw.get("start_date")) or min_date
    end_date = _as_date(raw.get("end_date")) or max_date
    if start_date and end_date and start_date > end_date:
        start_date, end_date = end_date, start_date

    top_n = raw.get("top_n")
    try:
        top_n = int(top_n) if top_n is not None else default_top_n
    except Exception:
        top_n = default_top_n
    top_n = max(1, min(50, top_n))

    return FilterCriteria(
        start_date=start_date,
        end_date=end_date,
        officer=_as_choice(raw.get("officer")),
        status=_as_choice(raw.get("status")),
        staff=_as_choice(raw.get("staff")),
        top_n=top_n,
    )


def _matches(value: str, choice: str) -> bool:
    return choice == ALL or value == choice


def record_matches(record: Record, criteria: FilterCriteria) -> bool:
    if criteria.start_date is not None and record.date < criteria.start_date:
        return False
    if criteria.end_date is not None and record.date > criteria.end_date:
        return False
    return (
        _matches(record.reporting_officer, criteria.officer)
        and _matches(record.ot_status, criteria.status)
        and _matches(record.staff_name, criteria.staff)
    )


def apply_filter(records: Sequence[Record], criteria: FilterCriteria) -> List[Record]:
    """Return the records matching ``criteria``, in their original order."""
    return [r for r in records if record_matches(r, criteria)]


def filter_options(records: Iterable[Record]) -> FilterOptions:
    records = list(records)
    if not records:
        return FilterOptions()
    dates = [r.date for r in records]
    return FilterOptions(
        officers=sorted({r.reporting_officer for r in records}),
        statuses=sorted({r.ot_status for r in records if r.ot_status}),
        staff=sorted({r.staff_name for r in records}),
        min_date=min(dates),
        max_date=max(dates),
    )
