from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Mapping, Optional, Tuple

from ot_core.errors import RowParseError
from ot_core.parsing import parse_clock_time, parse_signed_duration
from ot_core.settings import POTENTIAL_OT_THRESHOLD
from ot_core.shifts import ShiftType, classify_shift

logger = logging.getLogger(__name__)

LEGACY_OT_STATUS_COLUMN = "OT? If yes, help us understand why not submitted yet   "


@dataclass(frozen=True)
class ColumnMapping:
    shift_date: str = "Shift Date"
    staff_id: str = "Staff No"
    staff_name: str = "Staff Name"
    shift_start: str = "Shift Start Time"
    shift_end: str = "Shift End Time"
    clock_in: str = "Clock In Time"
    clock_out: str = "Clock Out Time"
    scheduled_hours: str = "ShiftTT"
    actual_hours: str = "ClockTT"
    delta: str = "Delta"
    reporting_officer: str = "reporting_officer_name"
    age: str = "Age"
    ot_status: Tuple[str, ...] = ("OT Status", LEGACY_OT_STATUS_COLUMN)

    def required_columns(self) -> List[str]:
        return [
            self.shift_date,
            self.staff_id,
            self.staff_name,
            self.shift_start,
            self.shift_end,
            self.delta,
        ]


DEFAULT_COLUMNS = ColumnMapping()


@dataclass(frozen=True)
class Record:
    date: date
    staff_id: str
    staff_name: str
    shift_start: str
    shift_end: str
    clock_in: str
    clock_out: str
    scheduled_hours: Optional[float]
    actual_hours: Optional[float]
    delta: float
    reporting_officer: str
    age: int
    ot_status: str
    shift_type: ShiftType
    is_potential_overtime: bool


@dataclass(frozen=True)
class SkippedRow:
    row_number: int
    reason: str


@dataclass(frozen=True)
class NormalizationResult:
    records: List[Record] = field(default_factory=list)
    skipped: List[SkippedRow] = field(default_factory=list)


def parse_shift_date(text: Optional[str]) -> date:
    """Parse ``DD-MM-YY`` into a date in the 2000s."""
    parts = (text or "").strip().split("-")
    if len(parts) != 3:
        raise RowParseError(f"expected DD-MM-YY date, got {text!r}")
    day, month, year = parts
    try:
        return date(2000 + int(year), int(month), int(day))
    except ValueError as exc:
        raise RowParseError(f"invalid date {text!r}: {exc}") from exc


def parse_age(text: Optional[str]) -> int:
    if text is None:
        return 0
    try:
        return int(float(str(text).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0


def _cell(row: Mapping[str, object], column: str) -> str:
    value = row.get(column)
    if value is None:
        return ""
    return str(value)


def _status(row: Mapping[str, object], aliases: Iterable[str]) -> str:
    for column in aliases:
        if column in row and row[column] is not None:
            return str(row[column])
    return ""


def _parse_field(parser, row: Mapping[str, object], column: str):
    try:
        return parser(_cell(row, column))
    except RowParseError as exc:
        raise RowParseError(exc.message, column=column) from exc


def normalize_row(
    row: Mapping[str, object],
    mapping: ColumnMapping = DEFAULT_COLUMNS,
    *,
    threshold: float = POTENTIAL_OT_THRESHOLD,
) -> Record:
    """Build one immutable Record from a raw table row.

    Raises RowParseError when the date, duration or delta text is malformed.
    """
    shift_start = _cell(row, mapping.shift_start)
    shift_end = _cell(row, mapping.shift_end)
    delta = _parse_field(parse_signed_duration, row, mapping.delta)
    return Record(
        date=_parse_field(parse_shift_date, row, mapping.shift_date),
        staff_id=_cell(row, mapping.staff_id),
        staff_name=_cell(row, mapping.staff_name),
        shift_start=shift_start,
        shift_end=shift_end,
        clock_in=_cell(row, mapping.clock_in),
        clock_out=_cell(row, mapping.clock_out),
        scheduled_hours=_parse_field(parse_clock_time, row, mapping.scheduled_hours),
        actual_hours=_parse_field(parse_clock_time, row, mapping.actual_hours),
        delta=delta,
        reporting_officer=_cell(row, mapping.reporting_officer),
        age=parse_age(row.get(mapping.age)),
        ot_status=_status(row, mapping.ot_status),
        shift_type=classify_shift(shift_start, shift_end),
        is_potential_overtime=delta > threshold,
    )


def normalize_rows(
    rows: Iterable[Mapping[str, object]],
    mapping: ColumnMapping = DEFAULT_COLUMNS,
    *,
    threshold: float = POTENTIAL_OT_THRESHOLD,
) -> NormalizationResult:
    """Normalize every row, skipping (and logging) rows that fail to parse.

    Row numbers are 1-based data rows, header excluded.
    """
    records: List[Record] = []
    skipped: List[SkippedRow] = []
    for row_number, row in enumerate(rows, start=1):
        try:
            records.append(normalize_row(row, mapping, threshold=threshold))
        except RowParseError as exc:
            exc.row_number = row_number
            logger.warning("Skipping row: %s", exc)
            skipped.append(SkippedRow(row_number=row_number, reason=str(exc)))
    return NormalizationResult(records=records, skipped=skipped)
