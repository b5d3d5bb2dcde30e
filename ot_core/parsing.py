"""Parsers for the clock and duration text found in timesheet exports.

Clock times (``"08:30"``) and durations (``"7:45"``, ``"-0:30"``) both arrive
as ``H:MM`` text and are converted to decimal hours.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from ot_core.errors import RowParseError

_HM_PATTERN = re.compile(r"^\s*(\d+):(\d{1,2})\s*$")


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not str(text).strip()


def _split_hours_minutes(text: str) -> float:
    match = _HM_PATTERN.match(text)
    if not match:
        raise RowParseError(f"expected H:MM text, got {text!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    return hours + minutes / 60


def parse_clock_time(text: Optional[str]) -> Optional[float]:
    """Return ``hour + minute / 60`` for ``H:MM`` text, or None when blank."""
    if _is_blank(text):
        return None
    return _split_hours_minutes(str(text))


def parse_signed_duration(text: Optional[str]) -> float:
    """Parse a signed ``H:MM`` duration into decimal hours.

    Blank text is zero. A minus sign anywhere in the text negates the whole
    value, so ``"1:-30"`` and ``"-1:30"`` both give ``-1.5``.
    """
    if _is_blank(text):
        return 0.0
    raw = str(text)
    negative = "-" in raw
    total = _split_hours_minutes(raw.replace("-", ""))
    return -total if negative else total


def format_clock_duration(hours: float) -> str:
    """Render decimal hours as ``[-]H:MM``."""
    whole = math.floor(abs(hours))
    minutes = round((abs(hours) - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    sign = "-" if hours < 0 else ""
    return f"{sign}{whole}:{minutes:02d}"


def format_hours(hours: Optional[float]) -> str:
    if hours is None or (isinstance(hours, float) and math.isnan(hours)):
        return "N/A"
    return f"{abs(hours):.1f}h"


def truncate_text(text: str, max_length: int) -> str:
    return text[:max_length] + "..." if len(text) > max_length else text
