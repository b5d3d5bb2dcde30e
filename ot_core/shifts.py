from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class ShiftType(str, Enum):
    DAY = "Day"
    EVENING = "Evening"
    NIGHT = "Night"
    OTHER = "Other"


SHIFT_ORDER = (ShiftType.DAY, ShiftType.EVENING, ShiftType.NIGHT, ShiftType.OTHER)

_SHIFT_TABLE: Dict[Tuple[str, str], ShiftType] = {
    ("08:00", "16:00"): ShiftType.DAY,
    ("16:00", "00:00"): ShiftType.EVENING,
    ("00:00", "08:00"): ShiftType.NIGHT,
}


def classify_shift(start: str, end: str) -> ShiftType:
    """Map scheduled start/end labels to a shift type by exact string match."""
    return _SHIFT_TABLE.get((start, end), ShiftType.OTHER)
