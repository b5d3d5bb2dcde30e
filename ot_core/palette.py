from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

PRIMARY_COLORS: List[str] = ["#3498db", "#e74c3c", "#2ecc71", "#f39c12", "#9b59b6", "#1abc9c", "#34495e", "#e67e22"]
NO_STATUS_COLOR = "#bdc3c7"


class StatusCategory(str, Enum):
    NOT_CLAIMING = "Not claiming OT"
    MISSED_OUT = "OT missed out"
    NOT_ON_FORM = "Staff did not write on OT form"
    EARLY_ARRIVAL = "OT not claimed due to early arrival"
    LATE_DEPARTURE = "OT not claimed due to late departure"
    SYSTEM_ERROR = "System error"
    OTHER_REASON = "Other reason"
    NONE = ""

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["StatusCategory"]:
        if label is None or label == "No Status":
            return cls.NONE
        try:
            return cls(label)
        except ValueError:
            return None


STATUS_COLORS: Dict[StatusCategory, str] = {
    StatusCategory.NOT_CLAIMING: "#95a5a6",
    StatusCategory.MISSED_OUT: "#e74c3c",
    StatusCategory.NOT_ON_FORM: "#f39c12",
    StatusCategory.EARLY_ARRIVAL: "#3498db",
    StatusCategory.LATE_DEPARTURE: "#9b59b6",
    StatusCategory.SYSTEM_ERROR: "#e67e22",
    StatusCategory.OTHER_REASON: "#34495e",
    StatusCategory.NONE: NO_STATUS_COLOR,
}


def status_color(label: Optional[str], index: int = 0) -> str:
    """Colour for an OT status label; unknown labels cycle the primary palette."""
    category = StatusCategory.from_label(label)
    if category is not None:
        return STATUS_COLORS[category]
    return PRIMARY_COLORS[index % len(PRIMARY_COLORS)]
