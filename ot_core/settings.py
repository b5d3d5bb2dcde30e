from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Default source: the sample export shipped as package data.
DATA_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_FILE = "mock_data.csv"

POTENTIAL_OT_THRESHOLD = 0.5
DEFAULT_TOP_N = 8


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class DashboardSettings:
    data_path: Path = DATA_DIR / DEFAULT_DATA_FILE
    potential_ot_threshold: float = POTENTIAL_OT_THRESHOLD
    default_top_n: int = DEFAULT_TOP_N
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, data_path: Optional[Path] = None) -> "DashboardSettings":
        env_path = os.getenv("OT_DASHBOARD_DATA")
        path = Path(data_path) if data_path is not None else (Path(env_path) if env_path else DATA_DIR / DEFAULT_DATA_FILE)
        return cls(
            data_path=path,
            potential_ot_threshold=_env_float("OT_DASHBOARD_OT_THRESHOLD", POTENTIAL_OT_THRESHOLD),
            default_top_n=max(1, _env_int("OT_DASHBOARD_TOP_N", DEFAULT_TOP_N)),
            log_level=os.getenv("OT_DASHBOARD_LOG_LEVEL", "INFO"),
        )
