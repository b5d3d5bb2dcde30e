from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ot_core.records import Record

DEFAULT_BINS = 12


@dataclass(frozen=True)
class HistogramBin:
    lower: float
    upper: float
    count: int


def delta_histogram(records: Sequence[Record], bins: int = DEFAULT_BINS) -> List[HistogramBin]:
    """Bin record deltas into ``bins`` equal-width buckets over their extent."""
    values = np.array([r.delta for r in records], dtype=float)
    values = values[~np.isnan(values)]
    if values.size == 0:
        return []
    low, high = float(values.min()), float(values.max())
    if low == high:
        return [HistogramBin(lower=low, upper=high, count=int(values.size))]
    counts, edges = np.histogram(values, bins=max(1, int(bins)), range=(low, high))
    return [
        HistogramBin(lower=float(edges[i]), upper=float(edges[i + 1]), count=int(counts[i]))
        for i in range(len(counts))
    ]
