from __future__ import annotations

import logging
from dataclasses import asdict
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ot_core.errors import SourceLoadError
from ot_core.filters import FilterCriteria, apply_filter, filter_options, normalize_filters
from ot_core.records import DEFAULT_COLUMNS, ColumnMapping, Record, normalize_rows
from ot_core.settings import DEFAULT_TOP_N, DashboardSettings

logger = logging.getLogger(__name__)


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


def read_raw_rows(path: Path, mapping: ColumnMapping = DEFAULT_COLUMNS) -> List[Dict[str, str]]:
    """Read the source CSV as untyped string rows."""
    if not path.exists():
        raise SourceLoadError(f"Source table not found: {path}")
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as exc:
        raise SourceLoadError(f"Source table is empty: {path}") from exc
    except (OSError, pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise SourceLoadError(f"Could not read source table {path}: {exc}") from exc

    if df.empty:
        raise SourceLoadError(f"Source table has no rows: {path}")
    missing = [c for c in mapping.required_columns() if c not in df.columns]
    if missing:
        raise SourceLoadError(f"Source table {path.name} is missing columns: {', '.join(missing)}")
    return df.to_dict(orient="records")


@lru_cache(maxsize=4)
def _load_dashboard_data_cached(source_sig: Tuple[str, float], threshold: float, default_top_n: int) -> Dict[str, object]:
    path = Path(source_sig[0])
    rows = read_raw_rows(path)
    result = normalize_rows(rows, threshold=threshold)
    if not result.records:
        raise SourceLoadError(f"No valid rows in {path.name} ({len(result.skipped)} skipped)")
    logger.info("Loaded %d records from %s (%d rows skipped)", len(result.records), path.name, len(result.skipped))
    return {
        "source": path.name,
        "raw_row_count": len(rows),
        "records": tuple(result.records),
        "skipped": tuple(result.skipped),
        "options": filter_options(result.records),
        "potential_ot_threshold": threshold,
        "default_top_n": default_top_n,
    }


def load_dashboard_data(path: Optional[Path] = None) -> Dict[str, object]:
    settings = DashboardSettings.from_env(path)
    source = settings.data_path
    if not source.exists():
        raise SourceLoadError(f"Source table not found: {source}")
    return _load_dashboard_data_cached(file_signature(source), settings.potential_ot_threshold, settings.default_top_n)


def prepare_context(filters: dict | FilterCriteria, data_ctx: Dict[str, object]) -> Dict[str, object]:
    records: Sequence[Record] = data_ctx.get("records", ())
    options = data_ctx.get("options")
    bounds = (options.min_date, options.max_date) if options is not None else None
    filt = filters if isinstance(filters, FilterCriteria) else normalize_filters(
        filters,
        date_bounds=bounds,
        default_top_n=int(data_ctx.get("default_top_n", DEFAULT_TOP_N)),
    )
    return {
        "filters": filt,
        "records": records,
        "filtered": apply_filter(records, filt),
        "skipped": data_ctx.get("skipped", ()),
        "raw_row_count": data_ctx.get("raw_row_count", len(records)),
    }


def records_frame(records: Sequence[Record]) -> pd.DataFrame:
    columns = list(Record.__dataclass_fields__)
    if not records:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([{**asdict(r), "shift_type": r.shift_type.value} for r in records], columns=columns)
