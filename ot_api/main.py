from __future__ import annotations

from dataclasses import asdict
import logging
import math
from typing import Any, Callable, Dict

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response
from fastapi.encoders import jsonable_encoder

from ot_api.schemas import FilterCriteriaModel, FilterOptionsResponse
from ot_core.data import load_dashboard_data, prepare_context, records_frame
from ot_core.errors import SourceLoadError
from ot_core.filters import FilterCriteria
from ot_core.logging_config import setup_logging
from ot_core.metrics_breakdown import compute_breakdown
from ot_core.metrics_debug import compute_debug
from ot_core.metrics_overview import compute_overview
from ot_core.metrics_trend import compute_trend
from ot_core.settings import DashboardSettings


setup_logging(DashboardSettings.from_env().log_level)
app = FastAPI(title="ERS Overtime Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _context(filters: FilterCriteriaModel) -> Dict[str, Any]:
    data_ctx = load_dashboard_data()
    return prepare_context(filters.model_dump(), data_ctx)


def _page(name: str, filters: FilterCriteriaModel, compute: Callable[[FilterCriteria, Dict[str, Any]], Dict[str, Any]]):
    try:
        ctx = _context(filters)
        return _json(compute(ctx["filters"], ctx))
    except SourceLoadError as exc:
        logger.error("%s unavailable: %s", name, exc)
        return _error(503, exc)
    except Exception as exc:
        logger.exception("%s failed", name)
        return _error(500, exc)


@app.get("/meta/options")
def meta_options():
    try:
        options = load_dashboard_data()["options"]
        return _json(FilterOptionsResponse(**asdict(options)).model_dump())
    except SourceLoadError as exc:
        logger.error("meta_options unavailable: %s", exc)
        return _error(503, exc)
    except Exception as exc:
        logger.exception("meta_options failed")
        return _error(500, exc)


@app.post("/overview")
def overview(filters: FilterCriteriaModel):
    return _page("overview", filters, compute_overview)


@app.post("/trend")
def trend(filters: FilterCriteriaModel, bins: int = Query(default=12, ge=1, le=100)):
    return _page("trend", filters, lambda f, ctx: compute_trend(f, ctx, bins=bins))


@app.post("/breakdown")
def breakdown(filters: FilterCriteriaModel):
    return _page("breakdown", filters, compute_breakdown)


@app.post("/debug")
def debug(filters: FilterCriteriaModel):
    return _page("debug", filters, compute_debug)


@app.post("/export/{page}")
def export_page(page: str, filters: FilterCriteriaModel):
    try:
        ctx = _context(filters)
        if page == "filtered":
            export_df = records_frame(ctx["filtered"])
        elif page == "all":
            export_df = records_frame(ctx["records"])
        else:
            export_df = pd.DataFrame()
    except SourceLoadError as exc:
        logger.error("export %s unavailable: %s", page, exc)
        return _error(503, exc)
    except Exception as exc:
        logger.exception("export %s failed", page)
        return _error(500, exc)
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={page}.csv"})
