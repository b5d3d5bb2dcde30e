from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from ot_core.filters import ALL


class FilterCriteriaModel(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    officer: str = ALL
    status: str = ALL
    staff: str = ALL
    top_n: Optional[int] = None


class FilterOptionsResponse(BaseModel):
    officers: List[str] = Field(default_factory=list)
    statuses: List[str] = Field(default_factory=list)
    staff: List[str] = Field(default_factory=list)
    min_date: Optional[date] = None
    max_date: Optional[date] = None
