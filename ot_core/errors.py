from __future__ import annotations

from typing import Optional


class DashboardError(Exception):
    """Base class for errors raised by the dashboard core."""


class SourceLoadError(DashboardError):
    """The source table could not be read, or holds no rows."""


class RowParseError(DashboardError):
    """A single row carries date or time text that cannot be parsed."""

    def __init__(self, message: str, *, row_number: Optional[int] = None, column: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.row_number = row_number
        self.column = column

    def __str__(self) -> str:
        where = []
        if self.row_number is not None:
            where.append(f"row {self.row_number}")
        if self.column:
            where.append(f"column {self.column!r}")
        if not where:
            return self.message
        return f"{', '.join(where)}: {self.message}"
