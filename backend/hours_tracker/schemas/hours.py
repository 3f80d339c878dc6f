# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class SubmitMonthlyHoursRequest(BaseModel):
    """Request body for reporting the hours worked in a month."""

    month: str = Field(pattern=r"^\d{4}-\d{2}$")
    hours_worked: float = Field(ge=0, le=744)


class MonthlyHoursResponse(BaseModel):
    """Response schema for a month's reported hours."""

    id: uuid.UUID
    employee_id: uuid.UUID
    month: str
    hours_worked: float
    submitted_at: datetime


class MonthlyHoursListResponse(BaseModel):
    items: list[MonthlyHoursResponse]
    total: int


class MonthlySummaryResponse(BaseModel):
    """Hours worked plus leave hours by type for one month."""

    employee_id: uuid.UUID
    month: str
    work_days: int
    hours_worked: float | None
    usage_by_type: dict[str, float]
    total_leave_hours: float
    acknowledged: bool
    locked: bool
