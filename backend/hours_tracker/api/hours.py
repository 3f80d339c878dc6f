# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from hours_tracker.api.deps import EmployeeAccessDep, require_employee_access
from hours_tracker.db import SessionDep
from hours_tracker.schemas.hours import (
    MonthlyHoursListResponse,
    MonthlyHoursResponse,
    MonthlySummaryResponse,
    SubmitMonthlyHoursRequest,
)
from hours_tracker.services import hours as hours_service

hours_router = APIRouter(
    prefix="/employees/{employee_id}",
    tags=["monthly-hours"],
    dependencies=[Depends(require_employee_access)],
)


@hours_router.get("/monthly-hours", response_model=MonthlyHoursListResponse)
async def list_monthly_hours(employee_id: uuid.UUID, session: SessionDep) -> MonthlyHoursListResponse:
    return await hours_service.list_monthly_hours(session, employee_id)


@hours_router.post("/monthly-hours", response_model=MonthlyHoursResponse, status_code=status.HTTP_201_CREATED)
async def submit_monthly_hours(
    employee_id: uuid.UUID,
    payload: SubmitMonthlyHoursRequest,
    session: SessionDep,
    auth: EmployeeAccessDep,
) -> MonthlyHoursResponse:
    """Report the hours worked in a month, replacing any earlier report."""
    return await hours_service.submit_monthly_hours(session, auth, employee_id, payload)


@hours_router.get("/monthly-summary", response_model=MonthlySummaryResponse)
async def get_monthly_summary(
    employee_id: uuid.UUID,
    session: SessionDep,
    month: str = Query(pattern=r"^\d{4}-\d{2}$"),
) -> MonthlySummaryResponse:
    """Hours worked and leave by type for the month under review."""
    return await hours_service.get_monthly_summary(session, employee_id, month)
