# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel


class TimeBucketResponse(BaseModel):
    """Allowed, used and remaining hours for one leave bucket."""

    allowed: float
    used: float
    remaining: float
    # Hours used beyond the allowance; remaining is 0 while this is positive.
    overdrawn_hours: float = 0.0


class MonthlyAccrualResponse(BaseModel):
    month: int
    work_days: int
    hours: float


class PtoStatusResponse(BaseModel):
    """Leave buckets and PTO allocation for an employee in one year."""

    employee_id: uuid.UUID
    year: int
    hire_date: date
    pto_rate: float
    carryover_hours: float
    annual_allocation: float
    next_business_day: date
    pto: TimeBucketResponse
    sick: TimeBucketResponse
    bereavement: TimeBucketResponse
    jury_duty: TimeBucketResponse
    monthly_accruals: list[MonthlyAccrualResponse]


class CarryoverResult(BaseModel):
    employee_id: uuid.UUID
    previous_carryover: float
    carryover_hours: float


class YearEndResponse(BaseModel):
    """Carryover written for each employee by a year-end run."""

    year: int
    items: list[CarryoverResult]
    total: int
    # Employees whose carryover for this year was already written.
    skipped: int = 0
