# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from hours_tracker.models.enums import EmployeeRole


class CreateEmployeeRequest(BaseModel):
    """Request body for creating an employee."""

    name: str = Field(min_length=1, max_length=255)
    identifier: str = Field(min_length=1, max_length=255)
    pto_rate: float = Field(default=0.71, ge=0, le=8)
    carryover_hours: float = Field(default=0.0, ge=0)
    hire_date: date
    role: EmployeeRole = EmployeeRole.EMPLOYEE


class UpdateEmployeeRequest(BaseModel):
    """Request body for a partial employee update. Omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    identifier: str | None = Field(default=None, min_length=1, max_length=255)
    pto_rate: float | None = Field(default=None, ge=0, le=8)
    carryover_hours: float | None = Field(default=None, ge=0)
    hire_date: date | None = None
    role: EmployeeRole | None = None


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    id: uuid.UUID
    name: str
    identifier: str
    pto_rate: float
    carryover_hours: float
    carryover_year: int | None
    hire_date: date
    role: EmployeeRole
    created_at: datetime


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
