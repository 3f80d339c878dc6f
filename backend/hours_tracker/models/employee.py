# ruff: noqa: TC003
from __future__ import annotations

import datetime

from sqlmodel import Field

from hours_tracker.models.base import TimestampMixin, UUIDBase
from hours_tracker.models.enums import EmployeeRole

DEFAULT_PTO_RATE = 0.71


class Employee(UUIDBase, TimestampMixin, table=True):
    """An employee who records time off against the leave buckets."""

    __tablename__ = "employee"

    name: str = Field(max_length=255)
    identifier: str = Field(max_length=255, unique=True, index=True)
    pto_rate: float = Field(default=DEFAULT_PTO_RATE, sa_column_kwargs={"server_default": str(DEFAULT_PTO_RATE)})
    carryover_hours: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    # Year the carryover was written for by year-end processing; None for a manually set balance.
    carryover_year: int | None = None
    hire_date: datetime.date
    role: str = Field(default=EmployeeRole.EMPLOYEE, max_length=50, sa_column_kwargs={"server_default": "Employee"})
