# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa

from hours_tracker.models.base import MonthKeyed, UUIDBase, utc_timestamp_field


class MonthlyHours(UUIDBase, MonthKeyed, table=True):
    """Hours worked reported by an employee for a calendar month."""

    __tablename__ = "monthly_hours"
    __table_args__ = (sa.UniqueConstraint("employee_id", "month", name="uq_monthly_hours_employee_month"),)

    hours_worked: float
    submitted_at: datetime = utc_timestamp_field()
