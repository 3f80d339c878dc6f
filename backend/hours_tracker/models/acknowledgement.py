# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from hours_tracker.models.base import MonthKeyed, UUIDBase, utc_timestamp_field


class Acknowledgement(UUIDBase, MonthKeyed, table=True):
    """An employee's sign-off that a month's hours and leave are correct."""

    __tablename__ = "acknowledgement"
    __table_args__ = (sa.UniqueConstraint("employee_id", "month", name="uq_acknowledgement_employee_month"),)

    note: str | None = None
    status: str | None = Field(default=None, max_length=50)
    acknowledged_at: datetime = utc_timestamp_field()


class AdminAcknowledgement(UUIDBase, MonthKeyed, table=True):
    """An admin lock on an employee's month; locked months are read-only."""

    __tablename__ = "admin_acknowledgement"
    __table_args__ = (sa.UniqueConstraint("employee_id", "month", name="uq_admin_acknowledgement_employee_month"),)

    admin_id: uuid.UUID
    acknowledged_at: datetime = utc_timestamp_field()
