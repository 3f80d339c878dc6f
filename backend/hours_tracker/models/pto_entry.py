# ruff: noqa: TC003
from __future__ import annotations

import datetime
import uuid

import sqlalchemy as sa
from sqlmodel import Field

from hours_tracker.models.base import EmployeeOwned, TimestampMixin, UUIDBase


class PtoEntry(UUIDBase, TimestampMixin, EmployeeOwned, table=True):
    """Hours of leave charged to one bucket on one date."""

    __tablename__ = "pto_entry"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "date", "type", name="uq_pto_entry_employee_date_type"),
        sa.Index("ix_pto_entry_employee_date", "employee_id", "date"),
    )

    date: datetime.date
    type: str = Field(max_length=50)
    hours: float
    approved_by: uuid.UUID | None = None
    approved_at: datetime.datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
