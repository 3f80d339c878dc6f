from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

# "YYYY-MM"
MONTH_KEY_LENGTH = 7


def now_utc() -> datetime:
    return datetime.now(UTC)


def utc_timestamp_field(*, index: bool = False) -> Any:
    """A timezone-aware timestamp set by both Python and the database on insert."""
    return Field(
        default_factory=now_utc,
        index=index,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )


class UUIDBase(SQLModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, sa_type=sa.Uuid)


class TimestampMixin(SQLModel):
    created_at: datetime = utc_timestamp_field()


class EmployeeOwned(SQLModel):
    """Rows that belong to a single employee and go away with them."""

    employee_id: uuid.UUID = Field(foreign_key="employee.id", ondelete="CASCADE", index=True, sa_type=sa.Uuid)


class MonthKeyed(EmployeeOwned):
    """Per-employee, per-month rows keyed by a ``YYYY-MM`` string."""

    month: str = Field(max_length=MONTH_KEY_LENGTH)
