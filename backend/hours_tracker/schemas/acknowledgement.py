# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from hours_tracker.models.enums import AcknowledgementStatus


class AcknowledgeMonthRequest(BaseModel):
    """Request body for an employee's monthly acknowledgement."""

    month: str = Field(pattern=r"^\d{4}-\d{2}$")
    note: str | None = Field(default=None, max_length=1000)
    status: AcknowledgementStatus = AcknowledgementStatus.CONFIRMED


class LockMonthRequest(BaseModel):
    """Request body for an admin month lock."""

    month: str = Field(pattern=r"^\d{4}-\d{2}$")


class AcknowledgementResponse(BaseModel):
    id: uuid.UUID
    employee_id: uuid.UUID
    month: str
    note: str | None
    status: AcknowledgementStatus | None
    acknowledged_at: datetime


class AcknowledgementListResponse(BaseModel):
    items: list[AcknowledgementResponse]
    total: int


class AdminAcknowledgementResponse(BaseModel):
    id: uuid.UUID
    employee_id: uuid.UUID
    month: str
    admin_id: uuid.UUID
    acknowledged_at: datetime


class AdminAcknowledgementListResponse(BaseModel):
    items: list[AdminAcknowledgementResponse]
    total: int
