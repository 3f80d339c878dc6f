# ruff: noqa: TC003
from __future__ import annotations

import datetime
import uuid

from pydantic import BaseModel, Field

from hours_tracker.services.buckets import MAX_REQUEST_HOURS

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreatePtoEntryRequest(BaseModel):
    """Request body for a single-day entry.

    ``type`` is a free string so legacy names ("Full PTO", "Partial PTO") can be
    normalised by the business rules instead of failing schema validation.
    """

    date: datetime.date
    type: str = Field(min_length=1, max_length=50)
    hours: float


class CreatePtoRangeRequest(BaseModel):
    """Request body for a multi-day request: a start date and a total number of hours."""

    start: datetime.date
    type: str = Field(min_length=1, max_length=50)
    hours: float = Field(gt=0, le=MAX_REQUEST_HOURS)


class UpdatePtoEntryRequest(BaseModel):
    """Partial update of an entry. Omitted fields are unchanged."""

    date: datetime.date | None = None
    type: str | None = Field(default=None, min_length=1, max_length=50)
    hours: float | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PtoEntryResponse(BaseModel):
    """Response schema for a single entry."""

    id: uuid.UUID
    employee_id: uuid.UUID
    date: datetime.date
    type: str
    hours: float
    approved_by: uuid.UUID | None
    approved_at: datetime.datetime | None
    created_at: datetime.datetime


class PtoEntryListResponse(BaseModel):
    """List of entries, ordered by date."""

    items: list[PtoEntryResponse]
    total: int


class PtoRangeResponse(BaseModel):
    """Entries created for a range request, with its computed end date."""

    start: datetime.date
    end: datetime.date
    items: list[PtoEntryResponse]
    total_hours: float
