# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from hours_tracker.api.deps import AdminDep, AuthDep, EmployeeAccessDep, require_employee_access
from hours_tracker.db import SessionDep
from hours_tracker.schemas.pto_entry import (
    CreatePtoEntryRequest,
    CreatePtoRangeRequest,
    PtoEntryListResponse,
    PtoEntryResponse,
    PtoRangeResponse,
    UpdatePtoEntryRequest,
)
from hours_tracker.services import pto_entry as entry_service

employee_entries_router = APIRouter(
    prefix="/employees/{employee_id}/pto-entries",
    tags=["pto-entries"],
    dependencies=[Depends(require_employee_access)],
)

entries_router = APIRouter(prefix="/pto-entries", tags=["pto-entries"])


# ---------------------------------------------------------------------------
# Per-employee entries
# ---------------------------------------------------------------------------


@employee_entries_router.get("", response_model=PtoEntryListResponse)
async def list_entries(
    employee_id: uuid.UUID,
    session: SessionDep,
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
) -> PtoEntryListResponse:
    """List an employee's entries, optionally within a date range."""
    return await entry_service.list_entries(session, employee_id, start, end)


@employee_entries_router.post("", response_model=PtoEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    employee_id: uuid.UUID,
    payload: CreatePtoEntryRequest,
    session: SessionDep,
    auth: EmployeeAccessDep,
) -> PtoEntryResponse:
    """Record leave hours on a single weekday."""
    return await entry_service.create_entry(session, auth, employee_id, payload)


@employee_entries_router.post("/range", response_model=PtoRangeResponse, status_code=status.HTTP_201_CREATED)
async def create_range(
    employee_id: uuid.UUID,
    payload: CreatePtoRangeRequest,
    session: SessionDep,
    auth: EmployeeAccessDep,
) -> PtoRangeResponse:
    """Spread a total number of hours over consecutive weekdays from a start date."""
    return await entry_service.create_range(session, auth, employee_id, payload)


# ---------------------------------------------------------------------------
# Single entries and the review queue
# ---------------------------------------------------------------------------


@entries_router.get("", response_model=PtoEntryListResponse)
async def review_queue(
    session: SessionDep,
    auth: AdminDep,
    pending: bool = Query(default=True),
) -> PtoEntryListResponse:
    """Entries across all employees; unapproved only unless ``pending=false`` (admin only)."""
    return await entry_service.list_review_queue(session, pending)


@entries_router.patch("/{entry_id}", response_model=PtoEntryResponse)
async def update_entry(
    entry_id: uuid.UUID,
    payload: UpdatePtoEntryRequest,
    session: SessionDep,
    auth: AuthDep,
) -> PtoEntryResponse:
    """Edit an entry. Clears any approval."""
    return await entry_service.update_entry(session, auth, entry_id, payload)


@entries_router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(entry_id: uuid.UUID, session: SessionDep, auth: AuthDep) -> Response:
    await entry_service.delete_entry(session, auth, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@entries_router.post("/{entry_id}/approve", response_model=PtoEntryResponse)
async def approve_entry(entry_id: uuid.UUID, session: SessionDep, auth: AdminDep) -> PtoEntryResponse:
    """Approve an entry (admin only)."""
    return await entry_service.approve_entry(session, auth, entry_id)
