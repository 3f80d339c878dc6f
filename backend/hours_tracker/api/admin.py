# ruff: noqa: B008
from __future__ import annotations

from fastapi import APIRouter, Query

from hours_tracker.api.deps import AdminDep
from hours_tracker.db import SessionDep
from hours_tracker.schemas.status import YearEndResponse
from hours_tracker.services import calendar
from hours_tracker.services.pto_status import process_year_end

admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.post("/year-end", response_model=YearEndResponse)
async def run_year_end(
    session: SessionDep,
    auth: AdminDep,
    year: int | None = Query(default=None, ge=2000, le=2099),
) -> YearEndResponse:
    """Carry unused PTO from the previous year into ``year`` (default: this year)."""
    return await process_year_end(session, auth, year or calendar.today().year)
