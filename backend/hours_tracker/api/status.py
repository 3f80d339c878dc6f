# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from hours_tracker.api.deps import RegistryDep, require_employee_access
from hours_tracker.db import SessionDep
from hours_tracker.schemas.status import PtoStatusResponse
from hours_tracker.services import pto_status as status_service
from hours_tracker.services.cards import render_bucket_card

status_router = APIRouter(
    prefix="/employees/{employee_id}",
    tags=["pto-status"],
    dependencies=[Depends(require_employee_access)],
)


@status_router.get("/pto-status", response_model=PtoStatusResponse)
async def get_pto_status(
    employee_id: uuid.UUID,
    session: SessionDep,
    year: int | None = Query(default=None, ge=2000, le=2099),
) -> PtoStatusResponse:
    """Leave buckets, PTO allocation and monthly accruals for a year (default: this year)."""
    return await status_service.get_pto_status(session, employee_id, year)


@status_router.get("/cards/{tag}", response_class=HTMLResponse)
async def get_bucket_card(
    employee_id: uuid.UUID,
    tag: str,
    session: SessionDep,
    registry: RegistryDep,
    year: int | None = Query(default=None, ge=2000, le=2099),
    expanded: bool = Query(default=False),
) -> HTMLResponse:
    """Render a leave-bucket card component as an HTML fragment."""
    html = await render_bucket_card(session, registry, employee_id, tag, year, expanded)
    return HTMLResponse(content=html)
