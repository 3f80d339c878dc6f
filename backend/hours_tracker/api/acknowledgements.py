# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status

from hours_tracker.api.deps import AdminDep, EmployeeAccessDep, require_employee_access
from hours_tracker.db import SessionDep
from hours_tracker.schemas.acknowledgement import (
    AcknowledgementListResponse,
    AcknowledgementResponse,
    AcknowledgeMonthRequest,
    AdminAcknowledgementListResponse,
    AdminAcknowledgementResponse,
    LockMonthRequest,
)
from hours_tracker.services import acknowledgement as acknowledgement_service

acknowledgements_router = APIRouter(
    prefix="/employees/{employee_id}",
    tags=["acknowledgements"],
    dependencies=[Depends(require_employee_access)],
)


@acknowledgements_router.get("/acknowledgements", response_model=AcknowledgementListResponse)
async def list_acknowledgements(employee_id: uuid.UUID, session: SessionDep) -> AcknowledgementListResponse:
    return await acknowledgement_service.list_acknowledgements(session, employee_id)


@acknowledgements_router.post(
    "/acknowledgements",
    response_model=AcknowledgementResponse,
    status_code=status.HTTP_201_CREATED,
)
async def acknowledge_month(
    employee_id: uuid.UUID,
    payload: AcknowledgeMonthRequest,
    session: SessionDep,
    auth: EmployeeAccessDep,
) -> AcknowledgementResponse:
    """Confirm a month's hours and leave."""
    return await acknowledgement_service.acknowledge_month(session, auth, employee_id, payload)


@acknowledgements_router.get("/admin-acknowledgements", response_model=AdminAcknowledgementListResponse)
async def list_admin_acknowledgements(employee_id: uuid.UUID, session: SessionDep) -> AdminAcknowledgementListResponse:
    return await acknowledgement_service.list_admin_acknowledgements(session, employee_id)


@acknowledgements_router.post(
    "/admin-acknowledgements",
    response_model=AdminAcknowledgementResponse,
    status_code=status.HTTP_201_CREATED,
)
async def lock_month(
    employee_id: uuid.UUID,
    payload: LockMonthRequest,
    session: SessionDep,
    auth: AdminDep,
) -> AdminAcknowledgementResponse:
    """Lock an acknowledged, ended month (admin only)."""
    return await acknowledgement_service.lock_month(session, auth, employee_id, payload)
