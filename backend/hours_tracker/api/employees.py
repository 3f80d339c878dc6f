# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status

from hours_tracker.api.deps import AdminDep, require_employee_access
from hours_tracker.db import SessionDep
from hours_tracker.schemas.employee import (
    CreateEmployeeRequest,
    EmployeeListResponse,
    EmployeeResponse,
    UpdateEmployeeRequest,
)
from hours_tracker.services import employee as employee_service

employees_router = APIRouter(prefix="/employees", tags=["employees"])


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(session: SessionDep, auth: AdminDep) -> EmployeeListResponse:
    """List all employees (admin only)."""
    return await employee_service.list_employees(session)


@employees_router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: CreateEmployeeRequest,
    session: SessionDep,
    auth: AdminDep,
) -> EmployeeResponse:
    """Create an employee (admin only)."""
    return await employee_service.create_employee(session, auth, payload)


@employees_router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    dependencies=[Depends(require_employee_access)],
)
async def get_employee(employee_id: uuid.UUID, session: SessionDep) -> EmployeeResponse:
    """Get an employee. Employees may only read their own record."""
    return await employee_service.get_employee(session, employee_id)


@employees_router.patch("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: uuid.UUID,
    payload: UpdateEmployeeRequest,
    session: SessionDep,
    auth: AdminDep,
) -> EmployeeResponse:
    """Update an employee (admin only)."""
    return await employee_service.update_employee(session, auth, employee_id, payload)


@employees_router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(employee_id: uuid.UUID, session: SessionDep, auth: AdminDep) -> Response:
    """Delete an employee and everything recorded for them (admin only)."""
    await employee_service.delete_employee(session, auth, employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
