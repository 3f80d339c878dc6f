from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete
from sqlmodel import col

from hours_tracker.exceptions import AppError
from hours_tracker.models.acknowledgement import Acknowledgement, AdminAcknowledgement
from hours_tracker.models.employee import Employee
from hours_tracker.models.enums import AuditAction, EmployeeRole
from hours_tracker.models.monthly_hours import MonthlyHours
from hours_tracker.models.pto_entry import PtoEntry
from hours_tracker.repositories import EmployeeRepository
from hours_tracker.schemas.employee import EmployeeListResponse, EmployeeResponse
from hours_tracker.services.audit import model_to_audit_dict, record_change

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hours_tracker.schemas.auth import AuthContext
    from hours_tracker.schemas.employee import CreateEmployeeRequest, UpdateEmployeeRequest

logger = logging.getLogger(__name__)

_OWNED_MODELS = (PtoEntry, MonthlyHours, Acknowledgement, AdminAcknowledgement)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_employee_response(employee: Employee) -> EmployeeResponse:
    """Map an employee model to its response schema."""
    return EmployeeResponse(
        id=employee.id,
        name=employee.name,
        identifier=employee.identifier,
        pto_rate=employee.pto_rate,
        carryover_hours=employee.carryover_hours,
        carryover_year=employee.carryover_year,
        hire_date=employee.hire_date,
        role=EmployeeRole(employee.role),
        created_at=employee.created_at,
    )


async def get_employee_or_404(session: AsyncSession, employee_id: uuid.UUID) -> Employee:
    """Fetch an employee by ID. Raises 404 if not found."""
    employee = await EmployeeRepository(session).find_by_id(employee_id)
    if employee is None:
        raise AppError("Employee not found", status_code=404)
    return employee


async def _ensure_identifier_free(
    repo: EmployeeRepository,
    identifier: str,
    exclude_id: uuid.UUID | None = None,
) -> None:
    existing = await repo.find_by_identifier(identifier)
    if existing is not None and existing.id != exclude_id:
        raise AppError(f"An employee with identifier '{identifier}' already exists", status_code=409)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def create_employee(
    session: AsyncSession,
    auth: AuthContext,
    payload: CreateEmployeeRequest,
) -> EmployeeResponse:
    """Create an employee and record the creation in the audit log."""
    repo = EmployeeRepository(session)
    await _ensure_identifier_free(repo, payload.identifier)

    employee = await repo.save(
        Employee(
            name=payload.name,
            identifier=payload.identifier,
            pto_rate=payload.pto_rate,
            carryover_hours=payload.carryover_hours,
            hire_date=payload.hire_date,
            role=payload.role.value,
        )
    )

    await record_change(session, auth.user_id, employee, AuditAction.CREATE)

    await session.commit()
    await session.refresh(employee)
    logger.info("Created employee %s (%s)", employee.id, employee.identifier)
    return _build_employee_response(employee)


async def get_employee(session: AsyncSession, employee_id: uuid.UUID) -> EmployeeResponse:
    return _build_employee_response(await get_employee_or_404(session, employee_id))


async def list_employees(session: AsyncSession) -> EmployeeListResponse:
    """List every employee by name."""
    employees = await EmployeeRepository(session).list_all()
    items = [_build_employee_response(e) for e in employees]
    return EmployeeListResponse(items=items, total=len(items))


async def update_employee(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    payload: UpdateEmployeeRequest,
) -> EmployeeResponse:
    """Apply the fields present in ``payload`` to an employee."""
    repo = EmployeeRepository(session)
    employee = await get_employee_or_404(session, employee_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        return _build_employee_response(employee)

    if "identifier" in changes:
        await _ensure_identifier_free(repo, changes["identifier"], exclude_id=employee.id)

    before_dict = model_to_audit_dict(employee)
    for key, value in changes.items():
        setattr(employee, key, value.value if isinstance(value, EmployeeRole) else value)
    await repo.save(employee)

    await record_change(session, auth.user_id, employee, AuditAction.UPDATE, before=before_dict)

    await session.commit()
    await session.refresh(employee)
    logger.info("Updated employee %s: %s", employee.id, ", ".join(sorted(changes)))
    return _build_employee_response(employee)


async def delete_employee(session: AsyncSession, auth: AuthContext, employee_id: uuid.UUID) -> None:
    """Delete an employee together with their entries, hours and acknowledgements."""
    employee = await get_employee_or_404(session, employee_id)
    before_dict = model_to_audit_dict(employee)

    for model in _OWNED_MODELS:
        await session.execute(delete(model).where(col(model.employee_id) == employee_id))
    await EmployeeRepository(session).delete(employee)

    await record_change(session, auth.user_id, employee, AuditAction.DELETE, before=before_dict)

    await session.commit()
    logger.info("Deleted employee %s", employee_id)
