from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hours_tracker.exceptions import AppError
from hours_tracker.models.acknowledgement import Acknowledgement, AdminAcknowledgement
from hours_tracker.models.enums import AcknowledgementStatus, AuditAction
from hours_tracker.repositories import AcknowledgementRepository, AdminAcknowledgementRepository
from hours_tracker.schemas.acknowledgement import (
    AcknowledgementListResponse,
    AcknowledgementResponse,
    AdminAcknowledgementListResponse,
    AdminAcknowledgementResponse,
)
from hours_tracker.services import business_rules, calendar
from hours_tracker.services.audit import record_change
from hours_tracker.services.employee import get_employee_or_404

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hours_tracker.schemas.acknowledgement import AcknowledgeMonthRequest, LockMonthRequest
    from hours_tracker.schemas.auth import AuthContext

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_acknowledgement_response(ack: Acknowledgement) -> AcknowledgementResponse:
    return AcknowledgementResponse(
        id=ack.id,
        employee_id=ack.employee_id,
        month=ack.month,
        note=ack.note,
        status=AcknowledgementStatus(ack.status) if ack.status else None,
        acknowledged_at=ack.acknowledged_at,
    )


def _build_admin_acknowledgement_response(lock: AdminAcknowledgement) -> AdminAcknowledgementResponse:
    return AdminAcknowledgementResponse(
        id=lock.id,
        employee_id=lock.employee_id,
        month=lock.month,
        admin_id=lock.admin_id,
        acknowledged_at=lock.acknowledged_at,
    )


# ---------------------------------------------------------------------------
# Employee acknowledgements
# ---------------------------------------------------------------------------


async def acknowledge_month(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    payload: AcknowledgeMonthRequest,
) -> AcknowledgementResponse:
    """Record the employee's sign-off for a month. Each month is acknowledged once."""
    await get_employee_or_404(session, employee_id)
    calendar.parse_month(payload.month)

    repo = AcknowledgementRepository(session)
    existing = await repo.find_for_month(employee_id, payload.month)
    business_rules.validate_month_not_acknowledged(existing is not None)

    ack = await repo.save(
        Acknowledgement(
            employee_id=employee_id,
            month=payload.month,
            note=payload.note,
            status=payload.status.value,
        )
    )
    await record_change(session, auth.user_id, ack, AuditAction.ACKNOWLEDGE)

    await session.commit()
    await session.refresh(ack)
    logger.info("Employee %s acknowledged %s (%s)", employee_id, ack.month, ack.status)
    return _build_acknowledgement_response(ack)


async def list_acknowledgements(session: AsyncSession, employee_id: uuid.UUID) -> AcknowledgementListResponse:
    await get_employee_or_404(session, employee_id)
    acks = await AcknowledgementRepository(session).list_by_employee(employee_id)
    items = [_build_acknowledgement_response(a) for a in acks]
    return AcknowledgementListResponse(items=items, total=len(items))


# ---------------------------------------------------------------------------
# Admin locks
# ---------------------------------------------------------------------------


async def lock_month(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    payload: LockMonthRequest,
) -> AdminAcknowledgementResponse:
    """Lock an employee's month after it has ended and been acknowledged.

    Once locked, entries and hours in the month can no longer be changed.
    """
    await get_employee_or_404(session, employee_id)
    calendar.parse_month(payload.month)

    repo = AdminAcknowledgementRepository(session)
    if await repo.find_for_month(employee_id, payload.month) is not None:
        raise AppError(f"Month {payload.month} is already locked", status_code=409)

    acknowledged = await AcknowledgementRepository(session).find_for_month(employee_id, payload.month)
    business_rules.validate_admin_can_lock_month(payload.month, employee_acknowledged=acknowledged is not None)

    lock = await repo.save(AdminAcknowledgement(employee_id=employee_id, month=payload.month, admin_id=auth.user_id))
    await record_change(session, auth.user_id, lock, AuditAction.LOCK)

    await session.commit()
    await session.refresh(lock)
    logger.info("Admin %s locked %s for employee %s", auth.user_id, lock.month, employee_id)
    return _build_admin_acknowledgement_response(lock)


async def list_admin_acknowledgements(
    session: AsyncSession,
    employee_id: uuid.UUID,
) -> AdminAcknowledgementListResponse:
    await get_employee_or_404(session, employee_id)
    locks = await AdminAcknowledgementRepository(session).list_by_employee(employee_id)
    items = [_build_admin_acknowledgement_response(lock) for lock in locks]
    return AdminAcknowledgementListResponse(items=items, total=len(items))
