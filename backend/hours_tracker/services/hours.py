from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from hours_tracker.models.enums import AuditAction, PtoType
from hours_tracker.models.monthly_hours import MonthlyHours
from hours_tracker.repositories import (
    AcknowledgementRepository,
    AdminAcknowledgementRepository,
    MonthlyHoursRepository,
    PtoEntryRepository,
)
from hours_tracker.schemas.hours import MonthlyHoursListResponse, MonthlyHoursResponse, MonthlySummaryResponse
from hours_tracker.services import business_rules, calendar
from hours_tracker.services.audit import model_to_audit_dict, record_change
from hours_tracker.services.employee import get_employee_or_404
from hours_tracker.services.pto_entry import ensure_month_editable

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hours_tracker.schemas.auth import AuthContext
    from hours_tracker.schemas.hours import SubmitMonthlyHoursRequest

logger = logging.getLogger(__name__)


def _build_hours_response(record: MonthlyHours) -> MonthlyHoursResponse:
    return MonthlyHoursResponse(
        id=record.id,
        employee_id=record.employee_id,
        month=record.month,
        hours_worked=record.hours_worked,
        submitted_at=record.submitted_at,
    )


async def submit_monthly_hours(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    payload: SubmitMonthlyHoursRequest,
) -> MonthlyHoursResponse:
    """Create or replace the hours worked for a month; locked months are rejected."""
    await get_employee_or_404(session, employee_id)
    year, month = calendar.parse_month(payload.month)
    first_day = date(year, month, 1)
    business_rules.validate_date_future_limit(first_day)
    await ensure_month_editable(session, employee_id, first_day)

    repo = MonthlyHoursRepository(session)
    record = await repo.find_for_month(employee_id, payload.month)
    if record is None:
        record = MonthlyHours(employee_id=employee_id, month=payload.month, hours_worked=payload.hours_worked)
        action, before_dict = AuditAction.CREATE, None
    else:
        before_dict = model_to_audit_dict(record)
        record.hours_worked = payload.hours_worked
        record.submitted_at = datetime.now(UTC)
        action = AuditAction.UPDATE
    await repo.save(record)

    await record_change(session, auth.user_id, record, action, before=before_dict)

    await session.commit()
    await session.refresh(record)
    logger.info("Recorded %.1f hours for employee %s in %s", record.hours_worked, employee_id, record.month)
    return _build_hours_response(record)


async def list_monthly_hours(session: AsyncSession, employee_id: uuid.UUID) -> MonthlyHoursListResponse:
    await get_employee_or_404(session, employee_id)
    records = await MonthlyHoursRepository(session).list_by_employee(employee_id)
    items = [_build_hours_response(r) for r in records]
    return MonthlyHoursListResponse(items=items, total=len(items))


async def get_monthly_summary(session: AsyncSession, employee_id: uuid.UUID, month: str) -> MonthlySummaryResponse:
    """Hours worked, leave by type and acknowledgement state for one month."""
    await get_employee_or_404(session, employee_id)
    year, month_number = calendar.parse_month(month)
    first_day = date(year, month_number, 1)

    entries = await PtoEntryRepository(session).list_by_employee(
        employee_id, first_day, calendar.end_of_month(first_day)
    )
    usage_by_type = {pto_type.value: 0.0 for pto_type in PtoType}
    for entry in entries:
        usage_by_type[entry.type] = usage_by_type.get(entry.type, 0.0) + entry.hours

    record = await MonthlyHoursRepository(session).find_for_month(employee_id, month)
    acknowledgement = await AcknowledgementRepository(session).find_for_month(employee_id, month)
    lock = await AdminAcknowledgementRepository(session).find_for_month(employee_id, month)

    return MonthlySummaryResponse(
        employee_id=employee_id,
        month=month,
        work_days=calendar.work_days_in_month(year, month_number),
        hours_worked=record.hours_worked if record is not None else None,
        usage_by_type=usage_by_type,
        total_leave_hours=sum(usage_by_type.values()),
        acknowledged=acknowledgement is not None,
        locked=lock is not None,
    )
