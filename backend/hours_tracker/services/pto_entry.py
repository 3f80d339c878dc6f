from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from hours_tracker.config import get_settings
from hours_tracker.exceptions import AppError
from hours_tracker.models.enums import AuditAction, PtoType
from hours_tracker.models.pto_entry import PtoEntry
from hours_tracker.repositories import AdminAcknowledgementRepository, EmployeeRepository, PtoEntryRepository
from hours_tracker.schemas.pto_entry import PtoEntryListResponse, PtoEntryResponse, PtoRangeResponse
from hours_tracker.services import business_rules, calendar
from hours_tracker.services.audit import model_to_audit_dict, record_change
from hours_tracker.services.buckets import DateRangeRequest, LeaveBucketCalculator
from hours_tracker.services.employee import get_employee_or_404
from hours_tracker.services.pto_status import get_remaining_pto

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hours_tracker.models.employee import Employee
    from hours_tracker.schemas.auth import AuthContext
    from hours_tracker.schemas.pto_entry import CreatePtoEntryRequest, CreatePtoRangeRequest, UpdatePtoEntryRequest

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_entry_response(entry: PtoEntry) -> PtoEntryResponse:
    """Map an entry model to its response schema."""
    return PtoEntryResponse(
        id=entry.id,
        employee_id=entry.employee_id,
        date=entry.date,
        type=entry.type,
        hours=entry.hours,
        approved_by=entry.approved_by,
        approved_at=entry.approved_at,
        created_at=entry.created_at,
    )


async def _get_entry_or_404(session: AsyncSession, auth: AuthContext, entry_id: uuid.UUID) -> PtoEntry:
    """Fetch an entry the caller may access. Raises 404 if not found."""
    entry = await PtoEntryRepository(session).find_by_id(entry_id)
    if entry is None:
        raise AppError("PTO entry not found", status_code=404)
    if not auth.can_access(entry.employee_id):
        raise AppError("Not allowed to access this employee's entries", status_code=403)
    return entry


async def ensure_month_editable(session: AsyncSession, employee_id: uuid.UUID, value: date) -> None:
    """Raise when an admin has locked the month containing ``value``."""
    lock = await AdminAcknowledgementRepository(session).find_for_month(employee_id, calendar.month_of(value))
    if lock is None:
        return
    admin = await EmployeeRepository(session).find_by_id(lock.admin_id)
    business_rules.validate_month_editable(
        locked_by=admin.name if admin is not None else str(lock.admin_id),
        locked_at=calendar.to_calendar_date(lock.acknowledged_at).isoformat(),
    )


async def _validate_entry_day(
    session: AsyncSession,
    employee_id: uuid.UUID,
    entry_date: date,
    pto_type: PtoType,
    exclude_id: uuid.UUID | None = None,
) -> None:
    """Rules that apply to each single day: weekday, year, lock, duplicate."""
    business_rules.validate_weekday(entry_date)
    business_rules.validate_date_future_limit(entry_date)
    await ensure_month_editable(session, employee_id, entry_date)

    duplicate = await PtoEntryRepository(session).find_duplicate(employee_id, entry_date, pto_type.value, exclude_id)
    business_rules.validate_not_duplicate(duplicate is not None)


async def _validate_bucket_capacity(
    session: AsyncSession,
    employee: Employee,
    pto_type: PtoType,
    hours_by_year: dict[int, float],
    replaced: PtoEntry | None = None,
) -> None:
    """Check annual limits (or the PTO balance) for each year the new hours land in.

    ``replaced`` is an existing entry being edited; its hours are released first.
    """
    repo = PtoEntryRepository(session)
    for year, hours in hours_by_year.items():
        released = 0.0
        if replaced is not None and replaced.date.year == year and replaced.type == pto_type.value:
            released = replaced.hours

        if pto_type is PtoType.PTO:
            available = await get_remaining_pto(session, employee, year)
            business_rules.validate_pto_balance(hours, available + released)
        else:
            entries = await repo.list_for_year(employee.id, year)
            used = sum(e.hours for e in entries if e.type == pto_type.value) - released
            business_rules.validate_annual_limit(pto_type, hours, used)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def create_entry(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    payload: CreatePtoEntryRequest,
) -> PtoEntryResponse:
    """Record a single day of leave.

    Flow:
    1. Normalise the type and validate hours (at most one working day)
    2. Weekday, future-year, month-lock and duplicate checks
    3. Annual limit (or PTO balance) for the entry's year
    4. Insert, audit, commit
    """
    employee = await get_employee_or_404(session, employee_id)
    pto_type = business_rules.normalize_pto_type(payload.type)
    business_rules.validate_hours(payload.hours, max_hours=get_settings().hours_per_day)
    await _validate_entry_day(session, employee_id, payload.date, pto_type)
    await _validate_bucket_capacity(session, employee, pto_type, {payload.date.year: payload.hours})

    entry = await PtoEntryRepository(session).save(
        PtoEntry(employee_id=employee_id, date=payload.date, type=pto_type.value, hours=payload.hours)
    )
    await record_change(session, auth.user_id, entry, AuditAction.CREATE)

    await session.commit()
    await session.refresh(entry)
    logger.info("Created %s entry %s for employee %s on %s", entry.type, entry.id, employee_id, entry.date)
    return _build_entry_response(entry)


async def create_range(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    payload: CreatePtoRangeRequest,
) -> PtoRangeResponse:
    """Expand a start date and total hours into one entry per weekday.

    Full days are filled first and any leftover lands on the last weekday.
    The request is all-or-nothing: any failing day rejects every day.
    """
    employee = await get_employee_or_404(session, employee_id)
    pto_type = business_rules.normalize_pto_type(payload.type)
    business_rules.validate_hours(payload.hours)

    calculator = LeaveBucketCalculator(hours_per_day=get_settings().hours_per_day)
    request = DateRangeRequest(start=payload.start, hours=payload.hours, hours_per_day=calculator.hours_per_day)
    planned = calculator.plan_usage(request)

    hours_by_year: dict[int, float] = {}
    for usage in planned:
        await _validate_entry_day(session, employee_id, usage.date, pto_type)
        hours_by_year[usage.date.year] = hours_by_year.get(usage.date.year, 0.0) + usage.hours
    await _validate_bucket_capacity(session, employee, pto_type, hours_by_year)

    repo = PtoEntryRepository(session)
    entries = []
    for usage in planned:
        entry = await repo.save(PtoEntry(employee_id=employee_id, date=usage.date, type=pto_type.value, hours=usage.hours))
        await record_change(session, auth.user_id, entry, AuditAction.CREATE)
        entries.append(entry)

    await session.commit()
    for entry in entries:
        await session.refresh(entry)

    end = calculator.end_date(request)
    logger.info(
        "Created %d %s entries for employee %s from %s to %s", len(entries), pto_type.value, employee_id, payload.start, end
    )
    return PtoRangeResponse(
        start=payload.start,
        end=end,
        items=[_build_entry_response(e) for e in entries],
        total_hours=sum(e.hours for e in entries),
    )


async def list_entries(
    session: AsyncSession,
    employee_id: uuid.UUID,
    start: date | None = None,
    end: date | None = None,
) -> PtoEntryListResponse:
    await get_employee_or_404(session, employee_id)
    entries = await PtoEntryRepository(session).list_by_employee(employee_id, start, end)
    items = [_build_entry_response(e) for e in entries]
    return PtoEntryListResponse(items=items, total=len(items))


async def list_review_queue(session: AsyncSession, pending: bool = True) -> PtoEntryListResponse:
    """Entries across all employees; only those awaiting approval when ``pending``."""
    repo = PtoEntryRepository(session)
    entries = await (repo.list_pending() if pending else repo.list_all())
    items = [_build_entry_response(e) for e in entries]
    return PtoEntryListResponse(items=items, total=len(items))


async def update_entry(
    session: AsyncSession,
    auth: AuthContext,
    entry_id: uuid.UUID,
    payload: UpdatePtoEntryRequest,
) -> PtoEntryResponse:
    """Edit an entry. Any change clears a previous approval."""
    entry = await _get_entry_or_404(session, auth, entry_id)
    employee = await get_employee_or_404(session, entry.employee_id)

    new_date = payload.date or entry.date
    new_type = business_rules.normalize_pto_type(payload.type) if payload.type is not None else PtoType(entry.type)
    new_hours = payload.hours if payload.hours is not None else entry.hours
    if (new_date, new_type.value, new_hours) == (entry.date, entry.type, entry.hours):
        return _build_entry_response(entry)

    business_rules.validate_hours(new_hours, max_hours=get_settings().hours_per_day)
    await ensure_month_editable(session, entry.employee_id, entry.date)
    await _validate_entry_day(session, entry.employee_id, new_date, new_type, exclude_id=entry.id)
    await _validate_bucket_capacity(session, employee, new_type, {new_date.year: new_hours}, replaced=entry)

    before_dict = model_to_audit_dict(entry)
    entry.date = new_date
    entry.type = new_type.value
    entry.hours = new_hours
    entry.approved_by = None
    entry.approved_at = None
    await PtoEntryRepository(session).save(entry)
    await record_change(session, auth.user_id, entry, AuditAction.UPDATE, before=before_dict)

    await session.commit()
    await session.refresh(entry)
    logger.info("Updated entry %s for employee %s", entry.id, entry.employee_id)
    return _build_entry_response(entry)


async def delete_entry(session: AsyncSession, auth: AuthContext, entry_id: uuid.UUID) -> None:
    entry = await _get_entry_or_404(session, auth, entry_id)
    await ensure_month_editable(session, entry.employee_id, entry.date)

    before_dict = model_to_audit_dict(entry)
    await record_change(session, auth.user_id, entry, AuditAction.DELETE, before=before_dict)
    await PtoEntryRepository(session).delete(entry)

    await session.commit()
    logger.info("Deleted entry %s for employee %s", entry_id, entry.employee_id)


async def approve_entry(session: AsyncSession, auth: AuthContext, entry_id: uuid.UUID) -> PtoEntryResponse:
    """Mark an entry as reviewed by the calling admin."""
    entry = await _get_entry_or_404(session, auth, entry_id)
    if entry.approved_by is not None:
        raise AppError("Entry is already approved", status_code=400)

    before_dict = model_to_audit_dict(entry)
    entry.approved_by = auth.user_id
    entry.approved_at = datetime.now(UTC)
    await PtoEntryRepository(session).save(entry)
    await record_change(session, auth.user_id, entry, AuditAction.APPROVE, before=before_dict)

    await session.commit()
    await session.refresh(entry)
    logger.info("Approved entry %s by %s", entry.id, auth.user_id)
    return _build_entry_response(entry)
