from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from hours_tracker.config import get_settings
from hours_tracker.exceptions import AppError
from hours_tracker.models.enums import AuditAction, PtoType
from hours_tracker.repositories import EmployeeRepository, PtoEntryRepository
from hours_tracker.schemas.status import (
    CarryoverResult,
    MonthlyAccrualResponse,
    PtoStatusResponse,
    TimeBucketResponse,
    YearEndResponse,
)
from hours_tracker.services import calendar
from hours_tracker.services.audit import model_to_audit_dict, record_change
from hours_tracker.services.business_rules import ANNUAL_LIMITS, compute_carryover
from hours_tracker.services.buckets import LeaveBucketCalculator, TimeBucketData, UsageEntry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from hours_tracker.models.employee import Employee
    from hours_tracker.models.pto_entry import PtoEntry
    from hours_tracker.schemas.auth import AuthContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PtoStatus:
    """Buckets and allocation for one employee and year."""

    year: int
    annual_allocation: float
    buckets: dict[PtoType, TimeBucketData]
    monthly_accruals: list[tuple[int, int, float]]


def _calculator() -> LeaveBucketCalculator:
    return LeaveBucketCalculator(hours_per_day=get_settings().hours_per_day)


# ---------------------------------------------------------------------------
# Pure calculations
# ---------------------------------------------------------------------------


def annual_allocation(pto_rate: float, hire_date: date, year: int) -> float:
    """PTO earned over a calendar year: ``pto_rate`` per weekday from hire (or Jan 1) to Dec 31."""
    if year < hire_date.year:
        return 0.0
    start = max(hire_date, date(year, 1, 1))
    return round(pto_rate * calendar.count_weekdays_between(start, date(year, 12, 31)), 2)


def monthly_accruals(pto_rate: float, hire_date: date, year: int) -> list[tuple[int, int, float]]:
    """(month, work days, hours) for each month that accrues PTO in ``year``."""
    if year < hire_date.year:
        return []
    first_month = hire_date.month if year == hire_date.year else 1
    accruals = []
    for month in range(first_month, 13):
        work_days = calendar.work_days_in_month(year, month)
        accruals.append((month, work_days, round(pto_rate * work_days, 2)))
    return accruals


def _usage_by_type(entries: Iterable[PtoEntry]) -> dict[PtoType, list[UsageEntry]]:
    usage: dict[PtoType, list[UsageEntry]] = {pto_type: [] for pto_type in PtoType}
    for entry in entries:
        usage[PtoType(entry.type)].append(UsageEntry(date=entry.date, hours=entry.hours))
    return usage


def carryover_for_year(employee: Employee, year: int) -> float:
    """Carryover counted towards ``year``'s PTO bucket.

    A balance written by year-end processing belongs to that year only; a
    manually set balance (no ``carryover_year``) applies to any year.
    """
    if employee.carryover_year is None or employee.carryover_year == year:
        return employee.carryover_hours
    return 0.0


def calculate_pto_status(employee: Employee, entries: Iterable[PtoEntry], year: int) -> PtoStatus:
    """Build the four leave buckets for ``year`` from an employee's entries.

    PTO is allowed the year's allocation plus that year's carryover; the other
    buckets use their fixed annual limits. Buckets are reported as they stand,
    so one left overdrawn by a later change to the employee (a lower rate or
    carryover, a moved hire date) is returned with ``used > allowed`` instead
    of hiding the others.
    """
    calculator = _calculator()
    allocation = annual_allocation(employee.pto_rate, employee.hire_date, year)
    allowed = {pto_type: ANNUAL_LIMITS.get(pto_type, 0.0) for pto_type in PtoType}
    allowed[PtoType.PTO] = allocation + carryover_for_year(employee, year)

    usage = _usage_by_type(entries)
    buckets = {
        pto_type: calculator.bucket_from_usage(allowed[pto_type], usage[pto_type], year=year) for pto_type in PtoType
    }
    return PtoStatus(
        year=year,
        annual_allocation=allocation,
        buckets=buckets,
        monthly_accruals=monthly_accruals(employee.pto_rate, employee.hire_date, year),
    )


def calculate_year_end_carryover(employee: Employee, entries: Iterable[PtoEntry], year: int) -> float:
    """Hours of unused PTO from ``year`` carried into the next year."""
    start_balance = annual_allocation(employee.pto_rate, employee.hire_date, year) + carryover_for_year(employee, year)
    used = sum(entry.hours for entry in entries if entry.type == PtoType.PTO and entry.date.year == year)
    return compute_carryover(start_balance - used)


def _bucket_response(bucket: TimeBucketData) -> TimeBucketResponse:
    balance = bucket.allowed - bucket.used
    return TimeBucketResponse(
        allowed=bucket.allowed,
        used=bucket.used,
        remaining=max(balance, 0.0),
        overdrawn_hours=max(-balance, 0.0),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def get_pto_status(session: AsyncSession, employee_id: uuid.UUID, year: int | None = None) -> PtoStatusResponse:
    """Return an employee's buckets for ``year`` (default: the current year)."""
    employee = await EmployeeRepository(session).find_by_id(employee_id)
    if employee is None:
        raise AppError("Employee not found", status_code=404)

    today = calendar.today()
    target_year = year or today.year
    entries = await PtoEntryRepository(session).list_for_year(employee_id, target_year)
    status = calculate_pto_status(employee, entries, target_year)

    return PtoStatusResponse(
        employee_id=employee.id,
        year=target_year,
        hire_date=employee.hire_date,
        pto_rate=employee.pto_rate,
        carryover_hours=carryover_for_year(employee, target_year),
        annual_allocation=status.annual_allocation,
        next_business_day=calendar.get_next_business_day(today),
        pto=_bucket_response(status.buckets[PtoType.PTO]),
        sick=_bucket_response(status.buckets[PtoType.SICK]),
        bereavement=_bucket_response(status.buckets[PtoType.BEREAVEMENT]),
        jury_duty=_bucket_response(status.buckets[PtoType.JURY_DUTY]),
        monthly_accruals=[
            MonthlyAccrualResponse(month=month, work_days=work_days, hours=hours)
            for month, work_days, hours in status.monthly_accruals
        ],
    )


async def get_remaining_pto(session: AsyncSession, employee: Employee, year: int) -> float:
    """PTO hours still available in ``year``; an overdrawn bucket has none."""
    entries = await PtoEntryRepository(session).list_for_year(employee.id, year)
    pto = calculate_pto_status(employee, entries, year).buckets[PtoType.PTO]
    if pto.used > pto.allowed:
        return 0.0
    return _calculator().remaining(pto)


async def process_year_end(session: AsyncSession, auth: AuthContext, year: int) -> YearEndResponse:
    """Write each employee's carryover from ``year - 1`` into the new ``year``.

    Employees whose carryover was already written for ``year`` are skipped,
    so repeating a run leaves balances unchanged.
    """
    prior_year = year - 1
    employees = await EmployeeRepository(session).list_all()
    entries_repo = PtoEntryRepository(session)

    results: list[CarryoverResult] = []
    skipped = 0
    for employee in employees:
        if employee.carryover_year is not None and employee.carryover_year >= year:
            skipped += 1
            continue
        entries = await entries_repo.list_for_year(employee.id, prior_year)
        carryover = calculate_year_end_carryover(employee, entries, prior_year)
        before = model_to_audit_dict(employee)
        previous = employee.carryover_hours
        employee.carryover_hours = carryover
        employee.carryover_year = year
        session.add(employee)
        await session.flush()

        await record_change(session, auth.user_id, employee, AuditAction.CARRYOVER, before=before)
        results.append(CarryoverResult(employee_id=employee.id, previous_carryover=previous, carryover_hours=carryover))

    await session.commit()
    logger.info("Year-end carryover into %d written for %d employees (%d already done)", year, len(results), skipped)
    return YearEndResponse(year=year, items=results, total=len(results), skipped=skipped)
