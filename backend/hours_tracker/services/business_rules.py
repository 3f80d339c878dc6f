"""Validation rules for leave entries, month locks and carryover.

Every rule raises ``ValidationError`` with the offending field and a message
key from ``VALIDATION_MESSAGES``; callers never inspect return codes.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from hours_tracker.exceptions import ValidationError
from hours_tracker.models.enums import PtoType
from hours_tracker.services import calendar

if TYPE_CHECKING:
    from datetime import date

HOUR_INCREMENT = 4
CARRYOVER_LIMIT = 80.0

ANNUAL_LIMITS: dict[PtoType, float] = {
    PtoType.SICK: 24.0,
    PtoType.BEREAVEMENT: 16.0,
    PtoType.JURY_DUTY: 24.0,
}

_ANNUAL_LIMIT_KEYS: dict[PtoType, str] = {
    PtoType.SICK: "hours.exceed_annual_sick",
    PtoType.BEREAVEMENT: "hours.exceed_annual_bereavement",
    PtoType.JURY_DUTY: "hours.exceed_annual_jury_duty",
}

_LEGACY_TYPES = {"Full PTO": PtoType.PTO, "Partial PTO": PtoType.PTO}

VALIDATION_MESSAGES: dict[str, str] = {
    "hours.invalid": "Hours must be in 4-hour increments",
    "hours.not_integer": "Hours must be a whole number",
    "date.weekday": "Date must be a weekday (Monday to Friday)",
    "pto.duplicate": "A PTO entry of this type already exists for this employee on this date",
    "type.invalid": "Invalid PTO type",
    "date.invalid": "Invalid date format",
    "employee.not_found": "Employee not found",
    "entry.not_found": "PTO entry not found",
    "hours.exceed_annual_sick": "Sick time cannot exceed 24 hours annually",
    "hours.exceed_annual_bereavement": "Bereavement cannot exceed 16 hours (2 days) annually",
    "hours.exceed_annual_jury_duty": "Jury Duty cannot exceed 24 hours (3 days) annually",
    "hours.exceed_pto_balance": "PTO request exceeds available PTO balance",
    "date.future_limit": "Entries cannot be made into the next year",
    "month.locked": "This month was locked by {locked_by} on {locked_at} and is no longer editable",
    "month.already_acknowledged": "This month has already been acknowledged",
    "employee.not_acknowledged": "Employee must acknowledge this month before admin can lock it",
    "month.not_ended": "This month has not ended yet. Admin can lock starting {earliest_date}",
}


def _fail(field: str, message_key: str, **params: object) -> ValidationError:
    return ValidationError(VALIDATION_MESSAGES[message_key].format(**params), field=field, message_key=message_key)


# ---------------------------------------------------------------------------
# Entry rules
# ---------------------------------------------------------------------------


def validate_hours(hours: float, max_hours: float | None = None) -> None:
    """Hours must be a positive whole number in 4-hour increments, at most ``max_hours``."""
    if isinstance(hours, bool) or not math.isfinite(hours) or hours != int(hours):
        raise _fail("hours", "hours.not_integer")
    if hours <= 0 or int(hours) % HOUR_INCREMENT != 0:
        raise _fail("hours", "hours.invalid")
    if max_hours is not None and hours > max_hours:
        raise _fail("hours", "hours.invalid")


def validate_weekday(value: calendar.DateInput) -> None:
    if calendar.is_weekend(value):
        raise _fail("date", "date.weekday")


def normalize_pto_type(value: str) -> PtoType:
    """Map a type name, including the legacy PTO names, onto a bucket."""
    if value in _LEGACY_TYPES:
        return _LEGACY_TYPES[value]
    try:
        return PtoType(value)
    except ValueError:
        raise _fail("type", "type.invalid") from None


def validate_date_future_limit(value: calendar.DateInput, today: date | None = None) -> None:
    """Entries may not be dated in a later calendar year than today."""
    current = today or calendar.today()
    if calendar.to_calendar_date(value).year > current.year:
        raise _fail("date", "date.future_limit")


def validate_annual_limit(pto_type: PtoType, hours: float, used_this_year: float) -> None:
    """Sick, bereavement and jury duty are capped per calendar year; PTO is not."""
    limit = ANNUAL_LIMITS.get(pto_type)
    if limit is not None and used_this_year + hours > limit:
        raise _fail("hours", _ANNUAL_LIMIT_KEYS[pto_type])


def validate_not_duplicate(exists: bool) -> None:
    if exists:
        raise _fail("date", "pto.duplicate")


def validate_pto_balance(hours: float, available: float) -> None:
    if hours > available:
        raise _fail("hours", "hours.exceed_pto_balance")


# ---------------------------------------------------------------------------
# Month locks
# ---------------------------------------------------------------------------


def validate_month_editable(locked_by: str | None, locked_at: str | None = None) -> None:
    """Raise when an admin has locked the month; ``locked_by`` None means unlocked."""
    if locked_by is not None:
        raise _fail("date", "month.locked", locked_by=locked_by, locked_at=locked_at or "an earlier date")


def validate_month_not_acknowledged(acknowledged: bool) -> None:
    if acknowledged:
        raise _fail("month", "month.already_acknowledged")


def get_earliest_admin_lock_date(month: str) -> date:
    return calendar.first_day_of_next_month(month)


def validate_admin_can_lock_month(month: str, employee_acknowledged: bool, today: date | None = None) -> None:
    """A month can be locked once it has ended and the employee acknowledged it."""
    earliest = get_earliest_admin_lock_date(month)
    if (today or calendar.today()) < earliest:
        raise _fail("month", "month.not_ended", earliest_date=earliest.isoformat())
    if not employee_acknowledged:
        raise _fail("month", "employee.not_acknowledged")


# ---------------------------------------------------------------------------
# Carryover
# ---------------------------------------------------------------------------


def compute_carryover(prior_year_balance: float, limit: float = CARRYOVER_LIMIT) -> float:
    """Unused hours carried into the next year: never negative, capped at ``limit``."""
    return min(max(0.0, prior_year_balance), limit)
