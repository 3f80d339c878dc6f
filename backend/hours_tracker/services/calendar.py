"""Calendar-date arithmetic shared by leave accounting, validation and the API.

All functions work on ``datetime.date`` values. Anything carrying a time of day
is normalised to its calendar date first, so results never depend on the
server's local time zone. The only clock read is ``today()``.
"""

from __future__ import annotations

import calendar
import math
import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from hours_tracker.config import get_settings
from hours_tracker.exceptions import ValidationError

DateInput = date | datetime | str

SATURDAY = 5
SUNDAY = 6

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_US_SHORT_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2})$")
_US_LONG_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_MONTH = re.compile(r"^(\d{4})-(\d{2})$")

_ONE_DAY = timedelta(days=1)

_time_travel_day: date | None = None
_time_travel_year: int | None = None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _build_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def smart_parse_date(value: str) -> date | None:
    """Parse ``YYYY-MM-DD``, ``M/D/YY`` or ``M/D/YYYY``; None when nothing matches.

    Two-digit years 00-49 map to 2000-2049 and 50-99 to 1950-1999.
    """
    text = value.strip()

    if match := _ISO_DATE.match(text):
        return _build_date(int(match[1]), int(match[2]), int(match[3]))

    if match := _US_SHORT_DATE.match(text):
        year = int(match[3])
        year = 2000 + year if year < 50 else 1900 + year
        return _build_date(year, int(match[1]), int(match[2]))

    if match := _US_LONG_DATE.match(text):
        return _build_date(int(match[3]), int(match[1]), int(match[2]))

    return None


def is_valid_date_string(value: str) -> bool:
    """Return True for a real calendar date in strict ``YYYY-MM-DD`` form."""
    if not isinstance(value, str):
        return False
    match = _ISO_DATE.match(value)
    return match is not None and _build_date(int(match[1]), int(match[2]), int(match[3])) is not None


def to_calendar_date(value: DateInput) -> date:
    """Normalise a date, datetime or date string to a midnight-free ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        parsed = smart_parse_date(value)
        if parsed is None:
            raise ValidationError(f"Invalid date: {value!r}", field="date", message_key="date.invalid")
        return parsed
    raise ValidationError(f"Invalid date: {value!r}", field="date", message_key="date.invalid")


def parse_month(value: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` month key into (year, month)."""
    match = _MONTH.match(value) if isinstance(value, str) else None
    if match is None or not 1 <= int(match[2]) <= 12:
        raise ValidationError(f"Invalid month: {value!r}", field="month", message_key="month.invalid")
    return int(match[1]), int(match[2])


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_of(value: DateInput) -> str:
    """Return the ``YYYY-MM`` key of the month containing ``value``."""
    day = to_calendar_date(value)
    return format_month(day.year, day.month)


# ---------------------------------------------------------------------------
# Day arithmetic
# ---------------------------------------------------------------------------


def is_weekend(value: DateInput) -> bool:
    return to_calendar_date(value).weekday() in (SATURDAY, SUNDAY)


def _out_of_range(day: date) -> ValidationError:
    return ValidationError(
        f"Date arithmetic from {day} leaves the supported range", field="date", message_key="date.invalid"
    )


def add_days(value: DateInput, days: int) -> date:
    day = to_calendar_date(value)
    try:
        return day + timedelta(days=days)
    except OverflowError as exc:
        raise _out_of_range(day) from exc


def get_weekdays_between(start: DateInput, end: DateInput) -> list[date]:
    """List every Monday-Friday date from ``start`` to ``end`` inclusive.

    Returns an empty list when ``start`` is after ``end``.
    """
    first = to_calendar_date(start)
    last = to_calendar_date(end)

    days = (first + timedelta(days=offset) for offset in range((last - first).days + 1))
    return [day for day in days if day.weekday() < SATURDAY]


def count_weekdays_between(start: DateInput, end: DateInput) -> int:
    return len(get_weekdays_between(start, end))


def get_next_business_day(value: DateInput) -> date:
    """Return ``value`` itself on a weekday, otherwise the following Monday."""
    current = to_calendar_date(value)
    if current.weekday() >= SATURDAY:
        current = add_days(current, 7 - current.weekday())
    return current


def calculate_end_date_from_hours(start: DateInput, hours: float, hours_per_day: float = 8.0) -> date:
    """Walk forward from ``start`` consuming ``hours_per_day`` on each weekday.

    Weekends consume nothing. A leftover fraction of a day still occupies one
    more weekday, so ``ceil(hours / hours_per_day)`` weekdays are used, counting
    ``start`` when it is a weekday. Returns the date the last hour lands on.
    """
    start_date = to_calendar_date(start)
    if not math.isfinite(hours):
        raise ValidationError("Hours must be a finite number", field="hours", message_key="hours.invalid")
    if not math.isfinite(hours_per_day) or hours_per_day <= 0:
        raise ValidationError("Hours per day must be positive", field="hours_per_day", message_key="hours.invalid")

    if hours <= 0:
        return start_date

    # Whole weeks hold five working days; only the leftover days are walked.
    days_needed = math.ceil(hours / hours_per_day)
    weeks, extra_days = divmod(days_needed - 1, 5)
    current = add_days(get_next_business_day(start_date), weeks * 7)
    for _ in range(extra_days):
        current = get_next_business_day(add_days(current, 1))
    return current


def get_day_name(value: DateInput) -> str:
    return DAY_NAMES[to_calendar_date(value).weekday()]


# ---------------------------------------------------------------------------
# Month helpers
# ---------------------------------------------------------------------------


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def start_of_month(value: DateInput) -> date:
    return to_calendar_date(value).replace(day=1)


def end_of_month(value: DateInput) -> date:
    day = to_calendar_date(value)
    return day.replace(day=days_in_month(day.year, day.month))


def work_days_in_month(year: int, month: int) -> int:
    """Count Monday-Friday days in a month (holidays are not excluded)."""
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}. Must be 1-12.", field="month", message_key="month.invalid")
    first = date(year, month, 1)
    return count_weekdays_between(first, end_of_month(first))


def get_prior_month(value: DateInput) -> str:
    """Return the ``YYYY-MM`` key for the month before the one containing ``value``."""
    first = start_of_month(value)
    return month_of(first - _ONE_DAY)


def first_day_of_next_month(month: str) -> date:
    year, month_number = parse_month(month)
    return end_of_month(date(year, month_number, 1)) + _ONE_DAY


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


def set_time_travel_day(value: date | None) -> None:
    """Pin ``today()`` to a fixed date for developer testing. None disables it."""
    global _time_travel_day, _time_travel_year
    if value is not None and not 2000 <= value.year <= 2099:
        raise ValidationError(
            f"Invalid time-travel date year: {value.year}. Must be between 2000 and 2099.",
            field="date",
            message_key="date.invalid",
        )
    _time_travel_day = value
    _time_travel_year = None


def set_time_travel_year(year: int | None) -> None:
    """Replace only the year returned by ``today()``. None disables it."""
    global _time_travel_day, _time_travel_year
    if year is not None and not 2000 <= year <= 2099:
        raise ValidationError(
            f"Invalid time-travel year: {year}. Must be between 2000 and 2099.",
            field="year",
            message_key="date.invalid",
        )
    _time_travel_year = year
    _time_travel_day = None


def get_time_travel_day() -> date | None:
    return _time_travel_day


def today() -> date:
    """Return the current calendar date in the configured time zone."""
    settings = get_settings()
    if _time_travel_day is not None:
        return _time_travel_day
    if settings.time_travel_date is not None:
        return settings.time_travel_date

    now = datetime.now(ZoneInfo(settings.timezone)).date()
    if _time_travel_year is None:
        return now
    # Feb 29 clamps to Feb 28 when the override year is not a leap year.
    return now.replace(year=_time_travel_year, day=min(now.day, days_in_month(_time_travel_year, now.month)))
