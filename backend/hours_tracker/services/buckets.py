"""Leave-bucket accounting.

A bucket is one leave category (PTO, sick, bereavement, jury duty) with an
allowed-hours quota. Buckets, usage entries and date-range requests are frozen
value objects; the calculator never mutates them and always returns new values.

Overdrawn buckets (``used > allowed``) are rejected rather than clamped, so
``remaining == allowed - used`` holds for every bucket the calculator accepts.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from hours_tracker.exceptions import ValidationError
from hours_tracker.services import calendar

MAX_HOURS_PER_ENTRY = 24
DEFAULT_HOURS_PER_DAY = 8.0
# A full working year at eight hours a day; longer requests are rejected.
MAX_REQUEST_HOURS = 2080.0


def _check_number(value: float, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{field_name} must be a finite number", field=field_name, message_key="hours.invalid")


@dataclass(frozen=True)
class TimeBucketData:
    """Allowed, used and remaining hours for one leave bucket."""

    allowed: float
    used: float
    remaining: float | None = None

    def __post_init__(self) -> None:
        _check_number(self.allowed, "allowed")
        _check_number(self.used, "used")
        if self.remaining is None:
            object.__setattr__(self, "remaining", self.allowed - self.used)
            return
        _check_number(self.remaining, "remaining")
        if not math.isclose(self.remaining, self.allowed - self.used, abs_tol=1e-9):
            raise ValidationError(
                f"Remaining hours {self.remaining} do not match allowed {self.allowed} minus used {self.used}",
                field="remaining",
                message_key="bucket.inconsistent",
            )


@dataclass(frozen=True)
class UsageEntry:
    """Hours recorded against a bucket on a single date."""

    date: date
    hours: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", calendar.to_calendar_date(self.date))
        _check_number(self.hours, "hours")
        if self.hours <= 0 or self.hours > MAX_HOURS_PER_ENTRY:
            raise ValidationError(
                f"Hours must be greater than 0 and at most {MAX_HOURS_PER_ENTRY}",
                field="hours",
                message_key="hours.invalid",
            )


@dataclass(frozen=True)
class DateRangeRequest:
    """A time-off request expressed as a start date and a total number of hours."""

    start: date
    hours: float
    hours_per_day: float = DEFAULT_HOURS_PER_DAY

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", calendar.to_calendar_date(self.start))
        _check_number(self.hours, "hours")
        if self.hours > MAX_REQUEST_HOURS:
            raise ValidationError(
                f"Requests may cover at most {MAX_REQUEST_HOURS:g} hours",
                field="hours",
                message_key="hours.invalid",
            )
        _check_number(self.hours_per_day, "hours_per_day")
        if self.hours_per_day <= 0 or self.hours_per_day > MAX_HOURS_PER_ENTRY:
            raise ValidationError(
                f"Hours per day must be greater than 0 and at most {MAX_HOURS_PER_ENTRY}",
                field="hours_per_day",
                message_key="hours.invalid",
            )


@dataclass(frozen=True)
class LeaveBucketCalculator:
    """Balance and date-range arithmetic for leave buckets.

    Stateless apart from its configuration; safe to share between requests.
    """

    hours_per_day: float = DEFAULT_HOURS_PER_DAY

    # -- balances ------------------------------------------------------------

    def remaining(self, bucket: TimeBucketData) -> float:
        """Return ``allowed - used``; negative or overdrawn buckets are rejected."""
        if bucket.allowed < 0:
            raise ValidationError("Allowed hours cannot be negative", field="allowed", message_key="bucket.invalid")
        if bucket.used < 0:
            raise ValidationError("Used hours cannot be negative", field="used", message_key="bucket.invalid")
        if bucket.used > bucket.allowed:
            raise ValidationError(
                f"Used hours ({bucket.used}) exceed allowed hours ({bucket.allowed})",
                field="used",
                message_key="bucket.overdrawn",
            )
        return bucket.allowed - bucket.used

    def used_hours(self, entries: Iterable[UsageEntry], year: int | None = None) -> float:
        """Sum usage, optionally restricted to a calendar year."""
        return sum(entry.hours for entry in entries if year is None or entry.date.year == year)

    def bucket_from_usage(self, allowed: float, entries: Iterable[UsageEntry], year: int | None = None) -> TimeBucketData:
        """Bucket as recorded, overdrawn or not; ``remaining()`` gives the checked balance."""
        return TimeBucketData(allowed=allowed, used=self.used_hours(entries, year))

    def apply(self, bucket: TimeBucketData, entries: Iterable[UsageEntry]) -> TimeBucketData:
        """Return a new bucket with ``entries`` added to its usage."""
        updated = TimeBucketData(allowed=bucket.allowed, used=bucket.used + self.used_hours(entries))
        self.remaining(updated)
        return updated

    # -- dates ---------------------------------------------------------------

    def is_weekend(self, value: calendar.DateInput) -> bool:
        return calendar.is_weekend(value)

    def add_days(self, value: calendar.DateInput, days: int) -> date:
        return calendar.add_days(value, days)

    def get_weekdays_between(self, start: calendar.DateInput, end: calendar.DateInput) -> list[date]:
        return calendar.get_weekdays_between(start, end)

    def calculate_end_date_from_hours(
        self,
        start: calendar.DateInput,
        hours: float,
        hours_per_day: float | None = None,
    ) -> date:
        return calendar.calculate_end_date_from_hours(start, hours, self.hours_per_day if hours_per_day is None else hours_per_day)

    def get_day_name(self, value: calendar.DateInput) -> str:
        return calendar.get_day_name(value)

    def today(self) -> date:
        return calendar.today()

    # -- requests ------------------------------------------------------------

    def end_date(self, request: DateRangeRequest) -> date:
        return calendar.calculate_end_date_from_hours(request.start, request.hours, request.hours_per_day)

    def plan_usage(self, request: DateRangeRequest) -> list[UsageEntry]:
        """Spread a request over weekdays: full days first, the leftover on the last day."""
        if request.hours <= 0:
            return []

        end = self.end_date(request)
        entries: list[UsageEntry] = []
        left = float(request.hours)
        for day in calendar.get_weekdays_between(request.start, end):
            hours = min(left, request.hours_per_day)
            entries.append(UsageEntry(date=day, hours=hours))
            left -= hours
        return entries
