# ruff: noqa: B008
from __future__ import annotations

from fastapi import APIRouter, Query

from hours_tracker.api.deps import AuthDep
from hours_tracker.config import get_settings
from hours_tracker.schemas.calendar import EndDateResponse, WeekdayListResponse, WeekdayResponse
from hours_tracker.services import calendar
from hours_tracker.services.buckets import MAX_REQUEST_HOURS, LeaveBucketCalculator

calendar_router = APIRouter(prefix="/calendar", tags=["calendar"])


@calendar_router.get("/end-date", response_model=EndDateResponse)
async def get_end_date(
    auth: AuthDep,
    start: str = Query(description="YYYY-MM-DD, M/D/YY or M/D/YYYY"),
    hours: float = Query(le=MAX_REQUEST_HOURS),
    hours_per_day: float | None = Query(default=None, gt=0, le=24),
) -> EndDateResponse:
    """Date on which the last of ``hours`` is consumed, counting weekdays only."""
    calculator = LeaveBucketCalculator(hours_per_day=hours_per_day or get_settings().hours_per_day)
    start_date = calendar.to_calendar_date(start)
    end = calculator.calculate_end_date_from_hours(start_date, hours)
    return EndDateResponse(
        start=start_date,
        hours=hours,
        hours_per_day=calculator.hours_per_day,
        end=end,
        end_day_name=calculator.get_day_name(end),
        weekdays=len(calculator.get_weekdays_between(start_date, end)) if hours > 0 else 0,
    )


@calendar_router.get("/weekdays", response_model=WeekdayListResponse)
async def list_weekdays(
    auth: AuthDep,
    start: str = Query(),
    end: str = Query(),
) -> WeekdayListResponse:
    """Every weekday from ``start`` to ``end`` inclusive, with its name."""
    days = calendar.get_weekdays_between(calendar.to_calendar_date(start), calendar.to_calendar_date(end))
    items = [WeekdayResponse(date=day, day_name=calendar.get_day_name(day)) for day in days]
    return WeekdayListResponse(items=items, total=len(items))
