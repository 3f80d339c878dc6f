from __future__ import annotations

import datetime

from pydantic import BaseModel


class EndDateResponse(BaseModel):
    """The date on which the last requested hour is consumed."""

    start: datetime.date
    hours: float
    hours_per_day: float
    end: datetime.date
    end_day_name: str
    weekdays: int


class WeekdayResponse(BaseModel):
    date: datetime.date
    day_name: str


class WeekdayListResponse(BaseModel):
    items: list[WeekdayResponse]
    total: int
