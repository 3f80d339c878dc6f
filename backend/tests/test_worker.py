"""Tests for the scheduled year-end job."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

from hours_tracker import worker
from hours_tracker.models.employee import Employee
from hours_tracker.models.pto_entry import PtoEntry
from hours_tracker.repositories import EmployeeRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


@pytest.mark.parametrize(
    ("day", "expected"),
    [(date(2027, 1, 1), True), (date(2026, 12, 31), False), (date(2026, 1, 2), False), (date(2026, 3, 1), False)],
)
def test_is_year_end_day(day: date, expected: bool) -> None:
    assert worker.is_year_end_day(day) is expected


async def test_run_daily_jobs_skips_ordinary_days(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_database() -> None:
        raise AssertionError("database should not be touched")

    monkeypatch.setattr(worker, "get_session_factory", _no_database)
    assert await worker.run_daily_jobs(date(2026, 3, 16)) is False


async def test_run_daily_jobs_writes_carryover(monkeypatch: pytest.MonkeyPatch, engine: AsyncEngine) -> None:
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        employee = await EmployeeRepository(session).save(
            Employee(name="John Doe", identifier="john.doe@example.com", hire_date=date(2020, 1, 15))
        )
        await session.commit()

    monkeypatch.setattr(worker, "get_session_factory", lambda: factory)
    assert await worker.run_daily_jobs(date(2027, 1, 1)) is True

    async with factory() as session:
        refreshed = await EmployeeRepository(session).find_by_id(employee.id)
        assert refreshed is not None
        assert refreshed.carryover_hours == 80.0


async def test_run_daily_jobs_twice_keeps_first_carryover(
    monkeypatch: pytest.MonkeyPatch, engine: AsyncEngine
) -> None:
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        employee = await EmployeeRepository(session).save(
            Employee(
                name="Jane Smith",
                identifier="jane.smith@example.com",
                hire_date=date(2020, 1, 15),
                carryover_hours=40,
            )
        )
        session.add(PtoEntry(employee_id=employee.id, date=date(2026, 6, 1), type="PTO", hours=200))
        await session.commit()

    monkeypatch.setattr(worker, "get_session_factory", lambda: factory)
    await worker.run_daily_jobs(date(2027, 1, 1))
    await worker.run_daily_jobs(date(2027, 1, 1))

    async with factory() as session:
        refreshed = await EmployeeRepository(session).find_by_id(employee.id)
        assert refreshed is not None
        assert refreshed.carryover_hours == pytest.approx(25.31)
        assert refreshed.carryover_year == 2027


def test_seconds_until_next_day() -> None:
    now = datetime(2026, 3, 16, 23, 0, tzinfo=UTC)
    assert worker.seconds_until_next_day(now) == 3600 + worker.MIDNIGHT_SLACK_SECONDS


def test_seconds_until_next_day_across_dst_change() -> None:
    # Denver clocks go forward at 02:00 on 2026-03-08, so 01:00 is 22 hours from midnight.
    now = datetime(2026, 3, 8, 1, 0, tzinfo=ZoneInfo("America/Denver"))
    assert worker.seconds_until_next_day(now) == 22 * 3600 + worker.MIDNIGHT_SLACK_SECONDS
