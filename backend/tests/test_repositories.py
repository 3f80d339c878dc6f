"""Tests for the SQL repositories against an in-memory database."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

import pytest

from hours_tracker.models.acknowledgement import Acknowledgement, AdminAcknowledgement
from hours_tracker.models.employee import Employee
from hours_tracker.models.monthly_hours import MonthlyHours
from hours_tracker.models.pto_entry import PtoEntry
from hours_tracker.repositories import (
    AcknowledgementRepository,
    AdminAcknowledgementRepository,
    EmployeeOwnedRepository,
    EmployeeRepository,
    MonthlyHoursRepository,
    PtoEntryRepository,
    Repository,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
async def employee(db_session: AsyncSession) -> Employee:
    employee = Employee(name="John Doe", identifier="john.doe@example.com", hire_date=date(2020, 1, 15))
    await EmployeeRepository(db_session).save(employee)
    await db_session.commit()
    return employee


async def _add_entries(session: AsyncSession, employee: Employee, *days: date, pto_type: str = "PTO") -> list[PtoEntry]:
    repo = PtoEntryRepository(session)
    entries = [await repo.save(PtoEntry(employee_id=employee.id, date=day, type=pto_type, hours=8)) for day in days]
    await session.commit()
    return entries


async def test_repositories_satisfy_protocols(db_session: AsyncSession) -> None:
    assert isinstance(EmployeeRepository(db_session), Repository)
    assert not isinstance(EmployeeRepository(db_session), EmployeeOwnedRepository)
    for repo_class in (
        PtoEntryRepository,
        MonthlyHoursRepository,
        AcknowledgementRepository,
        AdminAcknowledgementRepository,
    ):
        assert isinstance(repo_class(db_session), EmployeeOwnedRepository)


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------


async def test_employee_find_by_id_and_identifier(db_session: AsyncSession, employee: Employee) -> None:
    repo = EmployeeRepository(db_session)
    assert await repo.find_by_id(employee.id) is employee
    assert await repo.find_by_identifier("john.doe@example.com") is employee
    assert await repo.find_by_id(uuid.uuid4()) is None
    assert await repo.find_by_identifier("nobody@example.com") is None


async def test_employee_list_all_by_name(db_session: AsyncSession, employee: Employee) -> None:
    repo = EmployeeRepository(db_session)
    await repo.save(Employee(name="Adam Brown", identifier="adam@example.com", hire_date=date(2021, 5, 3)))
    await db_session.commit()
    assert [e.name for e in await repo.list_all()] == ["Adam Brown", "John Doe"]


async def test_delete(db_session: AsyncSession, employee: Employee) -> None:
    repo = EmployeeRepository(db_session)
    await repo.delete(employee)
    await db_session.commit()
    assert await repo.find_by_id(employee.id) is None


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


async def test_entries_list_by_employee_in_range(db_session: AsyncSession, employee: Employee) -> None:
    await _add_entries(db_session, employee, date(2026, 3, 3), date(2025, 12, 1), date(2026, 2, 2))
    repo = PtoEntryRepository(db_session)

    assert [e.date for e in await repo.list_by_employee(employee.id)] == [
        date(2025, 12, 1),
        date(2026, 2, 2),
        date(2026, 3, 3),
    ]
    in_range = await repo.list_by_employee(employee.id, date(2026, 2, 1), date(2026, 2, 28))
    assert [e.date for e in in_range] == [date(2026, 2, 2)]
    assert len(await repo.list_for_year(employee.id, 2026)) == 2
    assert await repo.list_by_employee(uuid.uuid4()) == []


async def test_entries_find_duplicate(db_session: AsyncSession, employee: Employee) -> None:
    (entry,) = await _add_entries(db_session, employee, date(2026, 3, 2))
    repo = PtoEntryRepository(db_session)

    assert await repo.find_duplicate(employee.id, date(2026, 3, 2), "PTO") is entry
    assert await repo.find_duplicate(employee.id, date(2026, 3, 2), "Sick") is None
    assert await repo.find_duplicate(employee.id, date(2026, 3, 2), "PTO", exclude_id=entry.id) is None


async def test_entries_list_pending(db_session: AsyncSession, employee: Employee) -> None:
    first, second = await _add_entries(db_session, employee, date(2026, 3, 2), date(2026, 3, 3))
    first.approved_by = uuid.uuid4()
    first.approved_at = datetime.now(UTC)
    repo = PtoEntryRepository(db_session)
    await repo.save(first)
    await db_session.commit()

    assert await repo.list_pending() == [second]
    assert len(await repo.list_all()) == 2


# ---------------------------------------------------------------------------
# Monthly records
# ---------------------------------------------------------------------------


async def test_monthly_records_find_for_month(db_session: AsyncSession, employee: Employee) -> None:
    await MonthlyHoursRepository(db_session).save(
        MonthlyHours(employee_id=employee.id, month="2026-02", hours_worked=160)
    )
    await AcknowledgementRepository(db_session).save(
        Acknowledgement(employee_id=employee.id, month="2026-02", status="confirmed")
    )
    await AdminAcknowledgementRepository(db_session).save(
        AdminAcknowledgement(employee_id=employee.id, month="2026-02", admin_id=uuid.uuid4())
    )
    await db_session.commit()

    for repo in (
        MonthlyHoursRepository(db_session),
        AcknowledgementRepository(db_session),
        AdminAcknowledgementRepository(db_session),
    ):
        found = await repo.find_for_month(employee.id, "2026-02")
        assert found is not None
        assert found.month == "2026-02"
        assert await repo.find_for_month(employee.id, "2026-01") is None
        assert len(await repo.list_by_employee(employee.id)) == 1
