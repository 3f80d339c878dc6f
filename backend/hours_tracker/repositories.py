# ruff: noqa: TC003
"""Persistence interfaces for the table models.

Services talk to these repositories instead of issuing queries against the
entities directly. ``save`` only flushes; committing stays with the caller so a
mutation and its audit row land in one transaction.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from sqlalchemy import select
from sqlmodel import SQLModel, col

from hours_tracker.models.acknowledgement import Acknowledgement, AdminAcknowledgement
from hours_tracker.models.employee import Employee
from hours_tracker.models.monthly_hours import MonthlyHours
from hours_tracker.models.pto_entry import PtoEntry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT", bound=SQLModel)


@runtime_checkable
class Repository(Protocol[ModelT]):
    """Interface shared by every repository."""

    async def find_by_id(self, entity_id: uuid.UUID) -> ModelT | None:
        """Fetch an entity. Returns None if not found."""
        ...

    async def save(self, entity: ModelT) -> ModelT:
        """Insert or update an entity and flush it."""
        ...

    async def delete(self, entity: ModelT) -> None:
        """Remove an entity."""
        ...


@runtime_checkable
class EmployeeOwnedRepository(Repository[ModelT], Protocol[ModelT]):
    """Interface for entities that belong to a single employee."""

    async def list_by_employee(self, employee_id: uuid.UUID) -> Sequence[ModelT]:
        """List an employee's entities."""
        ...


# ---------------------------------------------------------------------------
# SQL implementations
# ---------------------------------------------------------------------------


class SqlRepository(Generic[ModelT]):
    """Repository over an async SQLAlchemy session."""

    model: ClassVar[type[SQLModel]]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, entity_id: uuid.UUID) -> ModelT | None:
        return await self.session.get(self.model, entity_id)  # ty: ignore[invalid-return-type]

    async def save(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()


class EmployeeRepository(SqlRepository[Employee]):
    model = Employee

    async def find_by_identifier(self, identifier: str) -> Employee | None:
        result = await self.session.execute(select(Employee).where(col(Employee.identifier) == identifier))
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[Employee]:
        result = await self.session.execute(select(Employee).order_by(col(Employee.name)))
        return result.scalars().all()


class PtoEntryRepository(SqlRepository[PtoEntry]):
    model = PtoEntry

    async def list_by_employee(
        self,
        employee_id: uuid.UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> Sequence[PtoEntry]:
        """List an employee's entries by date, optionally within ``[start, end]``."""
        query = select(PtoEntry).where(col(PtoEntry.employee_id) == employee_id)
        if start is not None:
            query = query.where(col(PtoEntry.date) >= start)
        if end is not None:
            query = query.where(col(PtoEntry.date) <= end)
        result = await self.session.execute(query.order_by(col(PtoEntry.date), col(PtoEntry.type)))
        return result.scalars().all()

    async def list_for_year(self, employee_id: uuid.UUID, year: int) -> Sequence[PtoEntry]:
        return await self.list_by_employee(employee_id, date(year, 1, 1), date(year, 12, 31))

    async def find_duplicate(
        self,
        employee_id: uuid.UUID,
        entry_date: date,
        entry_type: str,
        exclude_id: uuid.UUID | None = None,
    ) -> PtoEntry | None:
        query = select(PtoEntry).where(
            col(PtoEntry.employee_id) == employee_id,
            col(PtoEntry.date) == entry_date,
            col(PtoEntry.type) == entry_type,
        )
        if exclude_id is not None:
            query = query.where(col(PtoEntry.id) != exclude_id)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def list_all(self) -> Sequence[PtoEntry]:
        result = await self.session.execute(select(PtoEntry).order_by(col(PtoEntry.date)))
        return result.scalars().all()

    async def list_pending(self) -> Sequence[PtoEntry]:
        """Entries no admin has approved yet, oldest date first."""
        result = await self.session.execute(
            select(PtoEntry).where(col(PtoEntry.approved_by).is_(None)).order_by(col(PtoEntry.date))
        )
        return result.scalars().all()


class MonthlyHoursRepository(SqlRepository[MonthlyHours]):
    model = MonthlyHours

    async def list_by_employee(self, employee_id: uuid.UUID) -> Sequence[MonthlyHours]:
        result = await self.session.execute(
            select(MonthlyHours).where(col(MonthlyHours.employee_id) == employee_id).order_by(col(MonthlyHours.month))
        )
        return result.scalars().all()

    async def find_for_month(self, employee_id: uuid.UUID, month: str) -> MonthlyHours | None:
        result = await self.session.execute(
            select(MonthlyHours).where(
                col(MonthlyHours.employee_id) == employee_id,
                col(MonthlyHours.month) == month,
            )
        )
        return result.scalar_one_or_none()


class AcknowledgementRepository(SqlRepository[Acknowledgement]):
    model = Acknowledgement

    async def list_by_employee(self, employee_id: uuid.UUID) -> Sequence[Acknowledgement]:
        result = await self.session.execute(
            select(Acknowledgement)
            .where(col(Acknowledgement.employee_id) == employee_id)
            .order_by(col(Acknowledgement.month))
        )
        return result.scalars().all()

    async def find_for_month(self, employee_id: uuid.UUID, month: str) -> Acknowledgement | None:
        result = await self.session.execute(
            select(Acknowledgement).where(
                col(Acknowledgement.employee_id) == employee_id,
                col(Acknowledgement.month) == month,
            )
        )
        return result.scalar_one_or_none()


class AdminAcknowledgementRepository(SqlRepository[AdminAcknowledgement]):
    model = AdminAcknowledgement

    async def list_by_employee(self, employee_id: uuid.UUID) -> Sequence[AdminAcknowledgement]:
        result = await self.session.execute(
            select(AdminAcknowledgement)
            .where(col(AdminAcknowledgement.employee_id) == employee_id)
            .order_by(col(AdminAcknowledgement.month))
        )
        return result.scalars().all()

    async def find_for_month(self, employee_id: uuid.UUID, month: str) -> AdminAcknowledgement | None:
        result = await self.session.execute(
            select(AdminAcknowledgement).where(
                col(AdminAcknowledgement.employee_id) == employee_id,
                col(AdminAcknowledgement.month) == month,
            )
        )
        return result.scalar_one_or_none()
