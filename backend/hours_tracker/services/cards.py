from __future__ import annotations

from typing import TYPE_CHECKING

from hours_tracker.components.cards import BucketCard
from hours_tracker.exceptions import AppError
from hours_tracker.repositories import PtoEntryRepository
from hours_tracker.services import calendar
from hours_tracker.services.buckets import UsageEntry
from hours_tracker.services.employee import get_employee_or_404
from hours_tracker.services.pto_status import calculate_pto_status

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hours_tracker.components.registry import ComponentRegistry


async def render_bucket_card(
    session: AsyncSession,
    registry: ComponentRegistry,
    employee_id: uuid.UUID,
    tag: str,
    year: int | None = None,
    expanded: bool = False,
) -> str:
    """Mount the card registered under ``tag`` with an employee's bucket and return its HTML."""
    card = registry.create(tag)
    if not isinstance(card, BucketCard):
        raise AppError(f"Component {tag} is not a leave-bucket card", status_code=404)

    employee = await get_employee_or_404(session, employee_id)
    target_year = year or calendar.today().year
    entries = await PtoEntryRepository(session).list_for_year(employee_id, target_year)
    status = calculate_pto_status(employee, entries, target_year)

    typed = [e for e in entries if e.type == card.entry_type.value]
    html = card.mount(
        {
            "data": status.buckets[card.entry_type],
            "entries": [UsageEntry(date=e.date, hours=e.hours) for e in typed],
            "approved_dates": frozenset(e.date for e in typed if e.approved_by is not None),
            "expanded": expanded,
        }
    )
    card.unmount()
    return html
