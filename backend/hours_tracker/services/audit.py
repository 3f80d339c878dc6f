from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from hours_tracker.models.acknowledgement import Acknowledgement, AdminAcknowledgement
from hours_tracker.models.audit import AuditLog
from hours_tracker.models.employee import Employee
from hours_tracker.models.enums import AuditAction, AuditEntityType
from hours_tracker.models.monthly_hours import MonthlyHours
from hours_tracker.models.pto_entry import PtoEntry

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlmodel import SQLModel

ENTITY_TYPES: dict[type[SQLModel], AuditEntityType] = {
    Employee: AuditEntityType.EMPLOYEE,
    PtoEntry: AuditEntityType.PTO_ENTRY,
    MonthlyHours: AuditEntityType.MONTHLY_HOURS,
    Acknowledgement: AuditEntityType.ACKNOWLEDGEMENT,
    AdminAcknowledgement: AuditEntityType.ADMIN_ACKNOWLEDGEMENT,
}


def model_to_audit_dict(model: SQLModel) -> dict[str, Any]:
    """Snapshot a row as JSON-safe values: ids as strings, dates in ISO form."""
    snapshot: dict[str, Any] = {}
    for key, value in model.model_dump().items():
        if isinstance(value, uuid.UUID):
            value = str(value)
        elif isinstance(value, (datetime, date)):
            value = value.isoformat()
        snapshot[key] = value
    return snapshot


async def write_audit_log(
    session: AsyncSession,
    *,
    actor_id: uuid.UUID,
    entity_type: AuditEntityType,
    entity_id: uuid.UUID,
    action: AuditAction,
    before_json: dict[str, Any] | None = None,
    after_json: dict[str, Any] | None = None,
) -> AuditLog:
    entry = AuditLog(
        actor_id=actor_id,
        entity_type=entity_type.value,
        entity_id=entity_id,
        action=action.value,
        before_json=before_json,
        after_json=after_json,
    )
    session.add(entry)
    return entry


async def record_change(
    session: AsyncSession,
    actor_id: uuid.UUID,
    entity: Employee | PtoEntry | MonthlyHours | Acknowledgement | AdminAcknowledgement,
    action: AuditAction,
    before: dict[str, Any] | None = None,
) -> AuditLog:
    """Audit a change to ``entity`` inside the caller's transaction.

    The after-image is taken from ``entity`` as it stands now, except for
    deletes, which only keep ``before``. The caller commits.
    """
    return await write_audit_log(
        session,
        actor_id=actor_id,
        entity_type=ENTITY_TYPES[type(entity)],
        entity_id=entity.id,
        action=action,
        before_json=before,
        after_json=None if action is AuditAction.DELETE else model_to_audit_dict(entity),
    )
