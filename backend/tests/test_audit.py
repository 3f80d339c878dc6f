"""Tests for audit rows written by record_change."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from hours_tracker.models.acknowledgement import AdminAcknowledgement
from hours_tracker.models.enums import AuditAction
from hours_tracker.models.pto_entry import PtoEntry
from hours_tracker.services.audit import model_to_audit_dict, record_change

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

ACTOR_ID = uuid.uuid4()


async def test_record_change_takes_entity_type_from_model(db_session: AsyncSession) -> None:
    lock = AdminAcknowledgement(employee_id=uuid.uuid4(), month="2026-02", admin_id=ACTOR_ID)
    audit = await record_change(db_session, ACTOR_ID, lock, AuditAction.LOCK)
    assert audit.entity_type == "ADMIN_ACKNOWLEDGEMENT"
    assert audit.entity_id == lock.id
    assert audit.actor_id == ACTOR_ID
    assert audit.before_json is None
    assert audit.after_json["month"] == "2026-02"


async def test_record_change_snapshots_after_image(db_session: AsyncSession) -> None:
    entry = PtoEntry(employee_id=uuid.uuid4(), date=date(2026, 3, 2), type="PTO", hours=8)
    before = model_to_audit_dict(entry)
    entry.hours = 4

    audit = await record_change(db_session, ACTOR_ID, entry, AuditAction.UPDATE, before=before)
    assert audit.action == "UPDATE"
    assert audit.before_json["hours"] == 8
    assert audit.after_json["hours"] == 4


async def test_record_change_delete_keeps_only_before(db_session: AsyncSession) -> None:
    entry = PtoEntry(employee_id=uuid.uuid4(), date=date(2026, 3, 2), type="Sick", hours=8)
    audit = await record_change(db_session, ACTOR_ID, entry, AuditAction.DELETE, before=model_to_audit_dict(entry))
    assert audit.entity_type == "PTO_ENTRY"
    assert audit.before_json["type"] == "Sick"
    assert audit.after_json is None
