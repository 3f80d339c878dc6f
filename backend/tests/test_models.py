from __future__ import annotations

import uuid
from datetime import UTC, date, datetime

import sqlalchemy as sa

from hours_tracker.models import (
    Acknowledgement,
    AdminAcknowledgement,
    AuditLog,
    Employee,
    EmployeeRole,
    MonthlyHours,
    PtoEntry,
    SQLModel,
)
from hours_tracker.services.audit import model_to_audit_dict

EXPECTED_TABLES = {
    "acknowledgement",
    "admin_acknowledgement",
    "audit_log",
    "employee",
    "monthly_hours",
    "pto_entry",
}


def test_all_tables_registered() -> None:
    table_names = set(SQLModel.metadata.tables.keys())
    assert EXPECTED_TABLES.issubset(table_names)


def test_pto_entry_unique_per_employee_date_type() -> None:
    table = SQLModel.metadata.tables["pto_entry"]
    unique_columns = {
        tuple(column.name for column in constraint.columns)
        for constraint in table.constraints
        if isinstance(constraint, sa.UniqueConstraint)
    }
    assert ("employee_id", "date", "type") in unique_columns


def test_owned_tables_reference_employee() -> None:
    for name in ("pto_entry", "monthly_hours", "acknowledgement", "admin_acknowledgement"):
        foreign_keys = SQLModel.metadata.tables[name].foreign_keys
        assert {fk.target_fullname for fk in foreign_keys} == {"employee.id"}
        assert all(fk.ondelete == "CASCADE" for fk in foreign_keys)


def test_employee_defaults() -> None:
    employee = Employee(name="John Doe", identifier="john.doe@example.com", hire_date=date(2020, 1, 15))
    assert employee.id is not None
    assert employee.pto_rate == 0.71
    assert employee.carryover_hours == 0.0
    assert employee.role == EmployeeRole.EMPLOYEE


def test_pto_entry_defaults() -> None:
    entry = PtoEntry(employee_id=uuid.uuid4(), date=date(2026, 3, 2), type="PTO", hours=8)
    assert entry.approved_by is None
    assert entry.approved_at is None
    assert entry.created_at is not None


def test_monthly_hours_instantiation() -> None:
    record = MonthlyHours(employee_id=uuid.uuid4(), month="2026-02", hours_worked=160)
    assert record.month == "2026-02"
    assert record.submitted_at is not None


def test_acknowledgement_instantiation() -> None:
    ack = Acknowledgement(employee_id=uuid.uuid4(), month="2026-02", status="confirmed")
    assert ack.note is None
    assert ack.acknowledged_at is not None

    lock = AdminAcknowledgement(employee_id=uuid.uuid4(), month="2026-02", admin_id=uuid.uuid4())
    assert lock.acknowledged_at is not None


def test_audit_log_instantiation() -> None:
    log = AuditLog(
        actor_id=uuid.uuid4(),
        entity_type="PTO_ENTRY",
        entity_id=uuid.uuid4(),
        action="CREATE",
    )
    assert log.before_json is None
    assert log.after_json is None


def test_model_to_audit_dict_is_json_safe() -> None:
    approver = uuid.uuid4()
    entry = PtoEntry(
        employee_id=uuid.uuid4(),
        date=date(2026, 3, 2),
        type="PTO",
        hours=8,
        approved_by=approver,
        approved_at=datetime(2026, 3, 3, 15, 0, tzinfo=UTC),
    )
    data = model_to_audit_dict(entry)
    assert data["date"] == "2026-03-02"
    assert data["approved_by"] == str(approver)
    assert data["approved_at"] == "2026-03-03T15:00:00+00:00"
    assert data["hours"] == 8
