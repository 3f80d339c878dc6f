"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-02-09 00:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _employee_fk() -> sa.Column:
    return sa.Column("employee_id", sa.Uuid(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False)


def upgrade() -> None:
    op.create_table(
        "employee",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("identifier", sa.String(length=255), nullable=False),
        sa.Column("pto_rate", sa.Float(), server_default="0.71", nullable=False),
        sa.Column("carryover_hours", sa.Float(), server_default="0", nullable=False),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("role", sa.String(length=50), server_default="Employee", nullable=False),
    )
    op.create_index("ix_employee_identifier", "employee", ["identifier"], unique=True)

    op.create_table(
        "pto_entry",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        _employee_fk(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("hours", sa.Float(), nullable=False),
        sa.Column("approved_by", sa.Uuid(), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("employee_id", "date", "type", name="uq_pto_entry_employee_date_type"),
    )
    op.create_index("ix_pto_entry_employee_id", "pto_entry", ["employee_id"])
    op.create_index("ix_pto_entry_employee_date", "pto_entry", ["employee_id", "date"])

    op.create_table(
        "monthly_hours",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _employee_fk(),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("hours_worked", sa.Float(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("employee_id", "month", name="uq_monthly_hours_employee_month"),
    )
    op.create_index("ix_monthly_hours_employee_id", "monthly_hours", ["employee_id"])

    op.create_table(
        "acknowledgement",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _employee_fk(),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("note", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=True),
        sa.Column("acknowledged_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("employee_id", "month", name="uq_acknowledgement_employee_month"),
    )
    op.create_index("ix_acknowledgement_employee_id", "acknowledgement", ["employee_id"])

    op.create_table(
        "admin_acknowledgement",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _employee_fk(),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("admin_id", sa.Uuid(), nullable=False),
        sa.Column("acknowledged_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("employee_id", "month", name="uq_admin_acknowledgement_employee_month"),
    )
    op.create_index("ix_admin_acknowledgement_employee_id", "admin_acknowledgement", ["employee_id"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("actor_id", sa.Uuid(), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("before_json", sa.JSON(), nullable=True),
        sa.Column("after_json", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_log_actor_id", "audit_log", ["actor_id"])
    op.create_index("ix_audit_log_created_at", "audit_log", ["created_at"])
    op.create_index("ix_audit_entity", "audit_log", ["entity_type", "entity_id"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("admin_acknowledgement")
    op.drop_table("acknowledgement")
    op.drop_table("monthly_hours")
    op.drop_table("pto_entry")
    op.drop_table("employee")
