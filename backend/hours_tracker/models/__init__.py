from sqlmodel import SQLModel

from hours_tracker.models.acknowledgement import Acknowledgement, AdminAcknowledgement
from hours_tracker.models.audit import AuditLog
from hours_tracker.models.base import TimestampMixin, UUIDBase
from hours_tracker.models.employee import Employee
from hours_tracker.models.enums import (
    AcknowledgementStatus,
    AuditAction,
    AuditEntityType,
    EmployeeRole,
    PtoType,
)
from hours_tracker.models.monthly_hours import MonthlyHours
from hours_tracker.models.pto_entry import PtoEntry

__all__ = [
    "Acknowledgement",
    "AcknowledgementStatus",
    "AdminAcknowledgement",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "Employee",
    "EmployeeRole",
    "MonthlyHours",
    "PtoEntry",
    "PtoType",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
