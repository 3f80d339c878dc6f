from __future__ import annotations

import enum


class PtoType(enum.StrEnum):
    """Leave bucket an entry is charged against."""

    PTO = "PTO"
    SICK = "Sick"
    BEREAVEMENT = "Bereavement"
    JURY_DUTY = "Jury Duty"


class EmployeeRole(enum.StrEnum):
    """Role stored on the employee record."""

    EMPLOYEE = "Employee"
    ADMIN = "Admin"


class AcknowledgementStatus(enum.StrEnum):
    """Outcome recorded when an employee acknowledges a month."""

    CONFIRMED = "confirmed"
    WARNING = "warning"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    EMPLOYEE = "EMPLOYEE"
    PTO_ENTRY = "PTO_ENTRY"
    MONTHLY_HOURS = "MONTHLY_HOURS"
    ACKNOWLEDGEMENT = "ACKNOWLEDGEMENT"
    ADMIN_ACKNOWLEDGEMENT = "ADMIN_ACKNOWLEDGEMENT"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    APPROVE = "APPROVE"
    ACKNOWLEDGE = "ACKNOWLEDGE"
    LOCK = "LOCK"
    CARRYOVER = "CARRYOVER"
