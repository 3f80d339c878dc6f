# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel


class AuthContext(BaseModel):
    """Dev auth context extracted from request headers."""

    user_id: uuid.UUID
    role: str = "employee"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def can_access(self, employee_id: uuid.UUID) -> bool:
        """Admins may act on anyone; employees only on themselves."""
        return self.is_admin or self.user_id == employee_id
