# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header, Path, Request, status

from hours_tracker.components.registry import ComponentRegistry
from hours_tracker.exceptions import AppError
from hours_tracker.schemas.auth import AuthContext


async def get_auth_context(
    x_user_id: uuid.UUID = Header(),
    x_role: str = Header(default="employee"),
) -> AuthContext:
    """Extract dev auth context from request headers."""
    return AuthContext(user_id=x_user_id, role=x_role.lower())


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_admin(
    auth: AuthDep,
) -> AuthContext:
    """Require admin role for the request."""
    if not auth.is_admin:
        raise AppError("Admin access required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


AdminDep = Annotated[AuthContext, Depends(require_admin)]


async def require_employee_access(
    employee_id: uuid.UUID = Path(),
    auth: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    """Ensure the caller is the employee in the path, or an admin."""
    if not auth.can_access(employee_id):
        raise AppError("Not allowed to access this employee", status_code=status.HTTP_403_FORBIDDEN)
    return auth


EmployeeAccessDep = Annotated[AuthContext, Depends(require_employee_access)]


def get_component_registry(request: Request) -> ComponentRegistry:
    """Component registry built at startup and stored on the application state."""
    return request.app.state.components


RegistryDep = Annotated[ComponentRegistry, Depends(get_component_registry)]
