# ruff: noqa: B008
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header

from hr_leave.db import SessionDep
from hr_leave.exceptions import ForbiddenError, NotFoundError
from hr_leave.models.employee import Employee
from hr_leave.services.employee import get_employee_by_user_id


async def get_current_employee(
    session: SessionDep,
    x_user_id: str = Header(min_length=1),
) -> Employee:
    """Resolve the employee for the subject forwarded by the identity provider."""
    employee = await get_employee_by_user_id(session, x_user_id)
    if employee is None:
        raise NotFoundError("Employee profile not found")
    return employee


CurrentEmployeeDep = Annotated[Employee, Depends(get_current_employee)]


async def require_admin(
    employee: CurrentEmployeeDep,
) -> Employee:
    """Require the current employee to be an admin."""
    if not employee.is_admin:
        raise ForbiddenError()
    return employee


AdminDep = Annotated[Employee, Depends(require_admin)]
