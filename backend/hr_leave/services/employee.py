# ruff: noqa: TC003
"""Employee directory: profile CRUD and identity-provider subject lookup."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from hr_leave.exceptions import ConflictError, NotFoundError
from hr_leave.models.employee import Employee
from hr_leave.models.enums import AuditAction, AuditEntityType, EmployeeStatus
from hr_leave.schemas.employee import EmployeeListResponse, EmployeeResponse
from hr_leave.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.schemas.employee import CreateEmployeeRequest, UpdateEmployeeRequest, UpdateProfileRequest


def build_employee_response(employee: Employee) -> EmployeeResponse:
    """Map an employee model to its response schema."""
    return EmployeeResponse(
        id=employee.id,
        user_id=employee.user_id,
        employee_number=employee.employee_number,
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        department=employee.department,
        position=employee.position,
        start_date=employee.start_date,
        status=EmployeeStatus(employee.status),
        is_admin=employee.is_admin,
        phone=employee.phone,
        address=employee.address,
        created_at=employee.created_at,
    )


async def get_employee(session: AsyncSession, employee_id: uuid.UUID) -> Employee | None:
    """Fetch an employee by primary key. Returns None if not found."""
    result = await session.execute(select(Employee).where(col(Employee.id) == employee_id))
    return result.scalar_one_or_none()


async def get_employee_or_404(session: AsyncSession, employee_id: uuid.UUID) -> Employee:
    """Fetch an employee by primary key. Raises 404 if not found."""
    employee = await get_employee(session, employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")
    return employee


async def get_employee_by_user_id(session: AsyncSession, user_id: str) -> Employee | None:
    """Resolve the employee profile for an identity-provider subject."""
    result = await session.execute(select(Employee).where(col(Employee.user_id) == user_id))
    return result.scalar_one_or_none()


async def list_employees(
    session: AsyncSession,
    department: str | None = None,
    offset: int = 0,
    limit: int = 50,
) -> EmployeeListResponse:
    """List employees ordered by name. ``department="all"`` disables the filter."""
    filters = []
    if department is not None and department != "all":
        filters.append(col(Employee.department) == department)

    count_result = await session.execute(select(func.count()).select_from(Employee).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(Employee)
        .where(*filters)
        .order_by(col(Employee.first_name), col(Employee.last_name))
        .offset(offset)
        .limit(limit)
    )
    employees = list(result.scalars().all())

    return EmployeeListResponse(
        items=[build_employee_response(e) for e in employees],
        total=total,
    )


async def create_employee(
    session: AsyncSession,
    actor_id: uuid.UUID | None,
    payload: CreateEmployeeRequest,
) -> EmployeeResponse:
    """Create an employee profile. Raises 409 on a duplicate user_id or employee_number."""
    employee = Employee(
        user_id=payload.user_id,
        employee_number=payload.employee_number,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        department=payload.department,
        position=payload.position,
        start_date=payload.start_date,
        status=payload.status.value,
        is_admin=payload.is_admin,
        phone=payload.phone,
        address=payload.address,
    )

    try:
        async with session.begin_nested():
            session.add(employee)
            await session.flush()
    except IntegrityError:
        raise ConflictError("Employee with this user_id or employee_number already exists") from None

    await write_audit_log(
        session,
        actor_id=actor_id,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee.id,
        action=AuditAction.CREATE,
        summary=f"Created employee {employee.employee_number}",
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    return build_employee_response(employee)


async def _apply_update(
    session: AsyncSession,
    actor_id: uuid.UUID | None,
    employee: Employee,
    payload: UpdateEmployeeRequest | UpdateProfileRequest,
) -> EmployeeResponse:
    """Copy the fields set on ``payload`` onto ``employee``, audit and commit.

    Explicit nulls are applied as given; the payload schemas only admit them
    for nullable columns.
    """
    before_dict = model_to_audit_dict(employee)

    changed: list[str] = []
    for field_name, value in payload.model_dump(exclude_unset=True).items():
        if isinstance(value, EmployeeStatus):
            value = value.value
        setattr(employee, field_name, value)
        changed.append(field_name)

    await session.flush()

    await write_audit_log(
        session,
        actor_id=actor_id,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee.id,
        action=AuditAction.UPDATE,
        summary=f"Updated {', '.join(changed) or 'nothing'}",
        before_json=before_dict,
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    return build_employee_response(employee)


async def update_employee(
    session: AsyncSession,
    actor_id: uuid.UUID | None,
    employee_id: uuid.UUID,
    payload: UpdateEmployeeRequest,
) -> EmployeeResponse:
    """Apply an admin's partial update to an employee profile."""
    employee = await get_employee_or_404(session, employee_id)
    return await _apply_update(session, actor_id, employee, payload)


async def update_own_profile(
    session: AsyncSession,
    employee: Employee,
    payload: UpdateProfileRequest,
) -> EmployeeResponse:
    """Apply an employee's update to their own contact details."""
    return await _apply_update(session, employee.id, employee, payload)
