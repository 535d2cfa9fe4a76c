# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from hr_leave.api.deps import AdminDep, CurrentEmployeeDep
from hr_leave.db import SessionDep
from hr_leave.schemas.employee import (
    CreateEmployeeRequest,
    EmployeeListResponse,
    EmployeeResponse,
    UpdateEmployeeRequest,
    UpdateProfileRequest,
)
from hr_leave.services import employee as employee_service

employees_router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)

admin_employees_router = APIRouter(
    prefix="/admin/employees",
    tags=["employees"],
)


@employees_router.get("/me", response_model=EmployeeResponse)
async def get_me(employee: CurrentEmployeeDep) -> EmployeeResponse:
    """Get the current employee's profile."""
    return employee_service.build_employee_response(employee)


@employees_router.put("/me", response_model=EmployeeResponse)
async def update_me(
    payload: UpdateProfileRequest,
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> EmployeeResponse:
    """Update the current employee's contact details."""
    return await employee_service.update_own_profile(session, employee, payload)


@admin_employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(
    session: SessionDep,
    admin: AdminDep,
    department: str | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> EmployeeListResponse:
    """List employees, optionally filtered by department (admin only)."""
    return await employee_service.list_employees(session, department, offset, limit)


@admin_employees_router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: CreateEmployeeRequest,
    session: SessionDep,
    admin: AdminDep,
) -> EmployeeResponse:
    """Create an employee profile (admin only)."""
    return await employee_service.create_employee(session, admin.id, payload)


@admin_employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: uuid.UUID,
    session: SessionDep,
    admin: AdminDep,
) -> EmployeeResponse:
    """Get a single employee (admin only)."""
    employee = await employee_service.get_employee_or_404(session, employee_id)
    return employee_service.build_employee_response(employee)


@admin_employees_router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: uuid.UUID,
    payload: UpdateEmployeeRequest,
    session: SessionDep,
    admin: AdminDep,
) -> EmployeeResponse:
    """Update an employee profile (admin only)."""
    return await employee_service.update_employee(session, admin.id, employee_id, payload)
