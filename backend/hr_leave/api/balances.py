# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Query

from hr_leave.api.deps import AdminDep, CurrentEmployeeDep
from hr_leave.db import SessionDep
from hr_leave.exceptions import ForbiddenError
from hr_leave.models.employee import Employee
from hr_leave.schemas.balance import AccrualListResponse, AccrualRunResponse, BalanceResponse
from hr_leave.services import accrual as accrual_service
from hr_leave.services import balance as balance_service

leave_balance_router = APIRouter(
    prefix="/leave",
    tags=["balances"],
)

admin_accrual_router = APIRouter(
    prefix="/admin/employees/{employee_id}/accruals",
    tags=["balances"],
)


def _resolve_target(current: Employee, employee_id: uuid.UUID | None) -> uuid.UUID:
    """Employees read their own balance; admins may read anyone's."""
    if employee_id is None or employee_id == current.id:
        return current.id
    if not current.is_admin:
        raise ForbiddenError()
    return employee_id


@leave_balance_router.get("/balance", response_model=BalanceResponse)
async def get_leave_balance(
    session: SessionDep,
    employee: CurrentEmployeeDep,
    employee_id: uuid.UUID | None = Query(default=None),
) -> BalanceResponse:
    """Get the current-year leave balance, reconciling accruals first."""
    target_id = _resolve_target(employee, employee_id)
    today = date.today()
    await accrual_service.process_leave_accruals(session, target_id, today)
    return await balance_service.get_balance_response(session, target_id, today.year)


@leave_balance_router.get("/accruals", response_model=AccrualListResponse)
async def list_accruals(
    session: SessionDep,
    employee: CurrentEmployeeDep,
    employee_id: uuid.UUID | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AccrualListResponse:
    """Get paginated accrual history, newest first."""
    target_id = _resolve_target(employee, employee_id)
    return await accrual_service.list_accruals(session, target_id, offset, limit)


@admin_accrual_router.post("/process", response_model=AccrualRunResponse)
async def process_accruals(
    employee_id: uuid.UUID,
    session: SessionDep,
    admin: AdminDep,
    as_of: date | None = Query(default=None),
) -> AccrualRunResponse:
    """Reconcile an employee's balance against entitlement (admin only).

    ``as_of`` defaults to today; the balance row for its calendar year is reconciled.
    """
    result = await accrual_service.process_leave_accruals(session, employee_id, as_of)
    return accrual_service.build_accrual_run_response(result)
