# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter, status

from hr_leave.api.deps import AdminDep, CurrentEmployeeDep
from hr_leave.db import SessionDep
from hr_leave.schemas.pay import CreatePayRecordRequest, PayRecordListResponse, PayRecordResponse
from hr_leave.services import pay as pay_service

pay_router = APIRouter(
    prefix="/pay",
    tags=["pay"],
)

admin_pay_router = APIRouter(
    prefix="/admin/pay-records",
    tags=["pay"],
)


@pay_router.get("/records", response_model=PayRecordListResponse)
async def list_pay_records(
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> PayRecordListResponse:
    """The current employee's pay records, most recent first."""
    return await pay_service.list_pay_records(session, employee.id)


@pay_router.get("/latest", response_model=PayRecordResponse)
async def get_latest_pay_record(
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> PayRecordResponse:
    """The current employee's most recent pay record."""
    return await pay_service.get_latest_pay_record(session, employee.id)


@admin_pay_router.post("", response_model=PayRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_pay_record(
    payload: CreatePayRecordRequest,
    session: SessionDep,
    admin: AdminDep,
) -> PayRecordResponse:
    """Record a payslip for an employee (admin only)."""
    return await pay_service.create_pay_record(session, admin.id, payload)
