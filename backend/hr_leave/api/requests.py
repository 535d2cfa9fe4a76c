# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from hr_leave.api.deps import AdminDep, CurrentEmployeeDep
from hr_leave.db import SessionDep
from hr_leave.models.enums import RequestStatus
from hr_leave.schemas.request import (
    DecisionPayload,
    LeaveRequestListResponse,
    LeaveRequestResponse,
    LeaveValidationResponse,
    SubmitLeaveRequestPayload,
    ValidateLeavePayload,
)
from hr_leave.services import request as request_service

requests_router = APIRouter(
    prefix="/leave/requests",
    tags=["requests"],
)


@requests_router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_request(
    payload: SubmitLeaveRequestPayload,
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> LeaveRequestResponse:
    """Submit a new leave request for the current employee."""
    return await request_service.submit_request(session, employee, payload)


@requests_router.post("/validate", response_model=LeaveValidationResponse)
async def validate_request(
    payload: ValidateLeavePayload,
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> LeaveValidationResponse:
    """Check whether the current employee's balance covers a prospective request."""
    result = await request_service.validate_leave_request(session, employee.id, payload.leave_type, payload.days)
    return LeaveValidationResponse(valid=result.valid, message=result.message)


@requests_router.get("", response_model=LeaveRequestListResponse)
async def list_requests(
    session: SessionDep,
    employee: CurrentEmployeeDep,
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    employee_id: uuid.UUID | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> LeaveRequestListResponse:
    """List leave requests. Non-admins only see their own."""
    if not employee.is_admin:
        employee_id = employee.id
    return await request_service.list_requests(
        session,
        status_filter.value if status_filter is not None else None,
        employee_id,
        offset,
        limit,
    )


@requests_router.get("/{request_id}", response_model=LeaveRequestResponse)
async def get_request(
    request_id: uuid.UUID,
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> LeaveRequestResponse:
    """Get a single leave request."""
    return await request_service.get_request(session, employee, request_id)


@requests_router.post("/{request_id}/approve", response_model=LeaveRequestResponse)
async def approve_request(
    request_id: uuid.UUID,
    session: SessionDep,
    admin: AdminDep,
    payload: DecisionPayload | None = None,
) -> LeaveRequestResponse:
    """Approve a pending leave request and deduct its days (admin only)."""
    return await request_service.approve_request(session, admin, request_id, payload)


@requests_router.post("/{request_id}/deny", response_model=LeaveRequestResponse)
async def deny_request(
    request_id: uuid.UUID,
    session: SessionDep,
    admin: AdminDep,
    payload: DecisionPayload | None = None,
) -> LeaveRequestResponse:
    """Deny a pending leave request (admin only)."""
    return await request_service.deny_request(session, admin, request_id, payload)


@requests_router.post("/{request_id}/cancel", response_model=LeaveRequestResponse)
async def cancel_request(
    request_id: uuid.UUID,
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> LeaveRequestResponse:
    """Cancel a pending leave request."""
    return await request_service.cancel_request(session, employee, request_id)
