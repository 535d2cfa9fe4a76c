# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from hr_leave.exceptions import AppError, ConflictError, ForbiddenError, LeaveInputError, NotFoundError
from hr_leave.models.enums import AuditAction, AuditEntityType, LeaveType, RequestStatus
from hr_leave.models.request import LeaveRequest
from hr_leave.schemas.request import LeaveRequestListResponse, LeaveRequestResponse
from hr_leave.services.accrual import reconcile_balance
from hr_leave.services.audit import model_to_audit_dict, write_audit_log
from hr_leave.services.balance import apply_deduction, available_days, get_leave_balance
from hr_leave.services.employee import get_employee, get_employee_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.models.employee import Employee
    from hr_leave.schemas.request import DecisionPayload, SubmitLeaveRequestPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaveValidationResult:
    """Outcome of checking a leave request against the current balance."""

    valid: bool
    message: str


def _format_days(days: Decimal) -> str:
    """Render a day count without trailing zeros (``Decimal("4.00")`` -> ``"4"``)."""
    normalized = days.normalize()
    if normalized == normalized.to_integral():
        return str(normalized.quantize(Decimal(1)))
    return str(normalized)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_request_response(request: LeaveRequest) -> LeaveRequestResponse:
    """Map a request model to its response schema."""
    return LeaveRequestResponse(
        id=request.id,
        employee_id=request.employee_id,
        leave_type=LeaveType(request.leave_type),
        start_date=request.start_date,
        end_date=request.end_date,
        days=request.days,
        reason=request.reason,
        status=RequestStatus(request.status),
        approver_id=request.approver_id,
        decided_at=request.decided_at,
        decision_note=request.decision_note,
        created_at=request.created_at,
    )


async def _get_request_or_404(session: AsyncSession, request_id: uuid.UUID) -> LeaveRequest:
    """Fetch a request by ID. Raises 404 if not found."""
    result = await session.execute(select(LeaveRequest).where(col(LeaveRequest.id) == request_id))
    request = result.scalar_one_or_none()
    if request is None:
        raise NotFoundError("Leave request not found")
    return request


async def _check_balance(
    session: AsyncSession,
    employee: Employee,
    leave_type: LeaveType,
    days: Decimal,
    today: date,
) -> LeaveValidationResult:
    """Reconcile, then compare ``days`` with the relevant balance. Does not commit."""
    await reconcile_balance(session, employee, today)

    balance = await get_leave_balance(session, employee.id, today.year)
    if balance is None:
        return LeaveValidationResult(valid=False, message="Leave balance not found")

    available = available_days(balance, leave_type)
    if days > available:
        return LeaveValidationResult(
            valid=False,
            message=(
                f"Insufficient {leave_type.value} leave balance. "
                f"Available: {_format_days(available)} days, Requested: {_format_days(days)} days"
            ),
        )
    return LeaveValidationResult(valid=True, message="Leave request is valid")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def validate_leave_request(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type: LeaveType,
    days: Decimal,
    today: date | None = None,
) -> LeaveValidationResult:
    """Check a prospective request against up-to-date entitlement.

    Always reconciles accruals first and commits them. Never deducts.
    An unknown employee or missing balance is reported as ``valid=False``.
    """
    if days <= 0:
        raise LeaveInputError("Requested days must be greater than zero")
    if today is None:
        today = date.today()

    employee = await get_employee(session, employee_id)
    if employee is None:
        return LeaveValidationResult(valid=False, message="Employee not found")

    result = await _check_balance(session, employee, leave_type, days, today)
    await session.commit()
    return result


async def submit_request(
    session: AsyncSession,
    employee: Employee,
    payload: SubmitLeaveRequestPayload,
) -> LeaveRequestResponse:
    """Submit a leave request for ``employee``.

    Flow:
    1. Reconcile accruals and validate the balance
    2. Reject with 400 and the validation message if insufficient
    3. Create the request (pending)
    4. Write audit log
    5. Commit
    """
    today = date.today()

    validation = await _check_balance(session, employee, payload.leave_type, payload.days, today)
    if not validation.valid:
        # Accruals posted by reconciliation persist even when the request is refused.
        await session.commit()
        raise AppError(validation.message, status_code=400)

    leave_request = LeaveRequest(
        employee_id=employee.id,
        leave_type=payload.leave_type.value,
        start_date=payload.start_date,
        end_date=payload.end_date,
        days=payload.days,
        reason=payload.reason,
        status=RequestStatus.PENDING.value,
    )
    session.add(leave_request)
    await session.flush()

    await write_audit_log(
        session,
        actor_id=employee.id,
        entity_type=AuditEntityType.LEAVE_REQUEST,
        entity_id=leave_request.id,
        action=AuditAction.SUBMIT,
        summary=(
            f"Requested {_format_days(leave_request.days)} {leave_request.leave_type} day(s) "
            f"from {leave_request.start_date.isoformat()} to {leave_request.end_date.isoformat()}"
        ),
        after_json=model_to_audit_dict(leave_request),
    )

    await session.commit()
    await session.refresh(leave_request)
    return _build_request_response(leave_request)


async def approve_request(
    session: AsyncSession,
    approver: Employee,
    request_id: uuid.UUID,
    payload: DecisionPayload | None = None,
) -> LeaveRequestResponse:
    """Approve a pending request and deduct its days.

    1. Fetch and validate request (must be pending).
    2. Reconcile the requester's current-year balance.
    3. Deduct from it (atomic floor check).
    4. Update request status -> approved.
    5. Audit log with before/after.
    6. Commit.
    """
    leave_request = await _get_request_or_404(session, request_id)

    if leave_request.status != RequestStatus.PENDING.value:
        raise AppError("Only pending requests can be approved", status_code=400)

    today = date.today()
    requester = await get_employee_or_404(session, leave_request.employee_id)
    await reconcile_balance(session, requester, today)

    deducted = await apply_deduction(
        session,
        leave_request.employee_id,
        LeaveType(leave_request.leave_type),
        leave_request.days,
        actor_id=approver.id,
        today=today,
    )
    if not deducted:
        # Accruals posted by reconciliation persist even when the deduction is refused.
        await session.commit()
        raise ConflictError("Insufficient leave balance")

    before_dict = model_to_audit_dict(leave_request)

    leave_request.status = RequestStatus.APPROVED.value
    leave_request.approver_id = approver.id
    leave_request.decided_at = datetime.now(UTC)
    leave_request.decision_note = payload.note if payload else None

    await session.flush()

    await write_audit_log(
        session,
        actor_id=approver.id,
        entity_type=AuditEntityType.LEAVE_REQUEST,
        entity_id=leave_request.id,
        action=AuditAction.APPROVE,
        summary=f"Approved and deducted {_format_days(leave_request.days)} {leave_request.leave_type} day(s)",
        before_json=before_dict,
        after_json=model_to_audit_dict(leave_request),
    )

    await session.commit()
    await session.refresh(leave_request)
    logger.info("Leave request %s approved by %s", leave_request.id, approver.id)
    return _build_request_response(leave_request)


async def _close_request(
    session: AsyncSession,
    leave_request: LeaveRequest,
    actor: Employee,
    new_status: RequestStatus,
    audit_action: AuditAction,
    decision_note: str | None = None,
) -> LeaveRequestResponse:
    """Shared logic for deny and cancel: no balance change, status update and audit."""
    before_dict = model_to_audit_dict(leave_request)

    leave_request.status = new_status.value
    if new_status == RequestStatus.DENIED:
        leave_request.approver_id = actor.id
    leave_request.decided_at = datetime.now(UTC)
    leave_request.decision_note = decision_note

    await session.flush()

    await write_audit_log(
        session,
        actor_id=actor.id,
        entity_type=AuditEntityType.LEAVE_REQUEST,
        entity_id=leave_request.id,
        action=audit_action,
        summary=f"Request {new_status.value}",
        before_json=before_dict,
        after_json=model_to_audit_dict(leave_request),
    )

    await session.commit()
    await session.refresh(leave_request)
    return _build_request_response(leave_request)


async def deny_request(
    session: AsyncSession,
    approver: Employee,
    request_id: uuid.UUID,
    payload: DecisionPayload | None = None,
) -> LeaveRequestResponse:
    """Deny a pending request."""
    leave_request = await _get_request_or_404(session, request_id)

    if leave_request.status != RequestStatus.PENDING.value:
        raise AppError("Only pending requests can be denied", status_code=400)

    return await _close_request(
        session,
        leave_request,
        approver,
        new_status=RequestStatus.DENIED,
        audit_action=AuditAction.DENY,
        decision_note=payload.note if payload else None,
    )


async def cancel_request(
    session: AsyncSession,
    actor: Employee,
    request_id: uuid.UUID,
) -> LeaveRequestResponse:
    """Cancel a pending request.

    The employee who submitted the request or an admin can cancel.
    """
    leave_request = await _get_request_or_404(session, request_id)

    if leave_request.status != RequestStatus.PENDING.value:
        raise AppError("Only pending requests can be cancelled", status_code=400)

    if actor.id != leave_request.employee_id and not actor.is_admin:
        raise ForbiddenError("Not authorized to cancel this request")

    return await _close_request(
        session,
        leave_request,
        actor,
        new_status=RequestStatus.CANCELLED,
        audit_action=AuditAction.CANCEL,
    )


async def get_request(
    session: AsyncSession,
    viewer: Employee,
    request_id: uuid.UUID,
) -> LeaveRequestResponse:
    """Get a single request. Non-admins only see their own."""
    leave_request = await _get_request_or_404(session, request_id)
    if leave_request.employee_id != viewer.id and not viewer.is_admin:
        raise NotFoundError("Leave request not found")
    return _build_request_response(leave_request)


async def list_requests(
    session: AsyncSession,
    status_filter: str | None = None,
    employee_id: uuid.UUID | None = None,
    offset: int = 0,
    limit: int = 50,
) -> LeaveRequestListResponse:
    """List requests with optional filters, ordered by created_at DESC."""
    base_filters = []

    if status_filter is not None:
        base_filters.append(col(LeaveRequest.status) == status_filter)
    if employee_id is not None:
        base_filters.append(col(LeaveRequest.employee_id) == employee_id)

    count_result = await session.execute(select(func.count()).select_from(LeaveRequest).where(*base_filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveRequest)
        .where(*base_filters)
        .order_by(col(LeaveRequest.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    requests = list(result.scalars().all())

    return LeaveRequestListResponse(
        items=[_build_request_response(r) for r in requests],
        total=total,
    )
