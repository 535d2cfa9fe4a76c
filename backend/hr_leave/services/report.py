"""Reporting service: admin console statistics and audit log queries."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from hr_leave.models.accrual import LeaveAccrual
from hr_leave.models.audit import AuditLog
from hr_leave.models.employee import Employee
from hr_leave.models.enums import EmployeeStatus, RequestStatus
from hr_leave.models.notification import Notification
from hr_leave.models.request import LeaveRequest
from hr_leave.schemas.report import AdminStatsResponse, AuditLogEntryResponse, AuditLogListResponse

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession


async def get_admin_stats(session: AsyncSession, today: date | None = None) -> AdminStatsResponse:
    """Headline counts for the admin dashboard."""
    if today is None:
        today = date.today()
    month_start = today.replace(day=1)
    active = col(Employee.status) == EmployeeStatus.ACTIVE.value

    total_result = await session.execute(select(func.count()).select_from(Employee).where(active))
    new_hires_result = await session.execute(
        select(func.count())
        .select_from(Employee)
        .where(active, col(Employee.start_date) >= month_start, col(Employee.start_date) <= today)
    )
    pending_result = await session.execute(
        select(func.count())
        .select_from(LeaveRequest)
        .where(col(LeaveRequest.status) == RequestStatus.PENDING.value)
    )
    accruals_result = await session.execute(
        select(func.count())
        .select_from(LeaveAccrual)
        .where(col(LeaveAccrual.accrual_date) >= month_start, col(LeaveAccrual.accrual_date) <= today)
    )
    notifications_result = await session.execute(
        select(func.count()).select_from(Notification).where(col(Notification.is_active).is_(True))
    )

    return AdminStatsResponse(
        total_employees=total_result.scalar_one(),
        new_hires=new_hires_result.scalar_one(),
        pending_approvals=pending_result.scalar_one(),
        accruals_this_month=accruals_result.scalar_one(),
        active_notifications=notifications_result.scalar_one(),
    )


async def query_audit_log(
    session: AsyncSession,
    *,
    entity_type: str | None = None,
    entity_id: uuid.UUID | None = None,
    action: str | None = None,
    offset: int = 0,
    limit: int = 50,
) -> AuditLogListResponse:
    """Query audit log entries with optional filters."""
    filters = []

    if entity_type is not None:
        filters.append(col(AuditLog.entity_type) == entity_type)
    if entity_id is not None:
        filters.append(col(AuditLog.entity_id) == entity_id)
    if action is not None:
        filters.append(col(AuditLog.action) == action)

    count_result = await session.execute(select(func.count()).select_from(AuditLog).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(AuditLog).where(*filters).order_by(col(AuditLog.created_at).desc()).offset(offset).limit(limit)
    )
    entries = list(result.scalars().all())

    return AuditLogListResponse(
        items=[
            AuditLogEntryResponse(
                id=e.id,
                actor_id=e.actor_id,
                entity_type=e.entity_type,
                entity_id=e.entity_id,
                action=e.action,
                summary=e.summary,
                before_json=e.before_json,
                after_json=e.after_json,
                created_at=e.created_at,
            )
            for e in entries
        ],
        total=total,
    )
