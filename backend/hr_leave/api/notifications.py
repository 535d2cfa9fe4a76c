# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, status

from hr_leave.api.deps import AdminDep, CurrentEmployeeDep
from hr_leave.db import SessionDep
from hr_leave.schemas.notification import (
    CreateNotificationRequest,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from hr_leave.services import notification as notification_service

notifications_router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
)

admin_notifications_router = APIRouter(
    prefix="/admin/notifications",
    tags=["notifications"],
)


@notifications_router.get("", response_model=NotificationListResponse)
async def list_notifications(
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> NotificationListResponse:
    """Notifications addressed to the current employee or to everyone."""
    return await notification_service.list_notifications(session, employee.id)


@notifications_router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> UnreadCountResponse:
    """Number of unread notifications for the current employee."""
    return UnreadCountResponse(count=await notification_service.count_unread(session, employee.id))


@notifications_router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: uuid.UUID,
    session: SessionDep,
    employee: CurrentEmployeeDep,
) -> NotificationResponse:
    """Mark a notification read for the current employee."""
    return await notification_service.mark_read(session, employee, notification_id)


@admin_notifications_router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: CreateNotificationRequest,
    session: SessionDep,
    admin: AdminDep,
) -> NotificationResponse:
    """Send a notification to one employee or to everyone (admin only)."""
    return await notification_service.create_notification(session, admin, payload)


@admin_notifications_router.get("/company", response_model=NotificationListResponse)
async def list_company_notifications(
    session: SessionDep,
    admin: AdminDep,
) -> NotificationListResponse:
    """Active company-wide notifications (admin only)."""
    return await notification_service.list_company_notifications(session)


@admin_notifications_router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_notification(
    notification_id: uuid.UUID,
    session: SessionDep,
    admin: AdminDep,
) -> None:
    """Withdraw a notification (admin only)."""
    await notification_service.deactivate_notification(session, admin, notification_id)
