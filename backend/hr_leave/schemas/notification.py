# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from hr_leave.models.enums import NotificationType


class CreateNotificationRequest(BaseModel):
    """Request body for sending a notification. Omit ``recipient_id`` to address everyone."""

    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=5000)
    notification_type: NotificationType = NotificationType.INFO
    recipient_id: uuid.UUID | None = None


class NotificationResponse(BaseModel):
    """A notification as seen by one reader."""

    id: uuid.UUID
    title: str
    message: str
    notification_type: NotificationType
    sender_id: uuid.UUID
    recipient_id: uuid.UUID | None
    is_active: bool
    is_read: bool
    created_at: datetime


class NotificationListResponse(BaseModel):
    """List of notifications, newest first."""

    items: list[NotificationResponse]
    total: int


class UnreadCountResponse(BaseModel):
    count: int
