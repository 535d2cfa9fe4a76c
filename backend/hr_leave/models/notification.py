# ruff: noqa: TC003
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlmodel import Field

from hr_leave.models.base import TimestampMixin, UUIDBase
from hr_leave.models.enums import NotificationType


class Notification(UUIDBase, TimestampMixin, table=True):
    """A message from an admin to one employee, or company-wide when ``recipient_id`` is null."""

    __tablename__ = "notification"

    title: str = Field(max_length=200)
    message: str
    notification_type: str = Field(
        default=NotificationType.INFO, max_length=50, sa_column_kwargs={"server_default": "info"}
    )
    sender_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False),
    )
    recipient_id: uuid.UUID | None = Field(
        default=None,
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=True, index=True),
    )
    is_active: bool = Field(default=True, sa_column_kwargs={"server_default": sa.true()})


class NotificationReceipt(UUIDBase, TimestampMixin, table=True):
    """Records that one employee has read one notification."""

    __tablename__ = "notification_receipt"
    __table_args__ = (
        sa.UniqueConstraint("notification_id", "employee_id", name="uq_notification_receipt_notification_employee"),
    )

    notification_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("notification.id", ondelete="CASCADE"), nullable=False),
    )
    employee_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True),
    )
