# ruff: noqa: TC003
"""Admin notifications: direct and company-wide messages with per-reader read state.

A company-wide notification has no recipient. Read state lives in
``notification_receipt`` rows, one per (notification, reader), so one
employee reading a company-wide message does not mark it read for anyone else.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from hr_leave.exceptions import NotFoundError
from hr_leave.models.enums import AuditAction, AuditEntityType, NotificationType
from hr_leave.models.notification import Notification, NotificationReceipt
from hr_leave.schemas.notification import NotificationListResponse, NotificationResponse
from hr_leave.services.audit import model_to_audit_dict, write_audit_log
from hr_leave.services.employee import get_employee

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.models.employee import Employee
    from hr_leave.schemas.notification import CreateNotificationRequest

logger = logging.getLogger(__name__)


def build_notification_response(notification: Notification, *, is_read: bool = False) -> NotificationResponse:
    """Map a notification model to its response schema."""
    return NotificationResponse(
        id=notification.id,
        title=notification.title,
        message=notification.message,
        notification_type=NotificationType(notification.notification_type),
        sender_id=notification.sender_id,
        recipient_id=notification.recipient_id,
        is_active=notification.is_active,
        is_read=is_read,
        created_at=notification.created_at,
    )


def _visible_to(employee_id: uuid.UUID) -> list[Any]:
    return [
        or_(
            col(Notification.recipient_id) == employee_id,
            col(Notification.recipient_id).is_(None),
        ),
        col(Notification.is_active).is_(True),
    ]


def _receipt_join(employee_id: uuid.UUID) -> Any:
    return and_(
        col(NotificationReceipt.notification_id) == col(Notification.id),
        col(NotificationReceipt.employee_id) == employee_id,
    )


async def _get_visible_notification(
    session: AsyncSession,
    employee_id: uuid.UUID,
    notification_id: uuid.UUID,
) -> Notification:
    result = await session.execute(
        select(Notification).where(col(Notification.id) == notification_id, *_visible_to(employee_id))
    )
    notification = result.scalar_one_or_none()
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


# ---------------------------------------------------------------------------
# Reader side
# ---------------------------------------------------------------------------


async def list_notifications(session: AsyncSession, employee_id: uuid.UUID) -> NotificationListResponse:
    """Active notifications addressed to the employee or to everyone, newest first."""
    result = await session.execute(
        select(Notification, col(NotificationReceipt.id))
        .outerjoin(NotificationReceipt, _receipt_join(employee_id))
        .where(*_visible_to(employee_id))
        .order_by(col(Notification.created_at).desc())
    )
    rows = result.all()

    return NotificationListResponse(
        items=[build_notification_response(n, is_read=receipt_id is not None) for n, receipt_id in rows],
        total=len(rows),
    )


async def count_unread(session: AsyncSession, employee_id: uuid.UUID) -> int:
    """Number of visible notifications the employee has not read."""
    result = await session.execute(
        select(func.count())
        .select_from(Notification)
        .outerjoin(NotificationReceipt, _receipt_join(employee_id))
        .where(*_visible_to(employee_id), col(NotificationReceipt.id).is_(None))
    )
    return result.scalar_one()


async def mark_read(
    session: AsyncSession,
    employee: Employee,
    notification_id: uuid.UUID,
) -> NotificationResponse:
    """Mark a notification read for ``employee``. Idempotent.

    Raises 404 for a notification the employee cannot see.
    """
    notification = await _get_visible_notification(session, employee.id, notification_id)

    existing = await session.execute(
        select(NotificationReceipt).where(
            col(NotificationReceipt.notification_id) == notification.id,
            col(NotificationReceipt.employee_id) == employee.id,
        )
    )
    if existing.scalar_one_or_none() is None:
        try:
            async with session.begin_nested():
                session.add(NotificationReceipt(notification_id=notification.id, employee_id=employee.id))
                await session.flush()
        except IntegrityError:
            logger.debug("Notification %s already read by %s", notification.id, employee.id)
        await session.commit()

    return build_notification_response(notification, is_read=True)


# ---------------------------------------------------------------------------
# Admin side
# ---------------------------------------------------------------------------


async def create_notification(
    session: AsyncSession,
    sender: Employee,
    payload: CreateNotificationRequest,
) -> NotificationResponse:
    """Send a notification. Raises 404 if the recipient does not exist."""
    if payload.recipient_id is not None and await get_employee(session, payload.recipient_id) is None:
        raise NotFoundError("Recipient not found")

    notification = Notification(
        title=payload.title,
        message=payload.message,
        notification_type=payload.notification_type.value,
        sender_id=sender.id,
        recipient_id=payload.recipient_id,
    )
    session.add(notification)
    await session.flush()

    audience = "everyone" if notification.recipient_id is None else str(notification.recipient_id)
    await write_audit_log(
        session,
        actor_id=sender.id,
        entity_type=AuditEntityType.NOTIFICATION,
        entity_id=notification.id,
        action=AuditAction.CREATE,
        summary=f"Sent {notification.notification_type} notification to {audience}",
        after_json=model_to_audit_dict(notification),
    )

    await session.commit()
    await session.refresh(notification)
    logger.info("Notification %s sent by %s to %s", notification.id, sender.id, audience)
    return build_notification_response(notification)


async def list_company_notifications(session: AsyncSession) -> NotificationListResponse:
    """Active company-wide notifications, newest first."""
    result = await session.execute(
        select(Notification)
        .where(col(Notification.recipient_id).is_(None), col(Notification.is_active).is_(True))
        .order_by(col(Notification.created_at).desc())
    )
    notifications = list(result.scalars().all())

    return NotificationListResponse(
        items=[build_notification_response(n) for n in notifications],
        total=len(notifications),
    )


async def deactivate_notification(
    session: AsyncSession,
    actor: Employee,
    notification_id: uuid.UUID,
) -> None:
    """Withdraw a notification so no reader sees it any more."""
    result = await session.execute(select(Notification).where(col(Notification.id) == notification_id))
    notification = result.scalar_one_or_none()
    if notification is None:
        raise NotFoundError("Notification not found")

    before_dict = model_to_audit_dict(notification)
    notification.is_active = False
    await session.flush()

    await write_audit_log(
        session,
        actor_id=actor.id,
        entity_type=AuditEntityType.NOTIFICATION,
        entity_id=notification.id,
        action=AuditAction.UPDATE,
        summary="Deactivated notification",
        before_json=before_dict,
        after_json=model_to_audit_dict(notification),
    )
    await session.commit()
