"""Audit trail for employee, leave request and balance mutations.

Entries are added to the caller's session and committed with its unit of
work, so an audit row exists exactly when the change it describes does.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from hr_leave.models.audit import AuditLog

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlmodel import SQLModel

    from hr_leave.models.enums import AuditAction, AuditEntityType

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    if isinstance(value, uuid.UUID | Decimal):
        return str(value)
    if isinstance(value, datetime | date):
        return value.isoformat()
    return value


def model_to_audit_dict(model: SQLModel, **extra: Any) -> dict[str, Any]:
    """Snapshot a model as a JSON-safe dict. ``extra`` keys are merged in last."""
    data = {key: _json_safe(value) for key, value in model.model_dump().items()}
    data.update({key: _json_safe(value) for key, value in extra.items()})
    return data


async def write_audit_log(
    session: AsyncSession,
    *,
    actor_id: uuid.UUID | None,
    entity_type: AuditEntityType,
    entity_id: uuid.UUID,
    action: AuditAction,
    summary: str | None = None,
    before_json: dict[str, Any] | None = None,
    after_json: dict[str, Any] | None = None,
) -> AuditLog:
    """Add an audit entry to the session without committing.

    ``actor_id`` is None for system-initiated changes.
    """
    entry = AuditLog(
        actor_id=actor_id,
        entity_type=entity_type.value,
        entity_id=entity_id,
        action=action.value,
        summary=summary,
        before_json=before_json,
        after_json=after_json,
    )
    session.add(entry)
    logger.debug("Audit %s %s %s by %s", action.value, entity_type.value, entity_id, actor_id)
    return entry
