# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query

from hr_leave.api.deps import AdminDep
from hr_leave.db import SessionDep
from hr_leave.schemas.report import AdminStatsResponse, AuditLogListResponse
from hr_leave.services import report as report_service

reports_router = APIRouter(
    prefix="/admin",
    tags=["reports"],
)


@reports_router.get("/stats", response_model=AdminStatsResponse)
async def get_admin_stats(
    session: SessionDep,
    admin: AdminDep,
) -> AdminStatsResponse:
    """Headline counts for the admin console (admin only)."""
    return await report_service.get_admin_stats(session)


@reports_router.get("/audit-log", response_model=AuditLogListResponse)
async def query_audit_log(
    session: SessionDep,
    admin: AdminDep,
    entity_type: str | None = Query(default=None),
    entity_id: uuid.UUID | None = Query(default=None),
    action: str | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AuditLogListResponse:
    """Query audit log entries with optional filters (admin only)."""
    return await report_service.query_audit_log(
        session,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        offset=offset,
        limit=limit,
    )
