"""Tests for admin statistics and audit log queries."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from hr_leave.models.accrual import LeaveAccrual
from hr_leave.models.enums import RequestStatus
from hr_leave.models.notification import Notification
from hr_leave.models.request import LeaveRequest
from hr_leave.services.accrual import process_leave_accruals
from hr_leave.services.report import get_admin_stats

if TYPE_CHECKING:
    import uuid
    from collections.abc import Awaitable, Callable

    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.models.employee import Employee

TODAY = date(2025, 6, 15)


def _headers(employee: Employee) -> dict[str, str]:
    return {"X-User-Id": employee.user_id}


async def _add_request(session: AsyncSession, employee_id: uuid.UUID, status: RequestStatus) -> None:
    session.add(
        LeaveRequest(
            employee_id=employee_id,
            leave_type="vacation",
            start_date=date(2025, 7, 1),
            end_date=date(2025, 7, 2),
            days=Decimal(2),
            status=status.value,
        )
    )
    await session.flush()


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


async def test_admin_stats_counts(
    db_session: AsyncSession,
    make_employee: Callable[..., Awaitable[Employee]],
) -> None:
    new_hire = await make_employee(date(2025, 6, 3))
    veteran = await make_employee(date(2024, 1, 1))
    await make_employee(date(2025, 6, 10), status="terminated")
    await make_employee(date(2025, 6, 20))

    await _add_request(db_session, new_hire.id, RequestStatus.PENDING)
    await _add_request(db_session, veteran.id, RequestStatus.PENDING)
    await _add_request(db_session, veteran.id, RequestStatus.APPROVED)

    await process_leave_accruals(db_session, veteran.id, TODAY)
    db_session.add(
        LeaveAccrual(
            employee_id=veteran.id,
            accrual_type="casual",
            accrual_amount=Decimal(1),
            accrual_date=date(2025, 5, 31),
            reason="Posted last month",
        )
    )
    db_session.add(Notification(title="Benefits", message="Enrolment opens Monday", sender_id=veteran.id))
    db_session.add(
        Notification(title="Old", message="Withdrawn", sender_id=veteran.id, recipient_id=new_hire.id, is_active=False)
    )
    await db_session.flush()

    stats = await get_admin_stats(db_session, TODAY)

    assert stats.total_employees == 3
    assert stats.new_hires == 1
    assert stats.pending_approvals == 2
    assert stats.accruals_this_month == 2
    assert stats.active_notifications == 1


async def test_admin_stats_empty(db_session: AsyncSession) -> None:
    stats = await get_admin_stats(db_session, TODAY)

    assert stats.total_employees == 0
    assert stats.new_hires == 0
    assert stats.pending_approvals == 0
    assert stats.accruals_this_month == 0
    assert stats.active_notifications == 0


async def test_admin_stats_endpoint(async_client: AsyncClient, admin: Employee, employee: Employee) -> None:
    await async_client.get("/api/leave/balance", headers=_headers(employee))

    resp = await async_client.get("/api/admin/stats", headers=_headers(admin))
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_employees"] == 2
    assert data["pending_approvals"] == 0
    assert data["accruals_this_month"] == 2


async def test_admin_stats_requires_admin(async_client: AsyncClient, employee: Employee) -> None:
    resp = await async_client.get("/api/admin/stats", headers=_headers(employee))
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Audit log
# ---------------------------------------------------------------------------


async def test_audit_log_filters(async_client: AsyncClient, admin: Employee) -> None:
    created = await async_client.post(
        "/api/admin/employees",
        json={
            "user_id": "oidc|sam",
            "employee_number": "E-2001",
            "first_name": "Sam",
            "last_name": "Lee",
            "email": "sam.lee@example.com",
            "department": "Support",
            "position": "Agent",
            "start_date": "2023-09-01",
        },
        headers=_headers(admin),
    )
    employee_id = created.json()["id"]
    await async_client.put(
        f"/api/admin/employees/{employee_id}", json={"position": "Lead"}, headers=_headers(admin)
    )

    resp = await async_client.get(
        "/api/admin/audit-log", params={"entity_type": "EMPLOYEE"}, headers=_headers(admin)
    )
    assert resp.status_code == 200
    assert resp.json()["total"] == 2

    updates = await async_client.get(
        "/api/admin/audit-log",
        params={"entity_id": employee_id, "action": "UPDATE"},
        headers=_headers(admin),
    )
    items = updates.json()["items"]
    assert len(items) == 1
    assert items[0]["before_json"]["position"] == "Agent"
    assert items[0]["after_json"]["position"] == "Lead"
    assert items[0]["actor_id"] == str(admin.id)
    assert items[0]["summary"] == "Updated position"


async def test_audit_log_requires_admin(async_client: AsyncClient, employee: Employee) -> None:
    resp = await async_client.get("/api/admin/audit-log", headers=_headers(employee))
    assert resp.status_code == 403
