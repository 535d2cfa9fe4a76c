"""Tests for admin notifications and per-employee read state."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from hr_leave.models.audit import AuditLog
from hr_leave.models.notification import Notification
from hr_leave.services.notification import count_unread, list_notifications

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.models.employee import Employee

NOTIFICATIONS_URL = "/api/notifications"
ADMIN_NOTIFICATIONS_URL = "/api/admin/notifications"


def _headers(employee: Employee) -> dict[str, str]:
    return {"X-User-Id": employee.user_id}


async def _send(
    client: AsyncClient,
    admin: Employee,
    recipient: Employee | None = None,
    title: str = "Office closed",
) -> dict:  # type: ignore[type-arg]
    payload: dict[str, object] = {"title": title, "message": "The office is closed on Friday."}
    if recipient is not None:
        payload["recipient_id"] = str(recipient.id)
    resp = await client.post(ADMIN_NOTIFICATIONS_URL, json=payload, headers=_headers(admin))
    assert resp.status_code == 201, resp.text
    data: dict = resp.json()  # type: ignore[type-arg]
    return data


# ---------------------------------------------------------------------------
# Sending
# ---------------------------------------------------------------------------


async def test_create_company_wide(async_client: AsyncClient, db_session: AsyncSession, admin: Employee) -> None:
    data = await _send(async_client, admin)

    assert data["recipient_id"] is None
    assert data["sender_id"] == str(admin.id)
    assert data["notification_type"] == "info"
    assert data["is_active"] is True
    assert data["is_read"] is False

    audit = (
        await db_session.execute(select(AuditLog).where(col(AuditLog.entity_id) == uuid.UUID(data["id"])))
    ).scalar_one()
    assert audit.entity_type == "NOTIFICATION"
    assert audit.action == "CREATE"
    assert audit.summary == "Sent info notification to everyone"


async def test_create_unknown_recipient(async_client: AsyncClient, admin: Employee) -> None:
    resp = await async_client.post(
        ADMIN_NOTIFICATIONS_URL,
        json={"title": "Hi", "message": "Hello", "recipient_id": str(uuid.uuid4())},
        headers=_headers(admin),
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Recipient not found"


async def test_create_unknown_type_rejected(async_client: AsyncClient, admin: Employee) -> None:
    resp = await async_client.post(
        ADMIN_NOTIFICATIONS_URL,
        json={"title": "Hi", "message": "Hello", "notification_type": "gossip"},
        headers=_headers(admin),
    )
    assert resp.status_code == 422


async def test_create_requires_admin(async_client: AsyncClient, employee: Employee) -> None:
    resp = await async_client.post(
        ADMIN_NOTIFICATIONS_URL, json={"title": "Hi", "message": "Hello"}, headers=_headers(employee)
    )
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


async def test_list_shows_direct_and_company_wide_only(
    async_client: AsyncClient,
    admin: Employee,
    employee: Employee,
    make_employee: Callable[..., Awaitable[Employee]],
) -> None:
    other = await make_employee()
    await _send(async_client, admin, title="All hands")
    await _send(async_client, admin, recipient=employee, title="For you")
    await _send(async_client, admin, recipient=other, title="For someone else")

    resp = await async_client.get(NOTIFICATIONS_URL, headers=_headers(employee))
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert {n["title"] for n in data["items"]} == {"All hands", "For you"}


async def test_unread_count_and_mark_read(
    async_client: AsyncClient,
    admin: Employee,
    employee: Employee,
) -> None:
    company = await _send(async_client, admin)
    await _send(async_client, admin, recipient=employee)

    count = await async_client.get(f"{NOTIFICATIONS_URL}/unread-count", headers=_headers(employee))
    assert count.json() == {"count": 2}

    resp = await async_client.put(f"{NOTIFICATIONS_URL}/{company['id']}/read", headers=_headers(employee))
    assert resp.status_code == 200
    assert resp.json()["is_read"] is True

    count = await async_client.get(f"{NOTIFICATIONS_URL}/unread-count", headers=_headers(employee))
    assert count.json() == {"count": 1}


async def test_mark_read_is_idempotent(db_session: AsyncSession, async_client: AsyncClient, admin: Employee) -> None:
    company = await _send(async_client, admin)
    url = f"{NOTIFICATIONS_URL}/{company['id']}/read"

    assert (await async_client.put(url, headers=_headers(admin))).status_code == 200
    assert (await async_client.put(url, headers=_headers(admin))).status_code == 200
    assert await count_unread(db_session, admin.id) == 0


async def test_company_wide_read_state_is_per_employee(
    db_session: AsyncSession,
    async_client: AsyncClient,
    admin: Employee,
    employee: Employee,
) -> None:
    company = await _send(async_client, admin)

    await async_client.put(f"{NOTIFICATIONS_URL}/{company['id']}/read", headers=_headers(employee))

    assert await count_unread(db_session, employee.id) == 0
    assert await count_unread(db_session, admin.id) == 1

    seen_by_admin = await list_notifications(db_session, admin.id)
    assert [n.is_read for n in seen_by_admin.items] == [False]


async def test_mark_read_someone_elses_notification(
    async_client: AsyncClient,
    admin: Employee,
    employee: Employee,
    make_employee: Callable[..., Awaitable[Employee]],
) -> None:
    other = await make_employee()
    private = await _send(async_client, admin, recipient=other)

    resp = await async_client.put(f"{NOTIFICATIONS_URL}/{private['id']}/read", headers=_headers(employee))
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Admin views
# ---------------------------------------------------------------------------


async def test_company_list_excludes_direct(
    async_client: AsyncClient,
    admin: Employee,
    employee: Employee,
) -> None:
    await _send(async_client, admin, title="All hands")
    await _send(async_client, admin, recipient=employee, title="For you")

    resp = await async_client.get(f"{ADMIN_NOTIFICATIONS_URL}/company", headers=_headers(admin))
    assert resp.status_code == 200
    assert [n["title"] for n in resp.json()["items"]] == ["All hands"]


async def test_deactivate_hides_notification(
    async_client: AsyncClient,
    db_session: AsyncSession,
    admin: Employee,
    employee: Employee,
) -> None:
    company = await _send(async_client, admin)

    resp = await async_client.delete(f"{ADMIN_NOTIFICATIONS_URL}/{company['id']}", headers=_headers(admin))
    assert resp.status_code == 204

    listing = await async_client.get(NOTIFICATIONS_URL, headers=_headers(employee))
    assert listing.json()["total"] == 0
    stats = await async_client.get("/api/admin/stats", headers=_headers(admin))
    assert stats.json()["active_notifications"] == 0

    stored = (
        await db_session.execute(select(Notification).where(col(Notification.id) == uuid.UUID(company["id"])))
    ).scalar_one()
    assert stored.is_active is False


async def test_deactivate_unknown(async_client: AsyncClient, admin: Employee) -> None:
    resp = await async_client.delete(f"{ADMIN_NOTIFICATIONS_URL}/{uuid.uuid4()}", headers=_headers(admin))
    assert resp.status_code == 404
