"""Tests for the employee directory endpoints."""

from __future__ import annotations

import uuid
from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from hr_leave.models.audit import AuditLog

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.models.employee import Employee

ADMIN_EMPLOYEES_URL = "/api/admin/employees"


def _headers(employee: Employee) -> dict[str, str]:
    return {"X-User-Id": employee.user_id}


def _create_payload(**overrides: object) -> dict:  # type: ignore[type-arg]
    payload = {
        "user_id": "oidc|jane",
        "employee_number": "E-1001",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane.doe@example.com",
        "department": "Finance",
        "position": "Analyst",
        "start_date": "2024-03-01",
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Current employee
# ---------------------------------------------------------------------------


async def test_get_me(async_client: AsyncClient, employee: Employee) -> None:
    resp = await async_client.get("/api/employees/me", headers=_headers(employee))
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == str(employee.id)
    assert data["user_id"] == employee.user_id
    assert data["is_admin"] is False
    assert data["status"] == "active"


async def test_get_me_unknown_subject(async_client: AsyncClient) -> None:
    resp = await async_client.get("/api/employees/me", headers={"X-User-Id": "ghost"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "NotFoundError", "detail": "Employee profile not found", "status_code": 404}


async def test_update_me_contact_details(
    async_client: AsyncClient,
    db_session: AsyncSession,
    employee: Employee,
) -> None:
    resp = await async_client.put(
        "/api/employees/me",
        json={"phone": "+1 555 0100", "address": "1 Main St", "email": "new@example.com"},
        headers=_headers(employee),
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["phone"] == "+1 555 0100"
    assert data["address"] == "1 Main St"
    assert data["email"] == "new@example.com"

    audit = (
        await db_session.execute(
            select(AuditLog).where(col(AuditLog.entity_id) == employee.id, col(AuditLog.action) == "UPDATE")
        )
    ).scalar_one()
    assert audit.actor_id == employee.id


async def test_update_me_cannot_grant_admin(async_client: AsyncClient, employee: Employee) -> None:
    resp = await async_client.put(
        "/api/employees/me",
        json={"is_admin": True, "department": "Finance", "first_name": "Janet"},
        headers=_headers(employee),
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_admin"] is False
    assert data["department"] == "Engineering"
    assert data["first_name"] == "Janet"


async def test_update_me_null_name_rejected(async_client: AsyncClient, employee: Employee) -> None:
    resp = await async_client.put("/api/employees/me", json={"first_name": None}, headers=_headers(employee))
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Admin CRUD
# ---------------------------------------------------------------------------


async def test_create_employee(async_client: AsyncClient, db_session: AsyncSession, admin: Employee) -> None:
    resp = await async_client.post(ADMIN_EMPLOYEES_URL, json=_create_payload(), headers=_headers(admin))
    assert resp.status_code == 201
    data = resp.json()
    assert data["employee_number"] == "E-1001"
    assert data["start_date"] == "2024-03-01"
    assert data["status"] == "active"

    audit = (
        await db_session.execute(select(AuditLog).where(col(AuditLog.entity_id) == uuid.UUID(data["id"])))
    ).scalar_one()
    assert audit.action == "CREATE"
    assert audit.entity_type == "EMPLOYEE"
    assert audit.actor_id == admin.id
    assert audit.summary == "Created employee E-1001"


async def test_create_employee_duplicate_user_id(async_client: AsyncClient, admin: Employee) -> None:
    first = await async_client.post(ADMIN_EMPLOYEES_URL, json=_create_payload(), headers=_headers(admin))
    assert first.status_code == 201

    dup = await async_client.post(
        ADMIN_EMPLOYEES_URL, json=_create_payload(employee_number="E-1002"), headers=_headers(admin)
    )
    assert dup.status_code == 409


async def test_create_employee_duplicate_number(async_client: AsyncClient, admin: Employee) -> None:
    await async_client.post(ADMIN_EMPLOYEES_URL, json=_create_payload(), headers=_headers(admin))

    dup = await async_client.post(
        ADMIN_EMPLOYEES_URL, json=_create_payload(user_id="oidc|john"), headers=_headers(admin)
    )
    assert dup.status_code == 409


async def test_create_employee_missing_field(async_client: AsyncClient, admin: Employee) -> None:
    payload = _create_payload()
    del payload["start_date"]

    resp = await async_client.post(ADMIN_EMPLOYEES_URL, json=payload, headers=_headers(admin))
    assert resp.status_code == 422
    assert resp.json()["error"] == "ValidationError"


async def test_create_employee_future_start_date_rejected(async_client: AsyncClient, admin: Employee) -> None:
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    resp = await async_client.post(
        ADMIN_EMPLOYEES_URL, json=_create_payload(start_date=tomorrow), headers=_headers(admin)
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "ValidationError"


async def test_create_employee_requires_admin(async_client: AsyncClient, employee: Employee) -> None:
    resp = await async_client.post(ADMIN_EMPLOYEES_URL, json=_create_payload(), headers=_headers(employee))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Admin access required"


async def test_get_employee(async_client: AsyncClient, admin: Employee, employee: Employee) -> None:
    resp = await async_client.get(f"{ADMIN_EMPLOYEES_URL}/{employee.id}", headers=_headers(admin))
    assert resp.status_code == 200
    assert resp.json()["email"] == employee.email


async def test_get_employee_not_found(async_client: AsyncClient, admin: Employee) -> None:
    resp = await async_client.get(f"{ADMIN_EMPLOYEES_URL}/{uuid.uuid4()}", headers=_headers(admin))
    assert resp.status_code == 404
    assert resp.json()["error"] == "NotFoundError"


async def test_update_employee_partial(
    async_client: AsyncClient,
    db_session: AsyncSession,
    admin: Employee,
    employee: Employee,
) -> None:
    resp = await async_client.put(
        f"{ADMIN_EMPLOYEES_URL}/{employee.id}",
        json={"department": "Sales", "status": "inactive"},
        headers=_headers(admin),
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["department"] == "Sales"
    assert data["status"] == "inactive"
    assert data["first_name"] == employee.first_name

    audit = (
        await db_session.execute(
            select(AuditLog).where(col(AuditLog.entity_id) == employee.id, col(AuditLog.action) == "UPDATE")
        )
    ).scalar_one()
    assert audit.before_json is not None
    assert audit.after_json is not None
    assert audit.before_json["department"] == "Engineering"
    assert audit.after_json["department"] == "Sales"


async def test_update_employee_explicit_null_clears_phone(
    async_client: AsyncClient,
    admin: Employee,
    employee: Employee,
) -> None:
    url = f"{ADMIN_EMPLOYEES_URL}/{employee.id}"
    await async_client.put(url, json={"phone": "+1 555 0199"}, headers=_headers(admin))

    resp = await async_client.put(url, json={"phone": None}, headers=_headers(admin))
    assert resp.status_code == 200
    assert resp.json()["phone"] is None


async def test_update_employee_null_required_field_rejected(
    async_client: AsyncClient,
    admin: Employee,
    employee: Employee,
) -> None:
    resp = await async_client.put(
        f"{ADMIN_EMPLOYEES_URL}/{employee.id}", json={"department": None}, headers=_headers(admin)
    )
    assert resp.status_code == 422


async def test_update_employee_future_start_date_rejected(
    async_client: AsyncClient,
    admin: Employee,
    employee: Employee,
) -> None:
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    resp = await async_client.put(
        f"{ADMIN_EMPLOYEES_URL}/{employee.id}", json={"start_date": tomorrow}, headers=_headers(admin)
    )
    assert resp.status_code == 422

    me = await async_client.get("/api/employees/me", headers=_headers(employee))
    assert me.json()["start_date"] == employee.start_date.isoformat()


async def test_update_employee_not_found(async_client: AsyncClient, admin: Employee) -> None:
    resp = await async_client.put(
        f"{ADMIN_EMPLOYEES_URL}/{uuid.uuid4()}", json={"position": "Lead"}, headers=_headers(admin)
    )
    assert resp.status_code == 404


async def test_list_employees_by_department(
    async_client: AsyncClient,
    admin: Employee,
    make_employee: Callable[..., Awaitable[Employee]],
) -> None:
    await make_employee(department="Finance")
    await make_employee(department="Finance")
    await make_employee(department="Engineering")

    finance = await async_client.get(ADMIN_EMPLOYEES_URL, params={"department": "Finance"}, headers=_headers(admin))
    assert finance.status_code == 200
    assert finance.json()["total"] == 2
    assert {e["department"] for e in finance.json()["items"]} == {"Finance"}

    everyone = await async_client.get(ADMIN_EMPLOYEES_URL, params={"department": "all"}, headers=_headers(admin))
    assert everyone.json()["total"] == 4


async def test_list_employees_pagination(
    async_client: AsyncClient,
    admin: Employee,
    make_employee: Callable[..., Awaitable[Employee]],
) -> None:
    for _ in range(3):
        await make_employee()

    resp = await async_client.get(ADMIN_EMPLOYEES_URL, params={"offset": 1, "limit": 2}, headers=_headers(admin))
    data = resp.json()
    assert data["total"] == 4
    assert len(data["items"]) == 2
