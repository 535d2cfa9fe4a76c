from __future__ import annotations

import uuid
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from hr_leave.db import get_session
from hr_leave.main import app
from hr_leave.models import Employee, SQLModel

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from sqlalchemy.engine import Connection
    from sqlalchemy.ext.asyncio import AsyncEngine

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with the schema created.

    pysqlite's own transaction handling is switched off so that SAVEPOINTs
    issued by ``session.begin_nested()`` behave as they do on PostgreSQL.
    """
    _engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(_engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(_engine.sync_engine, "begin")
    def _emit_begin(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN")

    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Yield a database session wrapped in a transaction that rolls back after each test."""
    async with engine.connect() as conn:
        txn = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        yield session
        await session.close()
        await txn.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the database session dependency overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Employee fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_employee(db_session: AsyncSession) -> Callable[..., Awaitable[Employee]]:
    """Factory that inserts an employee row and returns it."""

    async def _make(
        start_date: date | None = None,
        *,
        is_admin: bool = False,
        department: str = "Engineering",
        status: str = "active",
        user_id: str | None = None,
    ) -> Employee:
        suffix = uuid.uuid4().hex[:8]
        employee = Employee(
            user_id=user_id or f"user-{suffix}",
            employee_number=f"EMP-{suffix}",
            first_name="Test",
            last_name=f"Employee {suffix}",
            email=f"{suffix}@example.com",
            department=department,
            position="Engineer",
            start_date=start_date or date.today() - timedelta(days=400),
            status=status,
            is_admin=is_admin,
        )
        db_session.add(employee)
        await db_session.flush()
        return employee

    return _make


@pytest.fixture
async def employee(make_employee: Callable[..., Awaitable[Employee]]) -> Employee:
    """A regular employee hired 400 days ago."""
    return await make_employee()


@pytest.fixture
async def admin(make_employee: Callable[..., Awaitable[Employee]]) -> Employee:
    """An admin employee hired two years ago."""
    return await make_employee(date.today() - timedelta(days=730), is_admin=True, department="HR")
