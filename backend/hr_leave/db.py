from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

    from hr_leave.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    Pool sizing applies to server databases only; SQLite picks its own pool.
    """
    url = make_url(settings.database_url)
    options: dict[str, Any] = {"echo": settings.database_echo}
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_pre_ping=True,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    return create_async_engine(url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to ``engine``."""
    return async_sessionmaker(engine, expire_on_commit=False)


def init_db(app: FastAPI, settings: Settings) -> None:
    """Attach a fresh engine and session factory to the application state. Call on startup."""
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)


async def dispose_db(app: FastAPI) -> None:
    """Dispose the engine held in application state. Call on shutdown."""
    engine: AsyncEngine | None = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.dispose()
        app.state.engine = None
        app.state.session_factory = None


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an async database session."""
    factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with factory() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_session)]
