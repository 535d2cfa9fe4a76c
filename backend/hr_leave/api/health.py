import logging
import time
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from hr_leave.config import get_settings
from hr_leave.db import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness report: service identity plus a database round trip."""

    status: Literal["ok", "degraded"]
    database: Literal["ok", "unreachable"]
    database_latency_ms: float | None
    version: str
    environment: str


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    """Report service status and database connectivity. Needs no identity header."""
    settings = get_settings()

    started = time.perf_counter()
    try:
        await session.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check: database connectivity failed")
        return HealthResponse(
            status="degraded",
            database="unreachable",
            database_latency_ms=None,
            version=settings.app_version,
            environment=settings.environment,
        )

    return HealthResponse(
        status="ok",
        database="ok",
        database_latency_ms=round((time.perf_counter() - started) * 1000, 2),
        version=settings.app_version,
        environment=settings.environment,
    )
