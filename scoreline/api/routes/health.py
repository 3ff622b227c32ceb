"""Health check endpoints."""

import time
from typing import Any

from fastapi import APIRouter

from scoreline.core.cache import health_check as redis_health_check
from scoreline.core.config import settings
from scoreline.core.rate_limit import STORAGE_URI
from scoreline.db.database import check_db

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Basic health check."""
    return {"status": "healthy", "version": settings.app_version}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """Readiness check including dependencies.

    "not_ready" when the database is unreachable, "degraded" when Redis is
    down in production, "ready" otherwise.
    """
    database_ok = await check_db()

    redis_start = time.monotonic()
    redis_ok = await redis_health_check()
    redis_latency_ms = round((time.monotonic() - redis_start) * 1000, 1)

    redis_status: dict[str, Any] = {
        "connected": redis_ok,
        "latency_ms": redis_latency_ms if redis_ok else None,
        "backend": "redis" if STORAGE_URI != "memory://" else "memory",
    }

    if not database_ok:
        overall_status = "not_ready"
    elif not redis_ok and settings.is_production:
        overall_status = "degraded"
    else:
        overall_status = "ready"

    return {
        "status": overall_status,
        "database": database_ok,
        "redis": redis_status,
        "sportmonks_api": bool(settings.sportmonks_api_token),
    }
