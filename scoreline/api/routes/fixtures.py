"""Fixture endpoints."""

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from scoreline.core.exceptions import SportMonksAPIError
from scoreline.core.rate_limit import RATE_LIMITS, limiter
from scoreline.db.services import FixtureService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", deprecated=True)
async def list_fixtures(
    date_from: date | None = Query(None, alias="dateFrom", description="YYYY-MM-DD"),
) -> dict[str, Any]:
    """Points clients at SofaScore's scheduled events for the day."""
    return FixtureService.scheduled_events_hint(date_from)


@router.get("/{fixture_id}")
@limiter.limit(RATE_LIMITS["proxy"])
async def get_fixture(request: Request, fixture_id: int) -> Any:
    """Fixture detail from the local cache or SportMonks."""
    try:
        fixture = await FixtureService.get_fixture(fixture_id)
    except SportMonksAPIError as e:
        upstream = e.upstream_status
        if upstream is None:
            raise
        return JSONResponse(
            status_code=upstream,
            content={"error": "Failed to fetch fixture from API", "details": e.details},
        )
    return {"fixture": fixture}
