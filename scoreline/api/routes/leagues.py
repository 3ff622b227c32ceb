"""League, standings and season endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Query, Request

from scoreline.core.exceptions import DataSourceError
from scoreline.core.rate_limit import RATE_LIMITS, limiter
from scoreline.data.sources.sofascore import DEFAULT_TOURNAMENT_ID, get_sofascore_client
from scoreline.data.sources.sportmonks import get_sportmonks_client
from scoreline.db.services import FixtureService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/leagues")
@limiter.limit(RATE_LIMITS["proxy"])
async def list_leagues(
    request: Request,
    page: int = Query(1, ge=1),
    per_page: int = Query(100, ge=1, le=100, alias="perPage"),
    includes: str = Query("country"),
) -> dict[str, Any]:
    """SportMonks leagues (cached for an hour)."""
    return await get_sportmonks_client().get_leagues(
        page=page, per_page=per_page, includes=includes
    )


@router.get("/leagues/{league_id}/standings")
@limiter.limit(RATE_LIMITS["proxy"])
async def get_standings(
    request: Request,
    league_id: int,
    season_id: int | None = Query(None, alias="seasonId"),
) -> dict[str, Any]:
    """Total standings for a SofaScore unique tournament."""
    return await FixtureService.get_standings(league_id, season_id)


@router.get("/seasons")
@limiter.limit(RATE_LIMITS["proxy"])
async def list_seasons(
    request: Request,
    tournament_id: int = Query(DEFAULT_TOURNAMENT_ID, alias="id"),
) -> dict[str, Any]:
    """Seasons of a tournament. Upstream failures yield an empty list."""
    try:
        seasons = await get_sofascore_client().get_seasons(tournament_id)
    except DataSourceError as e:
        logger.warning(f"Seasons lookup failed for tournament {tournament_id}: {e.message}")
        return {"error": e.message, "seasons": []}
    return {"seasons": seasons, "tournament": tournament_id}
