"""Team and player endpoints."""

from typing import Any

from fastapi import APIRouter, Query, Request

from scoreline.core.rate_limit import RATE_LIMITS, limiter
from scoreline.data.sources.sofascore import get_sofascore_client
from scoreline.data.sources.sportmonks import get_sportmonks_client

router = APIRouter()


@router.get("/teams")
@limiter.limit(RATE_LIMITS["proxy"])
async def list_teams(
    request: Request,
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100, alias="perPage"),
    includes: str = Query("country"),
    search: str | None = Query(None, min_length=1),
) -> dict[str, Any]:
    """SportMonks teams, optionally filtered by name."""
    return await get_sportmonks_client().get_teams(
        page=page, per_page=per_page, includes=includes, search=search
    )


@router.get("/teams/{team_id}/statistics")
@limiter.limit(RATE_LIMITS["proxy"])
async def get_team_statistics(request: Request, team_id: int) -> dict[str, Any]:
    return await get_sofascore_client().get_team_statistics(team_id)


@router.get("/players/{player_id}/transfers")
@limiter.limit(RATE_LIMITS["proxy"])
async def get_player_transfers(request: Request, player_id: int) -> dict[str, Any]:
    return await get_sofascore_client().get_player_transfers(player_id)
