"""Public leaderboard and profiles."""

from typing import Any

from fastapi import APIRouter, Query

from scoreline.core.config import settings
from scoreline.db.services import AccountService

router = APIRouter()


@router.get("/ranking")
async def get_ranking(
    limit: int = Query(settings.ranking_limit, ge=1, le=500),
) -> dict[str, Any]:
    """Accounts ordered by coin balance."""
    return {"users": await AccountService.get_ranking(limit)}


@router.get("/{account_id}")
async def get_user(account_id: int) -> dict[str, Any]:
    """Public profile with prediction statistics."""
    return {"user": await AccountService.get_public_profile(account_id)}
