"""Endpoints for the signed-in account (``/user``)."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from scoreline.auth import AUTH_RESPONSES, GAME_RESPONSES, AuthenticatedUser, get_account_id
from scoreline.db.services import AccountService

router = APIRouter()


class AddCoinsRequest(BaseModel):
    amount: int = Field(gt=0, description="Coins to add")


class BadgeRequest(BaseModel):
    badge_id: str = Field(min_length=1, max_length=100)


@router.get("/me", responses=AUTH_RESPONSES)
async def get_me(user: AuthenticatedUser) -> dict[str, Any]:
    """Private profile of the caller."""
    return {"user": await AccountService.get_profile(get_account_id(user))}


@router.post("/coins", responses=GAME_RESPONSES)
async def add_coins(body: AddCoinsRequest, user: AuthenticatedUser) -> dict[str, Any]:
    return await AccountService.add_coins(get_account_id(user), body.amount)


@router.post("/badges", responses=GAME_RESPONSES)
async def add_badge(body: BadgeRequest, user: AuthenticatedUser) -> dict[str, Any]:
    return await AccountService.add_badge(get_account_id(user), body.badge_id)


@router.delete("/badges", responses=GAME_RESPONSES)
async def remove_badge(body: BadgeRequest, user: AuthenticatedUser) -> dict[str, Any]:
    return await AccountService.remove_badge(get_account_id(user), body.badge_id)
