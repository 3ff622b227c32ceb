"""Cosmetics shop endpoints."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from scoreline.auth import AUTH_RESPONSES, GAME_RESPONSES, AuthenticatedUser, get_account_id
from scoreline.db.services import ShopService

router = APIRouter()


class PurchaseRequest(BaseModel):
    item_id: str = Field(min_length=1, max_length=100)


class EquipRequest(BaseModel):
    item_id: str = Field(min_length=1, max_length=100, description='Item id, "default" or "none"')
    category: str = Field(description="avatar, background, frame, effect or title")


@router.get("", responses=AUTH_RESPONSES)
async def get_shop(user: AuthenticatedUser) -> dict[str, Any]:
    """Catalog with the caller's inventory and balance."""
    return await ShopService.get_shop(get_account_id(user))


@router.post("", responses=GAME_RESPONSES)
async def purchase_item(body: PurchaseRequest, user: AuthenticatedUser) -> dict[str, Any]:
    return await ShopService.purchase(get_account_id(user), body.item_id)


@router.post("/equip", responses=GAME_RESPONSES)
async def equip_item(body: EquipRequest, user: AuthenticatedUser) -> dict[str, Any]:
    return await ShopService.equip(get_account_id(user), body.item_id, body.category)
