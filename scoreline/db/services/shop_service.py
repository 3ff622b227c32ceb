"""Shop service: catalog, purchases and equipping cosmetics."""

import logging
from typing import Any

from scoreline.core.exceptions import (
    AlreadyOwnedError,
    InsufficientCoinsError,
    InvalidCategoryError,
    ItemNotOwnedError,
    NotFoundError,
)
from scoreline.db.models import Account
from scoreline.db.repositories.unit_of_work import get_uow
from scoreline.db.services.account_service import load_account
from scoreline.shop.catalog import (
    RESET_IDS,
    SHOP_ITEMS,
    EquipSlot,
    ShopItem,
    get_item,
    slot_for_category,
)

logger = logging.getLogger(__name__)


def _owns(account: Account, item_id: str, category: str) -> bool:
    if category == "badge":
        return item_id in (account.badges or [])
    return item_id in (account.owned_items or [])


class ShopService:
    """Service for the cosmetics shop."""

    @staticmethod
    async def get_shop(account_id: int) -> dict[str, Any]:
        """Catalog plus the caller's inventory and balance."""
        async with get_uow() as uow:
            account = await load_account(uow, account_id)
            return {
                "items": SHOP_ITEMS,
                "owned_items": list(account.owned_items or []),
                "badges": list(account.badges or []),
                "equipped": account.equipped(),
                "coins": account.coins,
            }

    @staticmethod
    async def purchase(account_id: int, item_id: str) -> dict[str, Any]:
        """Buy a catalog item; equips it when its slot is still empty."""
        item = get_item(item_id)
        if item is None:
            raise NotFoundError("Item not found", details={"item_id": item_id})

        async with get_uow() as uow:
            account = await load_account(uow, account_id)
            ShopService._check_not_owned(account, item)
            if account.coins < item["price"]:
                raise InsufficientCoinsError(
                    "Insufficient coins", details={"coins": account.coins, "price": item["price"]}
                )

            # The debit locks the account row; inventory is re-read under that lock
            balance = await uow.accounts.apply_coin_delta(account_id, -item["price"])
            if balance is None:
                raise InsufficientCoinsError("Insufficient coins")
            await uow.session.refresh(account)
            ShopService._check_not_owned(account, item)

            account.owned_items = [*(account.owned_items or []), item_id]
            if item["category"] == "badge":
                account.badges = [*(account.badges or []), item_id]

            slot = slot_for_category(item["category"])
            if slot is not None and getattr(account, slot.column) == slot.sentinel:
                setattr(account, slot.column, item_id)

            await uow.commit()

        logger.info(f"Account {account_id} bought {item_id} for {item['price']} coins")
        return {
            "message": "Item purchased successfully",
            "item_id": item_id,
            "coins_remaining": balance,
        }

    @staticmethod
    async def equip(account_id: int, item_id: str, category: str) -> dict[str, Any]:
        """Point an equip slot at an owned item, or reset it with "default"/"none"."""
        slot = slot_for_category(category)
        if slot is None:
            raise InvalidCategoryError("Invalid category", details={"category": category})

        async with get_uow() as uow:
            account = await load_account(uow, account_id)
            value = ShopService._resolve_equip_value(account, slot, item_id)
            setattr(account, slot.column, value)
            await uow.commit()

            return {
                "message": "Item equipped successfully",
                "category": slot.value,
                "item_id": value,
                "equipped": account.equipped(),
            }

    @staticmethod
    def _check_not_owned(account: Account, item: ShopItem) -> None:
        if _owns(account, item["id"], item["category"]):
            noun = "badge" if item["category"] == "badge" else "item"
            raise AlreadyOwnedError(
                f"You already own this {noun}", details={"item_id": item["id"]}
            )

    @staticmethod
    def _resolve_equip_value(account: Account, slot: EquipSlot, item_id: str) -> str | None:
        if item_id in RESET_IDS:
            return slot.sentinel

        item = get_item(item_id)
        if item is None or not _owns(account, item_id, item["category"]):
            raise ItemNotOwnedError("You don't own this item", details={"item_id": item_id})
        if item["category"] != slot.value:
            raise InvalidCategoryError(
                "Item does not belong to this category",
                details={"item_id": item_id, "category": slot.value},
            )
        return item_id
