"""Shop catalog, equip slots and badge definitions."""

from scoreline.shop.badges import BADGE_DEFINITIONS, describe_badges
from scoreline.shop.catalog import (
    CATEGORIES,
    RESET_IDS,
    SHOP_ITEMS,
    EquipSlot,
    ShopItem,
    get_item,
    slot_for_category,
)

__all__ = [
    "BADGE_DEFINITIONS",
    "CATEGORIES",
    "RESET_IDS",
    "SHOP_ITEMS",
    "EquipSlot",
    "ShopItem",
    "describe_badges",
    "get_item",
    "slot_for_category",
]
