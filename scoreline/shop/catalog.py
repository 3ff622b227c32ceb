"""Static shop catalog and equip slots.

The catalog is the single source of truth for purchasable cosmetics; the
database only stores item ids.
"""

from enum import Enum
from typing import NotRequired, TypedDict


class ShopItem(TypedDict):
    """One purchasable cosmetic."""

    id: str
    name: str
    name_polish: str
    description: str
    price: int
    category: str  # avatar, background, frame, effect, title, badge
    icon: str
    limited: NotRequired[bool]


CATEGORIES = ("avatar", "background", "frame", "effect", "title", "badge")

SHOP_ITEMS: list[ShopItem] = [
    # Avatars
    {
        "id": "avatar_golden_fan",
        "name": "Golden Fan",
        "name_polish": "Złoty Kibic",
        "description": "Show everyone you're a true golden supporter",
        "price": 10000,
        "category": "avatar",
        "icon": "🏆",
    },
    {
        "id": "avatar_retro_player",
        "name": "Retro Player",
        "name_polish": "Retro Piłkarz",
        "description": "Classic football style from the golden era",
        "price": 7500,
        "category": "avatar",
        "icon": "⚽",
    },
    {
        "id": "avatar_ultras_3000",
        "name": "Ultras 3000",
        "name_polish": "Ultras 3000",
        "description": "For the most passionate fans",
        "price": 6000,
        "category": "avatar",
        "icon": "🔥",
    },
    {
        "id": "avatar_country_flag",
        "name": "Country Flag Avatar",
        "name_polish": "Avatar z flagą kraju",
        "description": "Represent your country with pride",
        "price": 3000,
        "category": "avatar",
        "icon": "🇵🇱",
    },
    {
        "id": "avatar_seasonal_exclusive",
        "name": "Seasonal Exclusive",
        "name_polish": "Ekskluzywny avatar sezonowy",
        "description": "Limited edition seasonal avatar - won't be available again!",
        "price": 12000,
        "category": "avatar",
        "icon": "⭐",
        "limited": True,
    },
    # Profile backgrounds
    {
        "id": "bg_stadium_night",
        "name": "Stadium at Night",
        "name_polish": "Stadion nocą",
        "description": "Beautiful stadium illuminated at night",
        "price": 8000,
        "category": "background",
        "icon": "🌃",
    },
    # Avatar frames
    {
        "id": "frame_golden_laurel",
        "name": "Golden Laurel",
        "name_polish": "Złoty Laur",
        "description": "Prestigious golden laurel frame for champions",
        "price": 6000,
        "category": "frame",
        "icon": "👑",
    },
    # Victory effects
    {
        "id": "effect_confetti",
        "name": "Confetti",
        "name_polish": "Konfetti",
        "description": "Celebrate your wins with confetti animation",
        "price": 4000,
        "category": "effect",
        "icon": "🎉",
    },
    # Titles
    {
        "id": "title_prediction_master",
        "name": "Prediction Master",
        "name_polish": "Mistrz Typowania",
        "description": "Show off your prediction skills",
        "price": 7000,
        "category": "title",
        "icon": "🎯",
    },
    # Badges
    {
        "id": "badge_100_percent",
        "name": "100% Accuracy",
        "name_polish": "100% trafień",
        "description": "Proof of perfect prediction streak",
        "price": 5000,
        "category": "badge",
        "icon": "💯",
    },
]

SHOP_ITEM_MAP: dict[str, ShopItem] = {item["id"]: item for item in SHOP_ITEMS}


def get_item(item_id: str) -> ShopItem | None:
    return SHOP_ITEM_MAP.get(item_id)


class EquipSlot(str, Enum):
    """Equippable slots, named after the shop category they accept."""

    AVATAR = "avatar"
    BACKGROUND = "background"
    FRAME = "frame"
    EFFECT = "effect"
    TITLE = "title"

    @property
    def column(self) -> str:
        """Account attribute holding the slot's equip pointer."""
        return _SLOT_COLUMNS[self]

    @property
    def sentinel(self) -> str | None:
        """Value meaning "nothing equipped" for this slot."""
        return _SLOT_SENTINELS[self]


_SLOT_COLUMNS: dict[EquipSlot, str] = {
    EquipSlot.AVATAR: "avatar",
    EquipSlot.BACKGROUND: "profile_background",
    EquipSlot.FRAME: "avatar_frame",
    EquipSlot.EFFECT: "victory_effect",
    EquipSlot.TITLE: "profile_title",
}

_SLOT_SENTINELS: dict[EquipSlot, str | None] = {
    EquipSlot.AVATAR: "default",
    EquipSlot.BACKGROUND: "default",
    EquipSlot.FRAME: "none",
    EquipSlot.EFFECT: "none",
    EquipSlot.TITLE: None,
}

# Ids a client may send to clear any slot
RESET_IDS = frozenset({"default", "none"})


def slot_for_category(category: str) -> EquipSlot | None:
    """Equip slot for a shop category, None for badges and unknown values."""
    try:
        return EquipSlot(category)
    except ValueError:
        return None
