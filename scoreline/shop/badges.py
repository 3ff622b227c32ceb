"""Achievement badge definitions shown on public profiles."""

from typing import TypedDict

from scoreline.shop.catalog import get_item


class BadgeDefinition(TypedDict):
    name: str
    description: str
    icon: str


BADGE_DEFINITIONS: dict[str, BadgeDefinition] = {
    "winner": {
        "name": "Always The Winner",
        "description": "Won 10 predictions in a row",
        "icon": "🏆",
    },
    "veteran": {
        "name": "Veteran Predictor",
        "description": "Made 100+ predictions",
        "icon": "🎖️",
    },
    "sharpshooter": {
        "name": "Sharpshooter",
        "description": "75%+ win rate with 20+ predictions",
        "icon": "🎯",
    },
    "millionaire": {
        "name": "Coin Millionaire",
        "description": "Earned 10,000+ coins",
        "icon": "💰",
    },
    "lucky": {
        "name": "Lucky Streak",
        "description": "Won 5 predictions in a row",
        "icon": "🍀",
    },
    "collector": {
        "name": "Badge Collector",
        "description": "Own 5 or more badges",
        "icon": "📛",
    },
}


def describe_badges(badge_ids: list[str]) -> list[dict[str, str]]:
    """Expand badge ids into display records.

    Ids without a definition (shop badges, for instance) are described by
    the shop catalog when possible and otherwise returned bare.
    """
    described: list[dict[str, str]] = []
    for badge_id in badge_ids:
        definition = BADGE_DEFINITIONS.get(badge_id)
        if definition is not None:
            described.append({"id": badge_id, **definition})
            continue
        item = get_item(badge_id)
        if item is not None:
            described.append(
                {
                    "id": badge_id,
                    "name": item["name"],
                    "description": item["description"],
                    "icon": item["icon"],
                }
            )
        else:
            described.append({"id": badge_id, "name": badge_id, "description": "", "icon": ""})
    return described
