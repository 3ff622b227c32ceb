"""Integration tests for the cosmetics shop."""

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from scoreline.core.exceptions import AlreadyOwnedError
from scoreline.db.services.shop_service import ShopService
from scoreline.shop.catalog import get_item


def _buy(client: TestClient, headers: dict[str, str], item_id: str) -> Any:
    return client.post("/api/v1/shop", json={"item_id": item_id}, headers=headers)


def _price(item_id: str) -> int:
    item = get_item(item_id)
    assert item is not None
    return item["price"]


def _equip(client: TestClient, headers: dict[str, str], item_id: str, category: str) -> Any:
    return client.post(
        "/api/v1/shop/equip", json={"item_id": item_id, "category": category}, headers=headers
    )


class TestGetShop:
    """Test suite for GET /shop."""

    def test_catalog_and_inventory(self, client: TestClient, player: dict[str, Any]):
        response = client.get("/api/v1/shop", headers=player["headers"])

        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 10
        assert data["owned_items"] == []
        assert data["badges"] == []
        assert data["coins"] == 100
        assert data["equipped"]["avatar"] == "default"
        assert data["equipped"]["victory_effect"] == "none"

    def test_requires_auth(self, client: TestClient):
        assert client.get("/api/v1/shop").status_code == 401


class TestPurchase:
    """Test suite for POST /shop."""

    def test_price_above_balance_rejected(self, client: TestClient, player: dict[str, Any]):
        response = _buy(client, player["headers"], "avatar_country_flag")

        assert response.status_code == 400
        assert response.json()["message"] == "Insufficient coins"

    def test_purchase_debits_and_auto_equips(
        self, client: TestClient, player: dict[str, Any], top_up: Any
    ):
        """First item of a slot is equipped straight away."""
        top_up(client, player["headers"], 2900)

        response = _buy(client, player["headers"], "avatar_country_flag")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Item purchased successfully",
            "item_id": "avatar_country_flag",
            "coins_remaining": 0,
        }
        shop = client.get("/api/v1/shop", headers=player["headers"]).json()
        assert shop["owned_items"] == ["avatar_country_flag"]
        assert shop["equipped"]["avatar"] == "avatar_country_flag"

    def test_second_item_does_not_replace_equipped(
        self, client: TestClient, player: dict[str, Any], top_up: Any
    ):
        top_up(client, player["headers"], 20000)
        _buy(client, player["headers"], "avatar_country_flag")

        _buy(client, player["headers"], "avatar_ultras_3000")

        shop = client.get("/api/v1/shop", headers=player["headers"]).json()
        assert shop["equipped"]["avatar"] == "avatar_country_flag"
        assert shop["coins"] == 100 + 20000 - 3000 - 6000

    def test_second_purchase_rejected(
        self, client: TestClient, player: dict[str, Any], top_up: Any
    ):
        top_up(client, player["headers"], 10000)
        _buy(client, player["headers"], "effect_confetti")

        response = _buy(client, player["headers"], "effect_confetti")

        assert response.status_code == 400
        assert response.json()["message"] == "You already own this item"
        shop = client.get("/api/v1/shop", headers=player["headers"]).json()
        assert shop["coins"] == 100 + 10000 - 4000

    def test_badge_purchase_grants_badge(
        self, client: TestClient, player: dict[str, Any], top_up: Any
    ):
        top_up(client, player["headers"], 4900)

        assert _buy(client, player["headers"], "badge_100_percent").status_code == 200

        shop = client.get("/api/v1/shop", headers=player["headers"]).json()
        assert "badge_100_percent" in shop["badges"]
        again = _buy(client, player["headers"], "badge_100_percent")
        assert again.json()["message"] == "You already own this badge"

    def test_unknown_item(self, client: TestClient, player: dict[str, Any]):
        response = _buy(client, player["headers"], "avatar_does_not_exist")

        assert response.status_code == 404
        assert response.json()["message"] == "Item not found"


class TestEquip:
    """Test suite for POST /shop/equip."""

    def test_unowned_item_rejected(self, client: TestClient, player: dict[str, Any]):
        response = _equip(client, player["headers"], "frame_golden_laurel", "frame")

        assert response.status_code == 400
        assert response.json()["message"] == "You don't own this item"

    def test_equip_owned_item(self, client: TestClient, player: dict[str, Any], top_up: Any):
        top_up(client, player["headers"], 20000)
        _buy(client, player["headers"], "avatar_country_flag")
        _buy(client, player["headers"], "avatar_ultras_3000")

        response = _equip(client, player["headers"], "avatar_ultras_3000", "avatar")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Item equipped successfully"
        assert data["equipped"]["avatar"] == "avatar_ultras_3000"

    @pytest.mark.parametrize(
        ("category", "column", "reset_to"),
        [
            ("avatar", "avatar", "default"),
            ("background", "profile_background", "default"),
            ("frame", "avatar_frame", "none"),
            ("effect", "victory_effect", "none"),
            ("title", "profile_title", None),
        ],
    )
    def test_reset_ids_are_always_allowed(
        self,
        client: TestClient,
        player: dict[str, Any],
        category: str,
        column: str,
        reset_to: str | None,
    ):
        for item_id in ("default", "none"):
            response = _equip(client, player["headers"], item_id, category)

            assert response.status_code == 200
            assert response.json()["equipped"][column] == reset_to

    def test_reset_after_equip(self, client: TestClient, player: dict[str, Any], top_up: Any):
        top_up(client, player["headers"], 7000)
        _buy(client, player["headers"], "title_prediction_master")

        response = _equip(client, player["headers"], "none", "title")

        assert response.json()["equipped"]["profile_title"] is None

    def test_item_in_wrong_slot_rejected(
        self, client: TestClient, player: dict[str, Any], top_up: Any
    ):
        top_up(client, player["headers"], 4000)
        _buy(client, player["headers"], "effect_confetti")

        response = _equip(client, player["headers"], "effect_confetti", "frame")

        assert response.status_code == 400
        assert response.json()["message"] == "Item does not belong to this category"

    @pytest.mark.parametrize("category", ["badge", "hat", ""])
    def test_invalid_category(self, client: TestClient, player: dict[str, Any], category: str):
        response = _equip(client, player["headers"], "default", category)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category"


class TestConcurrentPurchases:
    """Purchases racing on the same account."""

    @pytest.mark.asyncio
    async def test_both_items_are_kept(
        self, client: TestClient, player: dict[str, Any], top_up: Any
    ):
        """Each racing purchase is charged and lands in the inventory."""
        top_up(client, player["headers"], 20000)

        results = await asyncio.gather(
            ShopService.purchase(player["id"], "bg_stadium_night"),
            ShopService.purchase(player["id"], "effect_confetti"),
        )

        assert [r["message"] for r in results] == ["Item purchased successfully"] * 2
        shop = await ShopService.get_shop(player["id"])
        assert sorted(shop["owned_items"]) == ["bg_stadium_night", "effect_confetti"]
        spent = _price("bg_stadium_night") + _price("effect_confetti")
        assert shop["coins"] == 20100 - spent
        assert shop["equipped"]["profile_background"] == "bg_stadium_night"
        assert shop["equipped"]["victory_effect"] == "effect_confetti"

    @pytest.mark.asyncio
    async def test_same_item_is_charged_once(
        self, client: TestClient, player: dict[str, Any], top_up: Any
    ):
        top_up(client, player["headers"], 20000)

        results = await asyncio.gather(
            ShopService.purchase(player["id"], "effect_confetti"),
            ShopService.purchase(player["id"], "effect_confetti"),
            return_exceptions=True,
        )

        assert sum(isinstance(r, AlreadyOwnedError) for r in results) == 1
        shop = await ShopService.get_shop(player["id"])
        assert shop["owned_items"] == ["effect_confetti"]
        assert shop["coins"] == 20100 - _price("effect_confetti")
