"""Tests for the account endpoints, the coin ledger and the leaderboard."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from scoreline.db.repositories.unit_of_work import get_uow


async def _apply_delta(account_id: int, delta: int) -> int | None:
    async with get_uow() as uow:
        balance = await uow.accounts.apply_coin_delta(account_id, delta)
        await uow.commit()
        return balance


class TestCoinLedger:
    """Tests for AccountRepository.apply_coin_delta."""

    @pytest.mark.asyncio
    async def test_credit_and_debit(self, player: dict[str, Any]):
        assert await _apply_delta(player["id"], 50) == 150
        assert await _apply_delta(player["id"], -150) == 0

    @pytest.mark.asyncio
    async def test_overdraw_is_refused(self, player: dict[str, Any]):
        """A debit larger than the balance changes nothing."""
        assert await _apply_delta(player["id"], -101) is None
        assert await _apply_delta(player["id"], 0) == 100

    @pytest.mark.asyncio
    async def test_missing_account(self):
        assert await _apply_delta(424242, 10) is None


class TestProfile:
    """Test suite for /user endpoints."""

    def test_get_me(self, client: TestClient, player: dict[str, Any]):
        response = client.get("/api/v1/user/me", headers=player["headers"])

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "player@example.com"
        assert user["coins"] == 100
        assert user["badges"] == []

    def test_get_me_for_missing_account(self, client_ghost: TestClient):
        response = client_ghost.get("/api/v1/user/me")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_add_coins(self, client: TestClient, player: dict[str, Any]):
        response = client.post(
            "/api/v1/user/coins", json={"amount": 250}, headers=player["headers"]
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Coins added successfully", "coins": 350}

    def test_add_coins_rejects_non_positive(self, client: TestClient, player: dict[str, Any]):
        response = client.post("/api/v1/user/coins", json={"amount": 0}, headers=player["headers"])

        assert response.status_code == 422

    def test_add_and_remove_badge(self, client: TestClient, player: dict[str, Any]):
        added = client.post(
            "/api/v1/user/badges", json={"badge_id": "winner"}, headers=player["headers"]
        )
        assert added.status_code == 200
        assert added.json()["badge_id"] == "winner"

        again = client.post(
            "/api/v1/user/badges", json={"badge_id": "winner"}, headers=player["headers"]
        )
        assert again.status_code == 400
        assert again.json()["message"] == "Badge already owned"

        removed = client.request(
            "DELETE", "/api/v1/user/badges", json={"badge_id": "winner"}, headers=player["headers"]
        )
        assert removed.status_code == 200
        me = client.get("/api/v1/user/me", headers=player["headers"]).json()["user"]
        assert me["badges"] == []


class TestPublicProfile:
    """Test suite for GET /users/{id}."""

    def test_public_profile_hides_email(self, client: TestClient, player: dict[str, Any]):
        response = client.get(f"/api/v1/users/{player['id']}")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["nickname"] == "player_one"
        assert "email" not in user
        assert "password_hash" not in user

    def test_public_profile_stats_without_predictions(
        self, client: TestClient, player: dict[str, Any]
    ):
        stats = client.get(f"/api/v1/users/{player['id']}").json()["user"]["stats"]

        assert stats == {
            "total_predictions": 0,
            "settled_predictions": 0,
            "won_predictions": 0,
            "lost_predictions": 0,
            "win_rate": 0,
            "coins_wagered": 0,
            "coins_won": 0,
        }

    def test_public_profile_describes_badges(self, client: TestClient, player: dict[str, Any]):
        for badge_id in ("lucky", "badge_100_percent", "mystery"):
            client.post(
                "/api/v1/user/badges", json={"badge_id": badge_id}, headers=player["headers"]
            )

        badges = client.get(f"/api/v1/users/{player['id']}").json()["user"]["badges"]

        assert [b["id"] for b in badges] == ["lucky", "badge_100_percent", "mystery"]
        assert badges[0]["name"] == "Lucky Streak"
        assert badges[1]["name"] == "100% Accuracy"
        assert badges[2] == {"id": "mystery", "name": "mystery", "description": "", "icon": ""}

    def test_unknown_user(self, client: TestClient):
        response = client.get("/api/v1/users/31337")

        assert response.status_code == 404


class TestRanking:
    """Test suite for GET /users/ranking."""

    def test_ranking_orders_by_coins(
        self, client: TestClient, register_account: Any, top_up: Any
    ):
        poor = register_account(client, "poor@example.com", "poor")
        rich = register_account(client, "rich@example.com", "rich")
        middle = register_account(client, "mid@example.com", "middle")
        top_up(client, rich["headers"], 500)
        top_up(client, middle["headers"], 50)

        response = client.get("/api/v1/users/ranking")

        assert response.status_code == 200
        users = response.json()["users"]
        assert [u["nickname"] for u in users] == ["rich", "middle", "poor"]
        assert [u["rank"] for u in users] == [1, 2, 3]
        assert users[0]["coins"] == 600
        assert all("email" not in u for u in users)
        assert poor["id"] == users[2]["id"]

    def test_ranking_limit(self, client: TestClient, register_account: Any):
        register_account(client, "a@example.com", "alpha")
        register_account(client, "b@example.com", "bravo")

        users = client.get("/api/v1/users/ranking", params={"limit": 1}).json()["users"]

        assert len(users) == 1

    def test_equal_balances_keep_registration_order(
        self, client: TestClient, register_account: Any
    ):
        first = register_account(client, "a@example.com", "alpha")
        second = register_account(client, "b@example.com", "bravo")

        users = client.get("/api/v1/users/ranking").json()["users"]

        assert [u["id"] for u in users] == [first["id"], second["id"]]
