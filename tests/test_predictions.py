"""Integration tests for wager endpoints."""

import asyncio
from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from scoreline.api.main import app
from scoreline.core.exceptions import DuplicatePredictionError, SofaScoreAPIError
from scoreline.db.repositories.unit_of_work import get_uow
from scoreline.db.services.prediction_service import PredictionService


def _match_wager(
    fixture_api_id: int = 12345, home: int = 1, away: int = 0, coins: int = 40
) -> dict[str, Any]:
    return {
        "prediction_type": "match",
        "fixture_api_id": fixture_api_id,
        "predicted_home_score": home,
        "predicted_away_score": away,
        "coins_wagered": coins,
    }


class TestPredictionEndpointsAuth:
    """Wager endpoints require a session."""

    def test_list_without_auth(self):
        assert TestClient(app).get("/api/v1/predictions").status_code == 401

    def test_create_without_auth(self):
        response = TestClient(app).post("/api/v1/predictions", json=_match_wager())
        assert response.status_code == 401

    def test_settle_without_auth(self):
        assert TestClient(app).post("/api/v1/predictions/settle").status_code == 401


class TestCreateMatchPrediction:
    """Test suite for POST /predictions (match wagers)."""

    def test_stake_is_debited(
        self, client: TestClient, player: dict[str, Any], upcoming_sofascore: MagicMock
    ):
        """100 coins, 40 on 1-0: the wager is pending and 60 coins remain."""
        response = client.post(
            "/api/v1/predictions", json=_match_wager(), headers=player["headers"]
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Prediction created successfully"
        assert data["coins_remaining"] == 60
        prediction = data["prediction"]
        assert prediction["fixture_api_id"] == 12345
        assert prediction["predicted_home_score"] == 1
        assert prediction["predicted_away_score"] == 0
        assert prediction["verdict"] == "pending"
        assert prediction["is_settled"] is False
        assert prediction["coins_won"] == 0

        me = client.get("/api/v1/user/me", headers=player["headers"]).json()["user"]
        assert me["coins"] == 60
        upcoming_sofascore.get_event.assert_awaited_once_with(12345)

    def test_fixture_snapshot_is_stored(
        self, client: TestClient, player: dict[str, Any], upcoming_sofascore: MagicMock
    ):
        client.post("/api/v1/predictions", json=_match_wager(), headers=player["headers"])

        predictions = client.get("/api/v1/predictions", headers=player["headers"]).json()[
            "predictions"
        ]

        assert len(predictions) == 1
        fixture = predictions[0]["fixture"]
        assert fixture["home_team_name"] == "Manchester City"
        assert fixture["away_team_name"] == "Arsenal"
        assert fixture["state_name"] == "Not started"
        assert fixture["home_team_logo"].endswith("/team/17/image")

    def test_duplicate_wager_rejected(
        self, client: TestClient, player: dict[str, Any], upcoming_sofascore: MagicMock
    ):
        client.post("/api/v1/predictions", json=_match_wager(), headers=player["headers"])

        response = client.post(
            "/api/v1/predictions",
            json=_match_wager(home=2, away=2, coins=10),
            headers=player["headers"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "You have already predicted this match"
        me = client.get("/api/v1/user/me", headers=player["headers"]).json()["user"]
        assert me["coins"] == 60

    def test_insufficient_coins(
        self, client: TestClient, player: dict[str, Any], upcoming_sofascore: MagicMock
    ):
        response = client.post(
            "/api/v1/predictions", json=_match_wager(coins=101), headers=player["headers"]
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Insufficient coins"
        assert client.get("/api/v1/predictions", headers=player["headers"]).json() == {
            "predictions": []
        }

    def test_whole_balance_can_be_staked(
        self, client: TestClient, player: dict[str, Any], upcoming_sofascore: MagicMock
    ):
        response = client.post(
            "/api/v1/predictions", json=_match_wager(coins=100), headers=player["headers"]
        )

        assert response.status_code == 201
        assert response.json()["coins_remaining"] == 0

    @patch("scoreline.db.services.prediction_service.get_sofascore_client")
    def test_upstream_failure_uses_placeholder_fixture(
        self,
        mock_get_client: MagicMock,
        client: TestClient,
        player: dict[str, Any],
        mock_sofascore: Any,
    ):
        """A SofaScore outage never blocks a wager."""
        mock_get_client.return_value = mock_sofascore(
            get_event=SofaScoreAPIError("SofaScore API error: 503", details={"status": 503})
        )

        response = client.post(
            "/api/v1/predictions", json=_match_wager(), headers=player["headers"]
        )

        assert response.status_code == 201
        predictions = client.get("/api/v1/predictions", headers=player["headers"]).json()[
            "predictions"
        ]
        assert predictions[0]["fixture"]["home_team_name"] is None
        assert predictions[0]["fixture"]["starting_at"] is not None

    @patch(
        "scoreline.data.sources.sofascore.SofaScoreClient.fetch",
        new_callable=AsyncMock,
        return_value={"event": None},
    )
    def test_null_event_uses_placeholder_fixture(
        self, mock_fetch: AsyncMock, client: TestClient, player: dict[str, Any]
    ):
        response = client.post(
            "/api/v1/predictions", json=_match_wager(), headers=player["headers"]
        )

        assert response.status_code == 201
        predictions = client.get("/api/v1/predictions", headers=player["headers"]).json()[
            "predictions"
        ]
        assert predictions[0]["fixture"]["home_team_name"] is None
        mock_fetch.assert_awaited_once_with("/event/12345")

    def test_cached_fixture_is_reused(
        self,
        client: TestClient,
        player: dict[str, Any],
        register_account: Any,
        upcoming_sofascore: MagicMock,
    ):
        other = register_account(client, "other@example.com", "other")
        client.post("/api/v1/predictions", json=_match_wager(), headers=player["headers"])
        client.post("/api/v1/predictions", json=_match_wager(), headers=other["headers"])

        assert upcoming_sofascore.get_event.await_count == 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {"predicted_home_score": None},
            {"fixture_api_id": None},
            {"predicted_home_score": -1},
            {"predicted_away_score": 21},
            {"coins_wagered": 0},
            {"coins_wagered": -5},
        ],
    )
    def test_invalid_wager_rejected(
        self, client: TestClient, player: dict[str, Any], overrides: dict[str, Any]
    ):
        body = {**_match_wager(), **overrides}

        response = client.post("/api/v1/predictions", json=body, headers=player["headers"])

        assert response.status_code == 422


class TestCreateLeaguePrediction:
    """Test suite for POST /predictions (league winner wagers)."""

    def _league_wager(self, coins: int = 25) -> dict[str, Any]:
        return {
            "prediction_type": "league",
            "league_id": 17,
            "league_name": "Premier League",
            "predicted_winner_id": 42,
            "predicted_winner_name": "Arsenal",
            "coins_wagered": coins,
        }

    def test_league_wager(self, client: TestClient, player: dict[str, Any]):
        response = client.post(
            "/api/v1/predictions", json=self._league_wager(), headers=player["headers"]
        )

        assert response.status_code == 201
        data = response.json()
        assert data["coins_remaining"] == 75
        assert data["prediction"]["prediction_type"] == "league"
        assert data["prediction"]["predicted_winner_name"] == "Arsenal"
        assert data["prediction"]["fixture_id"] is None

    def test_league_wager_requires_ids(self, client: TestClient, player: dict[str, Any]):
        body = {**self._league_wager(), "predicted_winner_id": None}

        response = client.post("/api/v1/predictions", json=body, headers=player["headers"])

        assert response.status_code == 422

    def test_one_wager_per_league(self, client: TestClient, player: dict[str, Any]):
        client.post("/api/v1/predictions", json=self._league_wager(), headers=player["headers"])

        response = client.post(
            "/api/v1/predictions", json=self._league_wager(coins=5), headers=player["headers"]
        )

        assert response.status_code == 400
        assert response.json()["message"] == "You have already predicted this league winner"


class TestListPredictions:
    """Test suite for GET /predictions."""

    def test_newest_first(
        self, client: TestClient, player: dict[str, Any], upcoming_sofascore: MagicMock
    ):
        client.post("/api/v1/predictions", json=_match_wager(12345), headers=player["headers"])
        client.post(
            "/api/v1/predictions", json=_match_wager(67890, coins=10), headers=player["headers"]
        )

        predictions = client.get("/api/v1/predictions", headers=player["headers"]).json()[
            "predictions"
        ]

        assert [p["fixture_api_id"] for p in predictions] == [67890, 12345]

    def test_only_own_predictions(
        self,
        client: TestClient,
        player: dict[str, Any],
        register_account: Any,
        upcoming_sofascore: MagicMock,
    ):
        other = register_account(client, "other@example.com", "other")
        client.post("/api/v1/predictions", json=_match_wager(), headers=other["headers"])

        response = client.get("/api/v1/predictions", headers=player["headers"])

        assert response.json()["predictions"] == []


class TestConcurrentWagers:
    """Wagers racing on the same fixture or league."""

    @pytest.mark.asyncio
    async def test_one_match_wager_per_fixture(self, client: TestClient, player: dict[str, Any]):
        async with get_uow() as uow:
            await uow.fixtures.create_or_get(
                777, name="Lech Poznan vs Legia Warszawa", starting_at=datetime(2026, 5, 1, 18)
            )
            await uow.commit()

        results = await asyncio.gather(
            PredictionService.create_match_prediction(player["id"], 777, 1, 0, 10),
            PredictionService.create_match_prediction(player["id"], 777, 2, 0, 10),
            return_exceptions=True,
        )

        assert sum(isinstance(r, DuplicatePredictionError) for r in results) == 1
        assert len(await PredictionService.list_predictions(player["id"])) == 1
        me = client.get("/api/v1/user/me", headers=player["headers"]).json()["user"]
        assert me["coins"] == 90

    @pytest.mark.asyncio
    async def test_one_league_wager_per_league(self, player: dict[str, Any]):
        results = await asyncio.gather(
            PredictionService.create_league_prediction(player["id"], 17, 42, 10),
            PredictionService.create_league_prediction(player["id"], 17, 43, 10),
            return_exceptions=True,
        )

        assert sum(isinstance(r, DuplicatePredictionError) for r in results) == 1
        assert len(await PredictionService.list_predictions(player["id"])) == 1

    @pytest.mark.asyncio
    async def test_new_fixture_is_shared_by_racing_accounts(
        self,
        client: TestClient,
        player: dict[str, Any],
        register_account: Any,
        make_event: Any,
    ):
        """Two accounts wagering on a fixture nobody cached yet both succeed."""
        other = register_account(client, "other@example.com", "other")

        async def slow_event(event_id: int) -> Any:
            await asyncio.sleep(0.05)
            return make_event(event_id)

        sofascore = MagicMock()
        sofascore.get_event = AsyncMock(side_effect=slow_event)
        with patch(
            "scoreline.db.services.prediction_service.get_sofascore_client",
            return_value=sofascore,
        ):
            results = await asyncio.gather(
                PredictionService.create_match_prediction(player["id"], 555, 1, 0, 10),
                PredictionService.create_match_prediction(other["id"], 555, 0, 0, 10),
            )

        assert [r["message"] for r in results] == ["Prediction created successfully"] * 2
        async with get_uow() as uow:
            fixture = await uow.fixtures.get_by_api_id(555)
        assert fixture is not None
        assert {r["prediction"]["fixture_id"] for r in results} == {fixture.id}
