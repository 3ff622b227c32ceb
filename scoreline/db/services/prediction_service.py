"""Prediction service: wager creation and listing.

A wager debits the stake through the coin ledger and inserts the
prediction in one transaction. Match wagers make sure a fixture snapshot
exists first; a provider failure leaves a placeholder fixture behind but
never blocks the wager.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from scoreline.core.exceptions import (
    DataSourceError,
    DuplicatePredictionError,
    InsufficientCoinsError,
)
from scoreline.data.sources.sofascore import get_sofascore_client
from scoreline.db.models import (
    PREDICTION_LEAGUE,
    PREDICTION_MATCH,
    VERDICT_PENDING,
    Fixture,
    Prediction,
)
from scoreline.db.repositories.unit_of_work import UnitOfWork, get_uow
from scoreline.db.services.account_service import load_account

logger = logging.getLogger(__name__)


def _fixture_summary(fixture: Fixture | None) -> dict[str, Any] | None:
    if fixture is None:
        return None
    return {
        "home_team_name": fixture.home_team_name,
        "away_team_name": fixture.away_team_name,
        "home_team_logo": fixture.home_team_logo,
        "away_team_logo": fixture.away_team_logo,
        "home_score": fixture.home_score,
        "away_score": fixture.away_score,
        "state_name": fixture.state_name,
        "starting_at": fixture.starting_at.isoformat() if fixture.starting_at else None,
    }


def prediction_to_dict(prediction: Prediction) -> dict[str, Any]:
    return {
        "id": prediction.id,
        "account_id": prediction.account_id,
        "prediction_type": prediction.prediction_type,
        "fixture_id": prediction.fixture_id,
        "fixture_api_id": prediction.fixture_api_id,
        "predicted_home_score": prediction.predicted_home_score,
        "predicted_away_score": prediction.predicted_away_score,
        "league_id": prediction.league_id,
        "league_name": prediction.league_name,
        "predicted_winner_id": prediction.predicted_winner_id,
        "predicted_winner_name": prediction.predicted_winner_name,
        "predicted_winner_logo": prediction.predicted_winner_logo,
        "coins_wagered": prediction.coins_wagered,
        "coins_won": prediction.coins_won,
        "verdict": prediction.verdict,
        "is_settled": prediction.is_settled,
        "created_at": prediction.created_at.isoformat() if prediction.created_at else None,
        "updated_at": prediction.updated_at.isoformat() if prediction.updated_at else None,
    }


def _placeholder_values() -> dict[str, Any]:
    return {
        "name": "Match",
        "starting_at": (datetime.now(timezone.utc) + timedelta(days=1)).replace(tzinfo=None),
    }


async def ensure_fixture(uow: UnitOfWork, fixture_api_id: int) -> Fixture:
    """Return the cached fixture, creating it from SofaScore when missing."""
    fixture = await uow.fixtures.get_by_api_id(fixture_api_id)
    if fixture is not None:
        return fixture

    try:
        event = await get_sofascore_client().get_event(fixture_api_id)
        values = event.fixture_values()
    except DataSourceError as e:
        logger.warning(f"Using placeholder fixture for {fixture_api_id}: {e.message}")
        values = _placeholder_values()
    except PydanticValidationError as e:
        logger.warning(f"Unexpected SofaScore payload for {fixture_api_id}: {e}")
        values = _placeholder_values()

    return await uow.fixtures.create_or_get(fixture_api_id, **values)


async def _check_balance(uow: UnitOfWork, account_id: int, coins_wagered: int) -> int:
    """Reject early when the balance cannot cover the stake."""
    account = await load_account(uow, account_id)
    if account.coins < coins_wagered:
        raise InsufficientCoinsError(
            "Insufficient coins", details={"coins": account.coins, "required": coins_wagered}
        )
    return account.coins


class PredictionService:
    """Service for creating and listing wagers."""

    @staticmethod
    async def create_match_prediction(
        account_id: int,
        fixture_api_id: int,
        predicted_home_score: int,
        predicted_away_score: int,
        coins_wagered: int,
    ) -> dict[str, Any]:
        """Place an exact-score wager on one fixture."""
        async with get_uow() as uow:
            await _check_balance(uow, account_id, coins_wagered)

            if await uow.predictions.exists_for_fixture(account_id, fixture_api_id):
                raise DuplicatePredictionError(
                    "You have already predicted this match",
                    details={"fixture_api_id": fixture_api_id},
                )

            fixture = await ensure_fixture(uow, fixture_api_id)

            balance = await uow.accounts.apply_coin_delta(account_id, -coins_wagered)
            if balance is None:
                raise InsufficientCoinsError("Insufficient coins")

            try:
                prediction = await uow.predictions.create(
                    account_id=account_id,
                    prediction_type=PREDICTION_MATCH,
                    fixture_id=fixture.id,
                    fixture_api_id=fixture_api_id,
                    predicted_home_score=predicted_home_score,
                    predicted_away_score=predicted_away_score,
                    coins_wagered=coins_wagered,
                    coins_won=0,
                    verdict=VERDICT_PENDING,
                    is_settled=False,
                )
            except IntegrityError as e:
                raise DuplicatePredictionError(
                    "You have already predicted this match",
                    details={"fixture_api_id": fixture_api_id},
                ) from e
            await uow.commit()

            logger.info(
                f"Account {account_id} wagered {coins_wagered} on fixture {fixture_api_id} "
                f"({predicted_home_score}-{predicted_away_score})"
            )
            return {
                "message": "Prediction created successfully",
                "prediction": prediction_to_dict(prediction),
                "coins_remaining": balance,
            }

    @staticmethod
    async def create_league_prediction(
        account_id: int,
        league_id: int,
        predicted_winner_id: int,
        coins_wagered: int,
        league_name: str | None = None,
        predicted_winner_name: str | None = None,
        predicted_winner_logo: str | None = None,
    ) -> dict[str, Any]:
        """Place a league-winner wager. One per account and league."""
        async with get_uow() as uow:
            await _check_balance(uow, account_id, coins_wagered)

            if await uow.predictions.exists_for_league(account_id, league_id):
                raise DuplicatePredictionError(
                    "You have already predicted this league winner",
                    details={"league_id": league_id},
                )

            balance = await uow.accounts.apply_coin_delta(account_id, -coins_wagered)
            if balance is None:
                raise InsufficientCoinsError("Insufficient coins")

            try:
                prediction = await uow.predictions.create(
                    account_id=account_id,
                    prediction_type=PREDICTION_LEAGUE,
                    league_id=league_id,
                    league_name=league_name,
                    predicted_winner_id=predicted_winner_id,
                    predicted_winner_name=predicted_winner_name,
                    predicted_winner_logo=predicted_winner_logo,
                    coins_wagered=coins_wagered,
                    coins_won=0,
                    verdict=VERDICT_PENDING,
                    is_settled=False,
                )
            except IntegrityError as e:
                raise DuplicatePredictionError(
                    "You have already predicted this league winner",
                    details={"league_id": league_id},
                ) from e
            await uow.commit()

            logger.info(f"Account {account_id} wagered {coins_wagered} on league {league_id}")
            return {
                "message": "League prediction created successfully",
                "prediction": prediction_to_dict(prediction),
                "coins_remaining": balance,
            }

    @staticmethod
    async def list_predictions(account_id: int) -> list[dict[str, Any]]:
        """Account's predictions newest first, each with its fixture summary."""
        async with get_uow() as uow:
            predictions = await uow.predictions.get_by_account(account_id)
            return [
                {**prediction_to_dict(p), "fixture": _fixture_summary(p.fixture)}
                for p in predictions
            ]
