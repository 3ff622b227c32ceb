"""Settlement of pending match wagers against final SofaScore results.

Runs on demand for one account. Each prediction is settled in its own
transaction; ``is_settled`` is flipped with a conditional update and
coins are only credited when that update touched the row, so running the
batch twice (or concurrently) never pays twice.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from scoreline.core.config import settings
from scoreline.core.exceptions import DataSourceError, NotFoundError
from scoreline.data.sources.sofascore import get_sofascore_client
from scoreline.db.models import VERDICT_LOSE, VERDICT_WIN
from scoreline.db.repositories.unit_of_work import get_uow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingWager:
    """Detached copy of an unsettled prediction."""

    id: int
    account_id: int
    fixture_api_id: int | None
    predicted_home_score: int | None
    predicted_away_score: int | None
    coins_wagered: int

    @property
    def predicted(self) -> str:
        return f"{self.predicted_home_score} - {self.predicted_away_score}"


def is_exact_match(wager: PendingWager, home_goals: int, away_goals: int) -> bool:
    return wager.predicted_home_score == home_goals and wager.predicted_away_score == away_goals


class SettlementService:
    """Service for settling an account's pending wagers."""

    @staticmethod
    async def _snapshot(account_id: int) -> list[PendingWager]:
        async with get_uow() as uow:
            predictions = await uow.predictions.get_unsettled(account_id)
            return [
                PendingWager(
                    id=p.id,
                    account_id=p.account_id,
                    fixture_api_id=p.fixture_api_id,
                    predicted_home_score=p.predicted_home_score,
                    predicted_away_score=p.predicted_away_score,
                    coins_wagered=p.coins_wagered,
                )
                for p in predictions
            ]

    @staticmethod
    async def settle_one(wager: PendingWager) -> dict[str, Any] | None:
        """Settle a single wager. Returns its result, or None when skipped."""
        if wager.fixture_api_id is None:
            logger.debug(f"Prediction {wager.id} has no fixture, skipping")
            return None

        try:
            event = await get_sofascore_client().get_event(wager.fixture_api_id)
        except (DataSourceError, PydanticValidationError) as e:
            logger.info(
                f"Could not fetch match {wager.fixture_api_id} for prediction {wager.id}: {e}"
            )
            return None

        home_goals = event.home_goals
        away_goals = event.away_goals
        if not event.is_finished or home_goals is None or away_goals is None:
            return None

        won = is_exact_match(wager, home_goals, away_goals)
        verdict = VERDICT_WIN if won else VERDICT_LOSE
        coins_won = wager.coins_wagered * settings.payout_multiplier if won else 0

        async with get_uow() as uow:
            await uow.fixtures.upsert_by_api_id(wager.fixture_api_id, **event.fixture_values())

            if not await uow.predictions.mark_settled(wager.id, verdict, coins_won):
                await uow.rollback()
                logger.info(f"Prediction {wager.id} was already settled, skipping")
                return None

            if coins_won:
                balance = await uow.accounts.apply_coin_delta(wager.account_id, coins_won)
                if balance is None:
                    raise NotFoundError(
                        "User not found", details={"account_id": wager.account_id}
                    )

            await uow.commit()

        logger.info(
            f"Settled prediction {wager.id}: predicted {wager.predicted}, "
            f"actual {home_goals} - {away_goals}, {verdict}, +{coins_won}"
        )
        return {
            "prediction_id": wager.id,
            "fixture_api_id": wager.fixture_api_id,
            "predicted": wager.predicted,
            "actual": f"{home_goals} - {away_goals}",
            "verdict": verdict,
            "coins_won": coins_won,
        }

    @staticmethod
    async def settle_for_account(account_id: int) -> dict[str, Any]:
        """Settle every pending wager of ``account_id`` whose match has finished."""
        pending = await SettlementService._snapshot(account_id)
        logger.info(f"Settling {len(pending)} pending predictions for account {account_id}")

        results: list[dict[str, Any]] = []
        for wager in pending:
            try:
                result = await SettlementService.settle_one(wager)
            except Exception as e:
                logger.error(f"Failed to settle prediction {wager.id}: {e}")
                continue
            if result is not None:
                results.append(result)

        total_coins_won = sum(r["coins_won"] for r in results)
        return {
            "message": f"Settled {len(results)} predictions",
            "settled_count": len(results),
            "total_coins_won": total_coins_won,
            "results": results,
        }
