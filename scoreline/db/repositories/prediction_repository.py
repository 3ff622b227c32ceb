"""Prediction repository: wager lookups, settlement updates and stats."""

from collections.abc import Sequence
from typing import Any, cast

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from scoreline.db.models import (
    PREDICTION_LEAGUE,
    PREDICTION_MATCH,
    VERDICT_LOSE,
    VERDICT_WIN,
    Prediction,
)
from scoreline.db.repositories.base import BaseRepository


class PredictionRepository(BaseRepository[Prediction]):
    """Repository for match and league wagers."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Prediction, session)

    async def exists_for_fixture(self, account_id: int, fixture_api_id: int) -> bool:
        """True when the account already wagered on this fixture."""
        stmt = select(func.count(Prediction.id)).where(
            Prediction.account_id == account_id,
            Prediction.prediction_type == PREDICTION_MATCH,
            Prediction.fixture_api_id == fixture_api_id,
        )
        result = await self.session.execute(stmt)
        return cast(int, result.scalar_one()) > 0

    async def exists_for_league(self, account_id: int, league_id: int) -> bool:
        stmt = select(func.count(Prediction.id)).where(
            Prediction.account_id == account_id,
            Prediction.prediction_type == PREDICTION_LEAGUE,
            Prediction.league_id == league_id,
        )
        result = await self.session.execute(stmt)
        return cast(int, result.scalar_one()) > 0

    async def get_by_account(self, account_id: int, limit: int = 200) -> Sequence[Prediction]:
        """Account's predictions newest first, with the fixture eagerly loaded."""
        stmt = (
            select(Prediction)
            .options(selectinload(Prediction.fixture))
            .where(Prediction.account_id == account_id)
            .order_by(Prediction.created_at.desc(), Prediction.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_unsettled(self, account_id: int) -> Sequence[Prediction]:
        stmt = (
            select(Prediction)
            .where(Prediction.account_id == account_id, Prediction.is_settled.is_(False))
            .order_by(Prediction.id.asc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def mark_settled(self, prediction_id: int, verdict: str, coins_won: int) -> bool:
        """Flip ``is_settled`` once.

        Returns False when another run already settled the row, in which
        case the caller must not credit any coins.
        """
        stmt = (
            update(Prediction)
            .where(Prediction.id == prediction_id, Prediction.is_settled.is_(False))
            .values(is_settled=True, verdict=verdict, coins_won=coins_won)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def get_account_stats(self, account_id: int) -> dict[str, Any]:
        """Aggregated wager statistics for one account."""
        stmt = select(
            func.count(Prediction.id).label("total"),
            func.sum(case((Prediction.is_settled.is_(True), 1), else_=0)).label("settled"),
            func.sum(case((Prediction.verdict == VERDICT_WIN, 1), else_=0)).label("won"),
            func.sum(case((Prediction.verdict == VERDICT_LOSE, 1), else_=0)).label("lost"),
            func.sum(Prediction.coins_wagered).label("coins_wagered"),
            func.sum(Prediction.coins_won).label("coins_won"),
        ).where(Prediction.account_id == account_id)

        row = (await self.session.execute(stmt)).one()
        settled = int(row.settled or 0)
        won = int(row.won or 0)

        return {
            "total_predictions": int(row.total or 0),
            "settled_predictions": settled,
            "won_predictions": won,
            "lost_predictions": int(row.lost or 0),
            "win_rate": round(won / settled * 100) if settled else 0,
            "coins_wagered": int(row.coins_wagered or 0),
            "coins_won": int(row.coins_won or 0),
        }
