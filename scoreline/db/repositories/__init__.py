"""Repository layer for database operations.

Usage:
    from scoreline.db.repositories import get_uow

    async with get_uow() as uow:
        account = await uow.accounts.get_by_email("fan@example.com")
        await uow.accounts.apply_coin_delta(account.id, -40)
        await uow.commit()
"""

from scoreline.db.repositories.account_repository import AccountRepository
from scoreline.db.repositories.base import BaseRepository
from scoreline.db.repositories.fixture_repository import FixtureRepository
from scoreline.db.repositories.prediction_repository import PredictionRepository
from scoreline.db.repositories.unit_of_work import UnitOfWork, get_uow

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "FixtureRepository",
    "PredictionRepository",
    "UnitOfWork",
    "get_uow",
]
