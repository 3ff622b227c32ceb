"""Database module with SQLAlchemy 2.0 async ORM.

Usage:
    from scoreline.db import get_uow

    async with get_uow() as uow:
        ranking = await uow.accounts.get_ranking(limit=10)
"""

from scoreline.db.database import async_session_factory, init_db
from scoreline.db.models import Account, Base, Fixture, Prediction
from scoreline.db.repositories import (
    AccountRepository,
    FixtureRepository,
    PredictionRepository,
    UnitOfWork,
    get_uow,
)

__all__ = [
    # Database utilities
    "async_session_factory",
    "init_db",
    # Models
    "Base",
    "Account",
    "Fixture",
    "Prediction",
    # Repositories
    "AccountRepository",
    "FixtureRepository",
    "PredictionRepository",
    # Unit of Work
    "UnitOfWork",
    "get_uow",
]
