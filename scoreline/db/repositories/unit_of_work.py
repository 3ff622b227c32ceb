"""Unit of Work pattern for transaction management.

Provides a single entry point for all repository operations with
automatic rollback on error.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from scoreline.db.repositories.account_repository import AccountRepository
from scoreline.db.repositories.fixture_repository import FixtureRepository
from scoreline.db.repositories.prediction_repository import PredictionRepository


class UnitOfWork:
    """Unit of Work for managing database transactions.

    Usage:
        async with UnitOfWork(session) as uow:
            balance = await uow.accounts.apply_coin_delta(account_id, -40)
            await uow.predictions.create(account_id=account_id, ...)
            await uow.commit()
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._accounts: AccountRepository | None = None
        self._fixtures: FixtureRepository | None = None
        self._predictions: PredictionRepository | None = None

    @property
    def session(self) -> AsyncSession:
        """Direct access to the session for custom queries."""
        return self._session

    @property
    def accounts(self) -> AccountRepository:
        if self._accounts is None:
            self._accounts = AccountRepository(self._session)
        return self._accounts

    @property
    def fixtures(self) -> FixtureRepository:
        if self._fixtures is None:
            self._fixtures = FixtureRepository(self._session)
        return self._fixtures

    @property
    def predictions(self) -> PredictionRepository:
        if self._predictions is None:
            self._predictions = PredictionRepository(self._session)
        return self._predictions

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def flush(self) -> None:
        await self._session.flush()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Roll back on exception, then release the session."""
        if exc_type is not None:
            await self.rollback()
        await self._session.close()


@asynccontextmanager
async def get_uow() -> AsyncGenerator[UnitOfWork, None]:
    """Get a Unit of Work bound to a fresh session.

    Usage:
        async with get_uow() as uow:
            account = await uow.accounts.get_by_id(1)
            await uow.commit()
    """
    from scoreline.db.database import async_session_factory

    async with async_session_factory() as session:
        async with UnitOfWork(session) as uow:
            yield uow
