"""Fixture repository."""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from scoreline.db.models import Fixture
from scoreline.db.repositories.base import BaseRepository


class FixtureRepository(BaseRepository[Fixture]):
    """Repository for cached fixture rows, keyed by provider id."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Fixture, session)

    async def get_by_api_id(self, api_id: int) -> Fixture | None:
        return await self.get_by_field("api_id", api_id)

    async def create_or_get(self, api_id: int, **values: Any) -> Fixture:
        """Insert the snapshot for ``api_id``.

        When another session inserted the same fixture first, the insert is
        rolled back to its savepoint and that row is returned instead.
        """
        try:
            async with self.session.begin_nested():
                return await self.create(api_id=api_id, **values)
        except IntegrityError:
            existing = await self.get_by_api_id(api_id)
            if existing is None:
                raise
            return existing

    async def upsert_by_api_id(self, api_id: int, **values: Any) -> Fixture:
        """Insert or refresh the snapshot for ``api_id``."""
        fixture = await self.get_by_api_id(api_id)
        if fixture is None:
            return await self.create_or_get(api_id, **values)
        for key, value in values.items():
            setattr(fixture, key, value)
        await self.session.flush()
        await self.session.refresh(fixture)
        return fixture
