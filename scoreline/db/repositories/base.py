"""Generic repository shared by the account, fixture and prediction repositories."""

from typing import Any, Generic, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scoreline.db.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Common lookups and inserts for a single model.

    Usage:
        class FixtureRepository(BaseRepository[Fixture]):
            def __init__(self, session: AsyncSession):
                super().__init__(Fixture, session)
    """

    def __init__(self, model: type[ModelT], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    async def get_by_id(self, id: int) -> ModelT | None:
        """Fetch one row by primary key."""
        return cast(ModelT | None, await self.session.get(self.model, id))

    async def get_by_field(self, field_name: str, value: Any) -> ModelT | None:
        """Fetch the first row whose ``field_name`` equals ``value``."""
        column = getattr(self.model, field_name)
        result = await self.session.execute(select(self.model).where(column == value).limit(1))
        return cast(ModelT | None, result.scalar_one_or_none())

    async def create(self, **values: Any) -> ModelT:
        """Insert a row and flush so its primary key is populated."""
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance
