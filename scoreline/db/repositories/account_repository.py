"""Account repository: credentials lookups, coin ledger and ranking."""

from collections.abc import Sequence
from typing import cast

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from scoreline.db.models import Account
from scoreline.db.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Repository for account operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Account, session)

    async def get_by_email(self, email: str) -> Account | None:
        """Case-insensitive email lookup."""
        stmt = select(Account).where(func.lower(Account.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_nickname(self, nickname: str) -> Account | None:
        return await self.get_by_field("nickname", nickname)

    async def get_balance(self, account_id: int) -> int | None:
        result = await self.session.execute(
            select(Account.coins).where(Account.id == account_id)
        )
        return cast(int | None, result.scalar_one_or_none())

    async def apply_coin_delta(self, account_id: int, delta: int) -> int | None:
        """Atomically add ``delta`` to the balance.

        The update only matches while the resulting balance stays
        non-negative. Returns the new balance, or None when the account is
        missing or the debit would overdraw it.
        """
        stmt = (
            update(Account)
            .where(Account.id == account_id, Account.coins + delta >= 0)
            .values(coins=Account.coins + delta)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.get_balance(account_id)

    async def get_ranking(self, limit: int = 100) -> Sequence[Account]:
        """Accounts ordered by balance, richest first."""
        stmt = select(Account).order_by(Account.coins.desc(), Account.id.asc()).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()
