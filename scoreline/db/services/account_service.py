"""Account service: registration, login, profiles, ranking and badges."""

import asyncio
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from scoreline.auth.session import create_session_token, hash_password, verify_password
from scoreline.core.config import settings
from scoreline.core.exceptions import (
    AlreadyOwnedError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from scoreline.db.models import Account
from scoreline.db.repositories.unit_of_work import UnitOfWork, get_uow
from scoreline.shop.badges import describe_badges

logger = logging.getLogger(__name__)


def _private_profile(account: Account) -> dict[str, Any]:
    return {
        "id": account.id,
        "email": account.email,
        "nickname": account.nickname,
        "coins": account.coins,
        **account.equipped(),
        "owned_items": list(account.owned_items or []),
        "badges": list(account.badges or []),
        "created_at": account.created_at.isoformat() if account.created_at else None,
    }


def _public_summary(account: Account) -> dict[str, Any]:
    return {
        "id": account.id,
        "nickname": account.nickname,
        "coins": account.coins,
        **account.equipped(),
        "created_at": account.created_at.isoformat() if account.created_at else None,
    }


async def load_account(uow: UnitOfWork, account_id: int) -> Account:
    """Fetch the account or raise ``NotFoundError``."""
    account = await uow.accounts.get_by_id(account_id)
    if account is None:
        raise NotFoundError("User not found", details={"account_id": account_id})
    return account


class AccountService:
    """Service for account lifecycle and profile reads."""

    @staticmethod
    async def register(email: str, nickname: str, password: str) -> tuple[dict[str, Any], str]:
        """Create an account and return its profile with a fresh session token."""
        email = email.strip().lower()
        password_hash = await asyncio.to_thread(hash_password, password)

        async with get_uow() as uow:
            if await uow.accounts.get_by_email(email):
                raise ValidationError("User with this email already exists")
            if await uow.accounts.get_by_nickname(nickname):
                raise ValidationError("Nickname is already taken")

            try:
                account = await uow.accounts.create(
                    email=email,
                    nickname=nickname,
                    password_hash=password_hash,
                    coins=settings.starting_coins,
                    owned_items=[],
                    badges=[],
                )
                await uow.commit()
            except IntegrityError as e:
                # Concurrent registration with the same email or nickname
                raise ValidationError("Email or nickname is already taken") from e

            logger.info(f"Registered account {account.id} ({nickname})")
            token = create_session_token(account.id, account.email)
            return _private_profile(account), token

    @staticmethod
    async def authenticate(email: str, password: str) -> tuple[dict[str, Any], str]:
        """Verify credentials. Unknown email and wrong password look the same."""
        async with get_uow() as uow:
            account = await uow.accounts.get_by_email(email.strip())
            if account is None:
                raise AuthenticationError("Invalid email or password")

            valid = await asyncio.to_thread(verify_password, password, account.password_hash)
            if not valid:
                raise AuthenticationError("Invalid email or password")

            token = create_session_token(account.id, account.email)
            return _private_profile(account), token

    @staticmethod
    async def get_profile(account_id: int) -> dict[str, Any]:
        async with get_uow() as uow:
            account = await load_account(uow, account_id)
            return _private_profile(account)

    @staticmethod
    async def get_public_profile(account_id: int) -> dict[str, Any]:
        """Public fields, described badges and wager statistics."""
        async with get_uow() as uow:
            account = await load_account(uow, account_id)
            stats = await uow.predictions.get_account_stats(account_id)
            return {
                **_public_summary(account),
                "badges": describe_badges(list(account.badges or [])),
                "stats": stats,
            }

    @staticmethod
    async def get_ranking(limit: int | None = None) -> list[dict[str, Any]]:
        """Leaderboard, richest first."""
        async with get_uow() as uow:
            accounts = await uow.accounts.get_ranking(limit or settings.ranking_limit)
            return [
                {"rank": position, **_public_summary(account)}
                for position, account in enumerate(accounts, start=1)
            ]

    @staticmethod
    async def add_coins(account_id: int, amount: int) -> dict[str, Any]:
        """Top up the balance through the ledger."""
        if amount <= 0:
            raise ValidationError("Amount must be a positive integer")

        async with get_uow() as uow:
            balance = await uow.accounts.apply_coin_delta(account_id, amount)
            if balance is None:
                raise NotFoundError("User not found", details={"account_id": account_id})
            await uow.commit()
            logger.info(f"Account {account_id} topped up by {amount} coins")
            return {"message": "Coins added successfully", "coins": balance}

    @staticmethod
    async def add_badge(account_id: int, badge_id: str) -> dict[str, Any]:
        async with get_uow() as uow:
            account = await load_account(uow, account_id)
            badges = list(account.badges or [])
            if badge_id in badges:
                raise AlreadyOwnedError("Badge already owned", details={"badge_id": badge_id})
            account.badges = [*badges, badge_id]
            await uow.commit()
            return {"message": "Badge added successfully", "badge_id": badge_id}

    @staticmethod
    async def remove_badge(account_id: int, badge_id: str) -> dict[str, Any]:
        """Revoke a badge. Removing one that is not held is a no-op."""
        async with get_uow() as uow:
            account = await load_account(uow, account_id)
            account.badges = [b for b in (account.badges or []) if b != badge_id]
            await uow.commit()
            return {"message": "Badge removed successfully", "badge_id": badge_id}
