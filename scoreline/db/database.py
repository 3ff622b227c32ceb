"""Database connection and session management.

Uses SQLAlchemy 2.0 async patterns with connection pooling and
proper transaction handling.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from scoreline.core.config import settings


def _get_async_database_url(url: str) -> str:
    """Convert sync database URL to async format.

    - postgresql:// -> postgresql+asyncpg://
    - sqlite:// -> sqlite+aiosqlite://
    """
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


_database_url = _get_async_database_url(settings.database_url)

_is_sqlite = _database_url.startswith("sqlite")

# NullPool for SQLite and tests, default QueuePool for PostgreSQL
_pool_class = NullPool if (settings.app_env == "test" or _is_sqlite) else None

# SQL logging goes through the "sqlalchemy.engine" logger, see setup_logging
_engine_kwargs: dict[str, Any] = {"poolclass": _pool_class}

if not _is_sqlite and _pool_class is None:
    _engine_kwargs.update(
        {
            "pool_pre_ping": True,
            "pool_size": 5,
            "max_overflow": 5,
            "pool_recycle": 3600,
        }
    )

engine = create_async_engine(_database_url, **_engine_kwargs)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Prevent lazy loading issues after commit
    autocommit=False,
    autoflush=False,
)

# Alias for Unit of Work compatibility
async_session_factory = async_session_maker


async def init_db() -> None:
    """Create all tables that do not exist yet."""
    from scoreline.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db() -> None:
    """Drop all tables. Used by the test suite."""
    from scoreline.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def check_db() -> bool:
    """Return True when a trivial query succeeds."""
    from sqlalchemy import text

    try:
        async with async_session_maker() as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()
