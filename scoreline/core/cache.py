"""Redis cache for provider responses.

Reference data (leagues, teams, seasons) changes rarely, so the provider
clients keep it in Redis for ``settings.cache_ttl_reference`` seconds.
Every Redis failure is logged and treated as a cache miss.
"""

import hashlib
import json
import logging
from typing import Any

import redis.asyncio as aioredis
from redis.asyncio.connection import ConnectionPool

from scoreline.core.config import settings

logger = logging.getLogger(__name__)

_pool: ConnectionPool | None = None


def get_redis_pool() -> ConnectionPool:
    """Get or create the Redis connection pool."""
    global _pool
    if _pool is None:
        _pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=10,
            decode_responses=True,
            socket_connect_timeout=1.0,
        )
    return _pool


def get_redis_client() -> aioredis.Redis:
    """Get an async Redis client bound to the shared pool."""
    return aioredis.Redis(connection_pool=get_redis_pool())


def generate_cache_key(*args: Any, prefix: str = "cache") -> str:
    """Build a namespaced key from arbitrary JSON-serialisable arguments."""
    key_data = json.dumps(args, sort_keys=True, default=str)
    key_hash = hashlib.md5(key_data.encode()).hexdigest()[:16]
    return f"{prefix}:{key_hash}"


async def cache_get_json(key: str) -> Any | None:
    """Return the decoded cached value, or None on miss or error."""
    try:
        value = await get_redis_client().get(key)
    except aioredis.RedisError as e:
        logger.warning(f"Redis GET error for key {key}: {e}")
        return None
    if value is None:
        logger.debug(f"Cache MISS: {key}")
        return None
    logger.debug(f"Cache HIT: {key}")
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        logger.warning(f"Invalid JSON in cache for {key}")
        return None


async def cache_set_json(key: str, value: Any, ttl: int) -> bool:
    """Store ``value`` as JSON with a TTL. Returns False when Redis is unavailable."""
    try:
        await get_redis_client().setex(key, ttl, json.dumps(value, default=str))
    except aioredis.RedisError as e:
        logger.warning(f"Redis SET error for key {key}: {e}")
        return False
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to serialize value for {key}: {e}")
        return False
    logger.debug(f"Cache SET: {key} (TTL: {ttl}s)")
    return True


async def health_check() -> bool:
    """Return True when Redis answers PING."""
    try:
        return bool(await get_redis_client().ping())
    except aioredis.RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False
