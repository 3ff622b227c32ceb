"""Shared httpx client for the sports data providers.

Both provider clients go through one pooled ``httpx.AsyncClient`` so that
settlement runs and passthrough routes reuse TCP/TLS connections.

Usage:
    from scoreline.core.http_client import get_http_client

    client = get_http_client()
    response = await client.get("https://www.sofascore.com/api/v1/event/1")
"""

import logging

import httpx

from scoreline.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": f"{settings.app_name}/{settings.app_version}",
}

_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Get the shared async HTTP client, creating it lazily."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout, connect=5.0),
            limits=httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=30,
            ),
            headers=DEFAULT_HEADERS,
            follow_redirects=True,
        )
        logger.info("Created shared HTTP client")
    return _client


async def close_http_client() -> None:
    """Close the shared HTTP client. Call during app shutdown."""
    global _client
    if _client and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.info("Closed shared HTTP client")
