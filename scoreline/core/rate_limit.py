"""Rate limiting for the public API.

Requests carrying a valid session token are bucketed per account
(``account:{id}``). Missing, forged or expired tokens fall back to the
client IP.
"""

import logging

from jose import JWTError
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from scoreline.auth.session import decode_session_token
from scoreline.core.config import settings

logger = logging.getLogger(__name__)


def _session_token(request: Request) -> str | None:
    auth_header = request.headers.get("authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:]
    return request.cookies.get(settings.auth_cookie_name)


def get_rate_limit_key(request: Request) -> str:
    """Return ``account:{id}`` for signed-in callers, the client IP otherwise."""
    token = _session_token(request)
    if token:
        try:
            return f"account:{decode_session_token(token)['sub']}"
        except JWTError:
            logger.debug("Rate limit key: invalid session token, using client IP")
    return get_remote_address(request)


STORAGE_URI = settings.redis_url if settings.is_production else "memory://"

limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=["100/minute"],
    storage_uri=STORAGE_URI,
    enabled=settings.rate_limit_enabled,
)

RATE_LIMITS = {
    "default": "100/minute",
    "auth": "10/minute",  # login / register
    "wagers": "30/minute",  # prediction creation and settlement
    "proxy": "60/minute",  # provider passthroughs
}
