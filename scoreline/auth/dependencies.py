"""FastAPI dependencies for authentication.

Provides typed dependencies for route protection:
- AuthenticatedUser: any signed-in account
- OptionalUser: optional authentication (may be None)
"""

from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from scoreline.auth.session import get_optional_session, get_required_session
from scoreline.core.logging_config import bind_account_context

# auto_error=False so the cookie can be used when no header is sent
security = HTTPBearer(auto_error=False)


async def require_auth(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict[str, Any]:
    """Session payload from the Bearer header or the session cookie; 401 otherwise."""
    payload = get_required_session(request, credentials)
    bind_account_context(payload["sub"])
    return payload


async def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict[str, Any] | None:
    payload = get_optional_session(request, credentials)
    if payload is not None:
        bind_account_context(payload["sub"])
    return payload


# Type aliases for cleaner route signatures
AuthenticatedUser = Annotated[dict[str, Any], Depends(require_auth)]
OptionalUser = Annotated[dict[str, Any] | None, Depends(get_optional_user)]


def get_account_id(user: dict[str, Any]) -> int:
    """Extract the account id from the session payload."""
    return int(user["sub"])


def get_account_email(user: dict[str, Any]) -> str | None:
    return user.get("email")
