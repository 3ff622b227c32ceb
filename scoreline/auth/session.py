"""Password hashing and session tokens.

Passwords are hashed with bcrypt (cost 12). Sessions are HS256 JWTs
``{sub, email, iat, exp}`` carried in the ``auth-token`` cookie or an
``Authorization: Bearer`` header.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from fastapi import HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt
from starlette.responses import Response

from scoreline.core.config import settings

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def create_session_token(account_id: int, email: str) -> str:
    """Issue a signed session token valid for ``settings.jwt_expire_days``."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(account_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.jwt_expire_days)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry. Raises ``JWTError`` on any failure."""
    payload: dict[str, Any] = jwt.decode(
        token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
    )
    if not payload.get("sub"):
        raise JWTError("Token has no subject")
    return payload


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.jwt_expire_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.auth_cookie_name, path="/")


def _extract_token(
    request: Request, credentials: HTTPAuthorizationCredentials | None
) -> str | None:
    if credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth_cookie_name)


def get_optional_session(
    request: Request, credentials: HTTPAuthorizationCredentials | None
) -> dict[str, Any] | None:
    """Session payload when a valid token is present, None otherwise."""
    token = _extract_token(request, credentials)
    if not token:
        return None
    try:
        return decode_session_token(token)
    except JWTError as e:
        logger.debug(f"Invalid session token: {e}")
        return None


def get_required_session(
    request: Request, credentials: HTTPAuthorizationCredentials | None
) -> dict[str, Any]:
    """Session payload, or 401 when the token is missing or invalid."""
    payload = get_optional_session(request, credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload
