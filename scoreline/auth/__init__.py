"""Authentication: bcrypt passwords and JWT session cookies."""

from scoreline.auth.dependencies import (
    AuthenticatedUser,
    OptionalUser,
    get_account_id,
    get_optional_user,
    require_auth,
)
from scoreline.auth.responses import AUTH_RESPONSES, GAME_RESPONSES, HTTPErrorResponse
from scoreline.auth.session import (
    clear_session_cookie,
    create_session_token,
    decode_session_token,
    hash_password,
    set_session_cookie,
    verify_password,
)

__all__ = [
    "AuthenticatedUser",
    "OptionalUser",
    "get_account_id",
    "get_optional_user",
    "require_auth",
    "AUTH_RESPONSES",
    "GAME_RESPONSES",
    "HTTPErrorResponse",
    "clear_session_cookie",
    "create_session_token",
    "decode_session_token",
    "hash_password",
    "set_session_cookie",
    "verify_password",
]
