"""Common HTTP error response models for OpenAPI documentation."""

from typing import Any

from pydantic import BaseModel


class HTTPErrorResponse(BaseModel):
    """Standard HTTP error response."""

    detail: str


class ErrorResponse(BaseModel):
    """Body rendered for application errors."""

    error: str
    message: str
    details: dict[str, Any] = {}


# Common response definitions for route decorators
AUTH_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {
        "model": HTTPErrorResponse,
        "description": "Authentication required - missing or invalid session",
    },
}

GAME_RESPONSES: dict[int | str, dict[str, Any]] = {
    **AUTH_RESPONSES,
    400: {
        "model": ErrorResponse,
        "description": "Rejected by game rules (insufficient coins, duplicate, not owned)",
    },
    404: {"model": ErrorResponse, "description": "Account or item not found"},
}
