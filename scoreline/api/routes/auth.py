"""Registration, login and logout.

Successful register/login calls set the session cookie and also return
the token so non-browser clients can use a Bearer header instead.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from scoreline.auth.session import clear_session_cookie, set_session_cookie
from scoreline.core.rate_limit import RATE_LIMITS, limiter
from scoreline.db.services import AccountService

logger = logging.getLogger(__name__)

router = APIRouter()


class RegisterRequest(BaseModel):
    email: EmailStr
    nickname: str = Field(min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_]+$")
    password: str = Field(min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


@router.post("/register", status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["auth"])
async def register(request: Request, response: Response, body: RegisterRequest) -> dict[str, Any]:
    """Create an account with the starting balance and sign it in."""
    profile, token = await AccountService.register(body.email, body.nickname, body.password)
    set_session_cookie(response, token)
    return {"message": "User registered successfully", "user": profile, "token": token}


@router.post("/login")
@limiter.limit(RATE_LIMITS["auth"])
async def login(request: Request, response: Response, body: LoginRequest) -> dict[str, Any]:
    profile, token = await AccountService.authenticate(body.email, body.password)
    set_session_cookie(response, token)
    return {"message": "Login successful", "user": profile, "token": token}


@router.post("/logout")
async def logout(response: Response) -> dict[str, str]:
    clear_session_cookie(response)
    return {"message": "Logged out successfully"}
