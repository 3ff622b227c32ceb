"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from scoreline.api.routes import (
    account,
    auth,
    fixtures,
    health,
    leagues,
    predictions,
    proxy,
    shop,
    teams,
    users,
)
from scoreline.core.config import settings
from scoreline.core.exceptions import ScorelineError
from scoreline.core.http_client import close_http_client
from scoreline.core.logging_config import (
    bind_request_context,
    clear_request_context,
    generate_request_id,
    setup_logging,
)
from scoreline.core.rate_limit import limiter
from scoreline.core.sentry import init_sentry
from scoreline.db.database import close_db, init_db

# Initialize Sentry for error monitoring
init_sentry()

logger = logging.getLogger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds a request id (and method/path) to every log line of the request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        bind_request_context(request_id, request.method, request.url.path)
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        clear_request_context()
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response: Response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=()"

        # HSTS - only in production
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"

        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Configure structured logging BEFORE anything else
    setup_logging(settings)

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.app_env}")

    try:
        await init_db()
        logger.info("[Database] Tables initialized")
    except Exception as e:
        logger.error(f"[Database] Could not initialize tables: {e}")
        if settings.is_production:
            raise

    # Report provider configuration (no values logged)
    if settings.sportmonks_api_token:
        logger.info("SPORTMONKS_API_TOKEN: configured")
    else:
        logger.warning("SPORTMONKS_API_TOKEN: NOT set - fixture detail, leagues and teams disabled")

    yield

    await close_http_client()
    await close_db()
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Football score prediction game: virtual coins, wagers, shop and leaderboard",
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestIdMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


@app.exception_handler(ScorelineError)
async def scoreline_exception_handler(request: Request, exc: ScorelineError) -> JSONResponse:
    """Render application exceptions with their own status code."""
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.__class__.__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(
    auth.router,
    prefix=f"{settings.api_v1_prefix}/auth",
    tags=["Auth"],
)
app.include_router(
    account.router,
    prefix=f"{settings.api_v1_prefix}/user",
    tags=["Account"],
)
app.include_router(
    users.router,
    prefix=f"{settings.api_v1_prefix}/users",
    tags=["Users"],
)
app.include_router(
    predictions.router,
    prefix=f"{settings.api_v1_prefix}/predictions",
    tags=["Predictions"],
)
app.include_router(
    shop.router,
    prefix=f"{settings.api_v1_prefix}/shop",
    tags=["Shop"],
)
app.include_router(
    fixtures.router,
    prefix=f"{settings.api_v1_prefix}/fixtures",
    tags=["Fixtures"],
)
app.include_router(
    leagues.router,
    prefix=settings.api_v1_prefix,
    tags=["Leagues"],
)
app.include_router(
    teams.router,
    prefix=settings.api_v1_prefix,
    tags=["Teams & Players"],
)
app.include_router(
    proxy.router,
    prefix=f"{settings.api_v1_prefix}/proxy",
    tags=["Proxy"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs" if not settings.is_production else None,
    }
