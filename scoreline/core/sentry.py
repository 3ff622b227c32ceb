"""Sentry configuration for error monitoring."""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from scoreline.core.config import settings

logger = logging.getLogger(__name__)


def init_sentry() -> bool:
    """Initialize Sentry when ``SENTRY_DSN`` is set. Returns True if enabled."""
    sentry_dsn = os.getenv("SENTRY_DSN")

    if not sentry_dsn:
        logger.info("SENTRY_DSN not set, Sentry disabled")
        return False

    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=settings.app_env,
        release=f"scoreline@{settings.app_version}",
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        # Account emails must not leave the service
        send_default_pii=False,
        enabled=settings.is_production,
    )

    logger.info("Sentry initialized for environment: %s", settings.app_env)
    return True
