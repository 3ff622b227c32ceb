"""Structured logging for the Scoreline API.

Every ``logging.getLogger(__name__)`` call site goes through structlog's
``ProcessorFormatter``. The output depends on ``APP_ENV``:

- production / staging: one JSON object per line, tagged with app and env
- development: colored console lines
- test: plain console lines, no colors

Request handling binds ``request_id``, ``method`` and ``path``; the auth
dependency adds ``account_id`` once the session is decoded.
"""

import logging
import uuid
from typing import Any

import structlog

from scoreline.core.config import Settings, settings

# Loggers kept at WARNING whatever the configured level
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "asyncio", "hpack")

JSON_ENVS = frozenset({"production", "staging"})


def _app_context(config: Settings) -> structlog.types.Processor:
    """Processor stamping app name, version and environment on each event."""

    def add_app_context(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.setdefault("app", config.app_name)
        event_dict.setdefault("version", config.app_version)
        event_dict.setdefault("env", config.app_env)
        return event_dict

    return add_app_context


def _renderer(config: Settings) -> structlog.types.Processor:
    if config.app_env in JSON_ENVS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=config.app_env == "development")


def resolve_log_level(config: Settings) -> int:
    """``DEBUG`` turns on debug logs; otherwise ``LOG_LEVEL`` applies."""
    if config.debug:
        return logging.DEBUG
    level = logging.getLevelName(config.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger from ``config``."""
    config = config or settings
    level = resolve_log_level(config)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if config.app_env in JSON_ENVS:
        shared_processors.append(_app_context(config))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(config),
        ],
        foreign_pre_chain=shared_processors,
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Access lines in development only
    access_level = logging.INFO if config.app_env == "development" else logging.WARNING
    logging.getLogger("uvicorn.access").setLevel(access_level)

    # SQL statements only with DEBUG on
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if config.debug else logging.WARNING
    )


def generate_request_id() -> str:
    """Generate a short unique request ID."""
    return uuid.uuid4().hex[:12]


def bind_request_context(request_id: str, method: str, path: str) -> None:
    """Bind per-request fields to every log line emitted while handling it."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)


def bind_account_context(account_id: int | str) -> None:
    structlog.contextvars.bind_contextvars(account_id=str(account_id))


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
