"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_config_logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars not defined in the model
    )

    # App
    app_name: str = "Scoreline API"
    app_version: str = "0.1.0"
    app_env: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./scoreline.db"

    # Redis
    redis_url: str = "redis://localhost:6379"

    # Sessions
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7
    auth_cookie_name: str = "auth-token"

    # External APIs
    sportmonks_api_token: str = ""
    sportmonks_base_url: str = "https://api.sportmonks.com/v3/football"
    sofascore_base_url: str = "https://www.sofascore.com/api/v1"
    sofascore_image_base_url: str = "https://api.sofascore.com/api/v1"
    sofascore_min_interval: float = 0.1  # seconds between outgoing requests
    http_timeout: float = 15.0

    # API Settings
    api_v1_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Rate Limiting
    rate_limit_enabled: bool = True

    # Cache TTLs (seconds)
    cache_ttl_reference: int = 3600  # leagues, teams, seasons

    # Game economy
    starting_coins: int = 100
    max_predicted_score: int = 20
    payout_multiplier: int = 2
    ranking_limit: int = 100

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @model_validator(mode="after")
    def _validate_production_env(self) -> "Settings":
        """Validate that critical env vars are set in production."""
        if self.app_env != "production":
            return self
        missing: list[str] = []
        if not self.database_url or self.database_url.startswith("sqlite"):
            missing.append("DATABASE_URL")
        if not self.jwt_secret or self.jwt_secret == "change-me-in-production":
            missing.append("JWT_SECRET")
        if not self.sportmonks_api_token:
            missing.append("SPORTMONKS_API_TOKEN")
        if missing:
            raise ValueError(f"Missing required env vars for production: {', '.join(missing)}")
        if not self.redis_url:
            _config_logger.warning("REDIS_URL not set - provider responses will not be cached")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
