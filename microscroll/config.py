"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from pydantic import ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.resolve()


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = f"sqlite:///{PROJECT_ROOT / 'microscroll.db'}"
    CREATE_TABLES_ON_STARTUP: bool = True

    SECRET_KEY: str = ""

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Microscroll API"
    VERSION: str = "0.1.0"

    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    LOG_LEVEL: str | None = None

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Auth
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "300/minute"

    # Study engine
    STUDY_TIMEZONE: str = "UTC"
    STUDY_CONFLICT_RETRIES: int = 3
    # Identical speed batches without a submission id are replays only inside this window
    SPEED_DEDUP_WINDOW_MINUTES: int = 10
    DUE_CARDS_DEFAULT_LIMIT: int = 50
    DUE_CARDS_MAX_LIMIT: int = 200
    SESSIONS_DEFAULT_LIMIT: int = 20

    @field_validator("STUDY_TIMEZONE", mode="after")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject time zones unknown to the system tz database."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as err:
            msg = f"Unknown STUDY_TIMEZONE '{value}'"
            raise ValueError(msg) from err
        return value

    @field_validator("STUDY_CONFLICT_RETRIES", "SPEED_DEDUP_WINDOW_MINUTES", mode="after")
    @classmethod
    def validate_positive(cls, value: int, info: ValidationInfo) -> int:
        """At least one attempt is always made and the dedup window is never empty."""
        if value < 1:
            msg = f"{info.field_name} must be at least 1"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def validate_due_limits(self) -> "Settings":
        """Validate due card limits."""
        if not 0 < self.DUE_CARDS_DEFAULT_LIMIT <= self.DUE_CARDS_MAX_LIMIT:
            msg = "DUE_CARDS_DEFAULT_LIMIT must be positive and <= DUE_CARDS_MAX_LIMIT"
            raise ValueError(msg)
        return self

    @property
    def study_zone(self) -> ZoneInfo:
        """Zone used for calendar-day boundaries in streaks and analytics."""
        return ZoneInfo(self.STUDY_TIMEZONE)


def configure_logging(environment: str = "development", level: str | None = None) -> None:
    """
    Route structlog through stdlib logging.

    Production renders one JSON object per line; other environments use the
    coloured console renderer. Without an explicit level, development logs at
    DEBUG and everything else at INFO.
    """
    if level is None:
        level = "DEBUG" if environment == "development" else "INFO"
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level.upper())

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings()
