"""Application settings loaded from the environment."""

import typing as t
from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.retry import RetryConfig


class Environment(Enum):
    """Runtime environment for the application."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(Enum):
    """Log levels understood by loguru."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Settings container used to bootstrap the app.

    Values come from ``FERRY_*`` environment variables, falling back to the
    defaults below. ``FERRY_BACKOFF_DELAYS_MS`` takes a JSON list.
    """

    model_config = SettingsConfigDict(env_prefix="FERRY_", frozen=True)

    environment: Environment = Environment.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO
    chunk_size: int = Field(
        default=1024 * 1024, gt=0, description="Upload chunk size in bytes"
    )
    max_retries: int = Field(
        default=3, ge=0, description="Additional attempts after the first"
    )
    backoff_delays_ms: list[int] = Field(
        default_factory=lambda: [1000, 2000, 4000],
        min_length=1,
        description="Wait before each retry, in milliseconds",
    )
    auto_retry: bool = Field(
        default=True, description="Wait between automatic retry attempts"
    )
    request_timeout: float | None = Field(
        default=None, gt=0, description="Total timeout per chunk request in seconds"
    )

    def retry_config(self) -> RetryConfig:
        """Build the retry policy described by these settings."""
        return RetryConfig(
            max_retries=self.max_retries,
            backoff_delays_ms=tuple(self.backoff_delays_ms),
            auto_retry=self.auto_retry,
        )


def build_settings(**overrides: t.Any) -> Settings:
    """Build Settings, applying only the overrides that are not None.

    Lets callers forward optional arguments straight through without
    clobbering environment or default values.
    """
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
