"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class QuoteSettings(BaseSettings):
    """Upstream quote source configuration.

    Validation of provider-specific requirements happens in the factory.
    """

    provider: str = Field(
        "proxy",
        description="Quote provider name (currently only 'proxy')",
    )
    base_url: str = Field(
        "https://stock-price-checker-proxy.freecodecamp.rocks",
        description="Base URL of the stock price proxy",
    )
    timeout_seconds: float = Field(
        8.0,
        description="Per-request timeout for quote fetches in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="QUOTE_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    trust_forwarded_for: bool = Field(
        False,
        description=(
            "Use the first X-Forwarded-For entry as the client address "
            "(enable only behind a trusted reverse proxy)"
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: 'json' or 'plain'")
    output: str = Field("stdout", description="Log destination: 'stdout' or 'file'")
    file_path: str | None = Field(
        None,
        description="Log file path when output is 'file' (default logs/app.log)",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file at this size; 0 disables rotation",
        ge=0,
    )
    backup_count: int = Field(5, description="Rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are malformed.
    """

    app_env: str = APP_ENV
    quote: QuoteSettings = Field(default_factory=QuoteSettings)
    app: AppSettings = Field(default_factory=AppSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
