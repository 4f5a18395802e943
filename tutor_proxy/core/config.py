"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

The upstream credential and the listen port keep their conventional names
(OPENAI_API_KEY, PORT) so the service drops into the usual PaaS setups.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
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
    load_dotenv(_env_file, override=False)


def _build_llm_settings() -> "LLMSettings":
    """Build LLM settings from environment.

    BaseSettings populates fields from the environment, but type checkers
    treat required fields as constructor arguments, hence the ignore.
    """

    return LLMSettings()  # type: ignore[call-arg]


def _build_app_settings() -> "AppSettings":
    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class LLMSettings(BaseSettings):
    """Completion provider configuration.

    The API key is optional at startup: a missing key is reported per
    request as a misconfiguration instead of preventing the server from
    booting (health checks keep working).
    """

    provider: str = Field(
        "openai",
        description="Completion provider name (only 'openai' is supported)",
    )
    model: str = Field(
        "gpt-4o-mini",
        description="Chat model identifier sent upstream",
    )
    api_key: str | None = Field(
        None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "LLM_API_KEY"),
        description="Bearer credential for the completion API",
    )
    base_url: str | None = Field(
        None,
        description="Custom API endpoint (OpenAI-compatible)",
    )
    temperature: float = Field(
        0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_tokens: int = Field(
        160,
        ge=1,
        description="Maximum number of tokens in the answer",
    )
    timeout_seconds: float = Field(
        45.0,
        description="Request timeout in seconds",
    )
    max_retries: int = Field(
        0,
        ge=0,
        description="Retries performed by the SDK transport (0 disables them)",
    )

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        case_sensitive=False,
        populate_by_name=True,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    host: str = Field(
        "0.0.0.0",
        description="Interface uvicorn binds to",
    )
    port: int = Field(
        3000,
        validation_alias=AliasChoices("PORT", "APP_PORT"),
        description="Listen port",
    )
    topic: str = Field(
        "Mass Media",
        description="The only subject the tutor is allowed to talk about",
    )
    max_attempts_per_client: int = Field(
        30,
        ge=1,
        description="Answered questions allowed per client for the process lifetime",
    )
    max_question_words: int = Field(
        120,
        ge=1,
        description="Maximum number of whitespace-separated words in a question",
    )
    trust_forwarded_for: bool = Field(
        False,
        description="Prefer the first X-Forwarded-For hop as client identifier",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable request throttling per client address",
    )
    rate_limit_requests: int = Field(
        60,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        3600,
        description="Rate limit window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include RateLimit-* and Retry-After headers",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        populate_by_name=True,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="'json' or 'plain'")
    output: str = Field("stdout", description="'stdout' or 'file'")
    file_path: str | None = Field(
        "logs/app.log",
        description="Log file path when output is 'file'",
    )
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
    )
    backup_count: int = Field(5, description="Rotated files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the correlation id",
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
    llm: LLMSettings = Field(default_factory=_build_llm_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
