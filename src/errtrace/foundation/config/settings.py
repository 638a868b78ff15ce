"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from errtrace.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.panic.exit_code
    1
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # ERRTRACE_PANIC_EXIT_CODE=2
    # ERRTRACE_LOG_LEVEL=DEBUG
    # ERRTRACE_TRACE_ROOT=/srv/app
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ERRTRACE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class TraceSettings(BaseSettings):
    """Call-site trace configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ERRTRACE_TRACE_",
        extra="ignore",
    )

    root: str | None = Field(
        default=None,
        description="Record trace paths relative to this directory when they live under it",
    )

    @field_validator("root", mode="after")
    @classmethod
    def _resolve_root(cls, v: str | None) -> str | None:
        """Absolute, symlink-free root so it compares against code object paths."""
        return str(Path(v).resolve()) if v else v


class PanicSettings(BaseSettings):
    """Program-termination output."""

    model_config = SettingsConfigDict(
        env_prefix="ERRTRACE_PANIC_",
        extra="ignore",
    )

    exit_code: Annotated[int, Field(ge=1, le=255)] = 1
    banner: str = Field(default="program panic at", description="Prefix of the timestamp line")


class ErrtraceSettings(BaseSettings):
    """Root settings for errtrace.

    Loads configuration from environment variables with ERRTRACE_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        ERRTRACE_DEBUG=true
        ERRTRACE_LOG_FORMAT=json
        ERRTRACE_TRACE_ROOT=/srv/app
        ERRTRACE_PANIC_EXIT_CODE=70
    """

    model_config = SettingsConfigDict(
        env_prefix="ERRTRACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    trace: TraceSettings = Field(default_factory=TraceSettings)
    panic: PanicSettings = Field(default_factory=PanicSettings)

    @computed_field
    @property
    def log_level(self) -> str:
        """Effective log level (debug mode forces DEBUG)."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> ErrtraceSettings:
    """Get the global settings instance (cached)."""
    return ErrtraceSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
