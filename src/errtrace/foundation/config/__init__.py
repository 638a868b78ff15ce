"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    ErrtraceSettings,
    LoggingSettings,
    PanicSettings,
    TraceSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ErrtraceSettings",
    "LoggingSettings",
    "PanicSettings",
    "TraceSettings",
    "clear_settings_cache",
    "get_settings",
]
