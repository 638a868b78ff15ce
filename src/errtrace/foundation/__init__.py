"""Foundation: error values, masking and configuration."""

from .config import ErrtraceSettings, clear_settings_cache, get_settings
from .errors import Context, Error, ErrorRecord, is_, mask, maskf, resolve_cause

__all__ = [
    "Context", "Error", "ErrorRecord", "is_", "mask", "maskf", "resolve_cause",
    "ErrtraceSettings", "clear_settings_cache", "get_settings",
]
