"""Shared fixtures: fresh settings and silent logging for every test."""

import pytest

from errtrace.foundation.config import clear_settings_cache
from errtrace.runtime.observability.logging import configure_logging


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> object:
    """Reload settings from a clean environment and silence log output."""
    for var in ("ERRTRACE_TRACE_ROOT", "ERRTRACE_PANIC_EXIT_CODE", "ERRTRACE_PANIC_BANNER",
                "ERRTRACE_LOG_LEVEL", "ERRTRACE_LOG_FORMAT", "ERRTRACE_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    configure_logging(format="none")
    yield
    clear_settings_cache()
