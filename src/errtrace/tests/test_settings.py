"""Tests for environment configuration and trace path handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from errtrace import mask
from errtrace.foundation.config import ErrtraceSettings, clear_settings_cache, get_settings


def test_defaults() -> None:
    settings = get_settings()

    assert settings.debug is False
    assert settings.logging.level == "INFO"
    assert settings.logging.format == "console"
    assert settings.trace.root is None
    assert settings.panic.exit_code == 1
    assert settings.panic.banner == "program panic at"
    assert settings.log_level == "INFO"


def test_settings_cached() -> None:
    assert get_settings() is get_settings()
    first = get_settings()
    clear_settings_cache()
    assert get_settings() is not first


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRTRACE_LOG_LEVEL", "warning")
    monkeypatch.setenv("ERRTRACE_LOG_FORMAT", "json")
    monkeypatch.setenv("ERRTRACE_PANIC_EXIT_CODE", "3")
    settings = ErrtraceSettings()

    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "json"
    assert settings.panic.exit_code == 3


def test_debug_forces_debug_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRTRACE_DEBUG", "true")

    assert ErrtraceSettings().log_level == "DEBUG"


def test_exit_code_must_be_nonzero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRTRACE_PANIC_EXIT_CODE", "0")
    with pytest.raises(ValueError):
        ErrtraceSettings()


def test_trace_root_relativizes_paths(monkeypatch: pytest.MonkeyPatch) -> None:
    """Paths under ERRTRACE_TRACE_ROOT are recorded relative to it."""
    here = Path(__file__).resolve()
    monkeypatch.setenv("ERRTRACE_TRACE_ROOT", str(here.parent))
    clear_settings_cache()

    err = mask(ValueError("x"))
    path, _, line = err.trace[0].rpartition(":")

    assert path == here.name
    assert int(line) > 0


def test_trace_root_elsewhere_keeps_absolute(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ERRTRACE_TRACE_ROOT", str(tmp_path))
    clear_settings_cache()

    err = mask(ValueError("x"))

    assert Path(err.trace[0].rpartition(":")[0]).name == Path(__file__).name
    assert Path(err.trace[0].rpartition(":")[0]).is_absolute()


def test_relative_trace_root_is_resolved(monkeypatch: pytest.MonkeyPatch) -> None:
    """A root given relative to the working directory still matches."""
    here = Path(__file__).resolve()
    monkeypatch.chdir(here.parent.parent)
    monkeypatch.setenv("ERRTRACE_TRACE_ROOT", here.parent.name)
    clear_settings_cache()

    assert get_settings().trace.root == str(here.parent)
    assert mask(ValueError("x")).trace[0].rpartition(":")[0] == here.name
