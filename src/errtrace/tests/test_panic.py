"""Tests for program-exit reporting."""

from __future__ import annotations

import io
import re

import orjson
import pytest

from errtrace import Error, mask, panic, run
from errtrace.foundation.config import clear_settings_cache

_BANNER = re.compile(r"^program panic at \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}(\.\d+)?\+00:00$")


def _panic(err: BaseException) -> tuple[int, list[str]]:
    out = io.StringIO()
    with pytest.raises(SystemExit) as info:
        panic(err, output=out)
    return info.value.code, out.getvalue().split("\n")


def test_panic_prints_banner_and_exits() -> None:
    """Banner, blank, indented JSON, blank, then exit 1."""
    err = mask(Error("connection refused"), ("port", "7777"))
    code, lines = _panic(err)

    assert code == 1
    assert _BANNER.match(lines[0])
    assert lines[1] == ""
    assert lines[2] == "    {"
    body = "\n".join(lines[2:lines.index("", 2)])
    assert all(line.startswith("    ") for line in body.splitlines())
    doc = orjson.loads(body)
    assert doc["description"] == "connection refused"
    assert doc["context"] == [{"key": "port", "value": "7777"}]
    assert len(doc["trace"]) == 1
    assert lines[-2:] == ["", ""]


def test_panic_nested_lines_indented_by_four() -> None:
    _, lines = _panic(mask(ValueError("x")))

    assert lines[3] == '        "description": "x",'
    assert lines[4] == '        "trace": ['
    assert lines[5].startswith('            "')


def test_panic_reraises_foreign_errors() -> None:
    """Non-Error exceptions propagate unchanged."""
    boom = RuntimeError("boom")
    with pytest.raises(RuntimeError) as info:
        panic(boom, output=io.StringIO())

    assert info.value is boom


def test_panic_none_is_type_error() -> None:
    with pytest.raises(TypeError):
        panic(None)  # type: ignore[arg-type]


def test_panic_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Exit code and banner come from ERRTRACE_PANIC_*."""
    monkeypatch.setenv("ERRTRACE_PANIC_EXIT_CODE", "70")
    monkeypatch.setenv("ERRTRACE_PANIC_BANNER", "fatal at")
    clear_settings_cache()

    code, lines = _panic(mask(Error("x")))

    assert code == 70
    assert lines[0].startswith("fatal at ")


def test_run_returns_result() -> None:
    assert run(lambda a, b=0: a + b, 1, b=2) == 3


def test_run_masks_and_panics(capsys: pytest.CaptureFixture[str]) -> None:
    """Escaping exceptions become a panic banner on stdout."""
    marker = Error(kind="notFoundError")

    def main() -> None:
        raise mask(marker)

    with pytest.raises(SystemExit) as info:
        run(main)

    out = capsys.readouterr().out
    assert info.value.code == 1
    assert out.startswith("program panic at ")
    doc = orjson.loads("\n".join(out.split("\n")[2:-2]))
    assert doc["description"] == "not found error"
    assert len(doc["trace"]) == 2


def test_run_adopts_foreign_errors(capsys: pytest.CaptureFixture[str]) -> None:
    def main() -> None:
        raise KeyError("missing")

    with pytest.raises(SystemExit):
        run(main)

    assert "\"description\": \"'missing'\"" in capsys.readouterr().out
