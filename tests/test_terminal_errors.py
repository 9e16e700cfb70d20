"""Tests for routehint.server.terminal_errors — compact error output."""

import logging

import pytest

from routehint.server.terminal_errors import (
    format_compact_traceback,
    format_minimal_error,
    log_error,
    traceback_style,
)


def _raise() -> ValueError:
    try:
        raise ValueError("broken")
    except ValueError as exc:
        return exc


class TestFormatting:
    def test_compact_lists_app_frames(self) -> None:
        text = format_compact_traceback(_raise())
        assert text.startswith("ValueError: broken")
        assert "Trace (app frames):" in text
        assert "_raise" in text

    def test_minimal_is_one_line(self) -> None:
        text = format_minimal_error(_raise())
        assert "\n" not in text
        assert text.startswith("ValueError at ")
        assert text.endswith(": broken")

    def test_without_traceback(self) -> None:
        assert format_compact_traceback(ValueError("x")) == "ValueError: x"
        assert format_minimal_error(ValueError("x")) == "ValueError: x"


class TestLogError:
    @pytest.mark.parametrize(
        ("env", "expected"),
        [(None, "compact"), ("FULL", "full"), ("minimal", "minimal"), ("bogus", "compact")],
    )
    def test_style_from_env(
        self, monkeypatch: pytest.MonkeyPatch, env: str | None, expected: str
    ) -> None:
        if env is None:
            monkeypatch.delenv("ROUTEHINT_TRACEBACK", raising=False)
        else:
            monkeypatch.setenv("ROUTEHINT_TRACEBACK", env)
        assert traceback_style() == expected

    def test_logs_to_given_logger(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("ROUTEHINT_TRACEBACK", "minimal")
        with caplog.at_level(logging.ERROR, logger="routehint.hint"):
            log_error(_raise(), prefix="Route hints failed", log=logging.getLogger("routehint.hint"))
        (record,) = caplog.records
        assert record.name == "routehint.hint"
        assert record.getMessage().startswith("Route hints failed: ValueError at ")
