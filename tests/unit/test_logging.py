"""Unit tests for structured logging setup."""

from __future__ import annotations

import json

import pytest
import structlog

from xa_xid.infrastructure.config import ObservabilityConfig
from xa_xid.infrastructure.logging import build_processors, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


@pytest.mark.unit
class TestLogging:
    """Tests for logging configuration."""

    def test_json_renderer_last(self) -> None:
        """The json format ends the chain with a JSON renderer."""
        processors = build_processors("json")
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_last(self) -> None:
        """The console format ends the chain with the dev renderer."""
        processors = build_processors("console")
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events are written as JSON lines with bound context."""
        setup_logging(ObservabilityConfig(log_level="INFO", log_format="json"))

        get_logger("xa_xid.test", component="recovery").info("xid_recovery_completed", count=3)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "xid_recovery_completed"
        assert event["count"] == 3
        assert event["component"] == "recovery"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events below the configured level are dropped."""
        setup_logging(ObservabilityConfig(log_level="WARNING", log_format="json"))

        get_logger("xa_xid.test").info("hidden")

        assert "hidden" not in capsys.readouterr().out
