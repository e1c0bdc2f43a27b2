"""Tests for structlog integration."""

import logging

import pytest
import structlog

from mockx import Mockx, configure_logging

from tests.interfaces import Calculator


class TestRegistryEvents:
    def test_registration_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="mockx")

        Mockx().init(Calculator)

        assert "mockx.method_registered" in caplog.text
        assert any(r.name == "mockx.registry" for r in caplog.records)

    def test_call_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        mock = Mockx()
        mock.init(Calculator)
        caplog.set_level(logging.DEBUG, logger="mockx")

        mock.call("add", 1, 2)

        assert "mockx.method_called" in caplog.text

    def test_silent_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="mockx")

        mock = Mockx()
        mock.init(Calculator)
        mock.call("add", 1, 2)

        assert caplog.records == []


class TestConfigureLogging:
    def test_json_renderer(self) -> None:
        configure_logging(log_level="DEBUG", log_format="json")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self) -> None:
        configure_logging(log_format="console")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_settings_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOCKX_LOG_FORMAT", "json")

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
