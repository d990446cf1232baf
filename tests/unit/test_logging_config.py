"""Unit tests for remotevalue.logging_config."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
import structlog

from remotevalue.api import RemoteValue
from remotevalue.config import LoggingSettings, Settings
from remotevalue.logging_config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_output_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(level="INFO", format="json"))
        structlog.get_logger().info("cache_cleared", dropped=2)

        err = capsys.readouterr().err.strip()
        record = json.loads(err)
        assert record["event"] == "cache_cleared"
        assert record["dropped"] == 2
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(level="WARNING", format="json"))
        log = structlog.get_logger()
        log.info("dropped_event")
        log.warning("kept_event")

        err = capsys.readouterr().err
        assert "dropped_event" not in err
        assert "kept_event" in err

    def test_text_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(level="DEBUG", format="text"))
        structlog.get_logger().debug("document_cached", url="https://example.com/a.json")

        err = capsys.readouterr().err
        assert "document_cached" in err
        assert "https://example.com/a.json" in err

    def test_applies_settings_logging_section(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        settings = Settings(logging={"level": "ERROR", "format": "json"})
        configure_logging(settings.logging)
        log = structlog.get_logger()
        log.warning("cache_invalidated", url="https://example.com/a.json")
        log.error("kept_event")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["kept_event"]

    def test_engine_does_not_reconfigure_logging(self) -> None:
        before = structlog.get_config()["processors"]
        RemoteValue.from_settings(Settings(logging={"level": "DEBUG", "format": "text"}))
        assert structlog.get_config()["processors"] == before
