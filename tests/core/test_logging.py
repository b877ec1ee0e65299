"""
Tests for channel-aware logging configuration.
"""

import pytest

from svgsvelte.core import logging as svg_logging
from svgsvelte.core.logging import (
    LogChannel,
    LogLevel,
    configure_logging,
    get_current_config,
    get_pass_logger,
)


@pytest.fixture(autouse=True)
def restore_silence():
    yield
    configure_logging(level="silent", force=True)


class TestLevels:
    """Tests for level parsing."""

    @pytest.mark.parametrize("text,level", [
        ("silent", LogLevel.SILENT),
        ("INFO", LogLevel.INFO),
        ("verbose", LogLevel.VERBOSE),
        ("debug", LogLevel.DEBUG),
        ("warning", LogLevel.INFO),
        ("nonsense", LogLevel.INFO),
    ])
    def test_from_string(self, text, level):
        assert LogLevel.from_string(text) == level

    def test_channel_from_string(self):
        assert LogChannel.from_string("parse") == LogChannel.PARSE
        assert LogChannel.from_string("nope") is None


class TestConfigure:
    """Tests for configure_logging."""

    def test_explicit_arguments(self):
        configure_logging(level="debug", format="json", channels=["parse", "batch", "bogus"], force=True)
        config = get_current_config()
        assert config["level"] == "DEBUG"
        assert config["format"] == "json"
        assert set(config["channels"]) == {"PARSE", "BATCH"}

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SVGSVELTE_LOG_LEVEL", "verbose")
        monkeypatch.setenv("SVGSVELTE_LOG_CHANNELS", "normalize")
        configure_logging(force=True)
        config = get_current_config()
        assert config["level"] == "VERBOSE"
        assert config["channels"] == ["NORMALIZE"]

    def test_not_reconfigured_without_force(self):
        configure_logging(level="debug", force=True)
        configure_logging(level="silent")
        assert get_current_config()["level"] == "DEBUG"


class TestPassLogger:
    """Tests for pass logger channel detection."""

    @pytest.mark.parametrize("pass_name,channel", [
        ("p00_normalize", LogChannel.NORMALIZE),
        ("p10_parse", LogChannel.PARSE),
        ("p20_generate", LogChannel.GENERATE),
        ("p99_custom", LogChannel.PIPELINE),
    ])
    def test_channel(self, pass_name, channel):
        logger = get_pass_logger(pass_name)
        assert logger.channel == channel
        assert logger.name == f"svgsvelte.{pass_name}"

    def test_filtered_channel_is_silent(self):
        configure_logging(level="debug", channels=["parse"], force=True)
        assert not get_pass_logger("p00_normalize")._should_log(LogLevel.INFO)
        assert get_pass_logger("p10_parse")._should_log(LogLevel.DEBUG)


def test_request_context_binding():
    svg_logging.clear_request_context()
    svg_logging.bind_request_context(request_id="abc")
    assert svg_logging._request_context.get() == {"request_id": "abc"}
    svg_logging.clear_request_context()
    assert svg_logging._request_context.get() == {}
