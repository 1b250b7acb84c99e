"""Unit tests for logging configuration."""

import json
import logging

import structlog

from beanwire.logging import configure_logging, get_logger


class TestLogging:
    """Test cases for configure_logging and get_logger."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_output(self, caplog):
        """Test that JSON mode renders one JSON object per event through stdlib logging."""
        configure_logging("INFO", json_output=True)
        caplog.set_level(logging.INFO)

        get_logger("beanwire.test.json").info("bean_created", bean_name="car")

        event = json.loads(caplog.records[-1].getMessage())
        assert event["event"] == "bean_created"
        assert event["bean_name"] == "car"
        assert event["level"] == "info"
        assert event["logger"] == "beanwire.test.json"
        assert "timestamp" in event

    def test_console_output(self, caplog):
        """Test that console mode still routes events through stdlib logging."""
        configure_logging("DEBUG", json_output=False)
        caplog.set_level(logging.DEBUG)

        get_logger("beanwire.test.console").debug("creating_bean", bean_name="car")

        assert "creating_bean" in caplog.records[-1].getMessage()

    def test_unknown_level_falls_back_to_info(self):
        """Test that an unknown level name does not raise."""
        configure_logging("VERBOSE")
