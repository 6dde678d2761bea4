"""
Tests for channel-aware logging configuration.
"""

import logging

import pytest

from objschema.core.logging import (
    ChannelLogger,
    LogChannel,
    LogLevel,
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_current_config,
    get_logger,
    get_pass_logger,
)


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    clear_request_context()
    configure_logging(level="info", format="console", channels=list(LogChannel), force=True)


class TestLogLevel:
    """Tests for level parsing."""

    @pytest.mark.parametrize("text, expected", [
        ("silent", LogLevel.SILENT),
        ("VERBOSE", LogLevel.VERBOSE),
        ("debug", LogLevel.DEBUG),
        ("warning", LogLevel.INFO),
        ("nonsense", LogLevel.INFO),
    ])
    def test_from_string(self, text, expected):
        assert LogLevel.from_string(text) == expected

    def test_channel_from_string(self):
        assert LogChannel.from_string("validation") is LogChannel.VALIDATION
        assert LogChannel.from_string("nope") is None


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_explicit_config(self):
        configure_logging(level="debug", format="json", channels=["schema", "loader"], force=True)

        assert get_current_config() == {
            "level": "DEBUG",
            "format": "json",
            "channels": ["LOADER", "SCHEMA"],
        }

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("OBJSCHEMA_LOG_LEVEL", "verbose")
        monkeypatch.setenv("OBJSCHEMA_LOG_CHANNELS", "validation,bogus")

        configure_logging(force=True)

        config = get_current_config()
        assert config["level"] == "VERBOSE"
        assert config["channels"] == ["VALIDATION"]

    def test_not_reconfigured_without_force(self):
        configure_logging(level="debug", force=True)
        configure_logging(level="silent")
        assert get_current_config()["level"] == "DEBUG"

    def test_root_logger_left_alone(self):
        """Verify handlers are left to the host application."""
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level

        configure_logging(level="debug", force=True)

        assert root.handlers == handlers
        assert root.level == level

    def test_package_logger_has_null_handler(self):
        handlers = logging.getLogger("objschema").handlers
        assert any(isinstance(handler, logging.NullHandler) for handler in handlers)

    def test_level_applied_to_package_logger(self):
        configure_logging(level="silent", force=True)
        assert not logging.getLogger("objschema").isEnabledFor(logging.CRITICAL)

        configure_logging(level="verbose", force=True)
        assert logging.getLogger("objschema").isEnabledFor(logging.DEBUG)


class TestChannelLogger:
    """Tests for channel filtering."""

    def test_channel_filter(self):
        configure_logging(level="debug", channels=["loader"], force=True)

        assert get_logger(LogChannel.LOADER)._enabled(LogLevel.DEBUG)
        assert not get_logger(LogChannel.VALIDATION)._enabled(LogLevel.INFO)

    def test_level_filter(self):
        configure_logging(level="info", force=True)
        logger = get_logger(LogChannel.SCHEMA)

        assert logger._enabled(LogLevel.INFO)
        assert not logger._enabled(LogLevel.VERBOSE)

    def test_pass_logger(self):
        logger = get_pass_logger("p10_cleanup_attributes")

        assert isinstance(logger, ChannelLogger)
        assert logger.channel is LogChannel.VALIDATION
        assert logger.name == "objschema.p10_cleanup_attributes"
        assert logger._make_event(removed=1)["pass"] == "p10_cleanup_attributes"

    def test_request_context(self):
        bind_request_context(command="validate")
        event = get_logger()._make_event(schema_id="Profile")

        assert event["command"] == "validate"
        assert event["channel"] == "SYSTEM"

        clear_request_context()
        assert "command" not in get_logger()._make_event()

    def test_events_reach_host_handlers(self, caplog):
        configure_logging(level="verbose", force=True)

        with caplog.at_level(logging.DEBUG, logger="objschema"):
            get_logger(LogChannel.SCHEMA).verbose("schema_normalized", schema_id="Profile")
            get_logger(LogChannel.SCHEMA).debug("schema_details")

        assert "schema_normalized" in caplog.text
        assert "schema_details" not in caplog.text

    def test_silent_emits_nothing(self, caplog):
        configure_logging(level="silent", force=True)

        with caplog.at_level(logging.DEBUG, logger="objschema"):
            get_logger().error("command_failed", error="boom")

        assert caplog.records == []
