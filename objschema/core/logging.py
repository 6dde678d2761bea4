"""
Channel-Aware Structured Logging for objschema.

Events are rendered by structlog and handed to the stdlib logger tree under
"objschema". The library never touches the root logger: "objschema" carries
a NullHandler until the application attaches handlers (the CLI does).

Channels:
- SCHEMA: schema normalization and reference resolution
- VALIDATION: validate/normalize pipeline passes
- LOADER: schema files read from disk
- SYSTEM: CLI and everything else

Levels: silent < info < verbose < debug.

Environment:
- OBJSCHEMA_LOG_LEVEL: silent/info/verbose/debug
- OBJSCHEMA_LOG_FORMAT: console/json
- OBJSCHEMA_LOG_CHANNELS: comma-separated channel filter (all if not set)
"""

import logging
import os
from contextvars import ContextVar
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Union

import structlog

LOGGER_NAME = "objschema"


class LogLevel(IntEnum):
    """Log verbosity levels."""
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse a level name; unknown names (and stdlib "warning"/"error") mean INFO."""
        return cls.__members__.get(s.strip().upper(), cls.INFO)


class LogChannel(str, Enum):
    """Semantic log channels."""
    SCHEMA = "SCHEMA"
    VALIDATION = "VALIDATION"
    LOADER = "LOADER"
    SYSTEM = "SYSTEM"

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        try:
            return cls(s.strip().upper())
        except ValueError:
            return None


# LogLevel -> level set on the "objschema" stdlib logger
_STDLIB_LEVELS = {
    LogLevel.SILENT: logging.CRITICAL + 10,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}

_package_logger = logging.getLogger(LOGGER_NAME)
_package_logger.addHandler(logging.NullHandler())

_request_context: ContextVar[dict] = ContextVar("objschema_log_context", default={})

_settings: dict[str, Any] = {
    "level": LogLevel.INFO,
    "format": "console",
    "channels": frozenset(LogChannel),
    "processors": [],
    "configured": False,
}


def _parse_channels(channels: Iterable[Union[LogChannel, str]]) -> set[LogChannel]:
    parsed = set()
    for channel in channels:
        if not isinstance(channel, LogChannel):
            channel = LogChannel.from_string(channel)
        if channel is not None:
            parsed.add(channel)
    return parsed


def _build_processors(format: str) -> list:
    processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if format == "json":
        return processors + [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return processors + [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[Iterable[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure objschema logging.

    Only the "objschema" logger is touched; handlers belong to the host.

    Args:
        level: Log level (LogLevel enum or string)
        format: Output format ("console" or "json")
        channels: Channels to enable (all if None)
        force: Reconfigure even if already configured
    """
    if _settings["configured"] and not force:
        return

    if level is None:
        level = os.environ.get("OBJSCHEMA_LOG_LEVEL", "info")
    if isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("OBJSCHEMA_LOG_FORMAT", "console")

    if channels is None:
        env_channels = os.environ.get("OBJSCHEMA_LOG_CHANNELS", "")
        channels = _parse_channels(env_channels.split(",")) if env_channels else set()
        channels = channels or set(LogChannel)
    else:
        channels = _parse_channels(channels)

    _settings.update(
        level=level,
        format=format,
        channels=frozenset(channels),
        processors=_build_processors(format),
        configured=True,
    )
    _package_logger.setLevel(_STDLIB_LEVELS[level])


class ChannelLogger:
    """
    A logger bound to one channel.

    - info(): key milestones
    - verbose(): detailed operations
    - debug(): everything
    - error(): always, unless silent
    """

    def __init__(
        self,
        channel: LogChannel,
        name: Optional[str] = None,
        pass_name: Optional[str] = None,
    ):
        self.channel = channel
        self.name = name or f"{LOGGER_NAME}.{channel.value.lower()}"
        self.pass_name = pass_name
        self._stdlib = logging.getLogger(self.name)

    def _enabled(self, level: LogLevel) -> bool:
        return self.channel in _settings["channels"] and _settings["level"] >= level

    def _make_event(self, **kwargs) -> dict:
        data = {"channel": self.channel.value, **kwargs}
        if self.pass_name:
            data["pass"] = self.pass_name
        data.update(_request_context.get())
        return data

    def _emit(self, method: str, event: str, **kwargs) -> None:
        logger = structlog.wrap_logger(
            self._stdlib,
            processors=_settings["processors"],
            wrapper_class=structlog.stdlib.BoundLogger,
        )
        getattr(logger, method)(event, **self._make_event(**kwargs))

    def info(self, event: str, **kwargs) -> None:
        if self._enabled(LogLevel.INFO):
            self._emit("info", event, **kwargs)

    def verbose(self, event: str, **kwargs) -> None:
        if self._enabled(LogLevel.VERBOSE):
            self._emit("debug", event, verbosity="verbose", **kwargs)

    def debug(self, event: str, **kwargs) -> None:
        if self._enabled(LogLevel.DEBUG):
            self._emit("debug", event, verbosity="debug", **kwargs)

    def error(self, event: str, **kwargs) -> None:
        if _settings["level"] != LogLevel.SILENT:
            self._emit("error", event, **kwargs)


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """Get a channel-specific logger."""
    configure_logging()

    if isinstance(channel, str):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM

    return ChannelLogger(channel=channel)


def get_pass_logger(pass_name: str, channel: LogChannel = LogChannel.VALIDATION) -> ChannelLogger:
    """Get a logger for a pipeline pass, e.g. "p10_cleanup_attributes"."""
    configure_logging()

    return ChannelLogger(
        channel=channel,
        name=f"{LOGGER_NAME}.{pass_name}",
        pass_name=pass_name,
    )


def bind_request_context(**kwargs) -> None:
    """Bind context that will be included in all log events."""
    _request_context.set({**_request_context.get(), **kwargs})


def clear_request_context() -> None:
    _request_context.set({})


def get_current_config() -> dict:
    """Current logging configuration (for testing/debugging)."""
    return {
        "level": _settings["level"].name,
        "format": _settings["format"],
        "channels": sorted(channel.value for channel in _settings["channels"]),
    }
