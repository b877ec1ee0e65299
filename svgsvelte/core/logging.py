"""
Logging — Channel and level filtered structlog output.

Every message belongs to a channel:
- PIPELINE: engine bookkeeping, pass timings
- NORMALIZE: cleanup transforms
- PARSE: tree building and structural checks
- GENERATE: props and component text
- BATCH: directory conversions
- SYSTEM: anything else

Levels, quietest first: silent, info, verbose, debug.

Environment (CLI flags take precedence):
- SVGSVELTE_LOG_LEVEL
- SVGSVELTE_LOG_FORMAT (console | json)
- SVGSVELTE_LOG_CHANNELS (comma separated, all when unset)

Output goes to stderr.
"""

import logging
import os
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Union

import structlog


class LogLevel(IntEnum):
    """Verbosity, ordered so that a higher level shows more."""
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Unknown names (and stdlib names like 'warning') fall back to INFO."""
        try:
            return cls[s.strip().upper()]
        except KeyError:
            return cls.INFO


class LogChannel(str, Enum):
    """Where a message comes from."""
    PIPELINE = "PIPELINE"
    NORMALIZE = "NORMALIZE"
    PARSE = "PARSE"
    GENERATE = "GENERATE"
    BATCH = "BATCH"
    SYSTEM = "SYSTEM"

    @classmethod
    def all(cls) -> list["LogChannel"]:
        return list(cls)

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        try:
            return cls(s.strip().upper())
        except ValueError:
            return None


# Pass name prefix -> channel
PASS_CHANNELS = {
    "p00": LogChannel.NORMALIZE,
    "p10": LogChannel.PARSE,
    "p20": LogChannel.GENERATE,
}

_STDLIB_LEVELS = {
    LogLevel.SILENT: logging.CRITICAL + 10,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}


@dataclass
class LoggingSettings:
    level: LogLevel = LogLevel.INFO
    format: str = "console"
    channels: set[LogChannel] = field(default_factory=lambda: set(LogChannel))
    configured: bool = False


_settings = LoggingSettings()

# Fields merged into every event of the current conversion
_request_context: ContextVar[dict] = ContextVar("svgsvelte_log_context", default={})


def _parse_channels(values: Iterable[Union[LogChannel, str]]) -> set[LogChannel]:
    parsed = set()
    for value in values:
        channel = value if isinstance(value, LogChannel) else LogChannel.from_string(value)
        if channel is not None:
            parsed.add(channel)
    return parsed


def _build_processors(fmt: str) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return processors


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[list[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Set up structlog and the stdlib root handler.

    Arguments left as None are read from the environment. Once configured,
    later calls are ignored unless force is set.
    """
    if _settings.configured and not force:
        return

    if level is None:
        level = os.environ.get("SVGSVELTE_LOG_LEVEL", "info")
    if isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("SVGSVELTE_LOG_FORMAT", "console")

    if channels is None:
        env_channels = os.environ.get("SVGSVELTE_LOG_CHANNELS", "")
        selected = _parse_channels(env_channels.split(",")) if env_channels else set()
    else:
        selected = _parse_channels(channels)

    _settings.level = level
    _settings.format = format
    # An empty env filter means everything; an explicit list is taken as given
    _settings.channels = selected if (selected or channels is not None) else set(LogChannel)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=_STDLIB_LEVELS[level],
        force=True,
    )
    structlog.configure(
        processors=_build_processors(format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _settings.configured = True


def get_current_config() -> dict:
    """Snapshot of the active settings."""
    return {
        "level": _settings.level.name,
        "format": _settings.format,
        "channels": sorted(ch.value for ch in _settings.channels),
    }


class ChannelLogger:
    """
    structlog logger that drops messages outside the active channels or
    above the active level. error() and warning() only respect SILENT.
    """

    def __init__(
        self,
        channel: LogChannel,
        name: Optional[str] = None,
        pass_name: Optional[str] = None,
    ):
        self.channel = channel
        self.name = name or f"svgsvelte.{channel.value.lower()}"
        self.pass_name = pass_name
        self._logger = structlog.get_logger(self.name)

    def _should_log(self, msg_level: LogLevel) -> bool:
        return self.channel in _settings.channels and _settings.level >= msg_level

    def _emit(self, method: str, event: str, fields: dict[str, Any]) -> None:
        fields["channel"] = self.channel.value
        if self.pass_name:
            fields["pass"] = self.pass_name
        fields.update(_request_context.get())
        getattr(self._logger, method)(event, **fields)

    def info(self, event: str, **kwargs: Any) -> None:
        if self._should_log(LogLevel.INFO):
            self._emit("info", event, kwargs)

    def verbose(self, event: str, **kwargs: Any) -> None:
        if self._should_log(LogLevel.VERBOSE):
            self._emit("debug", event, {"verbosity": "verbose", **kwargs})

    def debug(self, event: str, **kwargs: Any) -> None:
        if self._should_log(LogLevel.DEBUG):
            self._emit("debug", event, {"verbosity": "debug", **kwargs})

    def warning(self, event: str, **kwargs: Any) -> None:
        if _settings.level > LogLevel.SILENT:
            self._emit("warning", event, kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        if _settings.level > LogLevel.SILENT:
            self._emit("error", event, kwargs)


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """Logger for a channel; unknown channel names log to SYSTEM."""
    configure_logging()
    if isinstance(channel, str):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM
    return ChannelLogger(channel=channel)


def get_pass_logger(pass_name: str, channel: Optional[LogChannel] = None) -> ChannelLogger:
    """
    Logger for a pipeline pass.

    The channel is taken from the pass number prefix ("p10_parse" -> PARSE)
    unless given; unknown prefixes log to PIPELINE.
    """
    configure_logging()
    if channel is None:
        channel = PASS_CHANNELS.get(pass_name[:3], LogChannel.PIPELINE)
    return ChannelLogger(channel=channel, name=f"svgsvelte.{pass_name}", pass_name=pass_name)


def bind_request_context(**kwargs: Any) -> None:
    """Add fields to every message until clear_request_context()."""
    _request_context.set({**_request_context.get(), **kwargs})


def clear_request_context() -> None:
    _request_context.set({})


class ConversionLogger:
    """Timings and outcome of one engine run, tagged with its request id."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        self._log = get_logger(LogChannel.PIPELINE)
        self._started = time.perf_counter()
        self._pass_started: dict[str, float] = {}
        bind_request_context(request_id=request_id)

    @staticmethod
    def _elapsed_ms(since: float) -> float:
        return round((time.perf_counter() - since) * 1000, 2)

    def pass_start(self, pass_name: str) -> None:
        self._pass_started[pass_name] = time.perf_counter()
        self._log.debug("pass_started", pass_name=pass_name)

    def pass_end(self, pass_name: str, **metrics: Any) -> None:
        since = self._pass_started.get(pass_name, time.perf_counter())
        self._log.verbose(
            "pass_completed",
            pass_name=pass_name,
            duration_ms=self._elapsed_ms(since),
            **metrics,
        )

    def pass_error(self, pass_name: str, error: Exception) -> None:
        """Record a failed pass. Re-raising is the engine's job."""
        self._log.error(
            "pass_failed",
            pass_name=pass_name,
            error=str(error),
            error_type=type(error).__name__,
        )
        clear_request_context()

    def conversion_complete(self, **metrics: Any) -> None:
        self._log.info(
            "conversion_complete",
            total_duration_ms=self._elapsed_ms(self._started),
            **metrics,
        )
        clear_request_context()
