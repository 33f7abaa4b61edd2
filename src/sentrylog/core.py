"""
DebugLogger: process-wide debug facility.

One instance, one active sink. Callers log (value, level) pairs; the
facility gates on current_level and hands the pair to whatever sink is
active. Swapping the sink (get_sink/set_sink) is how LogForwarder gets
installed.
"""

import threading
from typing import Any, Optional

from sentrylog.records import LogLevel, level_name
from sentrylog.sinks import LogSink, TerminalSink, FileSink, MemorySink
from sentrylog.formatters import (
    LogFormatter,
    CompactFormatter,
    DetailedFormatter,
    JsonFormatter,
)


class DebugLogger:
    """
    Singleton debug logger with a replaceable active sink.

    Usage:
        log = DebugLogger.instance()
        log.warning("User login failed")
        log.exception(exc)
        log.log({"user": 42, "action": "login"}, DebugLogger.INFO)
    """

    _instance: Optional["DebugLogger"] = None
    _lock = threading.Lock()

    # Re-export levels for convenience: DebugLogger.DEBUG, etc.
    DEBUG = LogLevel.DEBUG
    INFO = LogLevel.INFO
    WARNING = LogLevel.WARNING
    ERROR = LogLevel.ERROR
    EXCEPTION = LogLevel.EXCEPTION
    CRITICAL = LogLevel.CRITICAL

    def __init__(self) -> None:
        self._sink: LogSink | None = None
        self._current_level: int = LogLevel.INFO
        self._sink_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "DebugLogger":
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton. For testing only, not for production use.
        Closes the sink chain before resetting.
        """
        with cls._lock:
            if cls._instance is not None:
                cls._instance.close()
                cls._instance = None

    # ── Configuration ─────────────────────────────────────────────

    def configure(self, config: dict) -> None:
        """
        Configure logger from a dict (parsed YAML).

        Expected structure:
            current_level: INFO
            sink: {type: file, path: logs/app.log, min_level: DEBUG}
        """
        if "current_level" in config:
            self._current_level = _resolve_level(config["current_level"])

        if config.get("sink") is not None:
            self.set_sink(build_sink(config["sink"]))

    def configure_defaults(self) -> None:
        """Terminal sink at INFO."""
        self._current_level = LogLevel.INFO
        self.set_sink(TerminalSink(color=True))

    # ── Active sink ───────────────────────────────────────────────

    def get_sink(self) -> LogSink:
        """Active sink. Installs the default terminal sink on first use."""
        with self._sink_lock:
            if self._sink is None:
                self._sink = TerminalSink(color=True)
            return self._sink

    def set_sink(self, sink: LogSink) -> None:
        """Replace the active sink. The previous one is not closed."""
        if not isinstance(sink, LogSink):
            raise TypeError(f"Expected LogSink, got {type(sink).__name__}")
        with self._sink_lock:
            self._sink = sink

    @property
    def sink(self) -> LogSink:
        return self.get_sink()

    # ── Level Management ──────────────────────────────────────────

    @property
    def current_level(self) -> int:
        return self._current_level

    @current_level.setter
    def current_level(self, value: int | str) -> None:
        self._current_level = _resolve_level(value)

    # ── Core Logging ──────────────────────────────────────────────

    def log(self, value: Any, level: Any = LogLevel.INFO) -> None:
        """
        Hand (value, level) to the active sink.

        Int levels below current_level return immediately. Levels the
        facility does not know are always passed through.
        """
        if isinstance(level, int) and not isinstance(level, bool) and level < self._current_level:
            return
        self.get_sink().log(value, level)

    # ── Convenience Methods ───────────────────────────────────────

    def debug(self, value: Any) -> None:
        self.log(value, LogLevel.DEBUG)

    def info(self, value: Any) -> None:
        self.log(value, LogLevel.INFO)

    def warning(self, value: Any) -> None:
        self.log(value, LogLevel.WARNING)

    def error(self, value: Any) -> None:
        self.log(value, LogLevel.ERROR)

    def exception(self, value: Any) -> None:
        self.log(value, LogLevel.EXCEPTION)

    def critical(self, value: Any) -> None:
        self.log(value, LogLevel.CRITICAL)

    # ── Status ────────────────────────────────────────────────────

    def status(self) -> dict:
        """Current level and the active sink chain, outermost first."""
        chain = []
        sink: LogSink | None = self._sink
        while sink is not None:
            chain.append({
                "name": sink.name,
                "type": type(sink).__name__,
                "min_level": sink.min_level,
                "min_level_name": level_name(sink.min_level),
            })
            sink = getattr(sink, "fallback", None)

        return {
            "current_level": self._current_level,
            "current_level_name": level_name(self._current_level),
            "sinks": chain,
        }

    # ── Cleanup ───────────────────────────────────────────────────

    def flush(self) -> None:
        if self._sink is not None:
            self._sink.flush()

    def close(self) -> None:
        """
        Close the active sink and every sink behind it in the forwarding
        chain. Call during shutdown.
        """
        sink: LogSink | None = self._sink
        while sink is not None:
            sink.close()
            sink = getattr(sink, "fallback", None)


# ── Helpers ───────────────────────────────────────────────────────────

def _resolve_level(value: int | str) -> int:
    """Convert level name or int to numeric level."""
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return LogLevel.from_name(value).value
    raise TypeError(f"Expected int or str for level, got {type(value).__name__}")


def _resolve_formatter(name: str | None) -> LogFormatter | None:
    if name is None:
        return None
    if name == "compact":
        return CompactFormatter()
    if name == "detailed":
        return DetailedFormatter()
    if name == "json":
        return JsonFormatter()
    raise ValueError(f"Unknown formatter '{name}'")


def build_sink(cfg: dict) -> LogSink:
    """Build a local sink from config dict."""
    sink_type = cfg.get("type", "terminal")
    name = cfg.get("name", sink_type)
    min_level = _resolve_level(cfg.get("min_level", LogLevel.DEBUG))
    formatter = _resolve_formatter(cfg.get("formatter"))

    if sink_type == "terminal":
        return TerminalSink(
            name=name,
            min_level=min_level,
            formatter=formatter,
            color=cfg.get("color", True),
        )
    elif sink_type == "file":
        return FileSink(
            name=name,
            min_level=min_level,
            formatter=formatter,
            path=cfg.get("path", "logs/sentrylog.log"),
            rotation=cfg.get("rotation", "daily"),
        )
    elif sink_type == "memory":
        return MemorySink(
            name=name,
            min_level=min_level,
            formatter=formatter,
            ring_buffer_size=cfg.get("ring_buffer_size", 10000),
        )
    else:
        raise ValueError(f"Unknown sink type '{sink_type}'")
