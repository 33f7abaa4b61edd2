"""
Local log sinks (output destinations).

A sink accepts any value at any level and persists it. Local sinks never
raise on a value they cannot render: rendering goes through render_value(),
which falls back to str().

Terminal, File and Memory sinks are the usual fallback targets for
LogForwarder.
"""

import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from pathlib import Path
from typing import Any, Optional

from sentrylog.records import LogEntry, LogLevel
from sentrylog.formatters import (
    LogFormatter,
    CompactFormatter,
    DetailedFormatter,
)


class LogSink(ABC):
    """Base sink. Receives raw (value, level) pairs."""

    def __init__(self, name: str, min_level: int = LogLevel.DEBUG, formatter: LogFormatter | None = None):
        self.name = name
        self.min_level = min_level
        self._formatter = formatter

    @property
    def formatter(self) -> LogFormatter:
        if self._formatter is None:
            self._formatter = self._default_formatter()
        return self._formatter

    @formatter.setter
    def formatter(self, value: LogFormatter) -> None:
        self._formatter = value

    def _default_formatter(self) -> LogFormatter:
        """Subclass-specific default."""
        return CompactFormatter()

    @abstractmethod
    def log(self, value: Any, level: Any = LogLevel.INFO) -> None:
        """Write one log entry."""
        ...

    def accepts(self, level: Any) -> bool:
        """Int levels below min_level are dropped. Unknown levels always pass."""
        if isinstance(level, int) and not isinstance(level, bool):
            return level >= self.min_level
        return True

    def flush(self) -> None:
        """Flush any buffered entries. Override in buffered sinks."""
        pass

    def close(self) -> None:
        """Cleanup. Override if sink holds resources."""
        self.flush()


class TerminalSink(LogSink):
    """
    Writes to stdout/stderr with ANSI color coding.
    ERROR+ goes to stderr, everything else to stdout.
    """

    COLORS = {
        10: "\033[36m",      # DEBUG: cyan
        20: "\033[37m",      # INFO: white/default
        30: "\033[33m",      # WARNING: yellow
        40: "\033[31m",      # ERROR: red
        45: "\033[91m",      # EXCEPTION: bright red
        50: "\033[1;91m",    # CRITICAL: bold bright red
    }
    RESET = "\033[0m"

    def __init__(
        self,
        name: str = "terminal",
        min_level: int = LogLevel.DEBUG,
        formatter: LogFormatter | None = None,
        color: bool = True,
    ):
        super().__init__(name, min_level, formatter)
        self.color = color

    def log(self, value: Any, level: Any = LogLevel.INFO) -> None:
        if not self.accepts(level):
            return
        entry = LogEntry.create(value, level)
        formatted = self.formatter.format(entry)
        if self.color:
            formatted = f"{self._get_color(level)}{formatted}{self.RESET}"
        stream = sys.stderr if _is_error_level(level) else sys.stdout
        print(formatted, file=stream, flush=True)

    def _get_color(self, level: Any) -> str:
        """Get ANSI color for level, falling back to nearest lower level."""
        if not isinstance(level, int):
            return self.COLORS[LogLevel.CRITICAL]
        if level in self.COLORS:
            return self.COLORS[level]
        for threshold in sorted(self.COLORS.keys(), reverse=True):
            if level >= threshold:
                return self.COLORS[threshold]
        return ""


class FileSink(LogSink):
    """
    Appends to a .log file.
    Simple daily rotation: when the date changes, opens a new file.
    """

    def __init__(
        self,
        name: str = "logfile",
        min_level: int = LogLevel.DEBUG,
        formatter: LogFormatter | None = None,
        path: str | Path = "logs/sentrylog.log",
        rotation: str = "daily",
    ):
        super().__init__(name, min_level, formatter)
        self.base_path = Path(path)
        self.rotation = rotation
        self._current_date: Optional[str] = None
        self._file = None
        self._lock = threading.Lock()

    def _default_formatter(self) -> LogFormatter:
        return DetailedFormatter()

    def _file_path(self, date_str: str) -> Path:
        if self.rotation == "daily":
            stem = self.base_path.stem
            suffix = self.base_path.suffix or ".log"
            return self.base_path.parent / f"{stem}_{date_str}{suffix}"
        return self.base_path

    def _ensure_file(self, date_str: str) -> None:
        """Open or rotate file as needed. Must hold self._lock."""
        if self._current_date == date_str and self._file is not None:
            return
        if self._file is not None:
            self._file.close()
        self.base_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self._file_path(date_str), "a", encoding="utf-8")
        self._current_date = date_str

    @property
    def current_path(self) -> Path | None:
        if self._current_date is None:
            return None
        return self._file_path(self._current_date)

    def log(self, value: Any, level: Any = LogLevel.INFO) -> None:
        if not self.accepts(level):
            return
        entry = LogEntry.create(value, level)
        formatted = self.formatter.format(entry)
        with self._lock:
            self._ensure_file(entry.timestamp.strftime("%Y-%m-%d"))
            self._file.write(formatted + "\n")

    def flush(self) -> None:
        with self._lock:
            if self._file:
                self._file.flush()

    def close(self) -> None:
        self.flush()
        with self._lock:
            if self._file:
                self._file.close()
                self._file = None
                self._current_date = None


class MemorySink(LogSink):
    """
    Ring buffer of the last N entries.
    Does not grow unbounded. Useful as an in-process audit trail.
    """

    def __init__(
        self,
        name: str = "memory",
        min_level: int = LogLevel.DEBUG,
        formatter: LogFormatter | None = None,
        ring_buffer_size: int = 10000,
    ):
        super().__init__(name, min_level, formatter)
        self._buffer: deque[LogEntry] = deque(maxlen=ring_buffer_size)
        self._lock = threading.Lock()

    def log(self, value: Any, level: Any = LogLevel.INFO) -> None:
        if not self.accepts(level):
            return
        entry = LogEntry.create(value, level)
        with self._lock:
            self._buffer.append(entry)

    def get_recent(self, n: int = 100, min_level: int | None = None) -> list[LogEntry]:
        """Get recent entries, optionally only those at or above min_level."""
        with self._lock:
            entries = list(self._buffer)

        if min_level is not None:
            entries = [
                e for e in entries
                if not isinstance(e.level, int) or e.level >= min_level
            ]

        return entries[-n:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    @property
    def count(self) -> int:
        return len(self._buffer)

    @property
    def maxlen(self) -> int | None:
        return self._buffer.maxlen


def _is_error_level(level: Any) -> bool:
    if isinstance(level, int) and not isinstance(level, bool):
        return level >= LogLevel.ERROR
    return True
