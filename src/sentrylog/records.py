"""
Log levels and log entries.

Levels are the host facility's vocabulary (Python-compatible values, plus
EXCEPTION between ERROR and CRITICAL). An entry pairs an arbitrary value
with a level and a kind tag so sinks can branch without re-inspecting.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any


class LogLevel(IntEnum):
    """Debug facility levels, Python-compatible numeric values."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    EXCEPTION = 45   # Caught exception objects
    CRITICAL = 50

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve level from string name, case-insensitive."""
        name_upper = name.upper()
        try:
            return cls[name_upper]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            )

    @classmethod
    def from_value(cls, value: int | str) -> "LogLevel":
        """Resolve level from int or string."""
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int):
            for member in cls:
                if member.value == value:
                    return member
            raise ValueError(
                f"No standard level with value {value}. "
                f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
            )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


LEVEL_NAMES: dict[int, str] = {member.value: member.name for member in LogLevel}


def level_name(level: Any) -> str:
    """Get display name for a level value. Falls back to str(level)."""
    try:
        return LEVEL_NAMES.get(level, str(level))
    except TypeError:
        return str(level)


class EntryKind(str, Enum):
    TEXT = "text"
    STRUCTURED = "structured"
    EXCEPTION = "exception"


def classify(value: Any) -> EntryKind:
    """Tag a raw log value as text, structured data or an exception."""
    if isinstance(value, BaseException):
        return EntryKind.EXCEPTION
    if isinstance(value, str):
        return EntryKind.TEXT
    return EntryKind.STRUCTURED


@dataclass(frozen=True)
class LogEntry:
    """
    Immutable log entry. Built by local sinks and the forwarder from the
    (value, level) pair they receive.

    `level` is kept as given: the host facility may pass values outside
    LogLevel and sinks must still accept them.
    """
    timestamp: datetime
    value: Any
    level: Any
    level_name: str
    kind: EntryKind

    @classmethod
    def create(cls, value: Any, level: Any = LogLevel.INFO) -> "LogEntry":
        """Factory method with auto-timestamp, level name and kind."""
        return cls(
            timestamp=datetime.now(timezone.utc),
            value=value,
            level=level,
            level_name=level_name(level),
            kind=classify(value),
        )

    @property
    def is_exception(self) -> bool:
        return self.kind is EntryKind.EXCEPTION
