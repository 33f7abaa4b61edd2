"""
Value rendering and entry formatters.

render_value() is the one stringification convention: local sinks use it
through the formatters, the forwarder uses it for Sentry messages, so the
two logs show the same text for the same value.

  - compact:  "{timestamp:%H:%M:%S} [{level_name:>9}] {text}"
  - detailed: "{timestamp} [{level_name}] ({kind}) {text}" + traceback
  - json:     One JSON object per line
"""

import json
import traceback
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from sentrylog.records import LogEntry


CYCLE_MARKER = "<cycle>"


def render_value(value: Any) -> str:
    """
    Render any log value as display text. Never raises: values that cannot
    be rendered come back as "<unrenderable TypeName>".
    """
    try:
        if isinstance(value, str):
            return value
        if isinstance(value, BaseException):
            return _format_exception(value)
        if isinstance(value, (Mapping, list, tuple, set, frozenset)):
            return json.dumps(_serialize_value(value), default=_safe_str)
        return str(value)
    except Exception:
        return _unrenderable(value)


class LogFormatter(ABC):
    """Base formatter. Transforms LogEntry → string."""

    @abstractmethod
    def format(self, entry: LogEntry) -> str: ...


class CompactFormatter(LogFormatter):
    """
    Compact single-line format for terminal display.
    Example: 14:32:05 [  WARNING] User login failed
    """

    def format(self, entry: LogEntry) -> str:
        ts = entry.timestamp.strftime("%H:%M:%S")
        return f"{ts} [{entry.level_name:>9}] {render_value(entry.value)}"


class DetailedFormatter(LogFormatter):
    """
    Detailed format for file sinks. Exception entries get their traceback
    appended on the following lines.
    Example: 2026-02-12 14:32:05.123456 [    ERROR] (structured) {"user": 42}
    """

    def format(self, entry: LogEntry) -> str:
        ts = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")
        line = f"{ts} [{entry.level_name:>9}] ({entry.kind.value}) {render_value(entry.value)}"
        if entry.is_exception and entry.value.__traceback__ is not None:
            tb = "".join(traceback.format_tb(entry.value.__traceback__))
            line = f"{line}\n{tb.rstrip()}"
        return line


class JsonFormatter(LogFormatter):
    """Structured JSON for machine parsing. One JSON object per line."""

    def format(self, entry: LogEntry) -> str:
        obj: dict[str, Any] = {
            "timestamp": entry.timestamp.isoformat(),
            "level": _serialize_value(entry.level),
            "level_name": entry.level_name,
            "kind": entry.kind.value,
        }
        if entry.is_exception:
            obj["exception"] = {
                "type": type(entry.value).__name__,
                "message": _safe_str(entry.value),
            }
        else:
            try:
                obj["value"] = _serialize_value(entry.value)
            except Exception:
                obj["value"] = _unrenderable(entry.value)
        return json.dumps(obj, default=_safe_str)


def _format_exception(exc: BaseException) -> str:
    message = _safe_str(exc)
    name = type(exc).__name__
    return f"{name}: {message}" if message else name


def _unrenderable(value: Any) -> str:
    return f"<unrenderable {type(value).__name__}>"


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return _unrenderable(value)


def _serialize_value(v: Any, _seen: frozenset[int] = frozenset()) -> Any:
    """Make a value JSON-serializable. Containers already on the path become CYCLE_MARKER."""
    if isinstance(v, (str, int, float, bool, type(None))):
        return v
    if isinstance(v, BaseException):
        return _format_exception(v)
    if not isinstance(v, (list, tuple, set, frozenset, Mapping)):
        return _safe_str(v)

    if id(v) in _seen:
        return CYCLE_MARKER
    seen = _seen | {id(v)}
    if isinstance(v, (list, tuple)):
        return [_serialize_value(i, seen) for i in v]
    if isinstance(v, (set, frozenset)):
        return sorted((_serialize_value(i, seen) for i in v), key=str)
    return {_safe_str(k): _serialize_value(val, seen) for k, val in v.items()}
