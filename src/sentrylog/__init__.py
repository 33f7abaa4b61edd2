"""
sentrylog: debug logging with best-effort Sentry forwarding.

Entries always reach the local sink; Sentry gets a copy when its client is
initialised. Relay failures are logged locally at CRITICAL.
"""

from sentrylog.core import DebugLogger
from sentrylog.records import LogEntry, LogLevel, EntryKind
from sentrylog.severity import Severity, SEVERITY_MAP, resolve_severity
from sentrylog.sinks import LogSink, TerminalSink, FileSink, MemorySink
from sentrylog.remote import RemoteSink, SentrySink
from sentrylog.forwarder import LogForwarder
from sentrylog.formatters import LogFormatter, CompactFormatter, DetailedFormatter, JsonFormatter, render_value
from sentrylog.config import LoggingConfig, SentryConfig, SinkConfig, init_sentry, setup

__all__ = [
    "DebugLogger",
    "LogEntry",
    "LogLevel",
    "EntryKind",
    "Severity",
    "SEVERITY_MAP",
    "resolve_severity",
    "LogSink",
    "TerminalSink",
    "FileSink",
    "MemorySink",
    "RemoteSink",
    "SentrySink",
    "LogForwarder",
    "LogFormatter",
    "CompactFormatter",
    "DetailedFormatter",
    "JsonFormatter",
    "render_value",
    "LoggingConfig",
    "SentryConfig",
    "SinkConfig",
    "init_sentry",
    "setup",
]
