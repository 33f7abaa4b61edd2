"""
Level → Sentry severity mapping.

ERROR and EXCEPTION share `error`. CRITICAL and anything unrecognised share
`fatal`: an unknown level is reported as the worst case rather than
silently under-reported.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from sentrylog.records import LogLevel


class Severity(str, Enum):
    """Sentry event levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


SEVERITY_MAP: Mapping[LogLevel, Severity] = MappingProxyType({
    LogLevel.DEBUG: Severity.DEBUG,
    LogLevel.INFO: Severity.INFO,
    LogLevel.WARNING: Severity.WARNING,
    LogLevel.ERROR: Severity.ERROR,
    LogLevel.EXCEPTION: Severity.ERROR,
    LogLevel.CRITICAL: Severity.FATAL,
})

DEFAULT_SEVERITY = Severity.FATAL


def resolve_severity(level: Any) -> Severity:
    """
    Map a host level to a Sentry severity.

    Accepts LogLevel members, their int values and their names
    (case-insensitive). Everything else maps to DEFAULT_SEVERITY.
    """
    if isinstance(level, bool):
        return DEFAULT_SEVERITY
    if isinstance(level, str):
        try:
            level = LogLevel.from_name(level)
        except ValueError:
            return DEFAULT_SEVERITY
    try:
        return SEVERITY_MAP.get(level, DEFAULT_SEVERITY)
    except TypeError:
        # Unhashable level
        return DEFAULT_SEVERITY
