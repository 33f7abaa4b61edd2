"""
Remote error-tracking sinks.

The Sentry client is initialised by the host application (see
sentrylog.config.init_sentry). A RemoteSink only reports; delivery,
timeouts and stack trace attachment belong to the client.
"""

from abc import ABC, abstractmethod
from typing import Any

import sentry_sdk

from sentrylog.severity import Severity


class RemoteSink(ABC):
    """Best-effort reporting destination. Any method may raise."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying client is ready to send events."""
        ...

    @abstractmethod
    def capture_exception(self, error: BaseException, severity: Severity) -> Any: ...

    @abstractmethod
    def capture_message(self, message: str, severity: Severity) -> Any: ...


class SentrySink(RemoteSink):
    """
    Reports through the process-wide sentry_sdk client.

    Returns Sentry event ids (or None when the event was dropped).
    """

    def is_available(self) -> bool:
        return sentry_sdk.is_initialized()

    def capture_exception(self, error: BaseException, severity: Severity) -> str | None:
        return sentry_sdk.capture_exception(error, level=severity.value)

    def capture_message(self, message: str, severity: Severity) -> str | None:
        return sentry_sdk.capture_message(message, level=severity.value)
