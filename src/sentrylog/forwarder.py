"""
LogForwarder: local sink first, Sentry second.

Every entry reaches the fallback sink exactly once, before anything is sent
to Sentry. The relay is best-effort: whatever it raises is written to the
fallback at CRITICAL and never reaches the caller. A failing fallback is
not caught.

Install it over the active sink of the debug facility:

    sentry_sdk.init(dsn=..., attach_stacktrace=True)
    LogForwarder.register()
    DebugLogger.instance().warning("User login failed")
"""

from typing import Any, Callable, Optional

from sentrylog.core import DebugLogger
from sentrylog.formatters import render_value
from sentrylog.records import EntryKind, LogLevel, classify
from sentrylog.remote import RemoteSink, SentrySink
from sentrylog.severity import resolve_severity
from sentrylog.sinks import LogSink


class LogForwarder(LogSink):
    """
    Sink that wraps the previously active sink and relays to a RemoteSink.

    The fallback is borrowed, not owned: flush() passes through, close()
    leaves it open.
    """

    def __init__(
        self,
        fallback: LogSink,
        remote: RemoteSink | None = None,
        name: str = "forwarder",
    ):
        super().__init__(name)
        self._fallback = fallback
        self._remote = remote if remote is not None else SentrySink()

    @property
    def fallback(self) -> LogSink:
        return self._fallback

    @property
    def remote(self) -> RemoteSink:
        return self._remote

    def log(self, value: Any, level: Any = LogLevel.INFO) -> None:
        self._fallback.log(value, level)
        try:
            self._relay(value, level)
        except Exception as exc:
            self._fallback.log(exc, LogLevel.CRITICAL)

    def _relay(self, value: Any, level: Any) -> None:
        # Uninitialised client: entry is already persisted locally
        if not self._remote.is_available():
            return

        severity = resolve_severity(level)
        if classify(value) is EntryKind.EXCEPTION:
            self._remote.capture_exception(value, severity)
        else:
            self._remote.capture_message(render_value(value), severity)

    def flush(self) -> None:
        self._fallback.flush()

    def close(self) -> None:
        # Borrowed fallback stays open; DebugLogger.close() closes the chain
        pass

    @classmethod
    def register(
        cls,
        get_active: Optional[Callable[[], LogSink]] = None,
        set_active: Optional[Callable[[LogSink], None]] = None,
        remote: RemoteSink | None = None,
    ) -> None:
        """
        Wrap the currently active sink and install the wrapper in its place.

        Defaults to the DebugLogger singleton. Calling twice chains two
        forwarders, each falling back to the previous one.
        """
        if get_active is None or set_active is None:
            logger = DebugLogger.instance()
            get_active = get_active or logger.get_sink
            set_active = set_active or logger.set_sink

        previous = get_active()
        set_active(cls(previous, remote))
