"""
Pydantic configuration and bootstrap.

A single YAML document configures the local sink, the Sentry client and
whether the forwarder is installed:

    current_level: INFO
    sink:
      type: file
      path: logs/app.log
      min_level: DEBUG
    sentry:
      dsn: https://key@o0.ingest.sentry.io/0
      environment: production
    forward: true

Usage:
    config = LoggingConfig.from_yaml("logging.yaml")
    log = setup(config)
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional

import sentry_sdk
import yaml
from pydantic import BaseModel, Field

from sentrylog.core import DebugLogger, build_sink as _build_sink
from sentrylog.forwarder import LogForwarder
from sentrylog.sinks import LogSink


class SinkType(str, Enum):
    TERMINAL = "terminal"
    FILE = "file"
    MEMORY = "memory"


class FormatterName(str, Enum):
    COMPACT = "compact"
    DETAILED = "detailed"
    JSON = "json"


class SinkConfig(BaseModel):
    type: SinkType = SinkType.TERMINAL
    name: Optional[str] = None
    min_level: int | str = 10
    formatter: Optional[FormatterName] = None
    color: Optional[bool] = None              # terminal
    path: Optional[str] = None                # file
    rotation: Optional[str] = None            # file
    ring_buffer_size: Optional[int] = Field(None, gt=0)  # memory


class SentryConfig(BaseModel):
    dsn: Optional[str] = None
    environment: Optional[str] = None
    release: Optional[str] = None
    sample_rate: float = Field(1.0, ge=0.0, le=1.0)
    attach_stacktrace: bool = True
    send_default_pii: bool = False
    debug: bool = False


class LoggingConfig(BaseModel):
    """Top-level configuration: local sink, Sentry client, forwarding switch."""

    current_level: int | str = 20  # INFO
    sink: SinkConfig = Field(default_factory=SinkConfig)
    sentry: SentryConfig = Field(default_factory=SentryConfig)
    forward: bool = True

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoggingConfig":
        """Load and validate from a YAML file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.from_yaml_string(raw)

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LoggingConfig":
        """Load and validate from a YAML string. Empty documents give defaults."""
        data = yaml.safe_load(yaml_string) or {}
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict) -> "LoggingConfig":
        return cls.model_validate(data)

    def to_dict(self, exclude_none: bool = True) -> dict:
        return self.model_dump(mode="json", exclude_none=exclude_none)


def build_sink(cfg: SinkConfig) -> LogSink:
    """Build the local sink described by a SinkConfig."""
    return _build_sink(cfg.model_dump(mode="json", exclude_none=True))


def init_sentry(cfg: SentryConfig) -> bool:
    """
    Initialise the process-wide Sentry client.

    Without a DSN nothing is initialised and the forwarder runs in local-only
    mode. Returns whether sentry_sdk.init was called.
    """
    if not cfg.dsn:
        return False

    options: dict[str, Any] = {
        "dsn": cfg.dsn,
        "sample_rate": cfg.sample_rate,
        "attach_stacktrace": cfg.attach_stacktrace,
        "send_default_pii": cfg.send_default_pii,
        "debug": cfg.debug,
    }
    if cfg.environment:
        options["environment"] = cfg.environment
    if cfg.release:
        options["release"] = cfg.release

    sentry_sdk.init(**options)
    return True


def setup(config: LoggingConfig | dict | str | Path | None = None) -> DebugLogger:
    """
    Configure the debug facility, the Sentry client and the forwarder.

    `config` may be a LoggingConfig, a dict, or a path to a YAML file.
    Calling setup() again replaces the whole sink chain: the previous sinks
    are closed and at most one forwarder is installed. Use
    LogForwarder.register() directly to chain forwarders.
    """
    if config is None:
        config = LoggingConfig()
    elif isinstance(config, dict):
        config = LoggingConfig.from_dict(config)
    elif isinstance(config, (str, Path)):
        config = LoggingConfig.from_yaml(config)

    log = DebugLogger.instance()
    log.current_level = config.current_level
    sink = build_sink(config.sink)
    log.close()
    log.set_sink(sink)

    init_sentry(config.sentry)
    if config.forward:
        LogForwarder.register(log.get_sink, log.set_sink)

    return log
