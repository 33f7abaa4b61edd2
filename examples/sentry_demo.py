"""
Forwarding demo.

Logs a few entries through DebugLogger with the forwarder installed.
Without SENTRY_DSN the entries only reach the terminal.

Run:
    SENTRY_DSN=https://key@o0.ingest.sentry.io/0 python examples/sentry_demo.py
"""

import os

from sentrylog.config import LoggingConfig, setup


def main():
    config = LoggingConfig.from_dict({
        "current_level": "DEBUG",
        "sink": {"type": "terminal", "color": True},
        "sentry": {"dsn": os.environ.get("SENTRY_DSN"), "environment": "demo"},
    })
    log = setup(config)

    log.debug("Cache warmed")
    log.warning("User login failed")
    log.info({"user": 42, "action": "checkout", "items": [1, 2, 3]})

    try:
        {}["missing"]
    except KeyError as exc:
        log.exception(exc)

    print(log.status())


if __name__ == "__main__":
    main()
