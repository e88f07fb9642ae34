"""Diagnostic logging on stderr.

The report goes to stdout through the formatters module; structlog only
carries request and scenario diagnostics, shown with ``--verbose``.
"""

import logging
import sys

import structlog

# Transport loggers; requests are already logged by the client.
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "warning") -> None:
    """Route structlog through stdlib logging to stderr at the given level."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
