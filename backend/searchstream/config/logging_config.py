"""Logging configuration for the application.

Configures structlog to use clean, concise logging without verbose tracebacks.
"""

import logging
import sys

import structlog

NOISY_LOGGERS = ("aiohttp", "asyncio", "httpx", "httpcore", "openai", "engineio", "socketio")


def configure_logging(debug_mode: bool = False, log_level: str | None = None):
    """Configure structlog and standard logging.

    Args:
        debug_mode: Enable debug logging if True
        log_level: Explicit level name, overridden by debug_mode
    """
    if debug_mode:
        level = logging.DEBUG
    else:
        level = logging.getLevelName((log_level or "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
            structlog.dev.set_exc_info,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
