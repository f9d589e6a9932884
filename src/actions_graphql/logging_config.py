"""Structured logging configuration.

Workflow commands own stdout, so structlog events always go to stderr.
"""

import logging
import sys

import structlog


def configure_logging(log_level: str = "INFO", *, json: bool = True) -> None:
    """Configure structlog for workflow steps."""
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    return structlog.PrintLogger(sys.stderr)


def configure_default_logging() -> None:
    """Send structlog output to stderr unless logging is already configured."""
    if structlog.is_configured():
        return
    # Resolve sys.stderr per logger so a replaced stream is always honoured.
    structlog.configure(logger_factory=_stderr_logger, cache_logger_on_first_use=False)


__all__ = ["configure_default_logging", "configure_logging"]
