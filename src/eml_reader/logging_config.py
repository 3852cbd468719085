"""
Structured logging for the message reader.

Parse events are emitted through structlog; ``setup_logging`` picks the level and
the renderer (JSON lines or console) from Settings.
"""

import logging
from typing import Optional

import structlog
from structlog._config import BoundLoggerLazyProxy

from .config import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog for parse event logging.

    Args:
        settings: Settings to read log level and renderer from (defaults to environment)
    """
    settings = settings or get_settings()

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a lazily configured logger that tags every event with ``logger=name``.

    Module loggers are created at import time, before ``setup_logging`` runs, so
    the logger is only assembled on first use.
    """
    # ``logger`` collides with wrap_logger's positional parameter, so pass the
    # initial context to the lazy proxy directly.
    return BoundLoggerLazyProxy(
        None, logger_factory_args=(name,), initial_values={"logger": name}
    )
