"""Structured logging setup for applications built on altask."""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from altask.config import get_settings


def configure_structlog(log_level: Optional[str] = None) -> None:
    """
    Configure structlog for structured, human-readable console logging.

    ``log_level=None`` uses the configured ALTASK_LOG_LEVEL (INFO unless
    set). An explicit name that logging does not know falls back to INFO.
    """
    level_name = log_level if log_level is not None else get_settings().log_level
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level_name.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
