"""Structured logging configuration for infixcalc.

Logging is built on structlog and routed through the standard library so
that both structlog loggers and plain ``logging`` loggers share one handler:

- Human-readable console output on stderr (default)
- JSON lines when INFIXCALC_LOG_FORMAT=json
- Level taken from INFIXCALC_LOG_LEVEL unless overridden by the caller

Usage:
    from infixcalc.logging import configure_logging, get_logger

    configure_logging()

    log = get_logger(__name__)
    log.debug("tokenize_completed", token_count=5)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
    "clear_context",
]

LOG_FORMAT_ENV_VAR = "INFIXCALC_LOG_FORMAT"

LOG_LEVEL_ENV_VAR = "INFIXCALC_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def _get_log_level() -> int:
    """Resolve the log level from the environment.

    Unknown level names fall back to WARNING.
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.WARNING


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _shared_processors() -> list[Processor]:
    """Processors applied to both structlog and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog and the root stdlib logger.

    Safe to call more than once; each call replaces the root handlers so the
    CLI can reconfigure after reading the config file.

    Args:
        force_json: Emit JSON regardless of INFIXCALC_LOG_FORMAT.
        level: Explicit log level. If None, reads INFIXCALC_LOG_LEVEL.

    Example:
        configure_logging(level=logging.DEBUG)
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(use_json),
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def _configure_library_default() -> None:
    """Route structlog through stdlib logging until configure_logging() runs.

    structlog's own default prints every level to stdout. Sending records to
    stdlib instead means an application that never configures logging only
    sees warnings, via logging's last-resort handler.
    """
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


_configure_library_default()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name``.

    Example:
        log = get_logger(__name__)
        log.info("calculation_completed", result=11.0)
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Bind key-value pairs that every subsequent log line will carry.

    Example:
        bind_context(expression="3 + 4")
        log.debug("tokenize_completed")  # includes expression="3 + 4"
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Drop all bound context variables."""
    structlog.contextvars.clear_contextvars()
