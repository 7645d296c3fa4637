"""Structured logging for the transactor package, built on structlog.

The library only ever calls ``get_logger``. Whether and how records are
rendered is the host application's decision, made once through
``setup_logging``: colored console output in development, JSON elsewhere.

Every record passes through ``redact_sensitive`` before rendering, so a
card number, CVV, track, password or token passed as keyword context is
masked even if a caller logs it by mistake. Adapters log accounts by
``last_four`` only.

Usage:
    from transactor.logging_config import setup_logging, get_logger
    setup_logging()                      # level and format from Settings
    logger = get_logger(__name__)
    logger.info("transactor.transact.start", transaction_type="Sale")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from transactor.config import get_settings

REDACTED = "[filtered]"

SENSITIVE_LOG_KEYS = frozenset({
    "account_number",
    "account_token",
    "ccnumber",
    "customer_vault_id",
    "cvv",
    "password",
    "track_1",
    "track_2",
    "track_3",
})

QUIET_LOGGERS = ("httpx", "httpcore")


def redact_sensitive(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """structlog processor masking sensitive keys, one level deep into mappings."""
    for key, value in event_dict.items():
        if key in SENSITIVE_LOG_KEYS and value is not None:
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                k: REDACTED if k in SENSITIVE_LOG_KEYS and v is not None else v
                for k, v in value.items()
            }
    return event_dict


def _renderer(json_logs: bool) -> structlog.types.Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(log_level: str | None = None, json_logs: bool | None = None) -> None:
    """Route structlog through the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ... Defaults to ``Settings.app_log_level``.
        json_logs: JSON output when True, console output when False.
            Defaults to JSON everywhere except the development environment.
    """
    settings = get_settings()
    level_name = (log_level or settings.app_log_level).upper()
    if json_logs is None:
        json_logs = not settings.is_development

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            redact_sensitive,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_logs),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    # httpx logs every request URL at INFO
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, optionally named after the calling module."""
    return structlog.get_logger(name)
