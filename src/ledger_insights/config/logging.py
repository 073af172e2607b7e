"""Structured logging configuration for the insight pipeline."""

import logging
import sys
from typing import Any, Literal

import structlog

from ledger_insights.config.settings import get_settings

# Longest string value rendered for fields that may carry model text
MAX_LOGGED_TEXT = 500
_TEXT_FIELDS = ("error", "prompt", "response", "question")


def truncate_text_fields(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Shorten prompt, response and error text so one log line stays readable."""
    for key in _TEXT_FIELDS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > MAX_LOGGED_TEXT:
            event_dict[key] = f"{value[:MAX_LOGGED_TEXT]}... ({len(value)} chars)"
    return event_dict


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
) -> None:
    """Configure structured logging for the application.

    Request context bound with ``structlog.contextvars`` (analysis kind,
    document id) is merged into every event, including parser warnings.
    httpx request logging is held at WARNING so each generation attempt
    does not add a line of its own.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to settings.
        format: Output format (json or console). Defaults to settings.
    """
    settings = get_settings()
    log_level = level or settings.log_level
    log_format = format or settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level),
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        truncate_text_fields,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
