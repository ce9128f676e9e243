"""
Structured logging for the totals service.

Every event carries the service identity plus the currency and pricing mode
it was computed under. Issuing code binds the document kind and number with
``document_context`` so engine and allocator events can be traced back to
the document they belong to. Development renders to the console, every other
environment emits one JSON object per line.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from tallybook.config.settings import get_settings


def add_service_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp service identity and the default currency/pricing mode."""
    settings = get_settings()
    event_dict["service"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["env"] = settings.environment
    # Values bound for a specific document take precedence
    event_dict.setdefault("currency", settings.totals.default_currency)
    event_dict.setdefault("pricing_mode", settings.totals.pricing_mode)
    return event_dict


def drop_unset_fields(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Remove keys logged as None (no source quote, no traceback, ...)."""
    return {key: value for key, value in event_dict.items() if value is not None}


def build_processors(json_output: bool) -> list[Processor]:
    """Processor chain ending in a JSON or console renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_context,
        drop_unset_fields,
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def configure_logging() -> None:
    """Configure structlog and the stdlib root logger from settings."""
    settings = get_settings()

    structlog.configure(
        processors=build_processors(json_output=settings.environment != "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    # LoggingMiddleware already records every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


@contextmanager
def document_context(**context: Any) -> Iterator[None]:
    """
    Bind document identifiers (kind, number, currency) for the enclosed block.

    Keys given as None are skipped. Bindings are removed on exit, including
    when the block raises.
    """
    bound = {key: value for key, value in context.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield
