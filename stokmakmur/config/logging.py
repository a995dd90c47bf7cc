"""
structlog setup for the inventory service.

Development gets a colored console; staging and production emit one JSON
object per line. Stdlib loggers (uvicorn, httpx, aiosqlite) are routed
through the same stdout handler.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from stokmakmur.config.settings import get_settings

# Chatty third-party loggers kept at WARNING
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "uvicorn.access")


def add_service_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp every event with the service name, version and environment."""
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def _renderer(environment: str) -> list[Processor]:
    if environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging() -> None:
    """Configure structlog and stdlib logging from settings."""
    settings = get_settings()
    level = logging.getLevelName(settings.log_level)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_service_fields,
        *_renderer(settings.environment),
    ]

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
