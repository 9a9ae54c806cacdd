"""Structured logging configuration using structlog.

Console output with colors while debugging, one JSON object per line
otherwise. Standard library loggers (uvicorn, SQLAlchemy, Alembic) are
routed through the same handler.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from cms.core.config import get_settings

# Event keys whose values never reach the log output
SENSITIVE_KEYS = frozenset({
    "authorization",
    "token",
    "access_token",
    "jwt_secret_key",
    "upstash_redis_rest_token",
    "password",
})

REDACTED = "[redacted]"


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the service name, version and environment."""
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("env", settings.environment)
    return event_dict


def redact_sensitive(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask credentials passed as event fields."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def setup_logging() -> None:
    """Configure structlog and the standard library root logger."""
    settings = get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_app_context,
        redact_sensitive,
    ]

    renderer: Processor
    if settings.debug:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
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

    # Third-party chatter
    for name in ("uvicorn.access", "httpx", "httpcore", "aiohttp", "upstash_redis"):
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
