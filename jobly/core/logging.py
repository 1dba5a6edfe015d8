"""Logging configuration using structlog.

Every event carries the service name and environment so logs from several
Jobly deployments can share one sink.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from jobly.core.config import Settings, get_settings

# Held at WARNING or above regardless of LOG_LEVEL.
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine.Engine", "asyncio")


def _service_context(settings: Settings) -> Processor:
    service = settings.observability.service_name
    env = settings.app.env.value

    def add_service_context(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.setdefault("service", service)
        event_dict.setdefault("env", env)
        return event_dict

    return add_service_context


def setup_logging(settings: Settings | None = None) -> None:
    """Configure stdlib logging and structlog for the application."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.app.log_level.value)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if settings.observability.log_record_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _service_context(settings),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
