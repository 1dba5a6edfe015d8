"""Request-scoped tracing context.

The request ID is kept in a contextvar and bound into structlog's context so
every log line emitted while serving a request carries it.
"""

import uuid
from contextvars import ContextVar

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Get the current request ID from context."""
    return request_id_ctx.get()


def set_request_id(value: str | None) -> str:
    """Set the request ID in context, generating one when not provided."""
    if not value:
        value = str(uuid.uuid4())
    request_id_ctx.set(value)
    structlog.contextvars.bind_contextvars(request_id=value)
    return value


def clear_tracing_context() -> None:
    """Clear request-scoped tracing context after request completion."""
    request_id_ctx.set(None)
    structlog.contextvars.unbind_contextvars("request_id")
