"""Jobly error hierarchy."""

from typing import Any


class JoblyError(Exception):
    """Base exception for Jobly errors."""

    code = "JOBLY_INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidInputError(JoblyError):
    """Caller supplied data the operation cannot act on."""

    code = "JOBLY_INVALID_INPUT"
    status_code = 400


class NotFoundError(JoblyError):
    """Keyed lookup, update or delete matched no rows."""

    code = "JOBLY_NOT_FOUND"
    status_code = 404


class UnauthorizedError(JoblyError):
    """Missing, invalid or insufficient credentials."""

    code = "JOBLY_UNAUTHORIZED"
    status_code = 401


class InternalError(JoblyError):
    """Internal server error."""

    code = "JOBLY_INTERNAL_ERROR"
    status_code = 500


ERROR_STATUS_MAP: dict[type[JoblyError], int] = {
    InvalidInputError: 400,
    NotFoundError: 404,
    UnauthorizedError: 401,
    InternalError: 500,
}


def get_status_code(error: JoblyError) -> int:
    """Get HTTP status code for error."""
    return ERROR_STATUS_MAP.get(type(error), error.status_code)
