"""Application error taxonomy.

Services and repositories raise these; the HTTP layer maps them to status
codes and the ``{code, message, details}`` response body.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "AppError",
    "AppValidationError",
    "ConflictError",
    "ErrorDetail",
    "ErrorType",
    "ForbiddenError",
    "InternalError",
    "InvalidArgumentError",
    "InvalidCredentialsError",
    "NotFoundError",
    "UnauthorizedError",
]


class ErrorType(str, Enum):
    """Closed set of error categories exposed to callers."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CONFLICT = "CONFLICT"
    VALIDATION = "VALIDATION"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True)
class ErrorDetail:
    """Field-level explanation attached to an error."""

    field: str
    error: str


class AppError(Exception):
    """Base class for every error the core raises on purpose."""

    error_type: ErrorType = ErrorType.INTERNAL
    status_code: int = 500
    code: int = 99999

    def __init__(self, message: str, *details: ErrorDetail) -> None:
        super().__init__(message)
        self.message = message
        self.details: list[ErrorDetail] = list(details)


class NotFoundError(AppError):
    error_type = ErrorType.NOT_FOUND
    status_code = 404
    code = 20004


class InvalidArgumentError(AppError):
    error_type = ErrorType.INVALID_ARGUMENT
    status_code = 400
    code = 20000


class InvalidCredentialsError(InvalidArgumentError):
    """Raised for any login failure.

    Unknown usernames, wrong passwords and hashing failures all surface as
    this single error so callers cannot tell which step failed.
    """

    def __init__(self) -> None:
        super().__init__("Invalid Credentials")


class ConflictError(AppError):
    error_type = ErrorType.CONFLICT
    status_code = 409
    code = 20009


class AppValidationError(AppError):
    error_type = ErrorType.VALIDATION
    status_code = 422
    code = 22000


class UnauthorizedError(AppError):
    error_type = ErrorType.UNAUTHORIZED
    status_code = 401
    code = 10001


class ForbiddenError(AppError):
    error_type = ErrorType.FORBIDDEN
    status_code = 403
    code = 10003


class InternalError(AppError):
    """Wraps unexpected failures; the message shown to clients is generic."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
