"""
Operational error types.

Every error the API raises on purpose is an ``AppError``: it carries an HTTP
status code, a message that is safe to show to the client, and an
``ErrorKind`` the exception handlers switch on. Anything else reaching the
handlers is treated as unexpected and reported as a 500.
"""

from enum import Enum


class ErrorKind(str, Enum):
    DUPLICATE_IDENTITY = "duplicate_identity"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    UNEXPECTED = "unexpected"


class AppError(Exception):
    """Base class for errors with a client-facing message and status code."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message: str = "Something went very wrong!"
    default_status_code: int = 500

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status_code
        self.is_operational = True
        super().__init__(self.message)

    @property
    def status(self) -> str:
        """``"fail"`` for client errors, ``"error"`` for server errors."""
        return "fail" if 400 <= self.status_code < 500 else "error"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code})"
        )


class DuplicateIdentityError(AppError):
    kind = ErrorKind.DUPLICATE_IDENTITY
    default_message = "A user with this email already exists."
    default_status_code = 400


class InvalidCredentialsError(AppError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Incorrect email or password"
    default_status_code = 401


class UnauthenticatedError(AppError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "You are not logged in! Please log in to get access."
    default_status_code = 401


class TokenExpiredError(UnauthenticatedError):
    kind = ErrorKind.TOKEN_EXPIRED
    default_message = "Your token has expired! Please log in again."


class InvalidTokenError(UnauthenticatedError):
    kind = ErrorKind.TOKEN_INVALID
    default_message = "Invalid token. Please log in again!"


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"
    default_status_code = 404


class ValidationFailedError(AppError):
    kind = ErrorKind.VALIDATION_FAILED
    default_message = "Invalid input data"
    default_status_code = 400
