"""Core exception types shared across layers."""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus


class ErrorCode(str, Enum):
    """Machine-readable failure reasons raised by the services."""

    MISSING_FIELDS = "missing_fields"
    INVALID_USERNAME = "invalid_username"
    PASSWORD_TOO_LONG = "password_too_long"
    INVALID_COUNT = "invalid_count"
    MISSING_CREDENTIALS = "missing_credentials"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_LOGIN = "invalid_login"
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    SESSION_EXPIRED = "session_expired"
    USER_NOT_FOUND = "user_not_found"
    USERNAME_TAKEN = "username_taken"
    CODE_NOT_FOUND = "code_not_found"
    CODE_ALREADY_USED = "code_already_used"
    CODE_ALREADY_REDEEMED = "code_already_redeemed"
    ALREADY_BLACKLISTED = "already_blacklisted"
    STORAGE_FAILURE = "storage_failure"


class VicatError(Exception):
    """Base class for failures that map onto a client-visible response."""

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def public_message(self) -> str:
        """Message safe to return to the caller."""
        return self.message


class ValidationError(VicatError):
    """Raised when input is missing or malformed."""

    status_code = HTTPStatus.BAD_REQUEST


class AuthError(VicatError):
    """Raised when admin credentials or a user session do not check out."""

    status_code = HTTPStatus.UNAUTHORIZED


class ConflictError(VicatError):
    """Raised when a transition is not allowed from the current state."""

    # Existing dashboard clients expect 400 here rather than 409.
    status_code = HTTPStatus.BAD_REQUEST


class NotFoundError(VicatError):
    """Raised when a redeem code or key does not exist."""

    status_code = HTTPStatus.NOT_FOUND


class PersistenceError(VicatError):
    """Raised when the state document cannot be read or written."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.STORAGE_FAILURE, message)

    @property
    def public_message(self) -> str:
        return "Internal server error"


__all__ = [
    "AuthError",
    "ConflictError",
    "ErrorCode",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
    "VicatError",
]
