"""Application error taxonomy.

Every business-rule failure is raised as a ``TaskboardError`` subclass at the point
of detection. ``taskboard.core.error_handlers`` turns them into HTTP responses.
"""

from enum import Enum


class TaskboardError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class DuplicateEmail(TaskboardError):
    status_code = 400

    def __init__(self, message: str = "Email already registered. Please use a different email or login."):
        super().__init__(message)


class InvalidCredentials(TaskboardError):
    status_code = 401

    def __init__(self):
        super().__init__("Invalid email or password.")


class TokenFailure(str, Enum):
    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid-signature"
    UNKNOWN_USER = "unknown-user"


_TOKEN_FAILURE_MESSAGES = {
    TokenFailure.MISSING: "Authentication required. Please provide a valid token.",
    TokenFailure.MALFORMED: "Invalid token. Please login again.",
    TokenFailure.EXPIRED: "Token expired. Please login again.",
    TokenFailure.INVALID_SIGNATURE: "Invalid token. Please login again.",
    TokenFailure.UNKNOWN_USER: "User not found. Token is invalid.",
}


class Unauthorized(TaskboardError):
    status_code = 401

    def __init__(self, reason: TokenFailure):
        super().__init__(_TOKEN_FAILURE_MESSAGES[reason])
        self.reason = reason


class Forbidden(TaskboardError):
    status_code = 403


class NotFound(TaskboardError):
    status_code = 404


class RateLimited(TaskboardError):
    status_code = 429

    def __init__(self, retry_after: int):
        super().__init__("Too many login attempts. Please try again later.")
        self.retry_after = retry_after
