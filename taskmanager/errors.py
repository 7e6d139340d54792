"""
Task Manager API - Error Taxonomy

Domain exceptions raised by services and the auth gate. Each carries the
HTTP status and the client-safe message the handlers in main.py return.
"""

from fastapi import status


class TaskManagerError(Exception):
    """Base exception for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskManagerError):
    """Raised when caller input is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateEmail(TaskManagerError):
    """Raised when registering an email that already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already exists"


class Unauthenticated(TaskManagerError):
    """Raised when a request carries no usable identity."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class InvalidCredentials(TaskManagerError):
    """Raised on login for an unknown email or a wrong password alike."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class NotFound(TaskManagerError):
    """Raised when a task is absent or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Task not found"


class InternalError(TaskManagerError):
    """Raised for unexpected failures such as an unreachable store."""


class InvalidToken(Exception):
    """Raised by the token service for malformed, forged or expired tokens."""


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing."""
