"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class NotFoundError(AppError):
    """
    Raised when a requested resource is not found.

    Also used when the resource exists but belongs to another user, so
    callers cannot discover other users' ids.
    """

    def __init__(self, resource: str, identifier: object):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")
        self.resource = resource


class ConflictError(AppError):
    """Raised when concurrent writes kept colliding past the retry limit."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class StorageError(AppError):
    """Raised when the store is unreachable or a unit of work cannot commit."""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")


class StaleWriteError(Exception):
    """
    A compare-and-swap write found the row changed since it was read.

    Internal signal only: command services retry on it and surface
    ConflictError once the retry limit is reached.
    """
