"""Core utilities and shared functionality."""

from farm_ledger.core.timezone import (
    get_local_tz,
    now_local,
    to_local,
    parse_datetime_local,
)
from farm_ledger.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ConflictError,
    StorageError,
    StaleWriteError,
)

__all__ = [
    "get_local_tz",
    "now_local",
    "to_local",
    "parse_datetime_local",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "StaleWriteError",
]
