"""Core application utilities."""

from carwash.core.exceptions import (
    AppException,
    InvalidTransition,
    NotFoundError,
    PersistenceFailure,
    ValidationError,
)

__all__ = [
    "AppException",
    "InvalidTransition",
    "NotFoundError",
    "PersistenceFailure",
    "ValidationError",
]
