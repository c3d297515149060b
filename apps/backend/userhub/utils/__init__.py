"""Utility functions and helpers."""

from .exceptions import (
    AppError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "AppError",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "ValidationError",
]
