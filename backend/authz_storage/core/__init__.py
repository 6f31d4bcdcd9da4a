"""
Core module - error taxonomy and logging setup.
"""
from authz_storage.core.errors import (
    StorageError,
    InvalidInputError,
    NotFoundError,
    DuplicateError,
    InvalidStateError,
)
from authz_storage.core.logging import setup_logging

__all__ = [
    "StorageError",
    "InvalidInputError",
    "NotFoundError",
    "DuplicateError",
    "InvalidStateError",
    "setup_logging",
]
