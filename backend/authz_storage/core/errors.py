"""
Structured errors raised by the storage layer.

Each error carries a machine-readable ``name``, an HTTP status hint and a
``public`` flag telling an HTTP-facing caller whether the message may be
shown to clients. The underlying driver error, when there is one, is the
standard ``__cause__`` (``raise ... from cause``).
"""
from typing import Any, Optional


class StorageError(Exception):
    """Base class for all storage errors."""

    name = "OperationError"
    http_status_code = 500
    public = False

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {
            "httpStatusCode": self.http_status_code,
            "public": self.public,
            **(details or {}),
        }

    def to_dict(self) -> dict[str, Any]:
        """Render the error for an API response body."""
        details = {
            k: v for k, v in self.details.items()
            if k not in ("httpStatusCode", "public")
        }
        return {
            "type": self.name,
            "message": self.message,
            "details": details,
        }


class InvalidInputError(StorageError, TypeError):
    """A required argument is missing or has the wrong type."""

    name = "InvalidInputError"
    http_status_code = 400


class NotFoundError(StorageError):
    """No client record matched the requested id."""

    name = "NotFoundError"
    http_status_code = 404
    public = True


class DuplicateError(StorageError):
    """A client record with the same id already exists."""

    name = "DuplicateError"
    http_status_code = 409
    public = True


class InvalidStateError(StorageError):
    """The record is not in the state the caller expected."""

    name = "InvalidStateError"
    http_status_code = 409
    public = True
