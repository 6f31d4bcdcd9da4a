"""
Classification of driver errors.
"""
from pymongo.errors import BulkWriteError, DuplicateKeyError, OperationFailure

# Server error codes for a unique index violation
DUPLICATE_KEY_CODES = (11000, 11001)


def is_duplicate_error(error: BaseException) -> bool:
    """Return True if a driver error was caused by a unique index violation."""
    if isinstance(error, DuplicateKeyError):
        return True
    if isinstance(error, BulkWriteError):
        write_errors = (error.details or {}).get("writeErrors", [])
        return any(e.get("code") in DUPLICATE_KEY_CODES for e in write_errors)
    if isinstance(error, OperationFailure):
        return error.code in DUPLICATE_KEY_CODES
    return False
