# server/core/errors.py


class StorageError(Exception):
    """Raised when the user database is unreachable or rejects a write."""
