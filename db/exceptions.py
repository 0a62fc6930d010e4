"""Storage-layer exceptions."""


class StorageError(Exception):
    """Raised when the database rejects a write (constraint violation)."""
