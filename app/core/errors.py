"""Exception hierarchy for the collection store.

All store-level errors derive from :class:`CatalogError` so the UI can
catch broadly or specifically depending on context.  None of them is
fatal to the process.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all collection errors."""


class ValidationError(CatalogError):
    """Raised when a user intent carries an invalid or missing field.

    Raised before any state change, so the collection is untouched.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class PersistenceError(CatalogError):
    """Raised when writing a key to the storage adapter fails.

    The in-memory change that triggered the write has already been applied
    and is not rolled back.
    """

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"Failed to write '{key}': {message}")
