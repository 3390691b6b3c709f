"""Storage-layer exceptions shared by both backends and the routers."""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for storage failures. Carries a readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateKeyError(StorageError):
    """Raised when a group id is already taken."""


class InvalidRecordError(StorageError):
    """Raised when a payload does not have the shape of a group/video."""


class BackendUnavailableError(StorageError):
    """Raised when the SQL backend is selected but cannot be reached."""


class StorageIOError(StorageError):
    """Raised on file read/write errors and failed queries."""
