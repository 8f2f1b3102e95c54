from __future__ import annotations


class PathStoreError(Exception):
    """Base class for every error raised by the document store."""


class InvalidPathError(PathStoreError):
    """A document path or database path is malformed or reserved."""


class NotFoundError(PathStoreError):
    """A referenced document path or database file does not exist."""


class NotInitializedError(PathStoreError):
    """The documents table is missing, unreachable, or the store is closed."""


class ReadError(PathStoreError):
    """The engine failed while reading documents."""


class WriteError(PathStoreError):
    """The engine rejected or failed a write, including duplicate paths."""


class StoreIOError(PathStoreError, OSError):
    """Creating the database directory or releasing the connection failed."""
