from __future__ import annotations

from .errors import (
    InvalidPathError,
    NotFoundError,
    NotInitializedError,
    PathStoreError,
    ReadError,
    StoreIOError,
    WriteError,
)
from .interfaces import AsyncDocumentStore, DocumentStore
from .paths import MEMORY_SENTINEL
from .records import DocumentRecord
from .repositories import AsyncSQLiteDocumentStore
from .settings import Settings, get_settings, open_store, open_sync_store
from .sqlite_store import SQLiteDocumentStore

__all__ = [
    "MEMORY_SENTINEL",
    "DocumentRecord",
    "DocumentStore",
    "AsyncDocumentStore",
    "SQLiteDocumentStore",
    "AsyncSQLiteDocumentStore",
    "Settings",
    "get_settings",
    "open_store",
    "open_sync_store",
    "PathStoreError",
    "InvalidPathError",
    "NotFoundError",
    "NotInitializedError",
    "ReadError",
    "WriteError",
    "StoreIOError",
]
