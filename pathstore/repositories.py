from __future__ import annotations

import asyncio
import sqlite3
from typing import Any

from .interfaces import AsyncDocumentStore
from .records import DocumentRecord
from .sqlite_store import SQLiteDocumentStore, StrPath


class AsyncSQLiteDocumentStore(AsyncDocumentStore):
    """
    Async wrapper around the SQLite-backed document store.
    Uses asyncio.to_thread to avoid blocking the event loop on database I/O.

    Construction stays synchronous: opening SQLite and creating the table
    is cheap and callers usually do it once at startup.
    """

    def __init__(self, store: SQLiteDocumentStore) -> None:
        self._store = store

    @classmethod
    def in_memory(cls, *, log_queries: bool = False) -> "AsyncSQLiteDocumentStore":
        return cls(SQLiteDocumentStore.in_memory(log_queries=log_queries))

    @classmethod
    def in_file(cls, path: StrPath, *, log_queries: bool = False) -> "AsyncSQLiteDocumentStore":
        return cls(SQLiteDocumentStore.in_file(path, log_queries=log_queries))

    @classmethod
    def from_file(cls, path: StrPath, *, log_queries: bool = False) -> "AsyncSQLiteDocumentStore":
        return cls(SQLiteDocumentStore.from_file(path, log_queries=log_queries))

    @property
    def sync_store(self) -> SQLiteDocumentStore:
        return self._store

    @property
    def database_path(self) -> str:
        return self._store.database_path

    @property
    def connection(self) -> sqlite3.Connection:
        return self._store.connection

    @property
    def paths(self) -> list[str]:
        return self._store.paths

    def register_path(self, path: str) -> None:
        self._store.register_path(path)

    async def insert(self, path: str, data: str) -> None:
        await asyncio.to_thread(self._store.insert, path, data)

    async def read(self, path: str) -> DocumentRecord | None:
        return await asyncio.to_thread(self._store.read, path)

    async def list_children(self, path: str) -> list[DocumentRecord]:
        return await asyncio.to_thread(self._store.list_children, path)

    async def update(self, path: str, data: str) -> None:
        await asyncio.to_thread(self._store.update, path, data)

    async def delete(self, path: str) -> None:
        await asyncio.to_thread(self._store.delete, path)

    async def close(self) -> None:
        await asyncio.to_thread(self._store.close)

    async def __aenter__(self) -> "AsyncSQLiteDocumentStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
