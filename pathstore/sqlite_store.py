from __future__ import annotations

import logging
import os
import sqlite3
import threading
import time
from collections import Counter
from pathlib import Path
from typing import Any, Sequence

from .errors import (
    InvalidPathError,
    NotFoundError,
    NotInitializedError,
    ReadError,
    StoreIOError,
    WriteError,
)
from .interfaces import DocumentStore
from .paths import (
    MEMORY_SENTINEL,
    children_pattern,
    children_prefix,
    ends_with_digit,
    ends_with_separator,
    ensure_dir,
    is_memory_location,
    lineage,
    normalize,
)
from .records import DocumentRecord

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    path TEXT NOT NULL PRIMARY KEY,
    data TEXT,
    created INTEGER NOT NULL,
    updated INTEGER NOT NULL,
    UNIQUE(path)
)
"""

# A row is a direct child when it has exactly as many separators as the prefix.
CHILDREN_QUERY = r"""
SELECT * FROM documents WHERE (
    path LIKE ? ESCAPE '\' AND
    (LENGTH(path) - LENGTH(REPLACE(path, '/', ''))) = (LENGTH(?) - LENGTH(REPLACE(?, '/', '')))
)
ORDER BY created
"""


class SQLiteDocumentStore(DocumentStore):
    """
    Path-addressed document store over a single SQLite connection.

    Build instances through `in_memory()`, `in_file()` or `from_file()`.

    - The connection is opened in autocommit mode, so every statement is its
      own transaction and SQLite serializes concurrent writers.
    - `read()` and `list_children()` only accept paths the store knows about.
      Known paths are every inserted document path plus its ancestors; they
      are seeded from the table on open and dropped again on delete.
    - `created`/`updated` come from a millisecond clock that never repeats a
      value, so `ORDER BY created` is insertion order.
    - A path stays known while any descendant exists, so after deleting `/a`
      while `/a/b` remains, `read("/a")` returns None instead of raising
      NotFoundError.
    """

    def __init__(self, database_path: str, *, log_queries: bool = False):
        self._database_path = database_path
        self._log_queries = log_queries
        self._closed = False

        # Guards the in-process bookkeeping below, never a SQL statement.
        self._guard = threading.Lock()
        self._known: Counter[str] = Counter()
        self._last_tick = 0

        try:
            self._db = sqlite3.connect(database_path, check_same_thread=False, isolation_level=None)
        except sqlite3.Error as e:
            logger.error("Failed to open database %s: %s", database_path, e)
            raise StoreIOError(f"Failed to open database at {database_path}") from e
        self._db.row_factory = sqlite3.Row

        self._init_database()
        self._seed_known_paths()
        logger.info("Opened document store at %s", database_path)

    # ---- construction ----

    @classmethod
    def in_memory(cls, *, log_queries: bool = False) -> "SQLiteDocumentStore":
        return cls(MEMORY_SENTINEL, log_queries=log_queries)

    @classmethod
    def in_file(cls, path: StrPath, *, log_queries: bool = False) -> "SQLiteDocumentStore":
        """
        Open the database at `path`, creating it (and missing parent
        directories) when it does not exist yet.
        """
        location = os.fspath(path)
        if is_memory_location(location):
            raise InvalidPathError(f"Path cannot contain '{MEMORY_SENTINEL}'")
        if ends_with_separator(location):
            raise InvalidPathError("Path cannot end with a path separator")
        if Path(location).is_file():
            return cls.from_file(location, log_queries=log_queries)

        try:
            ensure_dir(Path(location).parent)
        except OSError as e:
            logger.error("Failed to create directory for %s: %s", location, e)
            raise StoreIOError(f"Failed to create directory for {location}") from e
        return cls(location, log_queries=log_queries)

    @classmethod
    def from_file(cls, path: StrPath, *, log_queries: bool = False) -> "SQLiteDocumentStore":
        location = os.fspath(path)
        if not Path(location).is_file():
            raise NotFoundError(f"Database file not found: {location}")
        return cls(location, log_queries=log_queries)

    # ---- properties ----

    @property
    def database_path(self) -> str:
        return self._database_path

    @property
    def connection(self) -> sqlite3.Connection:
        return self._db

    @property
    def paths(self) -> list[str]:
        with self._guard:
            return sorted(p for p, n in self._known.items() if n > 0)

    @property
    def closed(self) -> bool:
        return self._closed

    def register_path(self, path: str) -> None:
        """Make `path` (and its ancestors) readable without inserting under it."""
        self._remember(path)

    # ---- operations ----

    def insert(self, path: str, data: str) -> None:
        self._check_database_initialized()
        self._validate_path_for_insert(path)

        now = self._tick()
        try:
            self._execute(
                "INSERT INTO documents (path, data, created, updated) VALUES (?, ?, ?, ?)",
                (path, data, now, now),
            )
        except sqlite3.IntegrityError as e:
            logger.warning("Insert rejected for %s: %s", path, e)
            raise WriteError(f"Document already exists at {path}") from e
        except sqlite3.Error as e:
            logger.warning("Insert failed for %s: %s", path, e)
            raise WriteError("Error inserting document.") from e

        self._remember(path)

    def read(self, path: str) -> DocumentRecord | None:
        self._check_database_initialized()
        self._validate_path_for_read(path)

        try:
            row = self._execute("SELECT * FROM documents WHERE path = ?", (path,)).fetchone()
        except sqlite3.Error as e:
            logger.warning("Read failed for %s: %s", path, e)
            raise ReadError("Error reading document.") from e

        if row is None:
            return None
        return DocumentRecord.from_row(row)

    def list_children(self, path: str) -> list[DocumentRecord]:
        self._check_database_initialized()
        self._validate_path_for_read(path)

        pattern = children_pattern(path)
        prefix = children_prefix(path)
        try:
            rows = self._execute(CHILDREN_QUERY, (pattern, prefix, prefix)).fetchall()
        except sqlite3.Error as e:
            logger.warning("Collection read failed for %s: %s", path, e)
            raise ReadError("Error reading all documents.") from e

        return [DocumentRecord.from_row(row) for row in rows]

    def update(self, path: str, data: str) -> None:
        self._check_database_initialized()

        try:
            self._execute(
                "UPDATE documents SET data = ?, updated = ? WHERE path = ?",
                (data, self._tick(), path),
            )
        except sqlite3.Error as e:
            logger.warning("Update failed for %s: %s", path, e)
            raise WriteError("Error updating document.") from e

    def delete(self, path: str) -> None:
        self._check_database_initialized()

        try:
            cursor = self._execute("DELETE FROM documents WHERE path = ?", (path,))
        except sqlite3.Error as e:
            logger.warning("Delete failed for %s: %s", path, e)
            raise WriteError("Error deleting document.") from e

        if cursor.rowcount > 0:
            self._forget(path)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._db.close()
        except sqlite3.Error as e:
            logger.error("Failed to close database %s: %s", self._database_path, e)
            raise StoreIOError("Error closing the database.") from e
        logger.info("Closed document store at %s", self._database_path)

    def __enter__(self) -> "SQLiteDocumentStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ---- internals ----

    def _init_database(self) -> None:
        try:
            # LIKE must agree with the case-sensitive primary key.
            self._execute("PRAGMA case_sensitive_like = ON")
            self._execute(SCHEMA)
        except sqlite3.Error as e:
            self._db.close()
            self._closed = True
            raise NotInitializedError(f"Could not create documents table in {self._database_path}") from e

    def _seed_known_paths(self) -> None:
        rows = self._execute("SELECT path FROM documents").fetchall()
        for row in rows:
            self._remember(row["path"])

    def _check_database_initialized(self) -> None:
        if self._closed:
            raise NotInitializedError("Store is closed.")
        try:
            row = self._execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='documents'"
            ).fetchone()
        except sqlite3.Error as e:
            raise NotInitializedError("Database not properly initialized.") from e
        if row is None:
            raise NotInitializedError("Database not initialized.")

    def _validate_path_for_read(self, path: str) -> None:
        if ends_with_digit(path):
            raise InvalidPathError(f"Path mustn't end with an integer: {path}")
        if not self._path_exists(path):
            raise NotFoundError(f"Path does not exist: {path}")

    def _validate_path_for_insert(self, path: str) -> None:
        if ends_with_digit(path):
            raise InvalidPathError(f"Path mustn't end with an integer: {path}")

    def _path_exists(self, path: str) -> bool:
        with self._guard:
            return self._known[normalize(path)] > 0

    def _remember(self, path: str) -> None:
        with self._guard:
            for key in set(lineage(path)):
                self._known[key] += 1

    def _forget(self, path: str) -> None:
        with self._guard:
            for key in set(lineage(path)):
                self._known[key] -= 1
                if self._known[key] <= 0:
                    del self._known[key]

    def _tick(self) -> int:
        now = time.time_ns() // 1_000_000
        with self._guard:
            self._last_tick = max(now, self._last_tick + 1)
            return self._last_tick

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        if self._log_queries:
            logger.debug("SQL %s params=%r", " ".join(sql.split()), params)
        return self._db.execute(sql, params)
