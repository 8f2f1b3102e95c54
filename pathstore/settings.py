from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .paths import MEMORY_SENTINEL
from .repositories import AsyncSQLiteDocumentStore
from .sqlite_store import SQLiteDocumentStore


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Storage
    database: str
    create_if_missing: bool

    # Debug
    debug_log_queries: bool


def get_settings() -> Settings:
    database = os.getenv("PATHSTORE_DATABASE", "").strip() or MEMORY_SENTINEL

    # Off means an existing database file is required.
    create_if_missing = _env_bool("PATHSTORE_CREATE_IF_MISSING", True)

    debug_log_queries = _env_bool("PATHSTORE_DEBUG_LOG_QUERIES", False)

    return Settings(
        database=database,
        create_if_missing=create_if_missing,
        debug_log_queries=debug_log_queries,
    )


def open_sync_store(settings: Settings | None = None) -> SQLiteDocumentStore:
    if settings is None:
        load_dotenv("local.env")
        settings = get_settings()

    if settings.database == MEMORY_SENTINEL:
        return SQLiteDocumentStore.in_memory(log_queries=settings.debug_log_queries)
    if settings.create_if_missing:
        return SQLiteDocumentStore.in_file(settings.database, log_queries=settings.debug_log_queries)
    return SQLiteDocumentStore.from_file(settings.database, log_queries=settings.debug_log_queries)


def open_store(settings: Settings | None = None) -> AsyncSQLiteDocumentStore:
    """
    Build the async store described by `settings`, or by the environment
    (after loading `local.env`) when no settings are given.
    """
    return AsyncSQLiteDocumentStore(open_sync_store(settings))
