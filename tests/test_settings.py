from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from pathstore import (
    AsyncSQLiteDocumentStore,
    NotFoundError,
    Settings,
    SQLiteDocumentStore,
    get_settings,
    open_store,
    open_sync_store,
)


def test_default_settings(clean_env):
    settings = get_settings()
    assert settings.database == ":memory:"
    assert settings.create_if_missing is True
    assert settings.debug_log_queries is False


def test_settings_from_environment(clean_env, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PATHSTORE_DATABASE", "data/docs.db")
    monkeypatch.setenv("PATHSTORE_CREATE_IF_MISSING", "no")
    monkeypatch.setenv("PATHSTORE_DEBUG_LOG_QUERIES", " On ")

    settings = get_settings()
    assert settings.database == "data/docs.db"
    assert settings.create_if_missing is False
    assert settings.debug_log_queries is True


def test_open_store_reads_local_env(clean_env: Path):
    (clean_env / "local.env").write_text("PATHSTORE_DATABASE=nested/dir/docs.db\n", encoding="utf-8")

    async def _run():
        store = open_store()
        assert isinstance(store, AsyncSQLiteDocumentStore)
        await store.insert("/a", "x")
        await store.close()

    asyncio.run(_run())
    assert (clean_env / "nested" / "dir" / "docs.db").is_file()


def test_open_sync_store_requires_existing_file_when_creation_disabled(clean_env: Path):
    settings = Settings(database=str(clean_env / "missing.db"), create_if_missing=False, debug_log_queries=False)
    with pytest.raises(NotFoundError):
        open_sync_store(settings)


def test_query_logging(clean_env, caplog: pytest.LogCaptureFixture):
    settings = Settings(database=":memory:", create_if_missing=True, debug_log_queries=True)
    with caplog.at_level("DEBUG", logger="pathstore.sqlite_store"):
        with open_sync_store(settings) as store:
            assert isinstance(store, SQLiteDocumentStore)
            store.insert("/a", "x")

    assert any("INSERT INTO documents" in r.getMessage() for r in caplog.records)
