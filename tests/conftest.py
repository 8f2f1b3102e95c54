from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import pathstore` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def memory_store():
    from pathstore import SQLiteDocumentStore

    store = SQLiteDocumentStore.in_memory()
    yield store
    store.close()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Clear PATHSTORE_* variables and run from a temp directory so a developer's
    local.env or database files never leak into tests.
    """
    for name in ("PATHSTORE_DATABASE", "PATHSTORE_CREATE_IF_MISSING", "PATHSTORE_DEBUG_LOG_QUERIES"):
        # setenv first so monkeypatch restores the variable's absence after load_dotenv sets it.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
