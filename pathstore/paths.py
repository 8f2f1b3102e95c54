from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

MEMORY_SENTINEL = ":memory:"
SEPARATOR = "/"


def ends_with_digit(path: str) -> bool:
    # Trailing digits are reserved for array indexing.
    return bool(path) and path[-1] in "0123456789"


def normalize(path: str) -> str:
    """Treat `/a/b/` and `/a/b` as the same cache key; the root stays `/`."""
    stripped = path.rstrip(SEPARATOR)
    if not stripped and path.startswith(SEPARATOR):
        return SEPARATOR
    return stripped


def lineage(path: str) -> Iterator[str]:
    """
    Yield the normalized path followed by each of its ancestors, deepest first.

    `/a/b/c` -> `/a/b/c`, `/a/b`, `/a`, `/`
    `a/b`    -> `a/b`, `a`
    """
    key = normalize(path)
    if not key or key == SEPARATOR:
        yield key
        return
    segments = key.split(SEPARATOR)
    for depth in range(len(segments), 0, -1):
        ancestor = SEPARATOR.join(segments[:depth])
        if ancestor:
            yield ancestor
        elif key.startswith(SEPARATOR):
            yield SEPARATOR


def children_prefix(path: str) -> str:
    if path.endswith(SEPARATOR):
        return path
    return path + SEPARATOR


def like_escape(text: str) -> str:
    """Escape LIKE wildcards with a backslash; pair with `ESCAPE '\\'`."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def children_pattern(path: str) -> str:
    """LIKE pattern matching everything below `path`, wildcards in `path` taken literally."""
    return like_escape(children_prefix(path)) + "%"


def is_memory_location(location: str) -> bool:
    return location == MEMORY_SENTINEL or location.startswith(MEMORY_SENTINEL)


def ends_with_separator(location: str) -> bool:
    seps = {os.sep, SEPARATOR}
    if os.altsep:
        seps.add(os.altsep)
    return any(location.endswith(s) for s in seps)


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
