from __future__ import annotations

import sqlite3
from typing import Any, Mapping

from pydantic import BaseModel


class DocumentRecord(BaseModel):
    """
    Mirrors one row of the `documents` table:
      path TEXT PRIMARY KEY, data TEXT, created INTEGER, updated INTEGER
    """

    path: str
    data: str | None = None
    created: int
    updated: int

    @classmethod
    def from_row(cls, row: sqlite3.Row | Mapping[str, Any]) -> "DocumentRecord":
        return cls(
            path=row["path"],
            data=row["data"],
            created=int(row["created"]),
            updated=int(row["updated"]),
        )
