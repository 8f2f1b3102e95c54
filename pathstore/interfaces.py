from __future__ import annotations

from typing import Protocol

from .records import DocumentRecord


class DocumentStore(Protocol):
    """
    Path-addressed document store: one opaque string payload per path.
    """

    def insert(self, path: str, data: str) -> None:
        """Create a document; fails if the path is already taken."""
        ...

    def read(self, path: str) -> DocumentRecord | None:
        ...

    def list_children(self, path: str) -> list[DocumentRecord]:
        """Return the direct children of `path`, oldest first."""
        ...

    def update(self, path: str, data: str) -> None:
        """Replace the payload. Unknown paths are ignored."""
        ...

    def delete(self, path: str) -> None:
        ...

    def close(self) -> None:
        ...


class AsyncDocumentStore(Protocol):
    async def insert(self, path: str, data: str) -> None: ...
    async def read(self, path: str) -> DocumentRecord | None: ...
    async def list_children(self, path: str) -> list[DocumentRecord]: ...
    async def update(self, path: str, data: str) -> None: ...
    async def delete(self, path: str) -> None: ...
    async def close(self) -> None: ...
