"""Service interfaces (ports) for the application layer.

Protocols define contracts for external services (DIP).
"""

from __future__ import annotations

from typing import Protocol


class IObjectStorage(Protocol):
    """Protocol for key-addressed blob storage (project images)."""

    async def delete(self, object_key: str) -> bool:
        """Delete object. Returns True if deleted, False if it did not exist."""

    async def exists(self, object_key: str) -> bool:
        """Return True if object exists."""

    async def aclose(self) -> None:
        """Release network resources held by the backend."""
