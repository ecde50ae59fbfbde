"""Local filesystem storage for development, with path validation."""

from __future__ import annotations

from pathlib import Path

import aiofiles.os

from collab_sync.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
)


class LocalStorageService:
    """Objects stored as files under storage_root, keyed by relative path.

    Keys are validated against storage_root; a key that resolves outside it
    raises StoragePermissionError. Empty parent directories are pruned after
    a delete.
    """

    def __init__(self, storage_root: str) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, object_key: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / object_key).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(object_key, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(object_key, "path_validation")
        return full_path

    async def aclose(self) -> None:
        """Nothing to release."""

    async def delete(self, object_key: str) -> bool:
        """Delete file. Returns True if deleted."""
        file_path = self._get_full_path(object_key)
        try:
            if not await aiofiles.os.path.isfile(file_path):
                return False
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(object_key, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root:
            try:
                if await aiofiles.os.listdir(parent):
                    break
                await aiofiles.os.rmdir(parent)
            except OSError:
                break
            parent = parent.parent
        return True

    async def exists(self, object_key: str) -> bool:
        """Return True if file exists."""
        try:
            full_path = self._get_full_path(object_key)
        except StoragePermissionError:
            return False
        return await aiofiles.os.path.isfile(full_path)
