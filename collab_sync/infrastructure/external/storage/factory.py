"""Storage service factory: creates the Firebase Storage or local backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from collab_sync.application.interfaces.services import IObjectStorage

if TYPE_CHECKING:
    from collab_sync.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(
        settings: "Settings | None" = None,
        *,
        credentials=None,
        project_id: str | None = None,
    ) -> IObjectStorage:
        """Create storage service from settings.

        Args:
            settings: Application settings; if None, uses get_settings().
            credentials: google-auth credentials (firebase backend).
            project_id: Firebase project ID; used for the default bucket name.

        Returns:
            FirebaseStorageService or LocalStorageService.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from collab_sync.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from collab_sync.infrastructure.external.storage.local_storage import (
                LocalStorageService,
            )

            return LocalStorageService(storage_root=s.storage_root)
        if backend == "firebase":
            from collab_sync.infrastructure.external.storage.firebase_storage import (
                FirebaseStorageService,
            )

            if credentials is None:
                raise ValueError("Firebase credentials required for firebase storage backend")
            bucket = s.storage_bucket or (f"{project_id}.appspot.com" if project_id else None)
            if not bucket:
                raise ValueError("STORAGE_BUCKET (or a Firebase project ID) required for firebase backend")
            return FirebaseStorageService(
                bucket=bucket,
                credentials=credentials,
                timeout=s.http_timeout_seconds,
            )
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: 'firebase', 'local'"
        )
