"""Storage: Firebase (Cloud Storage JSON API) and local filesystem backends.

Factory creates backend from collab_sync.core.config. Implementations are
loaded lazily inside StorageFactory.create_storage_service().

Implementations satisfy IObjectStorage (delete, exists, aclose).
"""

from collab_sync.infrastructure.external.storage.factory import StorageFactory

__all__ = [
    "StorageFactory",
]
