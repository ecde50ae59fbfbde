"""Infrastructure exceptions for document store and blob storage operations.

These extend CollabSyncException so the presentation layer can map them
to HTTP responses consistently (all of them mean "redeliver").
"""

from collab_sync.domain.exceptions import CollabSyncException


class DocumentStoreError(CollabSyncException):
    """A Firestore REST call failed (unavailable, permission denied, ...)."""

    def __init__(self, path: str, status_code: int, reason: str) -> None:
        super().__init__(
            f"Document store request failed for {path}: {status_code} {reason}",
            "DOCUMENT_STORE_ERROR",
            {"path": path, "status_code": status_code, "reason": reason},
        )


class StorageException(CollabSyncException):
    """Base exception for storage operations."""


class StorageDeleteError(StorageException):
    """Object deletion failed."""

    def __init__(self, object_key: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete object: {object_key}",
            "STORAGE_DELETE_ERROR",
            {"object_key": object_key, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Insufficient permissions (or path escapes the storage root)."""

    def __init__(self, object_key: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {object_key}",
            "STORAGE_PERMISSION_ERROR",
            {"object_key": object_key, "operation": operation},
        )
