"""Application services: pure helpers used by the trigger handlers."""

from collab_sync.application.services.image_refs import (
    ObjectKeyRef,
    resolve_object_key,
)

__all__ = ["ObjectKeyRef", "resolve_object_key"]
