"""Firestore-backed project repository (implements IProjectRepository)."""

from __future__ import annotations

from collab_sync.application.dtos.project import ProjectEnrichment, ProjectResult
from collab_sync.infrastructure.firebase._rest_client import FirestoreRESTClient
from collab_sync.infrastructure.firebase.collections import project_path


class FirestoreProjectRepository:
    """Projects under projects/{projectId}."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def get_by_id(self, project_id: str) -> ProjectResult | None:
        """Return project by ID."""
        doc = await self._client.document(project_path(project_id)).get()
        if not doc:
            return None
        return ProjectResult.from_fields(doc.id, doc.to_dict())

    async def merge_enrichment(
        self, project_id: str, enrichment: ProjectEnrichment
    ) -> None:
        """Merge creator snapshot, createdAt and lifecycleStatus onto the project."""
        await self._client.document(project_path(project_id)).set(
            {
                "creator": enrichment.creator.to_document(),
                "createdAt": enrichment.created_at,
                "lifecycleStatus": enrichment.lifecycle_status.value,
            },
            merge=True,
        )
