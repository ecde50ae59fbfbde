"""Firestore-backed contributor relationship and contribution repositories."""

from __future__ import annotations

from collab_sync.application.dtos.contributor import (
    ContributionRecord,
    ContributorCompletion,
)
from collab_sync.infrastructure.firebase._rest_client import FirestoreRESTClient
from collab_sync.infrastructure.firebase.collections import (
    contribution_path,
    contributor_path,
)
from collab_sync.infrastructure.firebase.repositories._fields import drop_none


class FirestoreContributorRepository:
    """Relationship records under projects/{projectId}/contributors/{uid}."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def complete(
        self, project_id: str, uid: str, completion: ContributorCompletion
    ) -> None:
        """Merge profile snapshot, createdAt and status onto the relationship."""
        await self._client.document(contributor_path(project_id, uid)).set(
            drop_none({
                "email": completion.email,
                "name": completion.name,
                "picture": completion.picture,
                "createdAt": completion.created_at,
                "status": completion.status.value,
                "description": completion.description,
            }),
            merge=True,
        )


class FirestoreContributionRepository:
    """Contributions under users/{uid}/contributions/{projectId}."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def put(self, uid: str, project_id: str, record: ContributionRecord) -> None:
        """Overwrite the contribution with the current relationship state."""
        await self._client.document(contribution_path(uid, project_id)).set(
            drop_none({
                "projectName": record.project_name,
                "creatorName": record.creator_name,
                "status": record.status.value,
                "description": record.description,
            })
        )

    async def delete(self, uid: str, project_id: str) -> None:
        """Delete the contribution."""
        await self._client.document(contribution_path(uid, project_id)).delete()
