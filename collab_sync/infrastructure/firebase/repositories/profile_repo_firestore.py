"""Firestore-backed profile repository (implements IProfileRepository)."""

from __future__ import annotations

from collab_sync.application.dtos.profile import ProfileCreate, ProfileResult
from collab_sync.infrastructure.firebase._rest_client import FirestoreRESTClient
from collab_sync.infrastructure.firebase.collections import user_path
from collab_sync.infrastructure.firebase.repositories._fields import as_str, drop_none


class FirestoreProfileRepository:
    """Profiles under users/{uid}, mirrored from the identity provider."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def get_by_id(self, uid: str) -> ProfileResult | None:
        """Return profile by uid."""
        doc = await self._client.document(user_path(uid)).get()
        if not doc:
            return None
        d = doc.to_dict()
        return ProfileResult(
            id=doc.id,
            email=as_str(d.get("email")),
            name=as_str(d.get("name")),
            picture=as_str(d.get("picture")),
        )

    async def put(self, profile: ProfileCreate) -> None:
        """Overwrite users/{uid} with the identity snapshot."""
        await self._client.document(user_path(profile.uid)).set(drop_none({
            "email": profile.email,
            "picture": profile.picture,
            "name": profile.name,
            "creationTime": profile.creation_time,
            "status": profile.status.value,
        }))

    async def delete(self, uid: str) -> None:
        """Delete users/{uid}."""
        await self._client.document(user_path(uid)).delete()
