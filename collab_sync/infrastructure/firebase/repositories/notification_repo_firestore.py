"""Firestore-backed notification repository (implements INotificationRepository)."""

from __future__ import annotations

from collab_sync.application.dtos.notification import NotificationCreate
from collab_sync.infrastructure.firebase._rest_client import FirestoreRESTClient
from collab_sync.infrastructure.firebase.collections import notifications_path


class FirestoreNotificationRepository:
    """Append-only notifications under users/{uid}/notifications."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def add(self, uid: str, notification: NotificationCreate) -> str:
        """Append a notification; url is stored as null when absent."""
        ref = await self._client.collection(notifications_path(uid)).add({
            "title": notification.title,
            "url": notification.url,
            "status": notification.status.value,
        })
        return ref.id
