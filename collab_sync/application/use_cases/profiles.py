"""Identity mirror: keep users/{uid} in step with the identity provider."""

from __future__ import annotations

import logging

from collab_sync.application.dtos.profile import ProfileCreate
from collab_sync.application.dtos.trigger import AuthUserEvent
from collab_sync.application.interfaces.repositories import IProfileRepository
from collab_sync.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class ProfileMirrorService:
    """Single unconditional write/delete per identity event."""

    def __init__(self, profile_repo: IProfileRepository) -> None:
        self.profile_repo = profile_repo

    @traced("profile.created")
    async def on_user_created(self, event: AuthUserEvent) -> ProfileCreate:
        add_span_attributes(uid=event.uid)
        profile = ProfileCreate(
            uid=event.uid,
            email=event.email,
            name=event.display_name,
            picture=event.photo_url,
            creation_time=event.creation_time,
        )
        await self.profile_repo.put(profile)
        logger.info("Profile %s mirrored", event.uid)
        return profile

    @traced("profile.deleted")
    async def on_user_deleted(self, event: AuthUserEvent) -> None:
        add_span_attributes(uid=event.uid)
        await self.profile_repo.delete(event.uid)
        logger.info("Profile %s deleted", event.uid)
