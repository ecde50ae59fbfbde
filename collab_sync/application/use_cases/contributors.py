"""Contributor relationship lifecycle: mirror into the contributor's namespace and notify."""

from __future__ import annotations

import asyncio
import logging

from collab_sync.application.dtos.contributor import (
    ContributionRecord,
    ContributorCompletion,
)
from collab_sync.application.dtos.notification import NotificationCreate
from collab_sync.application.dtos.trigger import DocumentEvent
from collab_sync.application.interfaces.repositories import (
    IContributionRepository,
    IContributorRepository,
    INotificationRepository,
    IProfileRepository,
    IProjectRepository,
)
from collab_sync.core.constants import (
    NOTIFICATION_CONTRIBUTION_DELETED_TITLE,
    NOTIFICATION_CONTRIBUTION_REQUEST_TITLE,
    NOTIFICATION_CONTRIBUTION_REQUEST_URL,
)
from collab_sync.domain.enums import ContributorStatus
from collab_sync.domain.exceptions import ValidationException
from collab_sync.shared.telemetry.tracing import add_span_attributes, traced
from collab_sync.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class ContributorLifecycleService:
    """Handle create/delete of projects/{projectId}/contributors/{userId}.

    Create writes, in order: the contribution under users/{userId}, a
    notification, then completes the relationship record itself. Each step
    awaits the previous one; any failure propagates and the whole sequence
    is retried on redelivery (every write but the notification targets a
    fixed path).
    """

    def __init__(
        self,
        profile_repo: IProfileRepository,
        project_repo: IProjectRepository,
        contributor_repo: IContributorRepository,
        contribution_repo: IContributionRepository,
        notification_repo: INotificationRepository,
    ) -> None:
        self.profile_repo = profile_repo
        self.project_repo = project_repo
        self.contributor_repo = contributor_repo
        self.contribution_repo = contribution_repo
        self.notification_repo = notification_repo

    @staticmethod
    def _ids(event: DocumentEvent) -> tuple[str, str]:
        project_id = event.params.get("projectId")
        user_id = event.params.get("userId")
        if not project_id or not user_id:
            raise ValidationException(
                f"Contributor event for {event.document} lacks projectId/userId",
                field="document",
            )
        return project_id, user_id

    @traced("contributor.created")
    async def on_contributor_created(self, event: DocumentEvent) -> ContributorCompletion:
        """Initial -> Initialized."""
        project_id, user_id = self._ids(event)
        add_span_attributes(project_id=project_id, user_id=user_id)
        snapshot = event.value or {}
        description = snapshot.get("description")
        if not isinstance(description, str):
            description = None

        profile, project = await asyncio.gather(
            self.profile_repo.get_by_id(user_id),
            self.project_repo.get_by_id(project_id),
        )
        if profile is None:
            logger.warning("Profile %s not found for contributor on project %s", user_id, project_id)
        if project is None:
            logger.warning("Project %s not found for contributor %s", project_id, user_id)

        await self.contribution_repo.put(
            user_id,
            project_id,
            ContributionRecord(
                project_name=project.title if project else None,
                creator_name=project.creator_name if project else None,
                description=description,
                status=ContributorStatus.INITIALIZED,
            ),
        )
        await self.notification_repo.add(
            user_id,
            NotificationCreate(
                title=NOTIFICATION_CONTRIBUTION_REQUEST_TITLE,
                url=NOTIFICATION_CONTRIBUTION_REQUEST_URL,
            ),
        )

        created_at = event.create_time
        if created_at is None:
            logger.warning("Contributor %s/%s event has no create time; using current time", project_id, user_id)
            created_at = utc_now()
        completion = ContributorCompletion(
            email=profile.email if profile else None,
            name=profile.name if profile else None,
            picture=profile.picture if profile else None,
            created_at=created_at,
            description=description,
            status=ContributorStatus.INITIALIZED,
        )
        await self.contributor_repo.complete(project_id, user_id, completion)
        logger.info("Contributor %s initialized on project %s", user_id, project_id)
        return completion

    @traced("contributor.deleted")
    async def on_contributor_deleted(self, event: DocumentEvent) -> None:
        """Initialized -> removed: drop the mirrored contribution and notify."""
        project_id, user_id = self._ids(event)
        add_span_attributes(project_id=project_id, user_id=user_id)
        await self.contribution_repo.delete(user_id, project_id)
        await self.notification_repo.add(
            user_id,
            NotificationCreate(title=NOTIFICATION_CONTRIBUTION_DELETED_TITLE, url=None),
        )
        logger.info("Contributor %s removed from project %s", user_id, project_id)
