"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Every write is addressed by a stable document path so that redelivered
invocations overwrite rather than duplicate; notifications are the one
append-only exception.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collab_sync.application.dtos.contributor import (
        ContributionRecord,
        ContributorCompletion,
    )
    from collab_sync.application.dtos.notification import NotificationCreate
    from collab_sync.application.dtos.profile import ProfileCreate, ProfileResult
    from collab_sync.application.dtos.project import ProjectEnrichment, ProjectResult


class IProfileRepository(Protocol):
    """Protocol for users/{uid}."""

    async def get_by_id(self, uid: str) -> ProfileResult | None:
        """Return the profile, or None when it does not exist (yet)."""

    async def put(self, profile: ProfileCreate) -> None:
        """Create or overwrite the profile."""

    async def delete(self, uid: str) -> None:
        """Delete the profile; succeeds when already missing."""


class IProjectRepository(Protocol):
    """Protocol for projects/{projectId}."""

    async def get_by_id(self, project_id: str) -> ProjectResult | None:
        """Return the project, or None when it does not exist."""

    async def merge_enrichment(
        self, project_id: str, enrichment: ProjectEnrichment
    ) -> None:
        """Merge creator/createdAt/lifecycleStatus; other fields survive."""


class IContributorRepository(Protocol):
    """Protocol for projects/{projectId}/contributors/{uid}."""

    async def complete(
        self, project_id: str, uid: str, completion: ContributorCompletion
    ) -> None:
        """Merge the profile snapshot and status onto the relationship record."""


class IContributionRepository(Protocol):
    """Protocol for users/{uid}/contributions/{projectId}."""

    async def put(self, uid: str, project_id: str, record: ContributionRecord) -> None:
        """Create or overwrite the contribution."""

    async def delete(self, uid: str, project_id: str) -> None:
        """Delete the contribution; succeeds when already missing."""


class INotificationRepository(Protocol):
    """Protocol for users/{uid}/notifications."""

    async def add(self, uid: str, notification: NotificationCreate) -> str:
        """Append a notification and return its generated ID."""
