"""DTOs for contributor relationships and their mirrored contributions."""

from dataclasses import dataclass
from datetime import datetime

from collab_sync.domain.enums import ContributorStatus


@dataclass(frozen=True)
class ContributionRecord:
    """users/{uid}/contributions/{projectId}: the contributor's view of a relationship."""

    project_name: str | None
    creator_name: str | None
    description: str | None
    status: ContributorStatus = ContributorStatus.INITIALIZED


@dataclass(frozen=True)
class ContributorCompletion:
    """Profile snapshot and status written back onto projects/{projectId}/contributors/{uid}."""

    email: str | None
    name: str | None
    picture: str | None
    created_at: datetime
    description: str | None
    status: ContributorStatus = ContributorStatus.INITIALIZED
