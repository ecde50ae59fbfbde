"""Firestore-backed repository implementations."""

from collab_sync.infrastructure.firebase.repositories.contributor_repo_firestore import (
    FirestoreContributionRepository,
    FirestoreContributorRepository,
)
from collab_sync.infrastructure.firebase.repositories.notification_repo_firestore import (
    FirestoreNotificationRepository,
)
from collab_sync.infrastructure.firebase.repositories.profile_repo_firestore import (
    FirestoreProfileRepository,
)
from collab_sync.infrastructure.firebase.repositories.project_repo_firestore import (
    FirestoreProjectRepository,
)

__all__ = [
    "FirestoreContributionRepository",
    "FirestoreContributorRepository",
    "FirestoreNotificationRepository",
    "FirestoreProfileRepository",
    "FirestoreProjectRepository",
]
