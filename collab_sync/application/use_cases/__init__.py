"""Application use cases: one service per trigger family."""

from collab_sync.application.use_cases.contributors import ContributorLifecycleService
from collab_sync.application.use_cases.profiles import ProfileMirrorService
from collab_sync.application.use_cases.projects import (
    CleanupResult,
    ProjectAssetCleanupService,
    ProjectEnrichmentService,
)

__all__ = [
    "CleanupResult",
    "ContributorLifecycleService",
    "ProfileMirrorService",
    "ProjectAssetCleanupService",
    "ProjectEnrichmentService",
]
