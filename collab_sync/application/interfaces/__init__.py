"""Ports implemented by the infrastructure layer."""

from collab_sync.application.interfaces.repositories import (
    IContributionRepository,
    IContributorRepository,
    INotificationRepository,
    IProfileRepository,
    IProjectRepository,
)
from collab_sync.application.interfaces.services import IObjectStorage

__all__ = [
    "IObjectStorage",
    "IContributionRepository",
    "IContributorRepository",
    "INotificationRepository",
    "IProfileRepository",
    "IProjectRepository",
]
