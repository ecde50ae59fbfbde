"""Domain enumerations for collab-sync.

Enums represent fixed sets of status values written into documents.
"""

from enum import Enum


class ProfileStatus(str, Enum):
    """Profile status, set by the identity mirror."""

    ACTIVE = "active"


class ProjectLifecycleStatus(str, Enum):
    """Project lifecycle status. Projects are published as soon as they are enriched."""

    PUBLISHED = "Published"


class ContributorStatus(str, Enum):
    """Contributor relationship / contribution status."""

    INITIALIZED = "Initialized"


class NotificationStatus(str, Enum):
    """Notification read state."""

    UNREAD = "unread"
