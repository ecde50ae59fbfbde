"""DTOs for notifications (users/{uid}/notifications/{auto-id})."""

from dataclasses import dataclass

from collab_sync.domain.enums import NotificationStatus


@dataclass(frozen=True)
class NotificationCreate:
    """Append-only notification; url is None when there is nothing to open."""

    title: str
    url: str | None = None
    status: NotificationStatus = NotificationStatus.UNREAD
