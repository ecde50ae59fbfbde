"""Trigger events delivered by the hosting infrastructure (decoded CloudEvents)."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any


class TriggerKind(str, Enum):
    """What happened to the watched resource."""

    DOCUMENT_CREATED = "document.created"
    DOCUMENT_DELETED = "document.deleted"
    USER_CREATED = "user.created"
    USER_DELETED = "user.deleted"


@dataclass(frozen=True)
class DocumentEvent:
    """A Firestore document was created or deleted.

    Attributes:
        event_id: CloudEvent id (same id on redelivery).
        kind: DOCUMENT_CREATED or DOCUMENT_DELETED.
        document: Path relative to the database root, e.g. "projects/p1".
        value: Fields after the change (created documents); None when absent.
        old_value: Fields before the change (deleted documents); None when absent.
        create_time: Server-assigned creation time of the document.
        auth_id: Authenticated end-user id that caused the change, if any.
        params: Path template captures, filled in by the event router.
    """

    event_id: str
    kind: TriggerKind
    document: str
    value: dict[str, Any] | None = None
    old_value: dict[str, Any] | None = None
    create_time: datetime | None = None
    auth_id: str | None = None
    params: dict[str, str] = field(default_factory=dict)

    def with_params(self, params: dict[str, str]) -> "DocumentEvent":
        return replace(self, params=dict(params))


@dataclass(frozen=True)
class AuthUserEvent:
    """An identity was created or deleted in the identity provider."""

    event_id: str
    kind: TriggerKind
    uid: str
    email: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    creation_time: datetime | None = None
