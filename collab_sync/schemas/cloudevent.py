"""CloudEvent payload schemas for Firestore document and Firebase Auth triggers."""

from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from collab_sync.shared.utils.datetime import ensure_utc, parse_rfc3339


def _parse_timestamp(v: Any) -> datetime | None:
    """Accept RFC 3339 or RFC 1123 ("Tue, 26 May 2020 10:42:27 GMT") timestamps."""
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        return ensure_utc(v)
    if not isinstance(v, str):
        raise ValueError("timestamp must be a string")
    try:
        return parse_rfc3339(v)
    except ValueError:
        return ensure_utc(parsedate_to_datetime(v))


class FirestoreDocument(BaseModel):
    """Firestore REST Document resource as carried in DocumentEventData."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)
    create_time: datetime | None = Field(default=None, alias="createTime")
    update_time: datetime | None = Field(default=None, alias="updateTime")

    @field_validator("create_time", "update_time", mode="before")
    @classmethod
    def _timestamps(cls, v: Any) -> datetime | None:
        return _parse_timestamp(v)


class DocumentEventData(BaseModel):
    """Body of google.cloud.firestore.document.v1.* events (JSON encoding)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    value: FirestoreDocument | None = None
    old_value: FirestoreDocument | None = Field(default=None, alias="oldValue")


class AuthUserMetadata(BaseModel):
    """Identity metadata; legacy payloads use createdAt, newer ones creationTime."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    created_at: datetime | None = Field(default=None, alias="createdAt")
    creation_time: datetime | None = Field(default=None, alias="creationTime")

    @field_validator("created_at", "creation_time", mode="before")
    @classmethod
    def _timestamps(cls, v: Any) -> datetime | None:
        return _parse_timestamp(v)


class AuthUserData(BaseModel):
    """Body of Firebase Auth user.create / user.delete events."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    uid: str = Field(..., min_length=1)
    email: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")
    photo_url: str | None = Field(default=None, alias="photoURL")
    metadata: AuthUserMetadata | None = None
