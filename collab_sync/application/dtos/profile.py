"""DTOs for the profile mirror (users/{uid})."""

from dataclasses import dataclass
from datetime import datetime

from collab_sync.domain.enums import ProfileStatus


@dataclass(frozen=True)
class ProfileResult:
    """Profile read-model. Fields absent on the document are None."""

    id: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None


@dataclass(frozen=True)
class ProfileCreate:
    """Profile written by the identity mirror."""

    uid: str
    email: str | None
    name: str | None
    picture: str | None
    creation_time: datetime | None
    status: ProfileStatus = ProfileStatus.ACTIVE
