"""DTOs for projects (projects/{projectId})."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from collab_sync.domain.enums import ProjectLifecycleStatus


@dataclass(frozen=True)
class CreatorSnapshot:
    """Point-in-time copy of the creator's profile, embedded on the project.

    name and picture are None when the profile did not exist yet; they are
    then left out of the written map rather than stored as null.
    """

    uid: str
    name: str | None = None
    picture: str | None = None

    def to_document(self) -> dict[str, str]:
        data = {"uid": self.uid}
        if self.name is not None:
            data["name"] = self.name
        if self.picture is not None:
            data["picture"] = self.picture
        return data


@dataclass(frozen=True)
class ProjectResult:
    """Project read-model (only the fields the handlers consume)."""

    id: str
    title: str | None = None
    creator_name: str | None = None
    images: list[str] = field(default_factory=list)

    @classmethod
    def from_fields(cls, project_id: str, data: dict[str, Any]) -> "ProjectResult":
        """Build from decoded project fields (stored document or event snapshot).

        Malformed values (non-string title, non-list images, non-string
        image entries) read as absent.
        """
        creator = data.get("creator")
        creator_name = creator.get("name") if isinstance(creator, dict) else None
        title = data.get("title")
        images = data.get("images")
        return cls(
            id=project_id,
            title=title if isinstance(title, str) else None,
            creator_name=creator_name if isinstance(creator_name, str) else None,
            images=[i for i in images if isinstance(i, str)] if isinstance(images, list) else [],
        )


@dataclass(frozen=True)
class ProjectEnrichment:
    """Fields merged onto a newly created project."""

    creator: CreatorSnapshot
    created_at: datetime
    lifecycle_status: ProjectLifecycleStatus = ProjectLifecycleStatus.PUBLISHED
