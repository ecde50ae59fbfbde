"""Project triggers: creator enrichment on create, asset cleanup on delete."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from collab_sync.application.dtos.project import (
    CreatorSnapshot,
    ProjectEnrichment,
    ProjectResult,
)
from collab_sync.application.dtos.trigger import DocumentEvent
from collab_sync.application.interfaces.repositories import (
    IProfileRepository,
    IProjectRepository,
)
from collab_sync.application.interfaces.services import IObjectStorage
from collab_sync.application.services.image_refs import resolve_object_key
from collab_sync.domain.exceptions import HandlerFailedException, ValidationException
from collab_sync.shared.telemetry.tracing import add_span_attributes, traced
from collab_sync.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def _require_param(event: DocumentEvent, name: str) -> str:
    value = event.params.get(name)
    if not value:
        raise ValidationException(f"Missing path parameter {name!r} for {event.document}", field=name)
    return value


class ProjectEnrichmentService:
    """Attach the creator's identity to a newly created project."""

    def __init__(
        self,
        project_repo: IProjectRepository,
        profile_repo: IProfileRepository,
    ) -> None:
        self.project_repo = project_repo
        self.profile_repo = profile_repo

    @traced("project.enrich")
    async def on_project_created(self, event: DocumentEvent) -> ProjectEnrichment | None:
        """Merge creator, createdAt and lifecycleStatus onto projects/{projectId}.

        Skipped (returns None) when the write carried no authenticated user.
        A missing profile is tolerated: the creator map then holds only uid.
        """
        project_id = _require_param(event, "projectId")
        if not event.auth_id:
            logger.info("Project %s created without an authenticated user; enrichment skipped", project_id)
            return None

        profile = await self.profile_repo.get_by_id(event.auth_id)
        if profile is None:
            logger.warning(
                "Profile %s not found while enriching project %s; writing uid only",
                event.auth_id,
                project_id,
            )
        created_at = event.create_time
        if created_at is None:
            logger.warning("Project %s create event has no create time; using current time", project_id)
            created_at = utc_now()

        enrichment = ProjectEnrichment(
            creator=CreatorSnapshot(
                uid=event.auth_id,
                name=profile.name if profile else None,
                picture=profile.picture if profile else None,
            ),
            created_at=created_at,
        )
        await self.project_repo.merge_enrichment(project_id, enrichment)
        add_span_attributes(project_id=project_id, profile_found=profile is not None)
        logger.info("Project %s enriched with creator %s", project_id, event.auth_id)
        return enrichment


@dataclass
class CleanupResult:
    """Outcome of one project's asset cleanup."""

    attempted: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    skipped_failures: list[str] = field(default_factory=list)


class ProjectAssetCleanupService:
    """Delete the blobs referenced by a deleted project's images."""

    def __init__(self, storage: IObjectStorage) -> None:
        self.storage = storage

    @traced("project.cleanup_assets")
    async def on_project_deleted(self, event: DocumentEvent) -> CleanupResult:
        """Delete every image of the deleted project concurrently.

        Every reference is attempted. Failures for references that are not
        storage download URLs (external hosts) are logged and ignored;
        failures for owned objects are raised together once all deletions
        have finished, so the host redelivers the event.
        """
        result = CleanupResult()
        if event.old_value is None:
            logger.info("Deleted document %s had no data; nothing to clean up", event.document)
            return result

        project = ProjectResult.from_fields(event.params.get("projectId", ""), event.old_value)
        refs = [resolve_object_key(image) for image in project.images]
        if not refs:
            return result

        result.attempted = [ref.key for ref in refs]
        outcomes = await asyncio.gather(
            *(self.storage.delete(ref.key) for ref in refs),
            return_exceptions=True,
        )

        errors: list[BaseException] = []
        for ref, outcome in zip(refs, outcomes):
            if isinstance(outcome, BaseException):
                if ref.canonical:
                    logger.error("Deleting object %s of project %s failed: %s", ref.key, project.id, outcome)
                    errors.append(outcome)
                else:
                    logger.warning("Best-effort delete of non-storage image %r failed: %s", ref.reference, outcome)
                    result.skipped_failures.append(ref.key)
            elif outcome:
                result.deleted.append(ref.key)
            else:
                result.missing.append(ref.key)

        add_span_attributes(
            project_id=project.id,
            attempted=len(result.attempted),
            deleted=len(result.deleted),
        )
        if errors:
            raise HandlerFailedException("project-delete cleanup", errors)
        logger.info(
            "Project %s cleanup: %d deleted, %d missing, %d skipped",
            project.id,
            len(result.deleted),
            len(result.missing),
            len(result.skipped_failures),
        )
        return result
