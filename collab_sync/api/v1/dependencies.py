"""Presentation-layer dependency injection (composition root).

Builds the event router from the process-wide handler runtime. Each route
constructs its service from the runtime's clients on every invocation, so
handlers keep no state between events.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException, Request

from collab_sync.application.dispatch import EventRouter, Handler, TriggerEvent
from collab_sync.application.dtos.trigger import TriggerKind
from collab_sync.application.use_cases import (
    ContributorLifecycleService,
    ProfileMirrorService,
    ProjectAssetCleanupService,
    ProjectEnrichmentService,
)
from collab_sync.core.runtime import HandlerRuntime
from collab_sync.infrastructure.firebase.repositories import (
    FirestoreContributionRepository,
    FirestoreContributorRepository,
    FirestoreNotificationRepository,
    FirestoreProfileRepository,
    FirestoreProjectRepository,
)

PROJECT_DOCUMENT = "projects/{projectId}"
CONTRIBUTOR_DOCUMENT = "projects/{projectId}/contributors/{userId}"


def project_enrichment_service(runtime: HandlerRuntime) -> ProjectEnrichmentService:
    return ProjectEnrichmentService(
        project_repo=FirestoreProjectRepository(runtime.firestore),
        profile_repo=FirestoreProfileRepository(runtime.firestore),
    )


def project_cleanup_service(runtime: HandlerRuntime) -> ProjectAssetCleanupService:
    return ProjectAssetCleanupService(storage=runtime.storage)


def contributor_lifecycle_service(runtime: HandlerRuntime) -> ContributorLifecycleService:
    client = runtime.firestore
    return ContributorLifecycleService(
        profile_repo=FirestoreProfileRepository(client),
        project_repo=FirestoreProjectRepository(client),
        contributor_repo=FirestoreContributorRepository(client),
        contribution_repo=FirestoreContributionRepository(client),
        notification_repo=FirestoreNotificationRepository(client),
    )


def profile_mirror_service(runtime: HandlerRuntime) -> ProfileMirrorService:
    return ProfileMirrorService(FirestoreProfileRepository(runtime.firestore))


@dataclass(frozen=True)
class TriggerRoute:
    """One row of the trigger table: which events reach which service method."""

    name: str
    kind: TriggerKind
    template: str | None
    service: Callable[[HandlerRuntime], Any]
    method: str

    def handler_for(self, runtime: HandlerRuntime) -> Handler:
        """Handler that builds a fresh service from runtime for every event."""

        async def handle(event: TriggerEvent) -> Any:
            return await getattr(self.service(runtime), self.method)(event)

        return handle


TRIGGER_ROUTES: tuple[TriggerRoute, ...] = (
    TriggerRoute(
        "project-create enrich",
        TriggerKind.DOCUMENT_CREATED,
        PROJECT_DOCUMENT,
        project_enrichment_service,
        "on_project_created",
    ),
    TriggerRoute(
        "project-delete cleanup",
        TriggerKind.DOCUMENT_DELETED,
        PROJECT_DOCUMENT,
        project_cleanup_service,
        "on_project_deleted",
    ),
    TriggerRoute(
        "contributor-create",
        TriggerKind.DOCUMENT_CREATED,
        CONTRIBUTOR_DOCUMENT,
        contributor_lifecycle_service,
        "on_contributor_created",
    ),
    TriggerRoute(
        "contributor-delete",
        TriggerKind.DOCUMENT_DELETED,
        CONTRIBUTOR_DOCUMENT,
        contributor_lifecycle_service,
        "on_contributor_deleted",
    ),
    TriggerRoute(
        "profile-create mirror", TriggerKind.USER_CREATED, None, profile_mirror_service, "on_user_created"
    ),
    TriggerRoute(
        "profile-delete mirror", TriggerKind.USER_DELETED, None, profile_mirror_service, "on_user_deleted"
    ),
)


def _register(router: EventRouter, route: TriggerRoute, handler: Handler) -> None:
    if route.template is None:
        router.add_identity_route(route.name, route.kind, handler)
    else:
        router.add_document_route(route.name, route.kind, route.template, handler)


def build_event_router(runtime: HandlerRuntime) -> EventRouter:
    """Register one handler per trigger row."""
    router = EventRouter()
    for route in TRIGGER_ROUTES:
        _register(router, route, route.handler_for(runtime))
    return router


def _unbound(name: str) -> Handler:
    async def handle(event: TriggerEvent) -> Any:
        raise RuntimeError(f"Route {name} has no handler runtime; use build_event_router")

    return handle


def build_route_table() -> EventRouter:
    """Router with every trigger row registered and no runtime behind it.

    Use it to resolve events (dry-run replay, tooling). Dispatching through
    it raises RuntimeError.
    """
    router = EventRouter()
    for route in TRIGGER_ROUTES:
        _register(router, route, _unbound(route.name))
    return router


def get_event_router(request: Request) -> EventRouter:
    """Return the router built at startup (503 until the lifespan has run)."""
    router = getattr(request.app.state, "event_router", None)
    if router is None:
        raise HTTPException(status_code=503, detail="Handler runtime not initialized")
    return router
