"""Process-wide handler runtime: the shared store clients, built once per process.

Handlers never reach for module-level clients; the runtime is passed to
the event router, which builds fresh (stateless) services per invocation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from collab_sync.application.interfaces.services import IObjectStorage
from collab_sync.core.config import Settings, get_settings
from collab_sync.infrastructure.external.storage.factory import StorageFactory
from collab_sync.infrastructure.firebase._rest_client import FirestoreRESTClient
from collab_sync.infrastructure.firebase.client import (
    create_firestore_client,
    load_firebase_credentials,
)

logger = logging.getLogger(__name__)


@dataclass
class HandlerRuntime:
    """Document store client and blob storage shared by all invocations."""

    firestore: FirestoreRESTClient
    storage: IObjectStorage


def build_runtime(settings: Settings | None = None) -> HandlerRuntime:
    """Create the runtime from settings.

    Raises:
        RuntimeError: No usable Firebase credentials; the service cannot
            reach the document store, so startup fails rather than
            accepting events it would fail on.
    """
    settings = settings or get_settings()
    firebase = load_firebase_credentials(settings)
    if firebase is None:
        raise RuntimeError(
            "Firebase credentials are required: set FIREBASE_SERVICE_ACCOUNT_KEY "
            "(full JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
        )
    firestore = create_firestore_client(firebase, settings)
    storage = StorageFactory.create_storage_service(
        settings,
        credentials=firebase.credentials,
        project_id=firebase.project_id,
    )
    logger.info(
        "Handler runtime ready: project=%s, storage=%s, region=%s",
        firebase.project_id,
        settings.storage_backend,
        settings.function_region,
    )
    return HandlerRuntime(firestore=firestore, storage=storage)


async def close_runtime(runtime: HandlerRuntime) -> None:
    """Close HTTP pools held by the runtime's clients."""
    await runtime.firestore.aclose()
    await runtime.storage.aclose()
    logger.info("Handler runtime closed")
