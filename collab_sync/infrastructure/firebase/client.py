"""Firebase credentials and Firestore client construction (REST-based, no firebase-admin).

Credentials come from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or
FIREBASE_SERVICE_ACCOUNT_PATH (file path). The client is built once per
process by the runtime and injected into handlers; nothing here is a
module-level singleton.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from collab_sync.core.config import Settings, get_settings
from collab_sync.infrastructure.firebase._rest_client import (
    _FIRESTORE_SCOPE,
    FirestoreRESTClient,
    _get_credentials,
)
from collab_sync.infrastructure.external.storage.firebase_storage import (
    _STORAGE_SCOPE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FirebaseCredentials:
    """Service account credentials plus the project they belong to."""

    project_id: str
    credentials: Any


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key = settings.firebase_service_account_key
    key_json = key.get_secret_value() if key else None
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def load_firebase_credentials(settings: Settings | None = None) -> FirebaseCredentials | None:
    """Load service account credentials scoped for Firestore and Storage.

    Returns None (and logs) when no credentials are configured or they are
    malformed, so the caller decides whether that is fatal.
    """
    settings = settings or get_settings()
    try:
        key_dict = _load_key_dict(settings)
        if not key_dict:
            logger.warning("No Firebase service account configured")
            return None
        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return None
        cred = _get_credentials(key_dict, scopes=[_FIRESTORE_SCOPE, _STORAGE_SCOPE])
        return FirebaseCredentials(project_id=project_id, credentials=cred)
    except Exception:
        logger.exception("Loading Firebase credentials failed")
        return None


def create_firestore_client(
    firebase: FirebaseCredentials, settings: Settings | None = None
) -> FirestoreRESTClient:
    """Build the Firestore REST client for the credentials' project.

    API used by the repositories (all async):
    - await db.document(path).set(data, merge=...)
    - await db.document(path).get() -> DocumentSnapshot | None
    - await db.document(path).delete()
    - await db.collection(path).add(data) -> DocumentReference
    - async for doc in db.collection(path).stream() -> DocumentSnapshot
    """
    settings = settings or get_settings()
    return FirestoreRESTClient(
        firebase.project_id,
        firebase.credentials,
        timeout=settings.http_timeout_seconds,
    )
