"""Decode CloudEvents (binary content mode) into trigger events.

Attributes arrive as ``ce-*`` headers; the body is the event data as JSON.
Firestore events carry the document path in the ``document`` extension
attribute and, for ``*.withAuthContext`` types, ``authtype``/``authid``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from pydantic import ValidationError

from collab_sync.application.dispatch import TriggerEvent
from collab_sync.application.dtos.trigger import (
    AuthUserEvent,
    DocumentEvent,
    TriggerKind,
)
from collab_sync.core.constants import USER_AUTH_TYPES
from collab_sync.domain.exceptions import UnroutableEventException, ValidationException
from collab_sync.infrastructure.firebase._rest_encoding import decode_fields
from collab_sync.schemas.cloudevent import (
    AuthUserData,
    DocumentEventData,
    FirestoreDocument,
)
from collab_sync.shared.utils.datetime import parse_rfc3339

FIRESTORE_DOCUMENT_CREATED = "google.cloud.firestore.document.v1.created"
FIRESTORE_DOCUMENT_DELETED = "google.cloud.firestore.document.v1.deleted"
AUTH_CONTEXT_SUFFIX = ".withAuthContext"
AUTH_USER_CREATE = "providers/firebase.auth/eventTypes/user.create"
AUTH_USER_DELETE = "providers/firebase.auth/eventTypes/user.delete"

_DOCUMENT_KINDS: dict[str, TriggerKind] = {
    FIRESTORE_DOCUMENT_CREATED: TriggerKind.DOCUMENT_CREATED,
    FIRESTORE_DOCUMENT_DELETED: TriggerKind.DOCUMENT_DELETED,
}
_IDENTITY_KINDS: dict[str, TriggerKind] = {
    AUTH_USER_CREATE: TriggerKind.USER_CREATED,
    AUTH_USER_DELETE: TriggerKind.USER_DELETED,
}

_DOCUMENTS_MARKER = "/documents/"


def _attr(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(f"ce-{name}")
    return value.strip() if value and value.strip() else None


def _relative_path(doc: FirestoreDocument | None) -> str | None:
    """projects/x/databases/(default)/documents/a/b -> a/b"""
    if doc is None or not doc.name or _DOCUMENTS_MARKER not in doc.name:
        return None
    return doc.name.split(_DOCUMENTS_MARKER, 1)[1]


def _load_json(body: bytes) -> dict:
    if not body:
        return {}
    try:
        data = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationException(f"Event data is not valid JSON: {e}", field="data") from e
    if not isinstance(data, dict):
        raise ValidationException("Event data must be a JSON object", field="data")
    return data


def _document_event(
    event_id: str, kind: TriggerKind, headers: Mapping[str, str], body: bytes
) -> DocumentEvent:
    try:
        data = DocumentEventData.model_validate(_load_json(body))
    except ValidationError as e:
        raise ValidationException(f"Invalid document event data: {e}", field="data") from e

    document = _attr(headers, "document") or _relative_path(data.value) or _relative_path(data.old_value)
    if not document:
        raise ValidationException("Document event without a document path", field="document")

    auth_id = None
    if _attr(headers, "authtype") in USER_AUTH_TYPES:
        auth_id = _attr(headers, "authid")

    create_time = None
    if data.value is not None:
        create_time = data.value.create_time
    elif data.old_value is not None:
        create_time = data.old_value.create_time
    if create_time is None:
        try:
            create_time = parse_rfc3339(_attr(headers, "time"))
        except ValueError as e:
            raise ValidationException(f"Invalid ce-time: {e}", field="time") from e

    return DocumentEvent(
        event_id=event_id,
        kind=kind,
        document=document.strip("/"),
        value=decode_fields(data.value.fields) if data.value is not None else None,
        old_value=decode_fields(data.old_value.fields) if data.old_value is not None else None,
        create_time=create_time,
        auth_id=auth_id,
    )


def _identity_event(event_id: str, kind: TriggerKind, body: bytes) -> AuthUserEvent:
    try:
        data = AuthUserData.model_validate(_load_json(body))
    except ValidationError as e:
        raise ValidationException(f"Invalid identity event data: {e}", field="data") from e
    meta = data.metadata
    creation_time = (meta.creation_time or meta.created_at) if meta else None
    return AuthUserEvent(
        event_id=event_id,
        kind=kind,
        uid=data.uid,
        email=data.email,
        display_name=data.display_name,
        photo_url=data.photo_url,
        creation_time=creation_time,
    )


def parse_cloudevent(headers: Mapping[str, str], body: bytes) -> TriggerEvent:
    """Build a DocumentEvent or AuthUserEvent from a binary-mode CloudEvent.

    Args:
        headers: Request headers (case-insensitive mapping, e.g. Starlette Headers).
        body: Raw request body.

    Raises:
        ValidationException: Required attributes missing or data malformed.
        UnroutableEventException: Event type is not one this service handles.
    """
    event_id = _attr(headers, "id")
    event_type = _attr(headers, "type")
    if not event_id:
        raise ValidationException("Missing ce-id header", field="id")
    if not event_type:
        raise ValidationException("Missing ce-type header", field="type")

    base_type = event_type.removesuffix(AUTH_CONTEXT_SUFFIX)
    if base_type in _DOCUMENT_KINDS:
        return _document_event(event_id, _DOCUMENT_KINDS[base_type], headers, body)
    if event_type in _IDENTITY_KINDS:
        return _identity_event(event_id, _IDENTITY_KINDS[event_type], body)
    raise UnroutableEventException(event_type, _attr(headers, "document"))
