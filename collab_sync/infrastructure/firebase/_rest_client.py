"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Paths are relative to the database root and may address subcollections,
e.g. ``users/u1/contributions/p1``.
"""

from __future__ import annotations

import asyncio
import json
import re
from collections.abc import AsyncIterator
from typing import Any

import httpx

from collab_sync.infrastructure.exceptions import DocumentStoreError
from collab_sync.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_document,
)
from collab_sync.shared.utils.generators import generate_cuid

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_SIMPLE_FIELD = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")


def _get_credentials(key_dict: dict, scopes: list[str] | None = None):
    """Return google.oauth2.service_account.Credentials for Firestore (and Storage)."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=scopes or [_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    if not credentials.valid:
        from google.auth.transport.requests import Request

        credentials.refresh(Request())
    return credentials.token


def _field_path(name: str) -> str:
    """Quote a top-level field name for updateMask when it is not a simple identifier."""
    if _SIMPLE_FIELD.match(name):
        return name
    return "`" + name.replace("\\", "\\\\").replace("`", "\\`") + "`"


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    path: str,
    method: str = "GET",
    body: dict | None = None,
    params: list[tuple[str, str]] | None = None,
    access_token: str | None = None,
) -> dict | None:
    """Perform async HTTP request to Firestore REST API.

    404 returns None for GET (missing document) and DELETE (already gone);
    for writes it raises DocumentStoreError like any other failure.
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method not in ("GET", "PATCH", "POST", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    try:
        resp = await client.request(
            method, url, headers=headers, json=body, params=params
        )
    except httpx.HTTPError as e:
        raise DocumentStoreError(path, 0, str(e)) from e
    if resp.status_code == 404 and method in ("GET", "DELETE"):
        return None
    if resp.status_code not in (200, 204):
        raise DocumentStoreError(path, resp.status_code, resp.text[:200])
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self.path = path.strip("/")

    @property
    def id(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def _url(self) -> str:
        return f"{_BASE}/{self._client._prefix}/{self.path}"

    async def set(self, data: dict[str, Any], merge: bool = False) -> None:
        """Write the document.

        Without merge the document is replaced. With merge only the given
        top-level fields are written (updateMask); other fields survive and
        the document is created if it does not exist.
        """
        params = None
        if merge:
            params = [("updateMask.fieldPaths", _field_path(k)) for k in data]
        await _request_async(
            self._client._http,
            self._url,
            self.path,
            method="PATCH",
            body=encode_document(data),
            params=params,
            access_token=await self._client.get_token(),
        )

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            self._url,
            self.path,
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing."""
        await _request_async(
            self._client._http,
            self._url,
            self.path,
            method="DELETE",
            access_token=await self._client.get_token(),
        )


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class CollectionReference:
    """Reference to a (sub)collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self.path = path.strip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self.path}/{document_id}")

    async def add(self, data: dict[str, Any]) -> DocumentReference:
        """Create a document with a generated ID and return its reference."""
        parent, _, collection_id = self.path.rpartition("/")
        parent_url = f"{_BASE}/{self._client._prefix}"
        if parent:
            parent_url = f"{parent_url}/{parent}"
        doc_id = generate_cuid()
        await _request_async(
            self._client._http,
            f"{parent_url}/{collection_id}",
            self.path,
            method="POST",
            body=encode_document(data),
            params=[("documentId", doc_id)],
            access_token=await self._client.get_token(),
        )
        return self.document(doc_id)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List documents in the collection (shallow), following page tokens."""
        url = f"{_BASE}/{self._client._prefix}/{self.path}"
        page_token: str | None = None
        while True:
            params = [("pageToken", page_token)] if page_token else None
            out = await _request_async(
                self._client._http,
                url,
                self.path,
                params=params,
                access_token=await self._client.get_token(),
            )
            if not out:
                return
            for doc in out.get("documents", []):
                name = doc.get("name", "")
                doc_id = name.split("/")[-1] if name else ""
                yield DocumentSnapshot(doc_id, decode_document(doc))
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        database: str = "(default)",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/{database}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, path: str) -> CollectionReference:
        return CollectionReference(self, path)

    def document(self, path: str) -> DocumentReference:
        return DocumentReference(self, path)
