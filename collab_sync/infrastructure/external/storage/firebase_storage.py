"""Firebase (Google Cloud) Storage via the JSON API, using httpx and google-auth."""

from __future__ import annotations

import asyncio
from urllib.parse import quote

import httpx

from collab_sync.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
)

_STORAGE_SCOPE = "https://www.googleapis.com/auth/devstorage.read_write"
_BASE = "https://storage.googleapis.com/storage/v1"


def _get_access_token(credentials) -> str:
    if not credentials.valid:
        from google.auth.transport.requests import Request

        credentials.refresh(Request())
    return credentials.token


class FirebaseStorageService:
    """Object deletion in the project's storage bucket.

    Object keys are the decoded object paths (e.g. "p1/img.png"); they are
    percent-encoded as a single path segment for the JSON API.
    """

    def __init__(
        self,
        bucket: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.bucket = bucket
        self._credentials = credentials
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    async def _headers(self) -> dict[str, str]:
        token = await asyncio.to_thread(_get_access_token, self._credentials)
        return {"Authorization": f"Bearer {token}"}

    def _object_url(self, object_key: str) -> str:
        return f"{_BASE}/b/{quote(self.bucket, safe='')}/o/{quote(object_key, safe='')}"

    async def delete(self, object_key: str) -> bool:
        """Delete object. Returns True if deleted, False if it did not exist."""
        if not object_key:
            raise StorageDeleteError(object_key, "empty object key")
        try:
            resp = await self._http.delete(
                self._object_url(object_key), headers=await self._headers()
            )
        except httpx.HTTPError as e:
            raise StorageDeleteError(object_key, str(e)) from e
        if resp.status_code == 404:
            return False
        if resp.status_code == 403:
            raise StoragePermissionError(object_key, "delete")
        if resp.status_code not in (200, 204):
            raise StorageDeleteError(
                object_key, f"{resp.status_code} {resp.text[:200]}"
            )
        return True

    async def exists(self, object_key: str) -> bool:
        """Return True if object exists (metadata GET)."""
        if not object_key:
            return False
        try:
            resp = await self._http.get(
                self._object_url(object_key), headers=await self._headers()
            )
        except httpx.HTTPError:
            return False
        return resp.status_code == 200
