"""Tests for the Firestore REST client against a mocked HTTP transport."""

import json

import httpx
import pytest

from collab_sync.infrastructure.exceptions import DocumentStoreError
from collab_sync.infrastructure.firebase._rest_client import FirestoreRESTClient
from tests.fakes import FakeCredentials

PREFIX = "/v1/projects/demo/databases/(default)/documents"


def _client(handler) -> FirestoreRESTClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirestoreRESTClient("demo", FakeCredentials(), http_client=http)


async def test_merge_set_sends_update_mask_for_each_field() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    db = _client(handler)
    await db.document("projects/p1").set(
        {"creator": {"uid": "u1"}, "lifecycleStatus": "Published", "odd-name": 1},
        merge=True,
    )

    request = seen[0]
    assert request.method == "PATCH"
    assert request.url.path == f"{PREFIX}/projects/p1"
    assert request.url.params.get_list("updateMask.fieldPaths") == [
        "creator",
        "lifecycleStatus",
        "`odd-name`",
    ]
    assert request.headers["Authorization"] == "Bearer test-token"
    body = json.loads(request.content)
    assert body["fields"]["lifecycleStatus"] == {"stringValue": "Published"}


async def test_plain_set_has_no_update_mask() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    await _client(handler).document("users/u1/contributions/p1").set({"status": "Initialized"})
    assert "updateMask.fieldPaths" not in seen[0].url.params
    assert seen[0].url.path == f"{PREFIX}/users/u1/contributions/p1"


async def test_get_missing_document_returns_none() -> None:
    db = _client(lambda request: httpx.Response(404, json={"error": {"code": 404}}))
    assert await db.document("users/ghost").get() is None


async def test_get_decodes_fields() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={
            "name": "projects/demo/databases/(default)/documents/users/u1",
            "fields": {"name": {"stringValue": "Ada"}},
        })

    snap = await _client(handler).document("users/u1").get()
    assert snap is not None
    assert snap.id == "u1"
    assert snap.to_dict() == {"name": "Ada"}


async def test_write_answered_with_404_raises() -> None:
    """A 404 on PATCH/POST (e.g. database missing) is a failed write, not a no-op."""
    db = _client(lambda request: httpx.Response(404, text="The database (default) does not exist"))

    with pytest.raises(DocumentStoreError) as exc_info:
        await db.document("projects/p1").set({"lifecycleStatus": "Published"}, merge=True)
    assert exc_info.value.details["status_code"] == 404

    with pytest.raises(DocumentStoreError) as exc_info:
        await db.collection("users/u1/notifications").add({"title": "Hi"})
    assert exc_info.value.details["status_code"] == 404


async def test_server_error_raises_document_store_error() -> None:
    db = _client(lambda request: httpx.Response(503, text="unavailable"))
    with pytest.raises(DocumentStoreError) as exc_info:
        await db.document("projects/p1").set({"a": 1})
    assert exc_info.value.details["status_code"] == 503
    assert exc_info.value.details["path"] == "projects/p1"


async def test_transport_error_raises_document_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(DocumentStoreError):
        await _client(handler).document("projects/p1").get()


async def test_delete_missing_document_is_silent() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.method)
        return httpx.Response(404)

    await _client(handler).document("users/u1/contributions/p1").delete()
    assert seen == ["DELETE"]


async def test_add_posts_to_parent_with_generated_document_id() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    ref = await _client(handler).collection("users/u1/notifications").add({"title": "Hi"})

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == f"{PREFIX}/users/u1/notifications"
    doc_id = request.url.params["documentId"]
    assert doc_id
    assert ref.id == doc_id
    assert ref.path == f"users/u1/notifications/{doc_id}"


async def test_stream_follows_page_tokens() -> None:
    pages = {
        None: {
            "documents": [{"name": f"{PREFIX}/projects/a", "fields": {"t": {"stringValue": "A"}}}],
            "nextPageToken": "next",
        },
        "next": {
            "documents": [{"name": f"{PREFIX}/projects/b", "fields": {"t": {"stringValue": "B"}}}],
        },
    }

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=pages[request.url.params.get("pageToken")])

    docs = [doc async for doc in _client(handler).collection("projects").stream()]
    assert [(d.id, d.to_dict()) for d in docs] == [("a", {"t": "A"}), ("b", {"t": "B"})]


async def test_aclose_leaves_injected_http_client_open() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    db = FirestoreRESTClient("demo", FakeCredentials(), http_client=http)
    await db.aclose()
    assert not http.is_closed
    await http.aclose()
