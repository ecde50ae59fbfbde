"""Tests for project enrichment (on create) and asset cleanup (on delete)."""

from datetime import UTC, datetime

import pytest

from collab_sync.api.v1.dependencies import (
    project_cleanup_service,
    project_enrichment_service,
)
from collab_sync.application.dtos.trigger import DocumentEvent, TriggerKind
from collab_sync.application.use_cases import ProjectAssetCleanupService
from collab_sync.domain.exceptions import HandlerFailedException, ValidationException
from tests.fakes import CREATED_AT, FakeStorage

STORAGE_URL = "https://firebasestorage.googleapis.com/v0/b/demo.appspot.com/o/{}?alt=media&token=t"


def _created(project_id: str = "p1", auth_id: str | None = "u1", create_time=CREATED_AT) -> DocumentEvent:
    return DocumentEvent(
        event_id="e1",
        kind=TriggerKind.DOCUMENT_CREATED,
        document=f"projects/{project_id}",
        value={"title": "Analytical Engine"},
        create_time=create_time,
        auth_id=auth_id,
        params={"projectId": project_id},
    )


def _deleted(old_value: dict | None, project_id: str = "p1") -> DocumentEvent:
    return DocumentEvent(
        event_id="e2",
        kind=TriggerKind.DOCUMENT_DELETED,
        document=f"projects/{project_id}",
        old_value=old_value,
        params={"projectId": project_id},
    )


class TestProjectEnrichment:
    async def test_writes_creator_snapshot_and_published_status(self, runtime, store) -> None:
        await project_enrichment_service(runtime).on_project_created(_created())

        doc = store.docs["projects/p1"]
        assert doc["creator"] == {
            "uid": "u1",
            "name": "Ada",
            "picture": "https://cdn.example.com/ada.png",
        }
        assert doc["createdAt"] == CREATED_AT
        assert doc["lifecycleStatus"] == "Published"
        # merge keeps fields the client wrote
        assert doc["title"] == "Analytical Engine"
        assert doc["images"] == []

    async def test_missing_profile_writes_uid_only(self, runtime, store) -> None:
        enrichment = await project_enrichment_service(runtime).on_project_created(_created(auth_id="nobody"))

        assert enrichment is not None
        assert store.docs["projects/p1"]["creator"] == {"uid": "nobody"}
        assert store.docs["projects/p1"]["lifecycleStatus"] == "Published"

    async def test_without_authenticated_user_is_skipped(self, runtime, store) -> None:
        result = await project_enrichment_service(runtime).on_project_created(_created(auth_id=None))

        assert result is None
        assert store.writes == []

    async def test_missing_create_time_uses_current_time(self, runtime, store) -> None:
        before = datetime.now(UTC)
        await project_enrichment_service(runtime).on_project_created(_created(create_time=None))
        assert store.docs["projects/p1"]["createdAt"] >= before

    async def test_redelivery_converges(self, runtime, store) -> None:
        service = project_enrichment_service(runtime)
        await service.on_project_created(_created())
        first = dict(store.docs["projects/p1"])
        await service.on_project_created(_created())
        assert store.docs["projects/p1"] == first

    async def test_store_failure_propagates(self, runtime, store) -> None:
        store.fail("set", "projects/p1")
        with pytest.raises(Exception, match="injected failure"):
            await project_enrichment_service(runtime).on_project_created(_created())

    async def test_missing_project_id_param_is_rejected(self, runtime) -> None:
        event = DocumentEvent(event_id="e", kind=TriggerKind.DOCUMENT_CREATED, document="projects/p1", auth_id="u1")
        with pytest.raises(ValidationException):
            await project_enrichment_service(runtime).on_project_created(event)


class TestProjectAssetCleanup:
    async def test_deletes_key_decoded_from_download_url(self, runtime, storage) -> None:
        storage.objects.add("p1/img.png")

        result = await project_cleanup_service(runtime).on_project_deleted(
            _deleted({"images": [STORAGE_URL.format("p1%2Fimg.png")]})
        )

        assert storage.delete_calls == ["p1/img.png"]
        assert result.deleted == ["p1/img.png"]
        assert "p1/img.png" not in storage.objects

    async def test_already_missing_objects_count_as_done(self) -> None:
        storage = FakeStorage()
        result = await ProjectAssetCleanupService(storage).on_project_deleted(
            _deleted({"images": [STORAGE_URL.format("p1%2Fgone.png")]})
        )
        assert result.missing == ["p1/gone.png"]
        assert result.deleted == []

    async def test_raw_reference_failure_is_swallowed(self) -> None:
        storage = FakeStorage({"p1/a.png"})
        storage.fail("https://example.com/external.png")

        result = await ProjectAssetCleanupService(storage).on_project_deleted(
            _deleted({"images": ["https://example.com/external.png", STORAGE_URL.format("p1%2Fa.png")]})
        )

        assert result.skipped_failures == ["https://example.com/external.png"]
        assert result.deleted == ["p1/a.png"]

    async def test_external_url_with_o_segment_is_not_an_owned_key(self) -> None:
        storage = FakeStorage({"banner.png"})
        external = "https://cdn.example.com/o/banner.png?w=200"

        result = await ProjectAssetCleanupService(storage).on_project_deleted(_deleted({"images": [external]}))

        assert storage.delete_calls == [external]
        assert "banner.png" in storage.objects
        assert result.missing == [external]

    async def test_owned_object_failure_raises_after_all_attempted(self) -> None:
        storage = FakeStorage({"p1/a.png", "p1/c.png"})
        storage.fail("p1/b.png")
        images = [STORAGE_URL.format(f"p1%2F{name}") for name in ("a.png", "b.png", "c.png")]

        with pytest.raises(HandlerFailedException) as exc_info:
            await ProjectAssetCleanupService(storage).on_project_deleted(_deleted({"images": images}))

        assert sorted(storage.delete_calls) == ["p1/a.png", "p1/b.png", "p1/c.png"]
        assert storage.objects == set()
        assert len(exc_info.value.errors) == 1
        assert exc_info.value.error_code == "HANDLER_FAILED"

    @pytest.mark.parametrize(
        "old_value",
        [None, {}, {"images": []}, {"images": "not-a-list"}, {"images": [1, None, {"x": 1}]}],
    )
    async def test_nothing_to_delete_is_a_no_op(self, old_value) -> None:
        storage = FakeStorage()
        result = await ProjectAssetCleanupService(storage).on_project_deleted(_deleted(old_value))
        assert storage.delete_calls == []
        assert result.attempted == []

    async def test_non_string_entries_are_ignored(self) -> None:
        storage = FakeStorage({"p1/a.png"})
        result = await ProjectAssetCleanupService(storage).on_project_deleted(
            _deleted({"images": [42, STORAGE_URL.format("p1%2Fa.png")]})
        )
        assert storage.delete_calls == ["p1/a.png"]
        assert result.attempted == ["p1/a.png"]
