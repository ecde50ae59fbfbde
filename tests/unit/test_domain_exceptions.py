"""Tests for domain and infrastructure exceptions."""

from collab_sync.domain.exceptions import (
    CollabSyncException,
    HandlerFailedException,
    UnroutableEventException,
    ValidationException,
)
from collab_sync.infrastructure.exceptions import (
    DocumentStoreError,
    StorageDeleteError,
    StorageException,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = CollabSyncException("boom")
    assert exc.error_code == "CollabSyncException"
    assert exc.to_dict() == {"error": "CollabSyncException", "message": "boom", "details": {}}


def test_validation_exception_carries_field() -> None:
    exc = ValidationException("Missing ce-id header", field="id")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "id"}


def test_unroutable_event_details() -> None:
    exc = UnroutableEventException("document.created", "users/u1")
    assert exc.error_code == "UNROUTABLE_EVENT"
    assert exc.details == {"event_type": "document.created", "document": "users/u1"}
    assert "users/u1" in exc.message


def test_handler_failed_keeps_underlying_errors() -> None:
    errors = [StorageDeleteError("p1/a.png", "timeout"), DocumentStoreError("projects/p1", 503, "down")]
    exc = HandlerFailedException("project-delete cleanup", errors)
    assert exc.errors == errors
    assert exc.details["handler"] == "project-delete cleanup"
    assert len(exc.details["errors"]) == 2
    assert "2 error(s)" in exc.message


def test_infrastructure_errors_share_base() -> None:
    assert isinstance(StorageDeleteError("k", "r"), StorageException)
    assert isinstance(DocumentStoreError("p", 500, "r"), CollabSyncException)
