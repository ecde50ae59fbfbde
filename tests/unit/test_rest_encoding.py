"""Tests for Firestore REST value encoding and decoding."""

from datetime import UTC, datetime, timedelta, timezone

from collab_sync.infrastructure.firebase._rest_encoding import (
    decode_document,
    decode_fields,
    encode_document,
)


def test_encode_document_maps_python_types() -> None:
    body = encode_document({
        "title": "T",
        "count": 3,
        "ratio": 0.5,
        "active": True,
        "url": None,
        "images": ("a", "b"),
        "creator": {"uid": "u1"},
    })
    fields = body["fields"]
    assert fields["title"] == {"stringValue": "T"}
    assert fields["count"] == {"integerValue": "3"}
    assert fields["ratio"] == {"doubleValue": 0.5}
    assert fields["active"] == {"booleanValue": True}
    assert fields["url"] == {"nullValue": None}
    assert fields["images"] == {"arrayValue": {"values": [{"stringValue": "a"}, {"stringValue": "b"}]}}
    assert fields["creator"] == {"mapValue": {"fields": {"uid": {"stringValue": "u1"}}}}


def test_encode_timestamp_converts_to_utc() -> None:
    eat = timezone(timedelta(hours=3))
    body = encode_document({"createdAt": datetime(2024, 5, 1, 13, 0, 0, tzinfo=eat)})
    assert body["fields"]["createdAt"] == {"timestampValue": "2024-05-01T10:00:00.000000Z"}


def test_decode_fields_handles_nested_and_timestamps() -> None:
    data = decode_fields({
        "title": {"stringValue": "T"},
        "n": {"integerValue": "7"},
        "images": {"arrayValue": {"values": [{"stringValue": "x"}, {"integerValue": "1"}]}},
        "empty": {"arrayValue": {}},
        "creator": {"mapValue": {"fields": {"name": {"stringValue": "Ada"}}}},
        "createdAt": {"timestampValue": "2024-05-01T10:00:00.123456789Z"},
        "ref": {"referenceValue": "projects/x/databases/(default)/documents/users/u1"},
    })
    assert data["title"] == "T"
    assert data["n"] == 7
    assert data["images"] == ["x", 1]
    assert data["empty"] == []
    assert data["creator"] == {"name": "Ada"}
    assert data["createdAt"] == datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=UTC)
    assert data["ref"].endswith("/users/u1")


def test_decode_document_reads_fields_once() -> None:
    assert decode_document({"name": "n", "fields": {"a": {"stringValue": "b"}}}) == {"a": "b"}
    assert decode_document(None) == {}
    assert decode_document({"name": "n"}) == {}
