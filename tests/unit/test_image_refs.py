"""Tests for resolving image references to object keys."""

import pytest

from collab_sync.application.services.image_refs import resolve_object_key


def test_download_url_resolves_to_decoded_object_path() -> None:
    ref = resolve_object_key(
        "https://firebasestorage.googleapis.com/v0/b/app.appspot.com/o/p1%2Fimg.png?alt=media&token=abc"
    )
    assert ref.key == "p1/img.png"
    assert ref.canonical is True


def test_download_url_without_query_string() -> None:
    ref = resolve_object_key("https://firebasestorage.googleapis.com/v0/b/b/o/covers%2Fa%20b.jpg")
    assert ref.key == "covers/a b.jpg"
    assert ref.canonical is True


@pytest.mark.parametrize(
    "reference",
    [
        "https://example.com/picture.png",
        "https://cdn.example.com/o/banner.png?w=200",
        "https://cdn.example.com/v0/o/banner.png",
        "just-a-name.png",
        "",
    ],
)
def test_non_storage_reference_falls_back_to_raw_string(reference: str) -> None:
    ref = resolve_object_key(reference)
    assert ref.key == reference
    assert ref.reference == reference
    assert ref.canonical is False
