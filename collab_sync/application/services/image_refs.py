"""Resolve project image references to blob store object keys."""

import re
from dataclasses import dataclass
from urllib.parse import unquote

# https://<host>/v0/b/<bucket>/o/<encoded-object-path>?<query>
STORAGE_URL_PATTERN = re.compile(r"/v0/b/[^/?#]+/o/([^?#]+)")


@dataclass(frozen=True)
class ObjectKeyRef:
    """Object key resolved from an image reference.

    canonical is False when the reference did not look like a storage
    download URL and the raw string is used as the key instead.
    """

    reference: str
    key: str
    canonical: bool


def resolve_object_key(reference: str) -> ObjectKeyRef:
    """Map an image reference to the object key to delete.

    Canonical download URLs yield the percent-decoded object path
    (".../o/p1%2Fimg.png?alt=media" -> "p1/img.png"); anything else is
    returned unchanged as a best-effort key.
    """
    match = STORAGE_URL_PATTERN.search(reference)
    if match:
        return ObjectKeyRef(reference, unquote(match.group(1)), canonical=True)
    return ObjectKeyRef(reference, reference, canonical=False)
