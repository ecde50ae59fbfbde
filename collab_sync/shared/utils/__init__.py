"""Shared utilities: datetime, generators."""

from collab_sync.shared.utils.datetime import ensure_utc, parse_rfc3339, utc_now
from collab_sync.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "parse_rfc3339",
]
