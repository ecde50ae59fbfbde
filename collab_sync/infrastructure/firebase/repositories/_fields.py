"""Field helpers shared by the Firestore repositories."""

from typing import Any


def drop_none(data: dict[str, Any]) -> dict[str, Any]:
    """Return data without keys whose value is None.

    Denormalized fields copied from a missing profile or project are left
    out of the document instead of being stored as null.
    """
    return {k: v for k, v in data.items() if v is not None}


def as_str(value: Any) -> str | None:
    """Return value when it is a string, otherwise None."""
    return value if isinstance(value, str) else None
