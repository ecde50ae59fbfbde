"""
UTC datetime utilities for consistent timezone handling.

All datetime values written to the document store are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def parse_rfc3339(value: str | None) -> datetime | None:
    """
    Parse an RFC 3339 timestamp as sent by Firestore and CloudEvents.

    Accepts a trailing "Z" and fractional seconds of any precision
    (Firestore sends nanoseconds; fromisoformat only takes microseconds).

    Args:
        value: Timestamp string such as "2024-05-01T10:00:00.123456789Z"

    Returns:
        UTC-aware datetime, or None when value is empty
    """
    if not value:
        return None
    text = value.strip().replace("Z", "+00:00").replace("z", "+00:00")
    if "." in text:
        head, _, rest = text.partition(".")
        digits = ""
        while rest and rest[0].isdigit():
            digits, rest = digits + rest[0], rest[1:]
        text = f"{head}.{digits[:6].ljust(6, '0')}{rest}"
    return ensure_utc(datetime.fromisoformat(text))
