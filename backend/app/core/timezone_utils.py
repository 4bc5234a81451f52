"""
Timezone utilities for the SkillBridge platform.

SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
columns, so every comparison against "now" goes through ``ensure_utc``.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO 8601 date or datetime string into an aware UTC datetime.

    Accepts plain dates (``2025-01-31``) and a trailing ``Z``.

    Raises:
        ValueError: If the string is not a valid ISO date/datetime
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    return ensure_utc(parsed)
