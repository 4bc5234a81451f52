"""
Session date helpers driven by a course's weekly schedule.

Only the first schedule slot is considered; slots are dicts shaped like
``{"days": ["monday"], "startTime": "18:00", "endTime": "19:00", "timezone": "..."}``.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Mapping, Optional, Sequence

from ..core.constants import SESSION_LOOKAHEAD_DAYS, WEEKDAYS
from ..core.timezone_utils import ensure_utc, utc_now

Schedule = Optional[Sequence[Mapping[str, Any]]]


def _parse_start(start_time: str) -> tuple[int, int]:
    hours, minutes = start_time.split(":")
    return int(hours), int(minutes)


def calculate_next_session_date(schedule: Schedule, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Next scheduled session strictly after ``now``.

    Scans today and the following days up to the lookahead window and returns
    the first matching weekday at the slot's start time. Returns None when the
    schedule is empty or nothing matches inside the window.
    """
    if not schedule:
        return None

    now = ensure_utc(now) if now else utc_now()
    slot = schedule[0]
    target_days = {WEEKDAYS.index(day.lower()) for day in slot.get("days", []) if day.lower() in WEEKDAYS}
    if not target_days:
        return None
    hours, minutes = _parse_start(slot.get("startTime", "00:00"))

    day = now
    for _ in range(SESSION_LOOKAHEAD_DAYS):
        if day.weekday() in target_days:
            candidate = day.replace(hour=hours, minute=minutes, second=0, microsecond=0)
            if candidate > now:
                return candidate
        day = (day + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    return None


def has_session_occurred(schedule: Schedule, original_session_date: datetime, now: Optional[datetime] = None) -> bool:
    """True once the booked session lies in the past."""
    now = ensure_utc(now) if now else utc_now()
    next_session = calculate_next_session_date(schedule, now)
    if next_session is not None:
        return next_session > ensure_utc(original_session_date)
    return ensure_utc(original_session_date) < now
