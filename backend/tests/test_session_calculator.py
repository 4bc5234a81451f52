"""Tests for schedule-driven session dates."""

from datetime import datetime, timedelta, timezone

from app.utils.session_calculator import calculate_next_session_date, has_session_occurred

# A Wednesday
NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

MONDAY_EVENINGS = [{"days": ["monday"], "startTime": "18:00", "endTime": "19:00", "timezone": "UTC"}]


class TestCalculateNextSessionDate:
    def test_next_matching_weekday(self):
        assert calculate_next_session_date(MONDAY_EVENINGS, NOW) == datetime(2025, 1, 20, 18, 0, tzinfo=timezone.utc)

    def test_later_today(self):
        schedule = [{"days": ["Wednesday"], "startTime": "18:30"}]

        assert calculate_next_session_date(schedule, NOW) == datetime(2025, 1, 15, 18, 30, tzinfo=timezone.utc)

    def test_earlier_today_rolls_to_next_week(self):
        schedule = [{"days": ["wednesday"], "startTime": "09:00"}]

        assert calculate_next_session_date(schedule, NOW) == datetime(2025, 1, 22, 9, 0, tzinfo=timezone.utc)

    def test_only_first_slot_counts(self):
        schedule = MONDAY_EVENINGS + [{"days": ["thursday"], "startTime": "10:00"}]

        assert calculate_next_session_date(schedule, NOW).weekday() == 0

    def test_empty_schedule(self):
        assert calculate_next_session_date([], NOW) is None
        assert calculate_next_session_date(None, NOW) is None

    def test_unknown_days(self):
        assert calculate_next_session_date([{"days": ["someday"], "startTime": "10:00"}], NOW) is None

    def test_naive_now_is_treated_as_utc(self):
        naive = NOW.replace(tzinfo=None)

        assert calculate_next_session_date(MONDAY_EVENINGS, naive) == datetime(2025, 1, 20, 18, 0, tzinfo=timezone.utc)


class TestHasSessionOccurred:
    def test_booked_session_before_next_one(self):
        assert has_session_occurred(MONDAY_EVENINGS, NOW - timedelta(days=2), NOW) is True

    def test_upcoming_booked_session(self):
        assert has_session_occurred(MONDAY_EVENINGS, datetime(2025, 1, 20, 18, 0, tzinfo=timezone.utc), NOW) is False

    def test_without_schedule_compares_with_now(self):
        assert has_session_occurred([], NOW - timedelta(hours=1), NOW) is True
        assert has_session_occurred([], NOW + timedelta(hours=1), NOW) is False
