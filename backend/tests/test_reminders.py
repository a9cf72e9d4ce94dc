from datetime import datetime, timedelta, timezone

import pytest

from checkin.reminders import is_reminder_due, logged_today, next_streak, parse_reminder_time

NOW = datetime(2024, 12, 31, 22, 0, tzinfo=timezone.utc)  # 17:00 in New York


class TestParseReminderTime:
    def test_valid(self):
        assert parse_reminder_time("9:05") == "09:05"
        assert parse_reminder_time("17:00") == "17:00"
        assert parse_reminder_time(" OFF ") == "off"

    @pytest.mark.parametrize("value", ["", "24:00", "7pm", "12:60", "noon"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_reminder_time(value)


class TestIsReminderDue:
    def test_inside_window(self):
        assert is_reminder_due("17:00", NOW, "America/New_York")
        assert is_reminder_due("17:05", NOW, "America/New_York")
        assert is_reminder_due("16:55", NOW, "America/New_York")

    def test_outside_window(self):
        assert not is_reminder_due("17:06", NOW, "America/New_York")
        assert not is_reminder_due("17:00", NOW, "UTC")

    def test_off(self):
        assert not is_reminder_due("off", NOW, "UTC")
        assert not is_reminder_due(None, NOW, "UTC")

    def test_wraps_around_midnight(self):
        now = datetime(2024, 12, 31, 23, 58, tzinfo=timezone.utc)
        assert is_reminder_due("00:01", now, "UTC")


class TestStreaks:
    def test_first_log(self):
        assert next_streak(None, 0, NOW, "UTC") == 1

    def test_same_day_keeps_streak(self):
        assert next_streak(NOW - timedelta(hours=2), 4, NOW, "UTC") == 4

    def test_consecutive_day_extends(self):
        assert next_streak(NOW - timedelta(days=1), 4, NOW, "UTC") == 5

    def test_gap_resets(self):
        assert next_streak(NOW - timedelta(days=3), 4, NOW, "UTC") == 1

    def test_day_boundary_follows_timezone(self):
        # 01:00 UTC on the 31st is still the 30th in New York.
        last = datetime(2024, 12, 31, 1, 0, tzinfo=timezone.utc)
        assert next_streak(last, 2, NOW, "America/New_York") == 3
        assert next_streak(last, 2, NOW, "UTC") == 2


def test_logged_today():
    assert logged_today(NOW - timedelta(hours=1), NOW, "UTC")
    assert not logged_today(NOW - timedelta(days=1), NOW, "UTC")
    assert not logged_today(None, NOW, "UTC")
