"""Tests for the shared habit calendar."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from habit_analytics.calendar import HabitCalendar
from habit_analytics.config import Settings
from habit_analytics.models import HabitCompletion


class TestClock:
    """Tests for the injected clock."""

    def test_today_from_injected_now(self, calendar, today):
        """Test today comes from the injected instant."""
        assert calendar.today == today
        assert calendar.yesterday == date(2026, 3, 17)

    def test_naive_timestamps_are_local(self, calendar):
        """Test naive datetimes keep their calendar day."""
        assert calendar.local_date(datetime(2026, 3, 17, 23, 59)) == date(2026, 3, 17)

    def test_aware_timestamps_use_zone(self):
        """Test aware datetimes are converted to the configured zone."""
        cal = HabitCalendar(now=datetime(2026, 3, 18, 12, 0), tz=ZoneInfo("America/New_York"))
        moment = datetime(2026, 3, 18, 2, 0, tzinfo=timezone.utc)
        assert cal.local_date(moment) == date(2026, 3, 17)

    def test_invalid_first_weekday(self):
        """Test first weekday outside 1-7 is rejected."""
        with pytest.raises(ValueError):
            HabitCalendar(first_weekday=0)

    def test_from_settings(self):
        """Test calendar picks up zone and week start from settings."""
        settings = Settings(timezone="Europe/Berlin", first_weekday=1)
        cal = HabitCalendar.from_settings(settings, now=datetime(2026, 3, 18, 12, 0))
        assert cal.tz == ZoneInfo("Europe/Berlin")
        assert cal.first_weekday == 1


class TestWeekdays:
    """Tests for weekday numbering and weeks."""

    def test_sunday_is_one(self):
        """Test Sunday=1 and Saturday=7."""
        assert HabitCalendar.weekday_number(date(2026, 3, 15)) == 1
        assert HabitCalendar.weekday_number(date(2026, 3, 16)) == 2
        assert HabitCalendar.weekday_number(date(2026, 3, 21)) == 7

    def test_week_starts_monday_by_default(self, calendar):
        """Test ISO week start."""
        assert calendar.week_start() == date(2026, 3, 16)
        assert calendar.week_start(date(2026, 3, 15)) == date(2026, 3, 9)

    def test_sunday_week_start(self, now):
        """Test weeks starting on Sunday."""
        cal = HabitCalendar(now=now, first_weekday=1)
        assert cal.week_start() == date(2026, 3, 15)

    def test_rest_day(self, calendar, make_habit):
        """Test rest day lookup by weekday number."""
        habit = make_habit(rest_days={1, 7})
        assert calendar.is_rest_day(habit, date(2026, 3, 15))
        assert not calendar.is_rest_day(habit, date(2026, 3, 16))


class TestDayRanges:
    """Tests for windows and habit lifetime."""

    def test_window_is_inclusive(self, calendar):
        """Test a 7-day window ends today."""
        assert calendar.window(7) == (date(2026, 3, 12), date(2026, 3, 18))
        assert len(list(calendar.window_days(30))) == 30

    def test_days_since_creation(self, calendar, make_habit):
        """Test whole calendar days since creation."""
        assert calendar.days_since_creation(make_habit(created_days_ago=15)) == 15
        assert calendar.days_since_creation(make_habit(created_days_ago=0)) == 0

    def test_days_since_creation_never_negative(self, calendar, make_habit):
        """Test habits created in the future report zero days."""
        assert calendar.days_since_creation(make_habit(created_days_ago=-2)) == 0


class TestDailyLog:
    """Tests for per-day completion aggregation."""

    def test_duplicates_collapse_to_one_day(self, calendar, make_habit, at):
        """Test same-day completions are merged and values summed."""
        habit = make_habit()
        habit.completions = [
            HabitCompletion(date=at(0, hour=8), value=300),
            HabitCompletion(date=at(0, hour=18), value=200),
            HabitCompletion(date=at(1)),
        ]
        log = calendar.daily_log(habit)

        assert len(log) == 2
        assert log[date(2026, 3, 18)].count == 2
        assert log[date(2026, 3, 18)].value == 500
        assert log[date(2026, 3, 17)].value is None

    def test_empty_history(self, calendar, make_habit):
        """Test a habit without completions has an empty log."""
        assert calendar.daily_log(make_habit()) == {}
