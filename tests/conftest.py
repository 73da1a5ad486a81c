"""Shared fixtures: a fixed calendar and a habit factory."""

from datetime import datetime, time, timedelta
from typing import Iterable, Optional

import pytest

from habit_analytics.calendar import HabitCalendar
from habit_analytics.models import Habit, HabitCompletion
from habit_analytics.services import StatisticsCalculator


# Wednesday, 18 March 2026 at noon (naive = local time)
NOW = datetime(2026, 3, 18, 12, 0)
TODAY = NOW.date()


def days_ago(days: int, hour: int = 9) -> datetime:
    """A local timestamp ``days`` days before the fixed today."""
    return datetime.combine(TODAY - timedelta(days=days), time(hour))


def build_habit(
    name: str = "Drink Water",
    created_days_ago: int = 30,
    done_days_ago: Iterable[int] = (),
    value: Optional[float] = None,
    **kwargs,
) -> Habit:
    """Habit created ``created_days_ago`` days ago, completed on ``done_days_ago``."""
    completions = [HabitCompletion(date=days_ago(d), value=value) for d in done_days_ago]
    return Habit(
        name=name,
        created_at=days_ago(created_days_ago, hour=8),
        completions=completions,
        **kwargs,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def at():
    """Timestamp helper: ``at(3)`` is 09:00 three days ago."""
    return days_ago


@pytest.fixture
def make_habit():
    """Habit factory, see ``build_habit``."""
    return build_habit


@pytest.fixture
def calendar():
    return HabitCalendar(now=NOW)


@pytest.fixture
def statistics(calendar):
    return StatisticsCalculator(calendar)
