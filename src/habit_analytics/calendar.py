"""
Calendar utilities shared by every analytics component.

All day arithmetic (local-day conversion, weekday numbering, rest days,
week boundaries and per-day completion aggregation) lives here so the
services never walk days on their own.

Weekday numbers follow the habit model: Sunday=1, Monday=2 ... Saturday=7.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Tuple

from .models.habit import Habit

if TYPE_CHECKING:
    from .config import Settings


DAY_NAMES = ["", "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
SHORT_DAY_NAMES = ["", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

WEEKEND_DAYS = frozenset({1, 7})


@dataclass(frozen=True)
class DayRecord:
    """All completions of one habit on one calendar day."""
    day: date
    count: int
    value: Optional[float] = None  # Sum of recorded values, None if none carried one


class HabitCalendar:
    """
    Injectable clock and calendar rules.

    Args:
        now: Fixed analysis instant. Uses the wall clock when omitted.
        tz: Zone used to place aware timestamps on a calendar day. Naive
            timestamps are taken as already local. None means system local.
        first_weekday: Weekday number weeks start on (2 = Monday, ISO weeks).
    """

    def __init__(
        self,
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
        first_weekday: int = 2,
    ):
        if not 1 <= first_weekday <= 7:
            raise ValueError(f"first_weekday must be 1-7, got {first_weekday}")
        self._now = now
        self.tz = tz
        self.first_weekday = first_weekday

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        now: Optional[datetime] = None,
    ) -> "HabitCalendar":
        return cls(now=now, tz=settings.tzinfo, first_weekday=settings.first_weekday)

    # -------------------------------------------------------------------------
    # Clock
    # -------------------------------------------------------------------------

    def now(self) -> datetime:
        """The analysis instant."""
        if self._now is None:
            return datetime.now(self.tz) if self.tz else datetime.now()
        return self._now

    @property
    def today(self) -> date:
        return self.local_date(self.now())

    @property
    def yesterday(self) -> date:
        return self.today - timedelta(days=1)

    def local_date(self, moment: datetime) -> date:
        """Calendar day a timestamp falls on in this calendar's zone."""
        if moment.tzinfo is None:
            return moment.date()
        return moment.astimezone(self.tz).date()

    # -------------------------------------------------------------------------
    # Weekdays and weeks
    # -------------------------------------------------------------------------

    @staticmethod
    def weekday_number(day: date) -> int:
        """Weekday number with Sunday=1 ... Saturday=7."""
        return day.isoweekday() % 7 + 1

    @staticmethod
    def day_name(weekday: int) -> str:
        return DAY_NAMES[weekday]

    @staticmethod
    def short_day_name(weekday: int) -> str:
        return SHORT_DAY_NAMES[weekday]

    def is_rest_day(self, habit: Habit, day: date) -> bool:
        if not habit.rest_days:
            return False
        return self.weekday_number(day) in habit.rest_days

    def week_start(self, day: Optional[date] = None) -> date:
        """First day of the week containing ``day`` (default today)."""
        day = day or self.today
        offset = (self.weekday_number(day) - self.first_weekday) % 7
        return day - timedelta(days=offset)

    # -------------------------------------------------------------------------
    # Day ranges
    # -------------------------------------------------------------------------

    @staticmethod
    def iter_days(start: date, end: date) -> Iterator[date]:
        """Yield every day from start to end inclusive."""
        day = start
        while day <= end:
            yield day
            day += timedelta(days=1)

    def window(self, days: int) -> Tuple[date, date]:
        """The ``days`` calendar days ending today, inclusive."""
        end = self.today
        return end - timedelta(days=max(days, 1) - 1), end

    def window_days(self, days: int) -> Iterator[date]:
        start, end = self.window(days)
        return self.iter_days(start, end)

    # -------------------------------------------------------------------------
    # Habit lifetime
    # -------------------------------------------------------------------------

    def created_day(self, habit: Habit) -> date:
        return self.local_date(habit.created_at)

    def days_since_creation(self, habit: Habit, day: Optional[date] = None) -> int:
        """Whole calendar days from the creation day to ``day``, never negative."""
        day = day or self.today
        return max(0, (day - self.created_day(habit)).days)

    def daily_log(self, habit: Habit) -> Dict[date, DayRecord]:
        """Completions de-duplicated by calendar day."""
        counts: Dict[date, int] = {}
        values: Dict[date, float] = {}
        for completion in habit.completions:
            day = self.local_date(completion.date)
            counts[day] = counts.get(day, 0) + 1
            if completion.value is not None:
                values[day] = values.get(day, 0.0) + completion.value

        return {
            day: DayRecord(day=day, count=count, value=values.get(day))
            for day, count in sorted(counts.items())
        }
