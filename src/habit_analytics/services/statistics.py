"""
Per-habit statistics: streaks, completion rate and today's progress.

Everything else in the engine builds on these numbers. A day counts as
*completed* when the habit has at least one completion that day and, for
goal-measured habits, the day's summed value reaches the goal in force
that day (a completion without any value still counts).
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Set

from ..calendar import DayRecord, HabitCalendar
from ..models.habit import Habit
from ..progression import goal_for_day, is_goal_measured


logger = logging.getLogger(__name__)


@dataclass
class HabitStatistics:
    """Statistics bundle for one habit as of today."""
    habit_id: str
    habit_name: str
    is_completed_today: bool
    current_streak: int
    longest_streak: int
    completion_rate: float  # 0-1, rest days excluded
    today_value: Optional[float]
    today_progress: float  # 0-1
    effective_goal: Optional[float]
    total_completions: int  # Distinct check-in days

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DailyActivity:
    """How many habits were checked in on one day."""
    day: date
    label: str
    completed_count: int
    total_habits: int
    is_today: bool

    def to_dict(self) -> dict:
        return {
            "day": self.day.isoformat(),
            "label": self.label,
            "completed_count": self.completed_count,
            "total_habits": self.total_habits,
            "is_today": self.is_today,
        }


@dataclass
class OverviewStats:
    """Aggregate numbers across all habits."""
    total_habits: int
    completed_today: int
    best_current_streak: int
    best_longest_streak: int
    total_check_ins: int
    average_completion_rate: float

    def to_dict(self) -> dict:
        return asdict(self)


class StatisticsCalculator:
    """
    Computes streak and completion statistics for habits.

    Stateless apart from the injected calendar; every call recomputes
    from the habit's completion list.
    """

    def __init__(self, calendar: Optional[HabitCalendar] = None):
        self.calendar = calendar or HabitCalendar()

    # -------------------------------------------------------------------------
    # Day classification
    # -------------------------------------------------------------------------

    def goal_on(self, habit: Habit, day: date) -> Optional[float]:
        """Goal in force on ``day``."""
        return goal_for_day(habit, self.calendar.days_since_creation(habit, day))

    def is_day_completed(self, habit: Habit, record: Optional[DayRecord]) -> bool:
        if record is None or record.count == 0:
            return False
        goal = self.goal_on(habit, record.day)
        if is_goal_measured(goal) and record.value is not None:
            return record.value >= goal
        return True

    def checkin_days(self, habit: Habit) -> Set[date]:
        """Days with at least one completion."""
        return set(self.calendar.daily_log(habit))

    def completed_days(self, habit: Habit) -> Set[date]:
        """Days that count as completed."""
        return self._completed_days(habit, self.calendar.daily_log(habit))

    def _completed_days(self, habit: Habit, log: Dict[date, DayRecord]) -> Set[date]:
        return {day for day, record in log.items() if self.is_day_completed(habit, record)}

    def is_completed_on(self, habit: Habit, day: date) -> bool:
        return self.is_day_completed(habit, self.calendar.daily_log(habit).get(day))

    def is_completed_today(self, habit: Habit) -> bool:
        return self.is_completed_on(habit, self.calendar.today)

    # -------------------------------------------------------------------------
    # Streaks
    # -------------------------------------------------------------------------

    def current_streak(self, habit: Habit) -> int:
        """
        Consecutive completed days ending today or yesterday.

        Today only adds to the streak, it never breaks it. Rest days
        without a completion are skipped; a completed rest day counts.
        """
        log = self.calendar.daily_log(habit)
        if not log:
            return 0

        completed = self._completed_days(habit, log)
        earliest = min(log)
        today = self.calendar.today

        streak = 1 if today in completed else 0
        day = today - timedelta(days=1)

        while day >= earliest:
            if day in completed:
                streak += 1
            elif not self.calendar.is_rest_day(habit, day):
                break
            day -= timedelta(days=1)

        return streak

    def longest_streak(self, habit: Habit) -> int:
        """Longest run of completed days, using the same rest-day rule."""
        log = self.calendar.daily_log(habit)
        if not log:
            return 0

        completed = self._completed_days(habit, log)
        best = 0
        run = 0

        for day in self.calendar.iter_days(min(log), self.calendar.today):
            if day in completed:
                run += 1
                best = max(best, run)
            elif not self.calendar.is_rest_day(habit, day):
                run = 0

        return best

    # -------------------------------------------------------------------------
    # Rates and progress
    # -------------------------------------------------------------------------

    def completion_rate(self, habit: Habit) -> float:
        """Completed non-rest days over non-rest days since creation."""
        start = self.calendar.created_day(habit)
        return self._rate_between(habit, start, self.calendar.today)

    def recent_completion_rate(self, habit: Habit, days: int = 7) -> float:
        """Rest-day-aware completion rate over the trailing ``days`` days."""
        start, end = self.calendar.window(days)
        return self._rate_between(habit, start, end)

    def _rate_between(self, habit: Habit, start: date, end: date) -> float:
        completed = self.completed_days(habit)
        active = 0
        done = 0
        for day in self.calendar.iter_days(start, end):
            if self.calendar.is_rest_day(habit, day):
                continue
            active += 1
            if day in completed:
                done += 1

        if active == 0:
            return 0.0
        return min(max(done / active, 0.0), 1.0)

    def today_value(self, habit: Habit) -> Optional[float]:
        record = self.calendar.daily_log(habit).get(self.calendar.today)
        return record.value if record else None

    def today_progress(self, habit: Habit) -> float:
        today = self.calendar.today
        completed = self.is_completed_on(habit, today)
        goal = self.goal_on(habit, today)

        if not is_goal_measured(goal):
            return 1.0 if completed else 0.0

        value = self.today_value(habit)
        if value is None:
            return 1.0 if completed else 0.0
        return min(max(value / goal, 0.0), 1.0)

    # -------------------------------------------------------------------------
    # Bundles
    # -------------------------------------------------------------------------

    def calculate(self, habit: Habit) -> HabitStatistics:
        stats = HabitStatistics(
            habit_id=str(habit.id),
            habit_name=habit.name,
            is_completed_today=self.is_completed_today(habit),
            current_streak=self.current_streak(habit),
            longest_streak=self.longest_streak(habit),
            completion_rate=self.completion_rate(habit),
            today_value=self.today_value(habit),
            today_progress=self.today_progress(habit),
            effective_goal=self.goal_on(habit, self.calendar.today),
            total_completions=len(self.checkin_days(habit)),
        )
        logger.debug(
            f"Stats for {habit.name}: streak={stats.current_streak} "
            f"longest={stats.longest_streak} rate={stats.completion_rate:.2f}"
        )
        return stats

    def calculate_all(self, habits: List[Habit]) -> List[HabitStatistics]:
        return [self.calculate(habit) for habit in habits]

    def daily_activity(self, habits: List[Habit], days: int = 7) -> List[DailyActivity]:
        """Check-in counts for each of the last ``days`` days, oldest first."""
        today = self.calendar.today
        checkins = [self.checkin_days(habit) for habit in habits]

        activity = []
        for day in self.calendar.window_days(days):
            weekday = self.calendar.weekday_number(day)
            activity.append(DailyActivity(
                day=day,
                label=self.calendar.short_day_name(weekday),
                completed_count=sum(1 for days_done in checkins if day in days_done),
                total_habits=len(habits),
                is_today=day == today,
            ))
        return activity

    def overview(self, habits: List[Habit]) -> OverviewStats:
        if not habits:
            return OverviewStats(0, 0, 0, 0, 0, 0.0)

        stats = self.calculate_all(habits)
        return OverviewStats(
            total_habits=len(stats),
            completed_today=sum(1 for s in stats if s.is_completed_today),
            best_current_streak=max(s.current_streak for s in stats),
            best_longest_streak=max(s.longest_streak for s in stats),
            total_check_ins=sum(s.total_completions for s in stats),
            average_completion_rate=sum(s.completion_rate for s in stats) / len(stats),
        )
