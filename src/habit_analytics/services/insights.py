"""
Insight generation from habit history.

Scans all habits and emits ranked observations in five families:
streaks, weekday patterns, milestones, week-over-week improvement and
motivation. Output is sorted by priority (stable for ties) and capped.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from ..calendar import HabitCalendar
from ..models.habit import Habit
from ..models.insight import (
    DayOfWeekStats,
    Insight,
    InsightPriority,
    InsightType,
    WeeklyComparison,
)
from .statistics import HabitStatistics, StatisticsCalculator


logger = logging.getLogger(__name__)


# Streak rules
HOT_STREAK_DAYS = 7
URGENT_STREAK_DAYS = 30
AT_RISK_MIN_STREAK = 3  # exclusive
NEAR_RECORD_MAX_GAP = 3
NEAR_RECORD_MIN_STREAK = 5

# Pattern rules
POWER_DAY_RATE = 0.60
WEEKEND_DIFF_THRESHOLD = 0.15

# Milestones
CHECKIN_MILESTONES = [50, 100, 250, 500, 1000, 2500, 5000]
CHECKIN_MILESTONE_BAND = 50
HIGH_PRIORITY_CHECKIN_MILESTONE = 500
STREAK_MILESTONES = [30, 60, 90, 180, 365]
AGE_MILESTONES = [30, 90, 180, 365]

# Improvement rules (percent)
IMPROVED_PERCENT = 10
STRONGLY_IMPROVED_PERCENT = 25
DECLINED_PERCENT = 20
HABIT_SOARING_PERCENT = 50
HABIT_SOARING_MIN_CHECKINS = 3

CONSISTENCY_RATE = 0.80


class InsightGenerator:
    """
    Generates ranked behavioral insights for a set of habits.

    Deterministic for a given snapshot and calendar: calling it twice
    returns the same ordered list.
    """

    def __init__(
        self,
        calendar: Optional[HabitCalendar] = None,
        statistics: Optional[StatisticsCalculator] = None,
        limit: int = 15,
        pattern_window_days: int = 30,
    ):
        self.calendar = calendar or (statistics.calendar if statistics else HabitCalendar())
        self.statistics = statistics or StatisticsCalculator(self.calendar)
        self.limit = limit
        self.pattern_window_days = pattern_window_days

    def generate(self, habits: List[Habit]) -> List[Insight]:
        """Run every rule family and return the top insights."""
        if not habits:
            return [self._starter_insight()]

        entries = [(habit, self.statistics.calculate(habit)) for habit in habits]

        insights: List[Insight] = []
        insights.extend(self._streak_insights(entries))
        insights.extend(self._pattern_insights(habits))
        insights.extend(self._milestone_insights(entries))
        insights.extend(self._improvement_insights(habits))
        insights.extend(self._motivation_insights(entries))

        ranked = sorted(insights, key=lambda insight: insight.priority, reverse=True)
        logger.debug(f"Generated {len(insights)} insights for {len(habits)} habits")
        return ranked[:self.limit]

    def _insight(self, **kwargs) -> Insight:
        return Insight(created_at=self.calendar.now(), **kwargs)

    def _starter_insight(self) -> Insight:
        return self._insight(
            type=InsightType.MOTIVATION,
            title="Welcome!",
            message="Add your first habit to start tracking and receive personalized insights.",
            priority=InsightPriority.HIGH,
            is_positive=True,
        )

    # -------------------------------------------------------------------------
    # Streaks
    # -------------------------------------------------------------------------

    def _streak_insights(self, entries: List[Tuple[Habit, HabitStatistics]]) -> List[Insight]:
        insights = []

        best_habit, best = max(entries, key=lambda entry: entry[1].current_streak)
        if best.current_streak >= HOT_STREAK_DAYS:
            insights.append(self._insight(
                type=InsightType.STREAK,
                title="On Fire!",
                message=f"{best_habit.name} has a {best.current_streak}-day streak!",
                detail="Keep it going! You're building a strong habit.",
                priority=(
                    InsightPriority.URGENT
                    if best.current_streak >= URGENT_STREAK_DAYS
                    else InsightPriority.HIGH
                ),
                related_habit_id=best_habit.id,
                related_habit_name=best_habit.name,
                value=float(best.current_streak),
            ))

        yesterday = self.calendar.yesterday
        for habit, stats in entries:
            if stats.current_streak <= AT_RISK_MIN_STREAK or stats.is_completed_today:
                continue
            if self.statistics.is_completed_on(habit, yesterday):
                insights.append(self._insight(
                    type=InsightType.STREAK,
                    title="Streak at Risk!",
                    message=(
                        f"Complete {habit.name} to keep your "
                        f"{stats.current_streak}-day streak alive!"
                    ),
                    priority=InsightPriority.URGENT,
                    related_habit_id=habit.id,
                    related_habit_name=habit.name,
                    value=float(stats.current_streak),
                    is_positive=False,
                    actionable=True,
                ))

        for habit, stats in entries:
            to_record = stats.longest_streak - stats.current_streak
            if 0 < to_record <= NEAR_RECORD_MAX_GAP and stats.current_streak >= NEAR_RECORD_MIN_STREAK:
                insights.append(self._insight(
                    type=InsightType.STREAK,
                    title="Almost There!",
                    message=(
                        f"{to_record} more day{'' if to_record == 1 else 's'} "
                        f"to beat your {habit.name} record!"
                    ),
                    detail=(
                        f"Your current streak: {stats.current_streak} days. "
                        f"Personal best: {stats.longest_streak} days."
                    ),
                    priority=InsightPriority.HIGH,
                    related_habit_id=habit.id,
                    related_habit_name=habit.name,
                    value=float(to_record),
                    actionable=True,
                ))

        return insights

    # -------------------------------------------------------------------------
    # Weekday patterns
    # -------------------------------------------------------------------------

    def day_of_week_stats(self, habits: List[Habit]) -> List[DayOfWeekStats]:
        """
        Check-in rate per weekday over the pattern window.

        Each habit contributes only days since its creation that are not
        its rest days. Weekdays with no eligible days are omitted.
        """
        counts: Dict[int, int] = {}
        possible: Dict[int, int] = {}
        window_start, today = self.calendar.window(self.pattern_window_days)

        for habit in habits:
            checkins = self.statistics.checkin_days(habit)
            start = max(self.calendar.created_day(habit), window_start)
            for day in self.calendar.iter_days(start, today):
                if self.calendar.is_rest_day(habit, day):
                    continue
                weekday = self.calendar.weekday_number(day)
                possible[weekday] = possible.get(weekday, 0) + 1
                if day in checkins:
                    counts[weekday] = counts.get(weekday, 0) + 1

        return [
            DayOfWeekStats(
                day_name=self.calendar.day_name(weekday),
                day_index=weekday,
                completion_count=counts.get(weekday, 0),
                possible_count=possible[weekday],
            )
            for weekday in range(1, 8)
            if possible.get(weekday, 0) > 0
        ]

    def _pattern_insights(self, habits: List[Habit]) -> List[Insight]:
        insights = []
        day_stats = self.day_of_week_stats(habits)
        if not day_stats:
            return insights

        best_day = sorted(day_stats, key=lambda s: s.completion_rate, reverse=True)[0]
        if best_day.completion_rate <= 0:
            return insights

        if best_day.completion_rate > POWER_DAY_RATE:
            percent = int(best_day.completion_rate * 100)
            insights.append(self._insight(
                type=InsightType.PATTERN,
                title="Your Power Day",
                message=f"{best_day.day_name} is your strongest day with {percent}% completion rate!",
                detail=f"You've completed {best_day.completion_count} habits on {best_day.day_name}s.",
                priority=InsightPriority.MEDIUM,
                value=best_day.completion_rate,
            ))

        weekend = [s.completion_rate for s in day_stats if s.day_index in (1, 7)]
        weekday = [s.completion_rate for s in day_stats if 2 <= s.day_index <= 6]
        weekend_avg = sum(weekend) / max(len(weekend), 1)
        weekday_avg = sum(weekday) / max(len(weekday), 1)

        if weekend_avg > 0 and weekday_avg > 0:
            diff = abs(weekend_avg - weekday_avg)
            if diff > WEEKEND_DIFF_THRESHOLD:
                weekends_win = weekend_avg > weekday_avg
                period = "weekends" if weekends_win else "weekdays"
                insights.append(self._insight(
                    type=InsightType.PATTERN,
                    title="Weekend Warrior" if weekends_win else "Weekday Warrior",
                    message=f"You complete {int(diff * 100)}% more habits on {period}.",
                    detail=(
                        "Try scheduling important habits for Saturday and Sunday!"
                        if weekends_win
                        else "Your routine is stronger during the work week."
                    ),
                    priority=InsightPriority.MEDIUM,
                    value=diff,
                ))

        return insights

    # -------------------------------------------------------------------------
    # Milestones
    # -------------------------------------------------------------------------

    def _milestone_insights(self, entries: List[Tuple[Habit, HabitStatistics]]) -> List[Insight]:
        insights = []

        total = sum(stats.total_completions for _, stats in entries)
        for milestone in CHECKIN_MILESTONES:
            if milestone <= total < milestone + CHECKIN_MILESTONE_BAND:
                insights.append(self._insight(
                    type=InsightType.MILESTONE,
                    title="Milestone Reached!",
                    message=f"You've completed {total} habit check-ins!",
                    detail="Every check-in brings you closer to your goals.",
                    priority=(
                        InsightPriority.HIGH
                        if milestone >= HIGH_PRIORITY_CHECKIN_MILESTONE
                        else InsightPriority.MEDIUM
                    ),
                    value=float(total),
                ))
                break

        for habit, stats in entries:
            if stats.current_streak in STREAK_MILESTONES:
                milestone = stats.current_streak
                insights.append(self._insight(
                    type=InsightType.MILESTONE,
                    title=f"{milestone}-Day Champion!",
                    message=f"Incredible! {habit.name} streak hit {milestone} days!",
                    detail=(
                        "You've truly mastered this habit!"
                        if milestone >= 90
                        else "Keep going, you're building something great!"
                    ),
                    priority=InsightPriority.URGENT,
                    related_habit_id=habit.id,
                    related_habit_name=habit.name,
                    value=float(milestone),
                ))

        return insights

    # -------------------------------------------------------------------------
    # Week over week
    # -------------------------------------------------------------------------

    def _week_bounds(self) -> Tuple[date, date, date]:
        this_week = self.calendar.week_start()
        return this_week - timedelta(days=7), this_week, self.calendar.today

    def habit_weekly_comparison(self, habit: Habit) -> WeeklyComparison:
        """Check-in days this week (to today) against the previous week."""
        last_week, this_week, today = self._week_bounds()
        current = 0
        previous = 0
        for day in self.statistics.checkin_days(habit):
            if this_week <= day <= today:
                current += 1
            elif last_week <= day < this_week:
                previous += 1
        return WeeklyComparison(
            current_week_completions=current,
            previous_week_completions=previous,
        )

    def weekly_comparison(self, habits: List[Habit]) -> WeeklyComparison:
        current = 0
        previous = 0
        for habit in habits:
            comparison = self.habit_weekly_comparison(habit)
            current += comparison.current_week_completions
            previous += comparison.previous_week_completions
        return WeeklyComparison(
            current_week_completions=current,
            previous_week_completions=previous,
        )

    def _improvement_insights(self, habits: List[Habit]) -> List[Insight]:
        insights = []
        comparison = self.weekly_comparison(habits)

        if comparison.current_week_completions > 0 or comparison.previous_week_completions > 0:
            change = comparison.change_percent
            if comparison.is_improvement and change > IMPROVED_PERCENT:
                insights.append(self._insight(
                    type=InsightType.IMPROVEMENT,
                    title="You're Improving!",
                    message=f"{int(change)}% more completions than last week!",
                    detail=(
                        f"This week: {comparison.current_week_completions} vs "
                        f"Last week: {comparison.previous_week_completions}"
                    ),
                    priority=(
                        InsightPriority.HIGH
                        if change > STRONGLY_IMPROVED_PERCENT
                        else InsightPriority.MEDIUM
                    ),
                    value=change,
                ))
            elif not comparison.is_improvement and change > DECLINED_PERCENT:
                insights.append(self._insight(
                    type=InsightType.IMPROVEMENT,
                    title="Room to Grow",
                    message=f"Completions are down {int(change)}% from last week.",
                    detail="It's okay! Every day is a fresh start. You've got this!",
                    priority=InsightPriority.MEDIUM,
                    value=change,
                    is_positive=False,
                    actionable=True,
                ))

        for habit in habits:
            habit_comparison = self.habit_weekly_comparison(habit)
            if (
                habit_comparison.is_improvement
                and habit_comparison.change_percent > HABIT_SOARING_PERCENT
                and habit_comparison.current_week_completions >= HABIT_SOARING_MIN_CHECKINS
            ):
                insights.append(self._insight(
                    type=InsightType.IMPROVEMENT,
                    title=f"{habit.name} is Soaring!",
                    message="You've really stepped up this habit this week!",
                    priority=InsightPriority.MEDIUM,
                    related_habit_id=habit.id,
                    related_habit_name=habit.name,
                    value=habit_comparison.change_percent,
                ))

        return insights

    # -------------------------------------------------------------------------
    # Motivation
    # -------------------------------------------------------------------------

    def _motivation_insights(self, entries: List[Tuple[Habit, HabitStatistics]]) -> List[Insight]:
        insights = []

        if all(stats.is_completed_today for _, stats in entries):
            insights.append(self._insight(
                type=InsightType.MOTIVATION,
                title="Perfect Day!",
                message=f"You've completed all {len(entries)} habits today!",
                detail="Amazing work! Take a moment to celebrate your dedication.",
                priority=InsightPriority.HIGH,
            ))

        average_rate = sum(stats.completion_rate for _, stats in entries) / len(entries)
        if average_rate > CONSISTENCY_RATE:
            insights.append(self._insight(
                type=InsightType.MOTIVATION,
                title="Consistency Champion",
                message=f"Your average completion rate is {int(average_rate * 100)}%!",
                detail="You're in the top tier of habit builders. Keep it up!",
                priority=InsightPriority.MEDIUM,
                value=average_rate,
            ))

        for habit, _ in entries:
            age = self.calendar.days_since_creation(habit)
            if age in AGE_MILESTONES:
                insights.append(self._insight(
                    type=InsightType.MOTIVATION,
                    title=f"{age}-Day Anniversary!",
                    message=f"You've been tracking {habit.name} for {age} days!",
                    detail="Consistency is the key to transformation.",
                    priority=InsightPriority.MEDIUM,
                    related_habit_id=habit.id,
                    related_habit_name=habit.name,
                    value=float(age),
                ))

        return insights
