"""
Goal progression engine for fixed, ramp-up and adaptive habits.

Computes the goal in force on a given day and proposes adaptive
adjustments from recent performance. Proposals are never applied
automatically; ``apply_adjustment`` is the only goal mutation.
"""

import logging
from datetime import date
from typing import List, Optional

from ..calendar import HabitCalendar
from ..exceptions import GoalAdjustmentError
from ..models.goals import AdjustmentType, GoalAdjustmentSuggestion, GoalProgressionInfo
from ..models.habit import GoalProgression, Habit
from ..progression import format_goal_value, goal_for_day, has_ramp_parameters
from .statistics import StatisticsCalculator


logger = logging.getLogger(__name__)


# Adaptive thresholds
INCREASE_RATE_THRESHOLD = 0.90
INCREASE_VALUE_RATIO = 1.10
MAX_INCREASE_RATIO = 0.15
DECREASE_RATE_THRESHOLD = 0.50
DECREASE_MIN_CHECKINS = 3
DECREASE_RATIO = 0.20
DECREASE_FLOOR_RATIO = 0.50

# Display thresholds for adaptive habits
LIKELY_INCREASE_RATE = 0.80
LIKELY_DECREASE_RATE = 0.50

EARNED_REST_DAY_STREAK = 5


class GoalProgressionEngine:
    """
    Computes effective goals and adaptive goal proposals.

    Ramp-up goals grow by ``goal_increment`` every
    ``goal_increment_interval_days`` days, up to ``daily_goal`` when set.
    Adaptive goals look at the trailing window (7 days by default):

    - Increase when completion rate > 90% and the average recorded value
      beats the goal by more than 10%. The step is at most 15% of the goal.
    - Decrease by 20% when completion rate < 50% with at least 3 check-in
      days, never below half the initial goal.
    """

    def __init__(
        self,
        calendar: Optional[HabitCalendar] = None,
        statistics: Optional[StatisticsCalculator] = None,
        adaptive_window_days: int = 7,
    ):
        self.calendar = calendar or (statistics.calendar if statistics else HabitCalendar())
        self.statistics = statistics or StatisticsCalculator(self.calendar)
        self.adaptive_window_days = adaptive_window_days

    # -------------------------------------------------------------------------
    # Effective goal
    # -------------------------------------------------------------------------

    def effective_goal(self, habit: Habit, day: Optional[date] = None) -> Optional[float]:
        """Goal in force on ``day`` (default today), None if the habit has no goal."""
        return goal_for_day(habit, self.calendar.days_since_creation(habit, day))

    def recent_completion_rate(self, habit: Habit, days: Optional[int] = None) -> float:
        return self.statistics.recent_completion_rate(habit, days or self.adaptive_window_days)

    # -------------------------------------------------------------------------
    # Adaptive adjustments
    # -------------------------------------------------------------------------

    def check_adaptive_adjustment(self, habit: Habit) -> Optional[GoalAdjustmentSuggestion]:
        """Propose a goal change for an adaptive habit, or None."""
        if habit.goal_progression != GoalProgression.ADAPTIVE:
            return None
        current_goal = habit.daily_goal
        if current_goal is None or current_goal <= 0:
            return None

        start, end = self.calendar.window(self.adaptive_window_days)
        records = [
            record for day, record in self.calendar.daily_log(habit).items()
            if start <= day <= end
        ]
        rate = self.recent_completion_rate(habit)
        values = [record.value for record in records if record.value is not None]
        average = sum(values) / len(values) if values else None

        logger.debug(
            f"Adaptive check for {habit.name}: rate={rate:.2f} "
            f"checkins={len(records)} average={average}"
        )

        if (
            rate > INCREASE_RATE_THRESHOLD
            and average is not None
            and average > current_goal * INCREASE_VALUE_RATIO
        ):
            increase = min(current_goal * MAX_INCREASE_RATIO, average - current_goal)
            return GoalAdjustmentSuggestion(
                habit_id=habit.id,
                habit_name=habit.name,
                type=AdjustmentType.INCREASE,
                current_goal=current_goal,
                suggested_goal=current_goal + increase,
                reason="You've been crushing this goal! Ready to level up?",
            )

        if rate < DECREASE_RATE_THRESHOLD and len(records) >= DECREASE_MIN_CHECKINS:
            reference = habit.initial_goal if habit.initial_goal is not None else current_goal
            suggested = max(
                current_goal - current_goal * DECREASE_RATIO,
                reference * DECREASE_FLOOR_RATIO,
            )
            return GoalAdjustmentSuggestion(
                habit_id=habit.id,
                habit_name=habit.name,
                type=AdjustmentType.DECREASE,
                current_goal=current_goal,
                suggested_goal=suggested,
                reason="Let's make this more achievable. Small wins lead to big changes!",
            )

        return None

    def check_all_adjustments(self, habits: List[Habit]) -> List[GoalAdjustmentSuggestion]:
        suggestions = []
        for habit in habits:
            suggestion = self.check_adaptive_adjustment(habit)
            if suggestion is not None:
                suggestions.append(suggestion)
        return suggestions

    def apply_adjustment(self, suggestion: GoalAdjustmentSuggestion, habit: Habit) -> Habit:
        """
        Apply a proposed goal to its habit.

        Sets ``daily_goal`` and stamps ``last_goal_adjustment``.

        Raises:
            GoalAdjustmentError: If the suggestion was made for another habit.
        """
        if suggestion.habit_id != habit.id:
            raise GoalAdjustmentError(
                f"Suggestion for '{suggestion.habit_name}' cannot be applied to '{habit.name}'",
                details={
                    "suggestion_habit_id": str(suggestion.habit_id),
                    "habit_id": str(habit.id),
                },
            )

        previous = habit.daily_goal
        habit.daily_goal = suggestion.suggested_goal
        habit.last_goal_adjustment = self.calendar.now()
        logger.info(
            f"Applied {suggestion.type.value} to {habit.name}: "
            f"{previous} -> {suggestion.suggested_goal}"
        )
        return habit

    # -------------------------------------------------------------------------
    # Display info
    # -------------------------------------------------------------------------

    def get_progression_info(self, habit: Habit) -> Optional[GoalProgressionInfo]:
        """Where a ramp-up or adaptive goal is heading. None for fixed goals."""
        if habit.goal_progression == GoalProgression.RAMP_UP:
            return self._ramp_up_info(habit)
        if habit.goal_progression == GoalProgression.ADAPTIVE:
            return self._adaptive_info(habit)
        return None

    def _ramp_up_info(self, habit: Habit) -> Optional[GoalProgressionInfo]:
        if habit.initial_goal is None or not has_ramp_parameters(habit):
            return None

        current = self.effective_goal(habit)
        increment = habit.goal_increment
        interval = habit.goal_increment_interval_days

        if habit.daily_goal is not None and current >= habit.daily_goal:
            return GoalProgressionInfo(
                type=GoalProgression.RAMP_UP,
                current_goal=current,
                initial_goal=habit.initial_goal,
                message=f"Goal has reached its ceiling of {format_goal_value(current, habit.unit)}",
            )

        days_since = self.calendar.days_since_creation(habit)
        days_until = interval - (days_since % interval)
        next_goal = current + increment
        if habit.daily_goal is not None:
            next_goal = min(next_goal, habit.daily_goal)

        return GoalProgressionInfo(
            type=GoalProgression.RAMP_UP,
            current_goal=current,
            initial_goal=habit.initial_goal,
            next_goal=next_goal,
            days_until_change=days_until,
            message=(
                f"Goal increases by {format_goal_value(increment, habit.unit)} "
                f"in {days_until} day{'' if days_until == 1 else 's'}"
            ),
        )

    def _adaptive_info(self, habit: Habit) -> Optional[GoalProgressionInfo]:
        if habit.daily_goal is None:
            return None

        rate = self.recent_completion_rate(habit)
        if rate > LIKELY_INCREASE_RATE:
            message = "Great progress! Goal may increase soon"
        elif rate < LIKELY_DECREASE_RATE:
            message = "Taking it easy is okay. Goal may adjust"
        else:
            message = "Goal adapts based on your performance"

        return GoalProgressionInfo(
            type=GoalProgression.ADAPTIVE,
            current_goal=habit.daily_goal,
            initial_goal=habit.initial_goal,
            message=message,
        )

    # -------------------------------------------------------------------------
    # Rest days
    # -------------------------------------------------------------------------

    def is_rest_day(self, habit: Habit, day: Optional[date] = None) -> bool:
        return self.calendar.is_rest_day(habit, day or self.calendar.today)

    def format_rest_days(self, habit: Habit) -> Optional[str]:
        """Rest days as "Sun, Sat", None when the habit has none."""
        if not habit.rest_days:
            return None
        return ", ".join(self.calendar.short_day_name(day) for day in sorted(habit.rest_days))

    def has_earned_rest_day(self, habit: Habit) -> bool:
        """A rest day is earned after 5 completed days in a row."""
        return self.statistics.current_streak(habit) >= EARNED_REST_DAY_STREAK

    @staticmethod
    def format_goal_value(value: float, unit: Optional[str] = None) -> str:
        return format_goal_value(value, unit)
