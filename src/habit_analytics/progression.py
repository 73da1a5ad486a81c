"""
Goal arithmetic for fixed, ramp-up and adaptive habits.

Kept free of calendar and statistics imports so both the statistics
calculator and the goal engine can share it.
"""

import math
from typing import Optional

from .models.habit import GoalProgression, Habit


def base_goal(habit: Habit) -> Optional[float]:
    """Starting point for progression: initial goal, else the daily goal."""
    return habit.initial_goal if habit.initial_goal is not None else habit.daily_goal


def stored_goal(habit: Habit) -> Optional[float]:
    """Goal currently stored on the habit: daily goal, else the initial goal."""
    return habit.daily_goal if habit.daily_goal is not None else habit.initial_goal


def has_ramp_parameters(habit: Habit) -> bool:
    return (
        habit.goal_increment is not None
        and habit.goal_increment_interval_days is not None
        and habit.goal_increment_interval_days > 0
    )


def ramp_up_goal(habit: Habit, days_since_creation: int) -> Optional[float]:
    """
    Ramp-up goal after ``days_since_creation`` days.

    initial + floor(days / interval) * increment, capped at ``daily_goal``
    when one is set. Without ramp parameters this is the fixed rule.
    """
    start = base_goal(habit)
    if start is None:
        return None
    if not has_ramp_parameters(habit):
        return stored_goal(habit)

    steps = max(days_since_creation, 0) // habit.goal_increment_interval_days
    goal = start + steps * habit.goal_increment

    if habit.daily_goal is not None and goal > habit.daily_goal:
        return habit.daily_goal
    return goal


def goal_for_day(habit: Habit, days_since_creation: int) -> Optional[float]:
    """Effective goal in force ``days_since_creation`` days after creation."""
    if habit.goal_progression == GoalProgression.RAMP_UP:
        return ramp_up_goal(habit, days_since_creation)
    # Fixed and adaptive both use the stored goal; adaptive changes are
    # only ever applied explicitly.
    return stored_goal(habit)


def is_goal_measured(goal: Optional[float]) -> bool:
    return goal is not None and goal > 0


def format_goal_value(value: float, unit: Optional[str] = None) -> str:
    """Format a goal for display: "8", "2.5", "2000 ml"."""
    if math.isfinite(value) and value == math.floor(value):
        text = str(int(value))
    else:
        text = f"{value:.1f}"
    return f"{text} {unit}" if unit else text
