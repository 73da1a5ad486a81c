"""Pydantic models for habit records and analytics results."""

from .base import CamelModel, to_camel
from .goals import AdjustmentType, GoalAdjustmentSuggestion, GoalProgressionInfo
from .habit import (
    GoalProgression,
    Habit,
    HabitCompletion,
    HabitDataSource,
    HabitStack,
    HabitType,
)
from .insight import (
    DayOfWeekStats,
    Insight,
    InsightPriority,
    InsightType,
    WeeklyComparison,
)
from .stack import (
    ChainNotification,
    StackCombination,
    StackItem,
    StackProgress,
    StackTemplate,
    TemplateHabit,
)
from .suggestion import HabitCategory, HabitSuggestion, HabitTemplate

__all__ = [
    "CamelModel",
    "to_camel",
    # Habit records
    "GoalProgression",
    "Habit",
    "HabitCompletion",
    "HabitDataSource",
    "HabitStack",
    "HabitType",
    # Goals
    "AdjustmentType",
    "GoalAdjustmentSuggestion",
    "GoalProgressionInfo",
    # Insights
    "DayOfWeekStats",
    "Insight",
    "InsightPriority",
    "InsightType",
    "WeeklyComparison",
    # Stacks
    "ChainNotification",
    "StackCombination",
    "StackItem",
    "StackProgress",
    "StackTemplate",
    "TemplateHabit",
    # Suggestions
    "HabitCategory",
    "HabitSuggestion",
    "HabitTemplate",
]
