"""Analytics services."""

from .goals import GoalProgressionEngine
from .insights import InsightGenerator
from .stacks import StackProgressTracker
from .statistics import DailyActivity, HabitStatistics, OverviewStats, StatisticsCalculator
from .suggestions import SuggestionEngine, detect_categories

__all__ = [
    "StatisticsCalculator",
    "HabitStatistics",
    "DailyActivity",
    "OverviewStats",
    "GoalProgressionEngine",
    "InsightGenerator",
    "SuggestionEngine",
    "detect_categories",
    "StackProgressTracker",
]
