"""
Habit Analytics - streaks, adaptive goals, insights and suggestions.

Pure, synchronous analytics over a snapshot of habits and completions:
- Streak and completion statistics
- Fixed, ramp-up and adaptive daily goals
- Ranked behavioral insights
- Habit suggestions from a template catalog
- Habit chain (stack) progress
"""

from .calendar import DayRecord, HabitCalendar
from .config import Settings, get_settings
from .engine import HabitEngine
from .exceptions import (
    ErrorCode,
    GoalAdjustmentError,
    HabitAnalyticsError,
    SnapshotError,
    StackOperationError,
    StoreError,
    ValidationError,
)
from .models import (
    AdjustmentType,
    ChainNotification,
    DayOfWeekStats,
    GoalAdjustmentSuggestion,
    GoalProgression,
    GoalProgressionInfo,
    Habit,
    HabitCategory,
    HabitCompletion,
    HabitDataSource,
    HabitStack,
    HabitSuggestion,
    HabitTemplate,
    HabitType,
    Insight,
    InsightPriority,
    InsightType,
    StackCombination,
    StackItem,
    StackProgress,
    StackTemplate,
    WeeklyComparison,
)
from .services import (
    DailyActivity,
    GoalProgressionEngine,
    HabitStatistics,
    InsightGenerator,
    OverviewStats,
    StackProgressTracker,
    StatisticsCalculator,
    SuggestionEngine,
    detect_categories,
)
from .snapshot import HabitSnapshot, load_snapshot
from .stores import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore

__all__ = [
    # Engine
    "HabitEngine",
    "HabitCalendar",
    "DayRecord",
    "Settings",
    "get_settings",
    # Services
    "StatisticsCalculator",
    "HabitStatistics",
    "DailyActivity",
    "OverviewStats",
    "GoalProgressionEngine",
    "InsightGenerator",
    "SuggestionEngine",
    "detect_categories",
    "StackProgressTracker",
    # Models
    "Habit",
    "HabitCompletion",
    "HabitStack",
    "HabitType",
    "HabitDataSource",
    "GoalProgression",
    "AdjustmentType",
    "GoalAdjustmentSuggestion",
    "GoalProgressionInfo",
    "Insight",
    "InsightType",
    "InsightPriority",
    "DayOfWeekStats",
    "WeeklyComparison",
    "HabitCategory",
    "HabitTemplate",
    "HabitSuggestion",
    "StackItem",
    "StackProgress",
    "StackCombination",
    "ChainNotification",
    "StackTemplate",
    # Persistence
    "HabitSnapshot",
    "load_snapshot",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    # Errors
    "ErrorCode",
    "HabitAnalyticsError",
    "ValidationError",
    "GoalAdjustmentError",
    "StackOperationError",
    "SnapshotError",
    "StoreError",
]

__version__ = "0.1.0"
