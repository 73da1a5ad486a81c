"""
Engine facade wiring the analytics services together.

All services share one calendar, so "today" and week boundaries agree
across statistics, goals, insights, suggestions and stacks.
"""

import logging
from datetime import datetime
from typing import Optional

from .calendar import HabitCalendar
from .config import Settings, get_settings
from .services.goals import GoalProgressionEngine
from .services.insights import InsightGenerator
from .services.stacks import StackProgressTracker
from .services.statistics import StatisticsCalculator
from .services.suggestions import SuggestionEngine
from .stores import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore


logger = logging.getLogger(__name__)


class HabitEngine:
    """
    The five analytics components on a shared calendar and store.

    Args:
        settings: Engine settings. Uses ``get_settings()`` when omitted.
        now: Fixed analysis instant, for reproducible runs.
        calendar: Pre-built calendar; overrides ``now`` and the calendar settings.
        store: Key-value store for dismissed suggestions. Defaults to SQLite
            at ``settings.store_path`` when set, otherwise in-memory.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        now: Optional[datetime] = None,
        calendar: Optional[HabitCalendar] = None,
        store: Optional[KeyValueStore] = None,
    ):
        self.settings = settings or get_settings()
        self.calendar = calendar or HabitCalendar.from_settings(self.settings, now=now)
        self.store = store if store is not None else self._default_store()

        self.statistics = StatisticsCalculator(self.calendar)
        self.goals = GoalProgressionEngine(
            self.calendar,
            self.statistics,
            adaptive_window_days=self.settings.adaptive_window_days,
        )
        self.insights = InsightGenerator(
            self.calendar,
            self.statistics,
            limit=self.settings.insight_limit,
            pattern_window_days=self.settings.pattern_window_days,
        )
        self.suggestions = SuggestionEngine(
            self.statistics,
            self.store,
            limit=self.settings.suggestion_limit,
        )
        self.stacks = StackProgressTracker(
            self.calendar,
            self.statistics,
            combination_window_days=self.settings.combination_window_days,
            combination_threshold=self.settings.combination_threshold,
        )
        logger.debug(f"Habit engine ready for {self.calendar.today.isoformat()}")

    def _default_store(self) -> KeyValueStore:
        if self.settings.store_path:
            return SQLiteKeyValueStore(self.settings.store_path)
        return InMemoryKeyValueStore()
