"""Insight value objects produced by the insight generator."""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional
from uuid import UUID

from pydantic import Field, computed_field

from .base import CamelModel


class InsightType(str, Enum):
    """Families of behavioral observations."""
    STREAK = "streak"
    PATTERN = "pattern"
    MILESTONE = "milestone"
    IMPROVEMENT = "improvement"
    MOTIVATION = "motivation"


class InsightPriority(IntEnum):
    """Ordinal ranking, higher is shown first."""
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    URGENT = 4


class Insight(CamelModel):
    """A single ranked observation about the user's habits."""

    type: InsightType
    title: str
    message: str
    detail: Optional[str] = None
    priority: InsightPriority = InsightPriority.MEDIUM
    related_habit_id: Optional[UUID] = None
    related_habit_name: Optional[str] = None
    value: Optional[float] = None
    is_positive: bool = True
    actionable: bool = False
    created_at: datetime = Field(..., description="Analysis instant the insight was generated for")


class DayOfWeekStats(CamelModel):
    """Check-in rate for one weekday across all habits."""

    day_name: str
    day_index: int = Field(..., ge=1, le=7, description="1 = Sunday ... 7 = Saturday")
    completion_count: int = 0
    possible_count: int = 0

    @computed_field
    @property
    def completion_rate(self) -> float:
        if self.possible_count <= 0:
            return 0.0
        return self.completion_count / self.possible_count


class WeeklyComparison(CamelModel):
    """Check-in totals for the current week against the previous one."""

    current_week_completions: int = 0
    previous_week_completions: int = 0

    @computed_field
    @property
    def change_percent(self) -> float:
        """Absolute week-over-week change in percent."""
        previous = self.previous_week_completions
        current = self.current_week_completions
        if previous > 0:
            return abs(current - previous) / previous * 100
        return 100.0 if current > 0 else 0.0

    @computed_field
    @property
    def is_improvement(self) -> bool:
        return self.current_week_completions >= self.previous_week_completions
