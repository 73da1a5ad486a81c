"""Habit, completion and stack records supplied by the persistence layer."""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Set
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from .base import CamelModel


class HabitType(str, Enum):
    """Kind of behavior a habit tracks."""
    MANUAL = "manual"  # Binary done / not done
    SYNCED_SLEEP = "synced_sleep"
    SYNCED_WATER = "synced_water"
    SYNCED_CALORIES = "synced_calories"


class HabitDataSource(str, Enum):
    """Where completion values come from."""
    MANUAL = "manual"
    HEALTH_SYNC = "health_sync"


class GoalProgression(str, Enum):
    """How a habit's daily goal evolves over time."""
    FIXED = "fixed"
    RAMP_UP = "ramp_up"
    ADAPTIVE = "adaptive"

    @property
    def display_name(self) -> str:
        names = {
            GoalProgression.FIXED: "Fixed",
            GoalProgression.RAMP_UP: "Ramp Up",
            GoalProgression.ADAPTIVE: "Adaptive",
        }
        return names[self]

    @property
    def description(self) -> str:
        descriptions = {
            GoalProgression.FIXED: "Goal stays the same",
            GoalProgression.RAMP_UP: "Goal increases over time",
            GoalProgression.ADAPTIVE: "Adjusts based on your performance",
        }
        return descriptions[self]


class HabitCompletion(CamelModel):
    """One recorded instance of completing a habit."""

    id: UUID = Field(default_factory=uuid4)
    date: datetime = Field(..., description="When the habit was completed")
    value: Optional[float] = Field(None, description="Measured amount, e.g. ml of water")
    is_auto_synced: bool = Field(default=False, description="Imported from a health source")


class Habit(CamelModel):
    """A tracked behavior together with its completion history."""

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1)
    icon: str = "checkmark.circle.fill"
    color: str = "#34C759"
    habit_type: HabitType = HabitType.MANUAL
    data_source: HabitDataSource = HabitDataSource.MANUAL
    created_at: datetime = Field(default_factory=datetime.now)

    # Goal
    daily_goal: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    goal_progression: GoalProgression = GoalProgression.FIXED
    initial_goal: Optional[float] = Field(None, ge=0)
    goal_increment: Optional[float] = None
    goal_increment_interval_days: Optional[int] = Field(None, gt=0)
    last_goal_adjustment: Optional[datetime] = None

    # Weekday numbers, Sunday=1 ... Saturday=7
    rest_days: Set[int] = Field(default_factory=set)

    # Chain membership
    stack_id: Optional[UUID] = None
    stack_order: Optional[int] = None

    completions: List[HabitCompletion] = Field(default_factory=list)

    @field_validator("rest_days", mode="before")
    @classmethod
    def validate_rest_days(cls, v):
        if v is None:
            return set()
        days = set(v)
        invalid = sorted(d for d in days if not 1 <= int(d) <= 7)
        if invalid:
            raise ValueError(f"Rest days must be weekday numbers 1-7, got {invalid}")
        return days

    @property
    def is_stacked(self) -> bool:
        return self.stack_id is not None


class HabitStack(CamelModel):
    """An ordered chain of habits meant to be completed together."""

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1)
    icon: str = "link.circle.fill"
    color: str = "#A855F7"
    created_at: datetime = Field(default_factory=datetime.now)
    habit_order: List[UUID] = Field(default_factory=list)
    is_active: bool = True
    notify_on_chain_progress: bool = True

    @property
    def habit_count(self) -> int:
        return len(self.habit_order)

    @property
    def is_empty(self) -> bool:
        return not self.habit_order
