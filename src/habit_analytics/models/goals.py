"""Goal adjustment proposals and progression display info."""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import Field, computed_field

from .base import CamelModel
from .habit import GoalProgression


class AdjustmentType(str, Enum):
    """Direction of a proposed goal change."""
    INCREASE = "increase"
    DECREASE = "decrease"


class GoalAdjustmentSuggestion(CamelModel):
    """A proposed change to an adaptive habit's daily goal.

    Never applied automatically; see ``GoalProgressionEngine.apply_adjustment``.
    """

    habit_id: UUID
    habit_name: str
    type: AdjustmentType
    current_goal: float
    suggested_goal: float
    reason: str

    @computed_field
    @property
    def change(self) -> float:
        return self.suggested_goal - self.current_goal


class GoalProgressionInfo(CamelModel):
    """Human-readable summary of where a progressive goal is heading."""

    type: GoalProgression
    current_goal: float
    initial_goal: Optional[float] = None
    next_goal: Optional[float] = None
    days_until_change: Optional[int] = Field(None, ge=0)
    message: str
