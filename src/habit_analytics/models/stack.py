"""Chain (stack) progress, combinations and templates."""

from typing import List, Optional
from uuid import UUID

from pydantic import Field, computed_field

from .base import CamelModel


class StackItem(CamelModel):
    """One habit's position and today's state within a chain."""

    habit_id: UUID
    habit_name: str
    icon: str = "checkmark.circle.fill"
    color: str = "#34C759"
    order: int = Field(..., ge=0)
    is_completed: bool = False


class StackProgress(CamelModel):
    """Progress through a chain for the current day."""

    stack_id: UUID
    stack_name: str
    items: List[StackItem] = Field(default_factory=list)
    completed_count: int = 0
    total_count: int = 0

    @computed_field
    @property
    def progress(self) -> float:
        if self.total_count <= 0:
            return 0.0
        return self.completed_count / self.total_count

    @computed_field
    @property
    def is_complete(self) -> bool:
        return self.total_count > 0 and self.completed_count == self.total_count

    @computed_field
    @property
    def current_item(self) -> Optional[StackItem]:
        """The chain's next step: first incomplete item in order."""
        for item in self.items:
            if not item.is_completed:
                return item
        return None

    @computed_field
    @property
    def next_item(self) -> Optional[StackItem]:
        """The item after the current step, if any."""
        current = self.current_item
        if current is None:
            return None
        index = self.items.index(current)
        if index + 1 < len(self.items):
            return self.items[index + 1]
        return None


class StackCombination(CamelModel):
    """Two unstacked habits that tend to be done on the same days."""

    first_habit_id: UUID
    first_habit_name: str
    second_habit_id: UUID
    second_habit_name: str
    similarity: float = Field(..., ge=0.0, le=1.0, description="Jaccard similarity of check-in days")


class ChainNotification(CamelModel):
    """The next step to nudge after a chain member is completed."""

    stack_id: UUID
    stack_name: str
    completed_habit_id: UUID
    next_habit_id: UUID
    next_habit_name: str

    @computed_field
    @property
    def message(self) -> str:
        return f"Next in {self.stack_name}: {self.next_habit_name}"


class TemplateHabit(CamelModel):
    """A habit created when a chain template is adopted."""

    name: str
    icon: str
    color: str


class StackTemplate(CamelModel):
    """A pre-built chain of habits."""

    name: str
    description: str
    icon: str
    color: str
    habits: List[TemplateHabit] = Field(default_factory=list)
