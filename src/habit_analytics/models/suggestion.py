"""Habit categories, catalog templates and suggestion results."""

from enum import Enum
from typing import List

from pydantic import Field

from .base import CamelModel


class HabitCategory(str, Enum):
    """Behavioral categories used for coverage and relevance scoring."""
    HEALTH = "health"
    FITNESS = "fitness"
    MINDFULNESS = "mindfulness"
    PRODUCTIVITY = "productivity"
    LEARNING = "learning"
    SELF_CARE = "self_care"
    NUTRITION = "nutrition"
    SLEEP = "sleep"

    @property
    def display_name(self) -> str:
        if self is HabitCategory.SELF_CARE:
            return "Self Care"
        return self.value.title()


class HabitTemplate(CamelModel):
    """A catalog entry the suggestion engine can propose."""

    name: str
    icon: str
    color: str
    category: HabitCategory
    keywords: List[str] = Field(default_factory=list, description="Matched against existing habit names")
    complementary_categories: List[HabitCategory] = Field(default_factory=list)

    def matches(self, habit_name: str) -> bool:
        """True if any keyword is a case-insensitive substring of the name."""
        name = habit_name.lower()
        return any(keyword.lower() in name for keyword in self.keywords)


class HabitSuggestion(CamelModel):
    """A ranked proposal for a new habit."""

    name: str
    icon: str
    color: str
    category: HabitCategory
    reason: str
    detailed_reason: str
    related_to: List[str] = Field(default_factory=list, description="Existing habits that triggered this suggestion")
    priority: int = Field(default=0, description="Higher is more relevant")
