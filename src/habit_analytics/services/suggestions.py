"""
Habit suggestions matched against the user's existing habits.

Templates from the catalog are scored by keyword overlap with existing
habit names, category complementarity and category gaps. A separate
pass proposes one starter habit for every category the user has no
habit in.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..catalog import CATEGORY_KEYWORDS, HABIT_TEMPLATES, SYNCED_TYPE_CATEGORIES
from ..models.habit import Habit
from ..models.suggestion import HabitCategory, HabitSuggestion, HabitTemplate
from ..stores import InMemoryKeyValueStore, KeyValueStore
from .statistics import StatisticsCalculator


logger = logging.getLogger(__name__)


DISMISSED_KEY = "dismissed_suggestions"

# Scoring
KEYWORD_MATCH_POINTS = 20
COMPLEMENTARY_CATEGORY_POINTS = 10
MISSING_CATEGORY_POINTS = 5
HIGH_PERFORMER_POINTS = 15
HIGH_PERFORMER_RATE = 0.70
RELEVANCE_THRESHOLD = 10
GAP_SUGGESTION_PRIORITY = 5


def detect_categories(
    habits: Iterable[Habit],
    lexicon: Optional[Dict[HabitCategory, List[str]]] = None,
) -> Set[HabitCategory]:
    """
    Classify habits into categories by name substrings and synced type.

    Matching is a plain case-insensitive substring test, so "work" also
    hits "Workout".
    """
    lexicon = lexicon or CATEGORY_KEYWORDS
    categories: Set[HabitCategory] = set()

    for habit in habits:
        name = habit.name.lower()
        for category, keywords in lexicon.items():
            if any(keyword in name for keyword in keywords):
                categories.add(category)

        synced = SYNCED_TYPE_CATEGORIES.get(habit.habit_type)
        if synced is not None:
            categories.add(synced)

    return categories


class SuggestionEngine:
    """
    Proposes new habits from a template catalog.

    Dismissed template names persist in the injected key-value store and
    are excluded until ``reset_dismissed`` is called.
    """

    def __init__(
        self,
        statistics: Optional[StatisticsCalculator] = None,
        store: Optional[KeyValueStore] = None,
        templates: Optional[List[HabitTemplate]] = None,
        lexicon: Optional[Dict[HabitCategory, List[str]]] = None,
        limit: int = 10,
    ):
        self.statistics = statistics or StatisticsCalculator()
        self.store = store if store is not None else InMemoryKeyValueStore()
        self.templates = templates if templates is not None else HABIT_TEMPLATES
        self.lexicon = lexicon or CATEGORY_KEYWORDS
        self.limit = limit

    def generate(self, habits: List[Habit]) -> List[HabitSuggestion]:
        """Ranked suggestions, highest priority first, at most ``limit``."""
        existing_names = {habit.name.lower() for habit in habits}
        categories = detect_categories(habits, self.lexicon)
        dismissed = self.dismissed_names()
        high_performers = [
            habit for habit in habits
            if self.statistics.completion_rate(habit) > HIGH_PERFORMER_RATE
        ]

        suggestions: List[HabitSuggestion] = []
        for template in self.templates:
            if template.name.lower() in existing_names or template.name in dismissed:
                continue

            priority, related = self.score(template, habits, categories, high_performers)
            if priority >= RELEVANCE_THRESHOLD or related:
                suggestions.append(HabitSuggestion(
                    name=template.name,
                    icon=template.icon,
                    color=template.color,
                    category=template.category,
                    reason=self._short_reason(template, related),
                    detailed_reason=self._detailed_reason(template, related),
                    related_to=related,
                    priority=priority,
                ))

        claimed = {suggestion.name for suggestion in suggestions}
        suggestions.extend(
            self._gap_suggestions(categories, existing_names, dismissed, claimed)
        )

        ranked = sorted(suggestions, key=lambda s: s.priority, reverse=True)
        logger.debug(
            f"Generated {len(suggestions)} suggestions for {len(habits)} habits "
            f"(categories: {sorted(c.value for c in categories)})"
        )
        return ranked[:self.limit]

    def score(
        self,
        template: HabitTemplate,
        habits: List[Habit],
        categories: Set[HabitCategory],
        high_performers: Optional[List[Habit]] = None,
    ) -> Tuple[int, List[str]]:
        """Relevance score of a template and the habit names behind it."""
        priority = 0
        related: List[str] = []

        for habit in habits:
            if template.matches(habit.name):
                related.append(habit.name)
                priority += KEYWORD_MATCH_POINTS

        for category in template.complementary_categories:
            if category in categories:
                priority += COMPLEMENTARY_CATEGORY_POINTS

        if template.category not in categories:
            priority += MISSING_CATEGORY_POINTS

        for habit in high_performers or []:
            if template.matches(habit.name):
                priority += HIGH_PERFORMER_POINTS
                related.append(habit.name)

        return priority, list(dict.fromkeys(related))

    def _gap_suggestions(
        self,
        categories: Set[HabitCategory],
        existing_names: Set[str],
        dismissed: Set[str],
        claimed: Set[str],
    ) -> List[HabitSuggestion]:
        suggestions = []
        for category in HabitCategory:
            if category in categories:
                continue

            template = next(
                (
                    t for t in self.templates
                    if t.category == category
                    and t.name.lower() not in existing_names
                    and t.name not in dismissed
                    and t.name not in claimed
                ),
                None,
            )
            if template is None:
                continue

            label = category.display_name.lower()
            suggestions.append(HabitSuggestion(
                name=template.name,
                icon=template.icon,
                color=template.color,
                category=template.category,
                reason=f"Start your {label} journey",
                detailed_reason=(
                    f"You don't have any {label} habits yet. {template.name} "
                    f"is a great way to start building a balanced routine."
                ),
                related_to=[],
                priority=GAP_SUGGESTION_PRIORITY,
            ))
        return suggestions

    @staticmethod
    def _short_reason(template: HabitTemplate, related: List[str]) -> str:
        if not related:
            return "Popular with habit builders"
        if len(related) == 1:
            return f"Pairs well with {related[0]}"
        return f"Complements your {template.category.display_name.lower()} habits"

    @staticmethod
    def _detailed_reason(template: HabitTemplate, related: List[str]) -> str:
        name = template.name.lower()
        if not related:
            return (
                f"People who focus on building healthy routines often find {name} "
                f"helps them stay consistent and motivated."
            )
        if len(related) == 1:
            return (
                f"Since you're tracking {related[0]}, adding {name} can help "
                f"reinforce your progress and create a more complete routine."
            )
        habit_list = " and ".join(related[:2])
        return (
            f"Based on your habits like {habit_list}, we think {name} "
            f"would be a great addition to your routine."
        )

    # -------------------------------------------------------------------------
    # Dismissal
    # -------------------------------------------------------------------------

    def dismissed_names(self) -> Set[str]:
        return set(self.store.get(DISMISSED_KEY) or [])

    def dismiss(self, name: str) -> None:
        """Exclude a template from future suggestions."""
        names = self.dismissed_names()
        names.add(name)
        self.store.set(DISMISSED_KEY, sorted(names))
        logger.info(f"Dismissed suggestion '{name}'")

    def reset_dismissed(self) -> None:
        self.store.delete(DISMISSED_KEY)
        logger.info("Cleared dismissed suggestions")
