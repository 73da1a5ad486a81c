"""
Habit stacks (chains): progress, membership changes and pairing ideas.

A stack is an ordered list of habit ids. Membership is mirrored on each
habit through ``stack_id`` and ``stack_order``; every operation that
changes the order re-stamps those fields on the habits passed in.
"""

import logging
from datetime import datetime, time
from itertools import combinations
from typing import List, Optional

from ..calendar import HabitCalendar
from ..exceptions import ErrorCode, StackOperationError
from ..models.habit import Habit, HabitStack
from ..models.stack import (
    ChainNotification,
    StackCombination,
    StackItem,
    StackProgress,
    StackTemplate,
)
from .statistics import StatisticsCalculator


logger = logging.getLogger(__name__)


MIN_STACK_SIZE = 2


class StackProgressTracker:
    """Tracks progress through habit chains and edits their membership."""

    def __init__(
        self,
        calendar: Optional[HabitCalendar] = None,
        statistics: Optional[StatisticsCalculator] = None,
        combination_window_days: int = 30,
        combination_threshold: float = 0.5,
    ):
        self.calendar = calendar or (statistics.calendar if statistics else HabitCalendar())
        self.statistics = statistics or StatisticsCalculator(self.calendar)
        self.combination_window_days = combination_window_days
        self.combination_threshold = combination_threshold

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def _members(self, stack: HabitStack, habits: List[Habit]) -> List[Habit]:
        """Stack members in declared order, skipping ids with no habit."""
        by_id = {habit.id: habit for habit in habits}
        return [by_id[habit_id] for habit_id in stack.habit_order if habit_id in by_id]

    def get_progress(self, stack: HabitStack, habits: List[Habit]) -> StackProgress:
        items = [
            StackItem(
                habit_id=habit.id,
                habit_name=habit.name,
                icon=habit.icon,
                color=habit.color,
                order=index,
                is_completed=self.statistics.is_completed_today(habit),
            )
            for index, habit in enumerate(self._members(stack, habits))
        ]
        return StackProgress(
            stack_id=stack.id,
            stack_name=stack.name,
            items=items,
            completed_count=sum(1 for item in items if item.is_completed),
            total_count=len(items),
        )

    def get_current_habit(self, stack: HabitStack, habits: List[Habit]) -> Optional[Habit]:
        """The chain's next step, None when every member is done."""
        current = self.get_progress(stack, habits).current_item
        if current is None:
            return None
        return next((habit for habit in habits if habit.id == current.habit_id), None)

    def get_all_progress(self, stacks: List[HabitStack], habits: List[Habit]) -> List[StackProgress]:
        return [self.get_progress(stack, habits) for stack in stacks]

    def next_in_chain(
        self,
        completed_habit: Habit,
        stacks: List[HabitStack],
        habits: List[Habit],
    ) -> Optional[ChainNotification]:
        """The next incomplete member to nudge after ``completed_habit``."""
        if completed_habit.stack_id is None:
            return None
        stack = next((s for s in stacks if s.id == completed_habit.stack_id), None)
        if stack is None or not stack.is_active or not stack.notify_on_chain_progress:
            return None

        for item in self.get_progress(stack, habits).items:
            if not item.is_completed and item.habit_id != completed_habit.id:
                return ChainNotification(
                    stack_id=stack.id,
                    stack_name=stack.name,
                    completed_habit_id=completed_habit.id,
                    next_habit_id=item.habit_id,
                    next_habit_name=item.habit_name,
                )
        return None

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def _restamp(self, stack: HabitStack, habits: List[Habit]) -> None:
        positions = {habit_id: index for index, habit_id in enumerate(stack.habit_order)}
        for habit in habits:
            if habit.id in positions:
                habit.stack_id = stack.id
                habit.stack_order = positions[habit.id]

    def create_stack(
        self,
        name: str,
        habits: List[Habit],
        icon: str = "link.circle.fill",
        color: str = "#A855F7",
    ) -> HabitStack:
        """Create a stack from ``habits`` in the given order."""
        conflicts = [habit.name for habit in habits if habit.stack_id is not None]
        if conflicts:
            raise StackOperationError(
                f"Habits already belong to another stack: {', '.join(conflicts)}",
                code=ErrorCode.STACK_MEMBERSHIP_CONFLICT,
                details={"habits": conflicts},
            )

        stack = HabitStack(
            name=name,
            icon=icon,
            color=color,
            created_at=self.calendar.now(),
            habit_order=list(dict.fromkeys(habit.id for habit in habits)),
        )
        self._restamp(stack, habits)
        logger.info(f"Created stack '{name}' with {stack.habit_count} habits")
        return stack

    def can_add_to_stack(self, habit: Habit, stack: HabitStack) -> bool:
        if habit.stack_id is not None:
            return False
        return habit.id not in stack.habit_order

    def add_habit(
        self,
        habit: Habit,
        stack: HabitStack,
        habits: List[Habit],
        position: Optional[int] = None,
    ) -> bool:
        """
        Insert ``habit`` at ``position`` (default end) and re-stamp ``habits``.

        Returns False without changes if the habit cannot join the stack.
        """
        if not self.can_add_to_stack(habit, stack):
            logger.debug(f"Cannot add {habit.name} to stack '{stack.name}'")
            return False

        if position is None or position >= len(stack.habit_order):
            stack.habit_order.append(habit.id)
        else:
            stack.habit_order.insert(max(position, 0), habit.id)

        self._restamp(stack, [habit] + list(habits))
        logger.info(f"Added {habit.name} to stack '{stack.name}'")
        return True

    def remove_habit(
        self,
        habit: Habit,
        stack: HabitStack,
        habits: List[Habit],
    ) -> None:
        stack.habit_order = [habit_id for habit_id in stack.habit_order if habit_id != habit.id]
        if habit.stack_id == stack.id:
            habit.stack_id = None
            habit.stack_order = None
        self._restamp(stack, habits)
        logger.info(f"Removed {habit.name} from stack '{stack.name}'")

    def reorder(
        self,
        stack: HabitStack,
        source: int,
        destination: int,
        habits: List[Habit],
    ) -> None:
        """
        Move the member at ``source`` to ``destination`` and re-stamp ``habits``.

        Raises:
            StackOperationError: If ``source`` is out of range.
        """
        if not 0 <= source < len(stack.habit_order):
            raise StackOperationError(
                f"Source index {source} out of range for stack of {stack.habit_count}",
                details={"source": source, "size": stack.habit_count},
            )

        habit_id = stack.habit_order.pop(source)
        destination = min(max(destination, 0), len(stack.habit_order))
        stack.habit_order.insert(destination, habit_id)
        self._restamp(stack, habits)

    def delete_stack(self, stack: HabitStack, habits: List[Habit]) -> None:
        """Clear membership on all members. The habits themselves remain."""
        cleared = 0
        for habit in habits:
            if habit.stack_id == stack.id:
                habit.stack_id = None
                habit.stack_order = None
                cleared += 1
        logger.info(f"Deleted stack '{stack.name}', released {cleared} habits")

    @staticmethod
    def is_valid_stack(stack: HabitStack) -> bool:
        return stack.habit_count >= MIN_STACK_SIZE

    # -------------------------------------------------------------------------
    # Suggestions
    # -------------------------------------------------------------------------

    def suggest_stack_combinations(self, habits: List[Habit]) -> List[StackCombination]:
        """
        Pairs of unstacked habits often done on the same days.

        Jaccard similarity of check-in days over the trailing window; pairs
        above the threshold, most similar first. Quadratic in habit count.
        """
        start, end = self.calendar.window(self.combination_window_days)
        unstacked = [habit for habit in habits if habit.stack_id is None]
        days = {
            habit.id: {d for d in self.statistics.checkin_days(habit) if start <= d <= end}
            for habit in unstacked
        }

        pairs = []
        for first, second in combinations(unstacked, 2):
            first_days = days[first.id]
            second_days = days[second.id]
            if not first_days or not second_days:
                continue

            similarity = len(first_days & second_days) / len(first_days | second_days)
            if similarity > self.combination_threshold:
                pairs.append(StackCombination(
                    first_habit_id=first.id,
                    first_habit_name=first.name,
                    second_habit_id=second.id,
                    second_habit_name=second.name,
                    similarity=similarity,
                ))

        return sorted(pairs, key=lambda pair: pair.similarity, reverse=True)

    def habits_from_template(self, template: StackTemplate) -> List[Habit]:
        """New habits for a chain template, created today."""
        created_at = datetime.combine(self.calendar.today, time(0, 0))
        return [
            Habit(name=item.name, icon=item.icon, color=item.color, created_at=created_at)
            for item in template.habits
        ]
