"""Tests for the pydantic models and the error hierarchy."""

from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from habit_analytics.exceptions import (
    ErrorCode,
    GoalAdjustmentError,
    SnapshotError,
    StackOperationError,
    ValidationError,
)
from habit_analytics.models import (
    GoalAdjustmentSuggestion,
    AdjustmentType,
    ChainNotification,
    DayOfWeekStats,
    GoalProgression,
    Habit,
    HabitCategory,
    HabitTemplate,
    InsightPriority,
    StackItem,
    StackProgress,
    WeeklyComparison,
)


class TestHabit:
    """Tests for Habit validation and aliases."""

    @pytest.mark.parametrize("rest_days", [{0}, {8}, {1, 9}])
    def test_rest_days_out_of_range(self, rest_days):
        """Test rest days must be weekday numbers."""
        with pytest.raises(PydanticValidationError):
            Habit(name="Run", rest_days=rest_days)

    def test_negative_goal_rejected(self):
        """Test daily goal cannot be negative."""
        with pytest.raises(PydanticValidationError):
            Habit(name="Run", daily_goal=-1)

    def test_zero_interval_rejected(self):
        """Test ramp interval must be positive."""
        with pytest.raises(PydanticValidationError):
            Habit(name="Run", goal_increment_interval_days=0)

    def test_empty_name_rejected(self):
        """Test a habit needs a name."""
        with pytest.raises(PydanticValidationError):
            Habit(name="")

    def test_camel_case_input(self):
        """Test camelCase keys are accepted and emitted."""
        habit = Habit.model_validate({"name": "Water", "dailyGoal": 8, "restDays": [1, 7]})
        assert habit.daily_goal == 8
        assert habit.rest_days == {1, 7}
        assert habit.goal_progression == GoalProgression.FIXED

        dumped = habit.model_dump(by_alias=True)
        assert dumped["dailyGoal"] == 8
        assert "restDays" in dumped

    def test_is_stacked(self):
        """Test stack membership flag."""
        assert not Habit(name="Run").is_stacked
        assert Habit(name="Run", stack_id=uuid4()).is_stacked


class TestEnums:
    """Tests for enum display helpers."""

    def test_goal_progression_names(self):
        """Test progression display names."""
        assert GoalProgression.RAMP_UP.display_name == "Ramp Up"
        assert GoalProgression.ADAPTIVE.description == "Adjusts based on your performance"

    def test_category_names(self):
        """Test category display names."""
        assert HabitCategory.SELF_CARE.display_name == "Self Care"
        assert HabitCategory.FITNESS.display_name == "Fitness"

    def test_priority_ordering(self):
        """Test insight priorities compare as integers."""
        assert InsightPriority.URGENT > InsightPriority.HIGH > InsightPriority.MEDIUM > InsightPriority.LOW


class TestComputedFields:
    """Tests for computed model fields."""

    def test_empty_stack_progress(self):
        """Test an empty chain reports no progress."""
        progress = StackProgress(stack_id=uuid4(), stack_name="Morning")
        assert progress.progress == 0.0
        assert progress.is_complete is False
        assert progress.current_item is None
        assert progress.next_item is None

    def test_stack_progress_items(self):
        """Test current and next item follow chain order."""
        items = [
            StackItem(habit_id=uuid4(), habit_name=name, order=i, is_completed=done)
            for i, (name, done) in enumerate([("A", True), ("B", False), ("C", False)])
        ]
        progress = StackProgress(
            stack_id=uuid4(), stack_name="Morning", items=items, completed_count=1, total_count=3,
        )
        assert progress.current_item.habit_name == "B"
        assert progress.next_item.habit_name == "C"

    def test_weekly_comparison_from_zero(self):
        """Test growth from an empty previous week."""
        comparison = WeeklyComparison(current_week_completions=3, previous_week_completions=0)
        assert comparison.change_percent == 100.0
        assert comparison.is_improvement

    def test_weekly_comparison_decline(self):
        """Test change percent is absolute."""
        comparison = WeeklyComparison(current_week_completions=2, previous_week_completions=4)
        assert comparison.change_percent == 50.0
        assert not comparison.is_improvement

    def test_weekly_comparison_empty(self):
        """Test two empty weeks."""
        assert WeeklyComparison().change_percent == 0.0

    def test_day_of_week_rate(self):
        """Test weekday completion rate."""
        assert DayOfWeekStats(day_name="Sunday", day_index=1).completion_rate == 0.0
        stats = DayOfWeekStats(day_name="Monday", day_index=2, completion_count=3, possible_count=4)
        assert stats.completion_rate == 0.75

    def test_adjustment_change(self):
        """Test signed goal change."""
        suggestion = GoalAdjustmentSuggestion(
            habit_id=uuid4(), habit_name="Water", type=AdjustmentType.DECREASE,
            current_goal=100, suggested_goal=80, reason="",
        )
        assert suggestion.change == -20

    def test_chain_notification_message(self):
        """Test nudge text."""
        notification = ChainNotification(
            stack_id=uuid4(), stack_name="Morning Routine",
            completed_habit_id=uuid4(), next_habit_id=uuid4(), next_habit_name="Meditate",
        )
        assert notification.message == "Next in Morning Routine: Meditate"

    def test_template_matches(self):
        """Test keyword matching is a case-insensitive substring test."""
        template = HabitTemplate(
            name="Meditate", icon="", color="", category=HabitCategory.MINDFULNESS,
            keywords=["meditat", "calm"],
        )
        assert template.matches("Evening MEDITATION")
        assert not template.matches("Run")


class TestErrors:
    """Tests for error codes and serialization."""

    def test_to_dict(self):
        """Test structured error output."""
        error = ValidationError("Bad value", field="name")
        assert error.to_dict() == {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Bad value",
                "details": {"field": "name"},
            }
        }

    def test_no_details(self):
        """Test details are omitted when empty."""
        assert "details" not in StackOperationError("Out of range").to_dict()["error"]

    def test_goal_adjustment_code(self):
        """Test goal mismatch keeps its own code."""
        error = GoalAdjustmentError("Wrong habit")
        assert error.code == ErrorCode.GOAL_ADJUSTMENT_MISMATCH
        assert error.details == {"field": "habit_id"}
        assert isinstance(error, ValidationError)

    def test_snapshot_path(self):
        """Test snapshot errors record the path."""
        error = SnapshotError("Missing", path="/tmp/x.json", code=ErrorCode.SNAPSHOT_UNREADABLE)
        assert error.details["path"] == "/tmp/x.json"
        assert "SNAPSHOT_UNREADABLE" in repr(error)
