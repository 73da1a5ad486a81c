"""Tests for goal progression and adaptive adjustments."""

import pytest

from habit_analytics.exceptions import GoalAdjustmentError
from habit_analytics.models import AdjustmentType, GoalProgression, HabitCompletion
from habit_analytics.services import GoalProgressionEngine


@pytest.fixture
def goals(calendar, statistics):
    return GoalProgressionEngine(calendar, statistics)


def ramp_habit(make_habit, **kwargs):
    params = dict(
        created_days_ago=15,
        goal_progression=GoalProgression.RAMP_UP,
        initial_goal=10,
        goal_increment=2,
        goal_increment_interval_days=7,
    )
    params.update(kwargs)
    return make_habit(**params)


@pytest.fixture
def adaptive_habit(make_habit, at):
    """Adaptive habit factory with one valued completion per ``{days_ago: value}``."""
    def build(values_by_day, **kwargs):
        params = dict(goal_progression=GoalProgression.ADAPTIVE, daily_goal=100)
        params.update(kwargs)
        habit = make_habit(**params)
        habit.completions = [
            HabitCompletion(date=at(day), value=value)
            for day, value in values_by_day.items()
        ]
        return habit
    return build


class TestEffectiveGoal:
    """Tests for the goal in force today."""

    def test_ramp_up(self, goals, make_habit):
        """Test 10 + floor(15 / 7) * 2."""
        assert goals.effective_goal(ramp_habit(make_habit)) == 14

    def test_ramp_up_capped(self, goals, make_habit):
        """Test ramp-up never exceeds the daily goal."""
        assert goals.effective_goal(ramp_habit(make_habit, daily_goal=12)) == 12

    def test_ramp_up_without_increment(self, goals, make_habit):
        """Test missing ramp parameters fall back to the stored goal."""
        habit = ramp_habit(make_habit, goal_increment=None)
        assert goals.effective_goal(habit) == 10

    def test_ramp_up_on_creation_day(self, goals, make_habit):
        """Test the first interval uses the initial goal."""
        assert goals.effective_goal(ramp_habit(make_habit, created_days_ago=0)) == 10

    def test_fixed(self, goals, make_habit):
        """Test a fixed goal is the stored goal."""
        assert goals.effective_goal(make_habit(daily_goal=8)) == 8
        assert goals.effective_goal(make_habit()) is None


class TestAdaptiveAdjustment:
    """Tests for adaptive goal proposals."""

    def test_increase_capped_at_fifteen_percent(self, goals, adaptive_habit):
        """Test the step is at most 15% of the goal."""
        habit = adaptive_habit({d: 130 for d in range(7)})
        suggestion = goals.check_adaptive_adjustment(habit)

        assert suggestion.type == AdjustmentType.INCREASE
        assert suggestion.current_goal == 100
        assert suggestion.suggested_goal == pytest.approx(115)
        assert suggestion.reason == "You've been crushing this goal! Ready to level up?"

    def test_increase_to_average(self, goals, adaptive_habit):
        """Test the step stops at the recent average."""
        habit = adaptive_habit({d: 112 for d in range(7)})
        assert goals.check_adaptive_adjustment(habit).suggested_goal == pytest.approx(112)

    def test_no_increase_when_average_close(self, goals, adaptive_habit):
        """Test an average within 10% of the goal leaves it alone."""
        habit = adaptive_habit({d: 105 for d in range(7)})
        assert goals.check_adaptive_adjustment(habit) is None

    def test_decrease(self, goals, adaptive_habit):
        """Test a 20% cut after a weak week."""
        habit = adaptive_habit({0: 100, 1: 100, 2: 50, 3: 50, 4: 50}, initial_goal=100)
        suggestion = goals.check_adaptive_adjustment(habit)

        assert suggestion.type == AdjustmentType.DECREASE
        assert suggestion.suggested_goal == pytest.approx(80)
        assert suggestion.change == pytest.approx(-20)

    def test_decrease_floor(self, goals, adaptive_habit):
        """Test a cut never goes below half the initial goal."""
        habit = adaptive_habit({0: 100, 1: 100, 2: 50, 3: 50, 4: 50}, initial_goal=180)
        assert goals.check_adaptive_adjustment(habit).suggested_goal == pytest.approx(90)

    def test_too_few_checkins(self, goals, adaptive_habit):
        """Test fewer than 3 check-in days never triggers a cut."""
        habit = adaptive_habit({0: 50, 1: 50})
        assert goals.check_adaptive_adjustment(habit) is None

    def test_old_history_ignored(self, goals, adaptive_habit):
        """Test only the trailing window is considered."""
        habit = adaptive_habit({10: 50, 11: 50, 12: 50})
        assert goals.check_adaptive_adjustment(habit) is None

    def test_non_adaptive(self, goals, make_habit):
        """Test fixed and goal-less habits get no proposals."""
        assert goals.check_adaptive_adjustment(make_habit(daily_goal=100)) is None
        assert goals.check_adaptive_adjustment(
            make_habit(goal_progression=GoalProgression.ADAPTIVE)
        ) is None

    def test_check_all(self, goals, make_habit, adaptive_habit):
        """Test only habits with a proposal are returned."""
        habits = [
            adaptive_habit({d: 130 for d in range(7)}, name="Water"),
            make_habit(name="Read"),
        ]
        suggestions = goals.check_all_adjustments(habits)
        assert [s.habit_name for s in suggestions] == ["Water"]


class TestApplyAdjustment:
    """Tests for applying proposals."""

    def test_apply(self, goals, adaptive_habit, now):
        """Test the goal is updated and the change stamped."""
        habit = adaptive_habit({d: 130 for d in range(7)})
        suggestion = goals.check_adaptive_adjustment(habit)

        updated = goals.apply_adjustment(suggestion, habit)
        assert updated is habit
        assert habit.daily_goal == pytest.approx(115)
        assert habit.last_goal_adjustment == now

    def test_apply_to_other_habit(self, goals, make_habit, adaptive_habit):
        """Test a proposal for another habit is rejected."""
        habit = adaptive_habit({d: 130 for d in range(7)})
        suggestion = goals.check_adaptive_adjustment(habit)
        other = make_habit(name="Other", daily_goal=100)

        with pytest.raises(GoalAdjustmentError):
            goals.apply_adjustment(suggestion, other)
        assert other.daily_goal == 100
        assert other.last_goal_adjustment is None


class TestProgressionInfo:
    """Tests for progression display info."""

    def test_ramp_up(self, goals, make_habit):
        """Test the countdown to the next step."""
        info = goals.get_progression_info(ramp_habit(make_habit))
        assert info.current_goal == 14
        assert info.next_goal == 16
        assert info.days_until_change == 6
        assert info.message == "Goal increases by 2 in 6 days"

    def test_ramp_up_next_step_capped(self, goals, make_habit):
        """Test the next goal respects the ceiling."""
        info = goals.get_progression_info(ramp_habit(make_habit, daily_goal=15))
        assert info.next_goal == 15

    def test_ramp_up_ceiling(self, goals, make_habit):
        """Test a goal at its ceiling has no next step."""
        info = goals.get_progression_info(ramp_habit(make_habit, daily_goal=12))
        assert info.next_goal is None
        assert info.message == "Goal has reached its ceiling of 12"

    def test_ramp_up_incomplete(self, goals, make_habit):
        """Test ramp-up info needs an initial goal and increment."""
        assert goals.get_progression_info(ramp_habit(make_habit, initial_goal=None, daily_goal=20)) is None
        assert goals.get_progression_info(ramp_habit(make_habit, goal_increment=None)) is None

    def test_fixed(self, goals, make_habit):
        """Test fixed goals have no progression info."""
        assert goals.get_progression_info(make_habit(daily_goal=8)) is None

    @pytest.mark.parametrize("done, message", [
        (range(7), "Great progress! Goal may increase soon"),
        (range(5), "Goal adapts based on your performance"),
        ((), "Taking it easy is okay. Goal may adjust"),
    ])
    def test_adaptive_messages(self, goals, make_habit, done, message):
        """Test adaptive messages follow the recent rate."""
        habit = make_habit(
            done_days_ago=done, goal_progression=GoalProgression.ADAPTIVE, daily_goal=8,
        )
        info = goals.get_progression_info(habit)
        assert info.current_goal == 8
        assert info.message == message


class TestRestDays:
    """Tests for rest-day helpers."""

    def test_format_rest_days(self, goals, make_habit):
        """Test short names in weekday order."""
        assert goals.format_rest_days(make_habit(rest_days={7, 1})) == "Sun, Sat"
        assert goals.format_rest_days(make_habit()) is None

    def test_is_rest_day_today(self, goals, make_habit):
        """Test today's rest-day lookup."""
        assert goals.is_rest_day(make_habit(rest_days={4}))
        assert not goals.is_rest_day(make_habit(rest_days={1}))

    def test_earned_rest_day(self, goals, make_habit):
        """Test a 5-day streak earns a rest day."""
        assert goals.has_earned_rest_day(make_habit(done_days_ago=range(5)))
        assert not goals.has_earned_rest_day(make_habit(done_days_ago=range(4)))

    def test_format_goal_value(self, goals):
        """Test goal formatting."""
        assert goals.format_goal_value(14.0) == "14"
        assert goals.format_goal_value(2.5) == "2.5"
        assert goals.format_goal_value(2, "pages") == "2 pages"
