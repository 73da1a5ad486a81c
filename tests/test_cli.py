"""Tests for the command-line interface."""

import json

import pytest

from habit_analytics.cli import build_parser, main
from habit_analytics.models import HabitStack
from habit_analytics.snapshot import HabitSnapshot


NOW_ARGS = ["--now", "2026-03-18T12:00", "--tz", "UTC"]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep settings from picking up the developer's environment."""
    monkeypatch.chdir(tmp_path)
    for name in ("HABIT_ANALYTICS_STORE_PATH", "HABIT_ANALYTICS_TIMEZONE", "HABIT_ANALYTICS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def snapshot_path(tmp_path, make_habit):
    water = make_habit(name="Drink Water", daily_goal=2000, unit="ml", done_days_ago=[0, 1], value=2100)
    run = make_habit(name="Morning Run", done_days_ago=range(12))
    snapshot = HabitSnapshot(habits=[water, run])
    path = tmp_path / "habits.json"
    path.write_text(snapshot.model_dump_json(by_alias=True))
    return path


def run_json(capsys, snapshot_path, *command):
    code = main(["--snapshot", str(snapshot_path), *NOW_ARGS, "--json", *command])
    assert code == 0
    return json.loads(capsys.readouterr().out)


class TestCommands:
    """Tests for each command's JSON output."""

    def test_stats(self, capsys, snapshot_path):
        """Test per-habit statistics."""
        stats = run_json(capsys, snapshot_path, "stats")
        assert [s["habit_name"] for s in stats] == ["Drink Water", "Morning Run"]
        assert stats[0]["current_streak"] == 2
        assert stats[1]["current_streak"] == 12

    def test_overview(self, capsys, snapshot_path):
        """Test totals and weekly activity."""
        result = run_json(capsys, snapshot_path, "overview")
        assert result["overview"]["total_habits"] == 2
        assert result["overview"]["completed_today"] == 2
        assert len(result["daily_activity"]) == 7
        assert result["daily_activity"][-1]["day"] == "2026-03-18"

    def test_goals(self, capsys, snapshot_path):
        """Test goal rows."""
        rows = run_json(capsys, snapshot_path, "goals")
        assert rows[0]["habitName"] == "Drink Water"
        assert rows[0]["effectiveGoal"] == 2000
        assert rows[0]["progression"] is None
        assert rows[1]["effectiveGoal"] is None
        assert rows[1]["progressionDescription"] == "Goal stays the same"

    def test_insights(self, capsys, snapshot_path):
        """Test insights use camelCase keys and the fixed clock."""
        insights = run_json(capsys, snapshot_path, "insights")
        titles = [i["title"] for i in insights]
        assert "On Fire!" in titles
        assert "Perfect Day!" in titles
        assert all(i["createdAt"] == "2026-03-18T12:00:00" for i in insights)

    def test_suggestions_dismiss(self, capsys, snapshot_path):
        """Test dismissing before listing."""
        suggestions = run_json(capsys, snapshot_path, "suggestions", "--dismiss", "Morning Stretch")
        assert "Morning Stretch" not in [s["name"] for s in suggestions]

    def test_dismissals_persist(self, capsys, snapshot_path, tmp_path, monkeypatch):
        """Test dismissals survive between runs with a store path."""
        monkeypatch.setenv("HABIT_ANALYTICS_STORE_PATH", str(tmp_path / "store.db"))
        run_json(capsys, snapshot_path, "suggestions", "--dismiss", "Morning Stretch")
        suggestions = run_json(capsys, snapshot_path, "suggestions")
        assert "Morning Stretch" not in [s["name"] for s in suggestions]

        suggestions = run_json(capsys, snapshot_path, "suggestions", "--reset-dismissed")
        assert "Morning Stretch" in [s["name"] for s in suggestions]

    def test_reset_dismissed_prints_only_json(self, capsys, snapshot_path):
        """Test clearing dismissals keeps --json output parseable."""
        code = main(["--snapshot", str(snapshot_path), *NOW_ARGS, "--json", "suggestions", "--reset-dismissed"])
        assert code == 0
        out = capsys.readouterr().out
        assert "cleared" not in out
        assert isinstance(json.loads(out), list)

    def test_stacks(self, capsys, snapshot_path):
        """Test stack output with no stacks."""
        result = run_json(capsys, snapshot_path, "stacks")
        assert result["stacks"] == []
        assert isinstance(result["combinations"], list)


class TestTables:
    """Tests for rich table output."""

    @pytest.mark.parametrize("command", ["stats", "overview", "goals", "insights", "suggestions", "stacks"])
    def test_renders(self, capsys, snapshot_path, command):
        """Test every command renders without error."""
        assert main(["--snapshot", str(snapshot_path), *NOW_ARGS, command]) == 0
        assert capsys.readouterr().out

    def test_empty_stack(self, capsys, tmp_path, make_habit):
        """Test a stack with no members is listed without a table."""
        snapshot = HabitSnapshot(habits=[make_habit(name="Read")], stacks=[HabitStack(name="Evening")])
        path = tmp_path / "empty.json"
        path.write_text(snapshot.model_dump_json(by_alias=True))
        assert main(["--snapshot", str(path), *NOW_ARGS, "stacks"]) == 0
        assert "Evening has no habits." in capsys.readouterr().out


class TestErrors:
    """Tests for failure handling."""

    def test_missing_snapshot(self, tmp_path):
        """Test an unreadable snapshot exits with 1."""
        assert main(["--snapshot", str(tmp_path / "nope.json"), *NOW_ARGS, "stats"]) == 1

    def test_no_command(self, snapshot_path):
        """Test help is shown without a command."""
        assert main(["--snapshot", str(snapshot_path)]) == 1

    def test_bad_now(self, snapshot_path):
        """Test a malformed --now is a usage error."""
        with pytest.raises(SystemExit):
            main(["--snapshot", str(snapshot_path), "--now", "yesterday", "stats"])

    def test_bad_timezone(self, snapshot_path):
        """Test an unknown zone is a usage error."""
        with pytest.raises(SystemExit):
            main(["--snapshot", str(snapshot_path), "--tz", "Mars/Olympus", "stats"])

    def test_parser_requires_snapshot(self):
        """Test --snapshot is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["stats"])
