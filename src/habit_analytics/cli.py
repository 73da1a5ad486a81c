#!/usr/bin/env python3
"""
Habit analytics CLI.

Runs the analytics engine over a JSON snapshot of habits and stacks.

Usage:
    habit-analytics --snapshot habits.json stats
    habit-analytics --snapshot habits.json overview
    habit-analytics --snapshot habits.json goals
    habit-analytics --snapshot habits.json insights
    habit-analytics --snapshot habits.json suggestions --dismiss "Meditate"
    habit-analytics --snapshot habits.json stacks
    habit-analytics --snapshot habits.json --now 2026-03-18T20:00 --json insights
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import Settings, get_settings
from .engine import HabitEngine
from .exceptions import HabitAnalyticsError
from .models.insight import InsightPriority
from .progression import format_goal_value
from .snapshot import HabitSnapshot, load_snapshot

console = Console()
logger = logging.getLogger(__name__)


def get_priority_color(priority: InsightPriority) -> str:
    """Get rich color for insight priority."""
    colors = {
        InsightPriority.URGENT: "red",
        InsightPriority.HIGH: "yellow",
        InsightPriority.MEDIUM: "cyan",
        InsightPriority.LOW: "white",
    }
    return colors.get(priority, "white")


def format_rate(rate: float) -> Text:
    """Format a 0-1 rate with rich colors."""
    if rate >= 0.8:
        color = "green"
    elif rate >= 0.5:
        color = "yellow"
    else:
        color = "red"
    return Text(f"{rate:.0%}", style=color)


def dump(models: List[Any]) -> List[Any]:
    return [model.model_dump(mode="json", by_alias=True) for model in models]


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


# =============================================================================
# Commands
# =============================================================================

def cmd_stats(args, engine: HabitEngine, snapshot: HabitSnapshot):
    """Show streaks and completion rates per habit."""
    stats = engine.statistics.calculate_all(snapshot.habits)
    if args.json:
        print_json([s.to_dict() for s in stats])
        return

    table = Table(title=f"Habit Statistics ({engine.calendar.today.isoformat()})", box=box.ROUNDED)
    table.add_column("Habit", style="cyan")
    table.add_column("Today", justify="center")
    table.add_column("Streak", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Goal", justify="right")

    for s in stats:
        table.add_row(
            escape(s.habit_name),
            "[green]done[/green]" if s.is_completed_today else "[dim]-[/dim]",
            str(s.current_streak),
            str(s.longest_streak),
            format_rate(s.completion_rate),
            f"{s.today_progress:.0%}",
            format_goal_value(s.effective_goal) if s.effective_goal is not None else "-",
        )

    console.print(table)


def cmd_overview(args, engine: HabitEngine, snapshot: HabitSnapshot):
    """Show totals across all habits and the last 7 days of activity."""
    overview = engine.statistics.overview(snapshot.habits)
    activity = engine.statistics.daily_activity(snapshot.habits)
    if args.json:
        print_json({
            "overview": overview.to_dict(),
            "daily_activity": [day.to_dict() for day in activity],
        })
        return

    console.print(Panel(
        f"[bold]{overview.completed_today}/{overview.total_habits}[/bold] habits done today\n"
        f"Best current streak: [bold]{overview.best_current_streak}[/bold] days "
        f"(all-time {overview.best_longest_streak})\n"
        f"Total check-ins: [bold]{overview.total_check_ins}[/bold]\n"
        f"Average completion rate: [bold]{overview.average_completion_rate:.0%}[/bold]",
        title="Overview",
    ))

    table = Table(title="This Week", box=box.ROUNDED)
    table.add_column("Day", style="cyan")
    table.add_column("Check-ins", justify="right")
    table.add_column("", style="green")
    for day in activity:
        label = f"[bold]{day.label}[/bold]" if day.is_today else day.label
        table.add_row(label, f"{day.completed_count}/{day.total_habits}", "#" * day.completed_count)
    console.print(table)


def cmd_goals(args, engine: HabitEngine, snapshot: HabitSnapshot):
    """Show effective goals, progression info and adaptive proposals."""
    rows = []
    for habit in snapshot.habits:
        info = engine.goals.get_progression_info(habit)
        adjustment = engine.goals.check_adaptive_adjustment(habit)
        rows.append((habit, engine.goals.effective_goal(habit), info, adjustment))

    if args.json:
        print_json([
            {
                "habitId": str(habit.id),
                "habitName": habit.name,
                "goalProgression": habit.goal_progression.value,
                "progressionDescription": habit.goal_progression.description,
                "effectiveGoal": goal,
                "restDays": engine.goals.format_rest_days(habit),
                "progression": info.model_dump(mode="json", by_alias=True) if info else None,
                "adjustment": adjustment.model_dump(mode="json", by_alias=True) if adjustment else None,
            }
            for habit, goal, info, adjustment in rows
        ])
        return

    table = Table(title="Goals", box=box.ROUNDED)
    table.add_column("Habit", style="cyan")
    table.add_column("Mode")
    table.add_column("Goal", justify="right")
    table.add_column("Rest Days")
    table.add_column("Outlook")

    for habit, goal, info, adjustment in rows:
        if adjustment:
            outlook = (
                f"[yellow]Suggest {adjustment.type.value} to "
                f"{format_goal_value(adjustment.suggested_goal, habit.unit)}[/yellow]"
            )
        elif info:
            outlook = escape(info.message)
        else:
            outlook = f"[dim]{habit.goal_progression.description}[/dim]"
        table.add_row(
            escape(habit.name),
            habit.goal_progression.display_name,
            format_goal_value(goal, habit.unit) if goal is not None else "-",
            engine.goals.format_rest_days(habit) or "-",
            outlook,
        )

    console.print(table)


def cmd_insights(args, engine: HabitEngine, snapshot: HabitSnapshot):
    """Show ranked insights."""
    insights = engine.insights.generate(snapshot.habits)
    if args.json:
        print_json(dump(insights))
        return

    console.print()
    for insight in insights:
        color = get_priority_color(insight.priority)
        body = escape(insight.message)
        if insight.detail:
            body += f"\n[dim]{escape(insight.detail)}[/dim]"
        console.print(Panel(
            body,
            title=f"[{color}]{escape(insight.title)}[/{color}]",
            subtitle=insight.type.value,
            border_style=color,
        ))


def cmd_suggestions(args, engine: HabitEngine, snapshot: HabitSnapshot):
    """Show habit suggestions, optionally dismissing one first."""
    if args.reset_dismissed:
        engine.suggestions.reset_dismissed()
        if not args.json:
            console.print("[green]Dismissed suggestions cleared.[/green]")
    for name in args.dismiss or []:
        engine.suggestions.dismiss(name)

    suggestions = engine.suggestions.generate(snapshot.habits)
    if args.json:
        print_json(dump(suggestions))
        return

    table = Table(title="Suggested Habits", box=box.ROUNDED)
    table.add_column("Habit", style="cyan")
    table.add_column("Category")
    table.add_column("Score", justify="right")
    table.add_column("Why")

    for suggestion in suggestions:
        table.add_row(
            escape(suggestion.name),
            suggestion.category.display_name,
            str(suggestion.priority),
            escape(suggestion.reason),
        )

    console.print(table)


def cmd_stacks(args, engine: HabitEngine, snapshot: HabitSnapshot):
    """Show chain progress and pairs worth stacking."""
    progress = engine.stacks.get_all_progress(snapshot.stacks, snapshot.habits)
    combinations = engine.stacks.suggest_stack_combinations(snapshot.habits)
    if args.json:
        print_json({"stacks": dump(progress), "combinations": dump(combinations)})
        return

    if not progress:
        console.print("[dim]No stacks yet.[/dim]")

    for stack, chain in zip(snapshot.stacks, progress):
        if stack.is_empty:
            console.print(f"[dim]{escape(stack.name)} has no habits.[/dim]")
            continue

        table = Table(
            title=f"{escape(chain.stack_name)} ({chain.completed_count}/{chain.total_count})",
            box=box.ROUNDED,
        )
        table.add_column("#", justify="right")
        table.add_column("Habit", style="cyan")
        table.add_column("Done", justify="center")
        current_id = chain.current_item.habit_id if chain.current_item else None
        for item in chain.items:
            marker = " [yellow]<- next[/yellow]" if item.habit_id == current_id else ""
            table.add_row(
                str(item.order + 1),
                escape(item.habit_name) + marker,
                "[green]done[/green]" if item.is_completed else "[dim]-[/dim]",
            )
        console.print(table)

    if combinations:
        table = Table(title="Habits Often Done Together", box=box.ROUNDED)
        table.add_column("First", style="cyan")
        table.add_column("Second", style="cyan")
        table.add_column("Overlap", justify="right")
        for pair in combinations:
            table.add_row(
                escape(pair.first_habit_name),
                escape(pair.second_habit_name),
                f"{pair.similarity:.0%}",
            )
        console.print(table)


COMMANDS = {
    "stats": cmd_stats,
    "overview": cmd_overview,
    "goals": cmd_goals,
    "insights": cmd_insights,
    "suggestions": cmd_suggestions,
    "stacks": cmd_stacks,
}


# =============================================================================
# Entry point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="habit-analytics",
        description="Habit analytics - streaks, goals, insights and suggestions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  habit-analytics --snapshot habits.json stats
  habit-analytics --snapshot habits.json --now 2026-03-18T20:00 insights
  habit-analytics --snapshot habits.json --json suggestions
        """,
    )
    parser.add_argument("--snapshot", "-s", required=True, help="Path to a habit snapshot JSON file")
    parser.add_argument("--now", help="Analysis time as ISO 8601 (default: current time)")
    parser.add_argument("--timezone", "--tz", help="IANA time zone, e.g. Europe/Berlin")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default from settings)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("stats", help="Streaks and completion rates per habit")
    subparsers.add_parser("overview", help="Totals and the last 7 days")
    subparsers.add_parser("goals", help="Effective goals and adaptive proposals")
    subparsers.add_parser("insights", help="Ranked insights")

    suggestions_p = subparsers.add_parser("suggestions", help="Suggested new habits")
    suggestions_p.add_argument(
        "--dismiss",
        action="append",
        metavar="NAME",
        help="Dismiss a suggestion by name (repeatable)",
    )
    suggestions_p.add_argument(
        "--reset-dismissed",
        action="store_true",
        help="Clear all dismissed suggestions first",
    )

    subparsers.add_parser("stacks", help="Chain progress and stacking ideas")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = Settings(timezone=args.timezone) if args.timezone else get_settings()
    except PydanticValidationError as e:
        parser.error(f"invalid settings: {e.errors()[0]['msg']}")

    now = None
    if args.now:
        try:
            now = datetime.fromisoformat(args.now)
        except ValueError:
            parser.error(f"--now must be ISO 8601, got {args.now!r}")

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        snapshot = load_snapshot(args.snapshot)
        engine = HabitEngine(settings=settings, now=now)
        COMMANDS[args.command](args, engine, snapshot)
    except HabitAnalyticsError as e:
        logger.debug(f"Command failed: {e!r}")
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
