"""Development utility: evaluate badges for a YAML visit scenario.

Loads a scenario file (see data_builders.parse_scenario for the format),
runs the badge engine and prints the resulting badge table.

USAGE:
    # Print badges as a table
    python -m mugshot tests/scenarios/scenario_regular.yaml

    # Pin the reference time and zone from the command line
    python -m mugshot scenario.yaml --now 2025-11-14T12:00:00 --tz America/Chicago

    # Machine-readable output, with engine debug logging on stderr
    python -m mugshot scenario.yaml --json --verbose
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import json
import logging
import sys
from typing import Any

from . import const
from .badges import BadgeState
from .data_builders import ScenarioError, VisitValidationError, load_scenario
from .engines.gamification_engine import GamificationEngine
from .engines.statistics_engine import StatisticsEngine
from .type_defs import Aggregates
from .utils.dt_utils import dt_now_utc, dt_parse
from .utils.math_utils import calculate_percentage


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mugshot",
        description="Evaluate Mugshot badges for a YAML visit scenario.",
    )
    parser.add_argument("scenario", help="Path to the scenario YAML file")
    parser.add_argument(
        "--now",
        help="Reference time (ISO 8601); overrides the scenario's `now`",
    )
    parser.add_argument(
        "--tz",
        dest="time_zone",
        help="IANA time zone; overrides the scenario's `time_zone`",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print badges and aggregates as JSON"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def badge_to_dict(state: BadgeState) -> dict[str, Any]:
    """Serialize a badge state for JSON output."""
    definition = state.definition
    return {
        "id": state.id,
        "name": definition.name,
        "category": definition.category.display_name,
        "icon_name": definition.icon_name,
        "is_unlocked": state.is_unlocked,
        "current_value": state.current_value,
        "target_value": state.target_value,
        "progress": state.progress,
        "progress_text": state.progress_text,
        "unlock_hint": definition.unlock_hint,
    }


def aggregates_to_dict(aggregates: Aggregates) -> dict[str, int]:
    return {
        "total_visits": aggregates.total_visits,
        "unique_cafe_count": aggregates.unique_cafe_count,
        "visits_with_notes_count": aggregates.visits_with_notes_count,
        "distinct_drink_types_count": aggregates.distinct_drink_types_count,
        "early_morning_visits_count": aggregates.early_morning_visits_count,
        "current_streak_days": aggregates.current_streak_days,
        "longest_streak_days": aggregates.longest_streak_days,
        "consecutive_weekends_count": aggregates.consecutive_weekends_count,
    }


def format_badge_table(states: Sequence[BadgeState]) -> str:
    """Render badge states as aligned text rows."""
    name_width = max((len(s.definition.name) for s in states), default=0)
    category_width = max(
        (len(s.definition.category.display_name) for s in states), default=0
    )
    lines = []
    for state in states:
        marker = "[x]" if state.is_unlocked else "[ ]"
        percent = calculate_percentage(state.progress, 1.0)
        lines.append(
            f"{marker} {state.definition.name:<{name_width}}  "
            f"{state.definition.category.display_name:<{category_width}}  "
            f"{state.progress_text:>9}  {percent:6.2f}%"
        )
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        scenario = load_scenario(args.scenario, time_zone=args.time_zone)
    except (ScenarioError, VisitValidationError) as err:
        print(f"error: {err}", file=sys.stderr)
        return const.CLI_EXIT_INPUT_ERROR

    now = scenario.now
    if args.now:
        now = dt_parse(args.now, default_tzinfo=scenario.calendar.time_zone)
        if now is None:
            print(f"error: invalid --now value: {args.now}", file=sys.stderr)
            return const.CLI_EXIT_INPUT_ERROR

    # One reference instant for both the aggregates and the badges
    if now is None:
        now = dt_now_utc()

    visits = list(scenario.visits)
    aggregates = StatisticsEngine.compute_aggregates(visits, now, scenario.calendar)
    states = GamificationEngine.compute_badges(visits, now, scenario.calendar)

    if args.json:
        print(
            json.dumps(
                {
                    "aggregates": aggregates_to_dict(aggregates),
                    "badges": [badge_to_dict(state) for state in states],
                },
                indent=2,
            )
        )
    else:
        unlocked = sum(1 for state in states if state.is_unlocked)
        print(f"{const.MUGSHOT_TITLE}: {len(visits)} visits, {unlocked} badges unlocked")
        print(format_badge_table(states))

    return const.CLI_EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
