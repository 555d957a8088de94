"""Tests for StatisticsEngine.

Tests cover:
- Aggregate computation (counts, notes, drink types, early morning)
- Current and longest daily streaks
- Consecutive weekend runs, including the ISO year rollover
- Visit windows and the weekday strip
- Journal summaries (top cafes, notes, month grouping)
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from mugshot import const
from mugshot.engines.statistics_engine import StatisticsEngine
from mugshot.type_defs import Aggregates, DrinkType

from tests.helpers import (
    LA_CALENDAR,
    REFERENCE_NOW,
    UTC_CALENDAR,
    at,
    make_visit,
    make_visits_on_days,
)

# =============================================================================
# TEST: compute_aggregates
# =============================================================================


class TestComputeAggregates:
    """Tests for the badge aggregate reduction."""

    def test_empty_history_is_all_zero(self) -> None:
        """No visits produces zero for every statistic."""
        result = StatisticsEngine.compute_aggregates([], REFERENCE_NOW, UTC_CALENDAR)

        assert result == Aggregates()

    def test_counts_and_distinct_sets(self) -> None:
        """Totals, unique cafes and drink types are counted independently."""
        visits = [
            make_visit(cafe_id="cafe-1", drink_type=DrinkType.COFFEE),
            make_visit(cafe_id="cafe-1", drink_type=DrinkType.MATCHA),
            make_visit(cafe_id="cafe-2", drink_type=DrinkType.COFFEE),
            make_visit(cafe_id="cafe-3", drink_type=DrinkType.HOT_CHOCOLATE),
        ]

        result = StatisticsEngine.compute_aggregates(visits, REFERENCE_NOW, UTC_CALENDAR)

        assert result.total_visits == 4
        assert result.unique_cafe_count == 3
        assert result.distinct_drink_types_count == 3

    def test_notes_ignore_blank_text(self) -> None:
        """Only notes with content after trimming are counted."""
        visits = [
            make_visit(notes="Bright and fruity"),
            make_visit(notes="   "),
            make_visit(notes=""),
            make_visit(notes=None),
            make_visit(notes="\n Nutty \n"),
        ]

        result = StatisticsEngine.compute_aggregates(visits, REFERENCE_NOW, UTC_CALENDAR)

        assert result.visits_with_notes_count == 2

    def test_early_morning_cutoff_is_exclusive(self) -> None:
        """08:59 counts as early morning, 09:00 does not."""
        day = date(2025, 11, 14)
        visits = [
            make_visit(created_at=at(day, 8, 59)),
            make_visit(created_at=at(day, 9, 0)),
            make_visit(created_at=at(day, 0, 0)),
        ]

        result = StatisticsEngine.compute_aggregates(visits, REFERENCE_NOW, UTC_CALENDAR)

        assert result.early_morning_visits_count == 2

    def test_early_morning_uses_calendar_zone(self) -> None:
        """The hour is read in the calendar's zone, not UTC."""
        visits = [
            # 08:30 PST / 16:30 UTC
            make_visit(created_at=datetime(2025, 11, 14, 16, 30, tzinfo=UTC)),
            # 00:00 PST / 08:00 UTC
            make_visit(created_at=datetime(2025, 11, 14, 8, 0, tzinfo=UTC)),
            # 10:00 PST / 18:00 UTC
            make_visit(created_at=datetime(2025, 11, 14, 18, 0, tzinfo=UTC)),
        ]

        utc_result = StatisticsEngine.compute_aggregates(
            visits, REFERENCE_NOW, UTC_CALENDAR
        )
        la_result = StatisticsEngine.compute_aggregates(
            visits, REFERENCE_NOW, LA_CALENDAR
        )

        assert utc_result.early_morning_visits_count == 1
        assert la_result.early_morning_visits_count == 2

    def test_input_order_does_not_matter(self) -> None:
        """Shuffled visits produce identical aggregates."""
        visits = make_visits_on_days(
            [date(2025, 11, 12), date(2025, 11, 14), date(2025, 11, 13)]
        )

        forward = StatisticsEngine.compute_aggregates(visits, REFERENCE_NOW, UTC_CALENDAR)
        backward = StatisticsEngine.compute_aggregates(
            list(reversed(visits)), REFERENCE_NOW, UTC_CALENDAR
        )

        assert forward == backward
        assert forward.current_streak_days == 3


# =============================================================================
# TEST: streaks
# =============================================================================


class TestStreaks:
    """Tests for current and longest daily streaks."""

    def test_three_days_ending_today(self) -> None:
        """Visits on D, D-1, D-2 give a current streak of 3."""
        visits = make_visits_on_days(
            [date(2025, 11, 14), date(2025, 11, 13), date(2025, 11, 12)]
        )

        assert StatisticsEngine.current_streak(visits, REFERENCE_NOW, UTC_CALENDAR) == 3
        assert StatisticsEngine.longest_streak(visits, UTC_CALENDAR) == 3

    def test_gap_yesterday_breaks_streak(self) -> None:
        """Visits on D and D-2 only: today counts, runs are length 1."""
        visits = make_visits_on_days([date(2025, 11, 14), date(2025, 11, 12)])

        assert StatisticsEngine.current_streak(visits, REFERENCE_NOW, UTC_CALENDAR) == 1
        assert StatisticsEngine.longest_streak(visits, UTC_CALENDAR) == 1

    def test_streak_ending_yesterday_still_counts(self) -> None:
        """No visit yet today keeps a streak that ended yesterday."""
        visits = make_visits_on_days([date(2025, 11, 13), date(2025, 11, 12)])

        assert StatisticsEngine.current_streak(visits, REFERENCE_NOW, UTC_CALENDAR) == 2

    def test_streak_older_than_yesterday_is_zero(self) -> None:
        """A run ending two days ago is not current."""
        visits = make_visits_on_days([date(2025, 11, 12), date(2025, 11, 11)])

        assert StatisticsEngine.current_streak(visits, REFERENCE_NOW, UTC_CALENDAR) == 0
        assert StatisticsEngine.longest_streak(visits, UTC_CALENDAR) == 2

    def test_longest_vs_current(self) -> None:
        """A 5-day run two weeks ago and a 2-day run ending yesterday."""
        old_run = [date(2025, 10, day) for day in range(27, 32)]
        recent_run = [date(2025, 11, 12), date(2025, 11, 13)]
        visits = make_visits_on_days(old_run + recent_run)

        aggregates = StatisticsEngine.compute_aggregates(
            visits, REFERENCE_NOW, UTC_CALENDAR
        )

        assert aggregates.longest_streak_days == 5
        assert aggregates.current_streak_days == 2

    def test_multiple_visits_same_day_count_once(self) -> None:
        """Several visits on one day form a single streak day."""
        day = date(2025, 11, 14)
        visits = [
            make_visit(created_at=at(day, 7)),
            make_visit(created_at=at(day, 12)),
            make_visit(created_at=at(day, 18)),
        ]

        assert StatisticsEngine.current_streak(visits, REFERENCE_NOW, UTC_CALENDAR) == 1
        assert StatisticsEngine.longest_streak(visits, UTC_CALENDAR) == 1

    def test_empty_history(self) -> None:
        assert StatisticsEngine.current_streak([], REFERENCE_NOW, UTC_CALENDAR) == 0
        assert StatisticsEngine.longest_streak([], UTC_CALENDAR) == 0

    def test_streak_crosses_month_boundary(self) -> None:
        """Oct 31 to Nov 1 is one calendar day apart."""
        visits = make_visits_on_days(
            [date(2025, 10, 30), date(2025, 10, 31), date(2025, 11, 1)]
        )

        assert StatisticsEngine.longest_streak(visits, UTC_CALENDAR) == 3

    def test_days_are_bucketed_in_calendar_zone(self) -> None:
        """Two UTC days can collapse into one local day."""
        visits = [
            # Nov 13 19:00 PST
            make_visit(created_at=datetime(2025, 11, 14, 3, 0, tzinfo=UTC)),
            # Nov 13 02:00 PST
            make_visit(created_at=datetime(2025, 11, 13, 10, 0, tzinfo=UTC)),
        ]

        assert StatisticsEngine.current_streak(visits, REFERENCE_NOW, UTC_CALENDAR) == 2
        assert StatisticsEngine.current_streak(visits, REFERENCE_NOW, LA_CALENDAR) == 1


# =============================================================================
# TEST: consecutive_weekends
# =============================================================================


class TestConsecutiveWeekends:
    """Tests for the weekend-consistency metric."""

    def test_saturday_and_sunday_are_one_weekend(self) -> None:
        """Sat + Sun of the same weekend count as a single unit."""
        visits = make_visits_on_days([date(2025, 11, 15), date(2025, 11, 16)])

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 1

    def test_next_saturday_extends_run(self) -> None:
        """A visit the following Saturday makes two consecutive weekends."""
        visits = make_visits_on_days(
            [date(2025, 11, 15), date(2025, 11, 16), date(2025, 11, 22)]
        )

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 2

    def test_sunday_folds_onto_preceding_saturday(self) -> None:
        """Sunday Nov 9 belongs to the weekend starting Saturday Nov 8."""
        visits = make_visits_on_days([date(2025, 11, 9), date(2025, 11, 15)])

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 2

    def test_skipped_weekend_resets_run(self) -> None:
        """A one-week gap resets the run to 1."""
        visits = make_visits_on_days([date(2025, 11, 8), date(2025, 11, 22)])

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 1

    def test_longest_run_wins(self) -> None:
        """Three weekends, a gap, then two weekends gives 3."""
        visits = make_visits_on_days(
            [
                date(2025, 10, 18),
                date(2025, 10, 25),
                date(2025, 11, 1),
                date(2025, 11, 15),
                date(2025, 11, 22),
            ]
        )

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 3

    def test_weekday_visits_are_ignored(self) -> None:
        """Monday-Friday visits never form weekend units."""
        visits = make_visits_on_days([date(2025, 11, day) for day in range(10, 15)])

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 0

    def test_year_boundary_is_consecutive(self) -> None:
        """ISO 2024-W52 followed by 2025-W01 counts as back-to-back."""
        visits = make_visits_on_days([date(2024, 12, 28), date(2025, 1, 4)])

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 2

    def test_year_boundary_sunday_fold(self) -> None:
        """Sunday Dec 29 2024 folds back into ISO week 52 of 2024."""
        visits = make_visits_on_days([date(2024, 12, 29), date(2025, 1, 4)])

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 2

    def test_year_boundary_with_gap(self) -> None:
        """2024-W51 to 2025-W01 skips a weekend."""
        visits = make_visits_on_days([date(2024, 12, 21), date(2025, 1, 4)])

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 1

    def test_weekend_uses_calendar_zone(self) -> None:
        """Saturday 02:00 UTC is still Friday evening in Los Angeles."""
        visits = [make_visit(created_at=datetime(2025, 11, 15, 2, 0, tzinfo=UTC))]

        assert StatisticsEngine.consecutive_weekends(visits, UTC_CALENDAR) == 1
        assert StatisticsEngine.consecutive_weekends(visits, LA_CALENDAR) == 0


# =============================================================================
# TEST: visit windows
# =============================================================================


class TestVisitWindows:
    """Tests for rolling windows, the weekday strip and today's visit."""

    def test_last_7_days_includes_six_days_back(self) -> None:
        """The 7-day window starts at local midnight six days before today."""
        visits = make_visits_on_days(
            [date(2025, 11, 7), date(2025, 11, 8), date(2025, 11, 14)]
        )

        result = StatisticsEngine.visits_in_last_days(
            visits, const.STATS_WINDOW_WEEK_DAYS, REFERENCE_NOW, UTC_CALENDAR
        )

        assert result == 2

    def test_last_30_days(self) -> None:
        visits = make_visits_on_days(
            [date(2025, 10, 15), date(2025, 10, 16), date(2025, 11, 1)]
        )

        result = StatisticsEngine.visits_in_last_days(
            visits, const.STATS_WINDOW_MONTH_DAYS, REFERENCE_NOW, UTC_CALENDAR
        )

        assert result == 2

    def test_weekday_map_ends_today(self) -> None:
        """Seven entries, oldest first, lettered Sunday-first."""
        visits = make_visits_on_days([date(2025, 11, 10), date(2025, 11, 14)])

        entries = StatisticsEngine.weekday_visit_map(visits, REFERENCE_NOW, UTC_CALENDAR)

        assert [entry.date for entry in entries] == [
            date(2025, 11, day) for day in range(8, 15)
        ]
        assert "".join(entry.day_letter for entry in entries) == "SSMTWTF"
        assert [entry.has_visit for entry in entries] == [
            False,
            False,
            True,
            False,
            False,
            False,
            True,
        ]

    def test_todays_visit_returns_first_match(self) -> None:
        """The first visit from today in input order is returned."""
        first = make_visit(created_at=at(date(2025, 11, 14), 15), visit_id="late")
        second = make_visit(created_at=at(date(2025, 11, 14), 8), visit_id="early")
        older = make_visit(created_at=at(date(2025, 11, 13)), visit_id="old")

        result = StatisticsEngine.todays_visit(
            [older, first, second], REFERENCE_NOW, UTC_CALENDAR
        )

        assert result is first

    def test_todays_visit_none(self) -> None:
        visits = make_visits_on_days([date(2025, 11, 13)])

        assert StatisticsEngine.todays_visit(visits, REFERENCE_NOW, UTC_CALENDAR) is None


# =============================================================================
# TEST: journal summaries
# =============================================================================


class TestTopCafes:
    """Tests for top cafe ranking."""

    def test_ranked_by_count_then_rating(
        self, cafe_directory: dict[str, object]
    ) -> None:
        """Count wins; equal counts fall back to average score."""
        visits = [
            make_visit(cafe_id="cafe-1", overall_score=3.0),
            make_visit(cafe_id="cafe-1", overall_score=4.0),
            make_visit(cafe_id="cafe-1", overall_score=5.0),
            make_visit(cafe_id="cafe-2", overall_score=3.0),
            make_visit(cafe_id="cafe-2", overall_score=3.0),
            make_visit(cafe_id="cafe-3", overall_score=4.5),
            make_visit(cafe_id="cafe-3", overall_score=4.5),
        ]

        result = StatisticsEngine.top_cafes(visits, cafe_directory.get)

        assert [entry.cafe.id for entry in result] == ["cafe-1", "cafe-3", "cafe-2"]
        assert result[0].visit_count == 3
        assert result[0].avg_rating == 4.0
        assert result[1].avg_rating == 4.5

    def test_unknown_cafes_skipped_and_limit_applied(
        self, cafe_directory: dict[str, object]
    ) -> None:
        visits = [make_visit(cafe_id="closed-cafe") for _ in range(5)] + [
            make_visit(cafe_id="cafe-1"),
            make_visit(cafe_id="cafe-2"),
        ]

        result = StatisticsEngine.top_cafes(visits, cafe_directory.get, limit=1)

        assert len(result) == 1
        assert result[0].cafe.id in {"cafe-1", "cafe-2"}


class TestNotes:
    """Tests for notes listings and groupings."""

    def test_all_and_recent_are_newest_first(self) -> None:
        oldest = make_visit(created_at=at(date(2025, 11, 1)), notes="one")
        middle = make_visit(created_at=at(date(2025, 11, 5)), notes="two")
        newest = make_visit(created_at=at(date(2025, 11, 9)), notes="three")
        blank = make_visit(created_at=at(date(2025, 11, 10)), notes=" ")

        visits = [middle, blank, oldest, newest]

        assert StatisticsEngine.all_visits_with_notes(visits) == [newest, middle, oldest]
        assert StatisticsEngine.recent_visits_with_notes(visits, limit=2) == [
            newest,
            middle,
        ]
        assert StatisticsEngine.notes_count(visits) == 3

    def test_group_by_month(self) -> None:
        """Months newest first, visits newest first within a month."""
        nov_3 = make_visit(created_at=at(date(2025, 11, 3)), notes="a")
        oct_20 = make_visit(created_at=at(date(2025, 10, 20)), notes="b")
        nov_10 = make_visit(created_at=at(date(2025, 11, 10)), notes="c")

        groups = StatisticsEngine.group_visits_by_month(
            [nov_3, oct_20, nov_10], UTC_CALENDAR
        )

        assert [group.key for group in groups] == ["2025-11", "2025-10"]
        assert [group.display_string for group in groups] == [
            "November 2025",
            "October 2025",
        ]
        assert groups[0].visits == (nov_10, nov_3)
        assert groups[1].visits == (oct_20,)

    def test_group_by_month_uses_calendar_zone(self) -> None:
        """Nov 1 05:00 UTC is still October in Los Angeles."""
        visit = make_visit(created_at=datetime(2025, 11, 1, 5, 0, tzinfo=UTC))

        groups = StatisticsEngine.group_visits_by_month([visit], LA_CALENDAR)

        assert groups[0].key == "2025-10"

    def test_cafes_with_notes_sorted_case_insensitively(
        self, cafe_directory: dict[str, object]
    ) -> None:
        visits = [
            make_visit(cafe_id="cafe-1", notes="smooth"),
            make_visit(cafe_id="cafe-2", notes="floral"),
            make_visit(cafe_id="cafe-3", notes=None),
            make_visit(cafe_id="unknown", notes="gone"),
        ]

        cafes = StatisticsEngine.cafes_with_notes(visits, cafe_directory.get)

        assert [cafe.name for cafe in cafes] == ["Arabica", "blue bottle"]

    def test_filter_notes_by_cafe(self) -> None:
        older = make_visit(cafe_id="cafe-1", created_at=at(date(2025, 11, 1)))
        newer = make_visit(cafe_id="cafe-1", created_at=at(date(2025, 11, 2)))
        other = make_visit(cafe_id="cafe-2")

        result = StatisticsEngine.filter_notes_by_cafe([older, other, newer], "cafe-1")

        assert result == [newer, older]
