"""Statistics Engine - Visit history aggregation for badges and the journal.

This engine reduces a user's visit history into derived statistics:
- Badge aggregates (counts, streaks, weekend consistency)
- Rolling visit windows (this week, last 30 days)
- Journal summaries (weekday strip, top cafes, notes groupings)

Design Principles:
    - Stateless: All methods are static and operate on passed-in visits
    - Injectable time: `now` and `calendar` are parameters, never globals
    - Order-independent: Visits are never assumed to be sorted
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, date, datetime
from typing import Any

from .. import const
from ..type_defs import (
    Aggregates,
    CafeId,
    MonthGroup,
    TopCafeEntry,
    VisitRecord,
    WeekdayVisitEntry,
)
from ..utils.dt_utils import CalendarConvention, as_local, dt_add_days, dt_now_utc
from ..utils.math_utils import average

CafeLookup = Callable[[CafeId], Any]


class StatisticsEngine:
    """Pure functions over a visit list.

    All methods are static - no instance state. Time-dependent methods take
    `now` (defaults to the current UTC instant) and `calendar` (defaults to
    CalendarConvention.system_default()) so callers can pin both.

    Example:
        aggregates = StatisticsEngine.compute_aggregates(
            visits,
            now=datetime(2025, 11, 14, 12, tzinfo=UTC),
            calendar=CalendarConvention(ZoneInfo("America/Los_Angeles")),
        )
    """

    # ────────────────────────────────────────────────────────────────
    # Argument Defaults
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def _resolve(
        now: datetime | None, calendar: CalendarConvention | None
    ) -> tuple[datetime, CalendarConvention]:
        """Fill in wall-clock time and the default calendar."""
        return (
            now if now is not None else dt_now_utc(),
            calendar if calendar is not None else CalendarConvention.system_default(),
        )

    @staticmethod
    def visit_days(
        visits: Iterable[VisitRecord], calendar: CalendarConvention
    ) -> set[date]:
        """Return the distinct local calendar days that contain a visit."""
        return {calendar.local_date(visit.created_at) for visit in visits}

    # ────────────────────────────────────────────────────────────────
    # Badge Aggregates
    # ────────────────────────────────────────────────────────────────

    @classmethod
    def compute_aggregates(
        cls,
        visits: Sequence[VisitRecord],
        now: datetime | None = None,
        calendar: CalendarConvention | None = None,
    ) -> Aggregates:
        """Reduce visits into the statistics every badge rule reads.

        Args:
            visits: Visit history in any order (may be empty)
            now: Reference instant for "today"
            calendar: Calendar convention for days, hours and weekends

        Returns:
            Aggregates; all zeros for an empty history.
        """
        now, calendar = cls._resolve(now, calendar)

        if not visits:
            return Aggregates()

        return Aggregates(
            total_visits=len(visits),
            unique_cafe_count=len({visit.cafe_id for visit in visits}),
            visits_with_notes_count=cls.notes_count(visits),
            distinct_drink_types_count=len({visit.drink_type for visit in visits}),
            early_morning_visits_count=cls.early_morning_visits(visits, calendar),
            current_streak_days=cls.current_streak(visits, now, calendar),
            longest_streak_days=cls.longest_streak(visits, calendar),
            consecutive_weekends_count=cls.consecutive_weekends(visits, calendar),
        )

    @staticmethod
    def early_morning_visits(
        visits: Iterable[VisitRecord],
        calendar: CalendarConvention,
        cutoff_hour: int = const.EARLY_MORNING_CUTOFF_HOUR,
    ) -> int:
        """Count visits whose local hour is strictly before the cutoff."""
        return sum(1 for visit in visits if calendar.hour(visit.created_at) < cutoff_hour)

    # ────────────────────────────────────────────────────────────────
    # Streaks
    # ────────────────────────────────────────────────────────────────

    @classmethod
    def current_streak(
        cls,
        visits: Iterable[VisitRecord],
        now: datetime | None = None,
        calendar: CalendarConvention | None = None,
    ) -> int:
        """Count consecutive visit days ending today, or yesterday.

        A streak survives until the end of the day after the last visit, so
        a run ending yesterday still counts while today has no visit yet.

        Returns:
            Streak length in days; 0 when neither today nor yesterday has a visit.
        """
        now, calendar = cls._resolve(now, calendar)
        days = cls.visit_days(visits, calendar)
        if not days:
            return 0

        today = calendar.local_date(now)
        yesterday = dt_add_days(today, -1)

        if today in days:
            cursor = today
        elif yesterday in days:
            cursor = yesterday
        else:
            return 0

        streak = 0
        while cursor in days:
            streak += 1
            cursor = dt_add_days(cursor, -1)
        return streak

    @classmethod
    def longest_streak(
        cls,
        visits: Iterable[VisitRecord],
        calendar: CalendarConvention | None = None,
    ) -> int:
        """Return the longest run of consecutive visit days in the history."""
        _, calendar = cls._resolve(None, calendar)
        days = sorted(cls.visit_days(visits, calendar))
        if not days:
            return 0

        longest = 1
        running = 1
        for previous, current in zip(days, days[1:]):
            if dt_add_days(previous, 1) == current:
                running += 1
                longest = max(longest, running)
            else:
                running = 1
        return longest

    @classmethod
    def consecutive_weekends(
        cls,
        visits: Iterable[VisitRecord],
        calendar: CalendarConvention | None = None,
    ) -> int:
        """Return the longest run of back-to-back weekends with a visit.

        Saturday and the following Sunday form one weekend unit keyed as
        `iso_year * 100 + iso_week`. Two keys are consecutive when they are
        one week apart in the same ISO year, or when the earlier key is week
        52 or later and the next is week 1 of the following year.
        """
        _, calendar = cls._resolve(None, calendar)
        weekend_keys = {
            key
            for visit in visits
            if (key := calendar.weekend_key(visit.created_at)) is not None
        }
        if not weekend_keys:
            return 0

        ordered = sorted(weekend_keys)
        longest = 1
        running = 1
        for previous, current in zip(ordered, ordered[1:]):
            if cls._weekends_adjacent(previous, current):
                running += 1
                longest = max(longest, running)
            else:
                running = 1
        return longest

    @staticmethod
    def _weekends_adjacent(previous: int, current: int) -> bool:
        """Check whether two weekend keys are one week apart."""
        prev_year, prev_week = divmod(previous, 100)
        curr_year, curr_week = divmod(current, 100)
        if curr_year == prev_year:
            return curr_week == prev_week + 1
        # Year rollover: last ISO week of one year into week 1 of the next
        return curr_year == prev_year + 1 and curr_week == 1 and prev_week >= 52

    # ────────────────────────────────────────────────────────────────
    # Visit Windows
    # ────────────────────────────────────────────────────────────────

    @classmethod
    def visits_in_last_days(
        cls,
        visits: Iterable[VisitRecord],
        days: int,
        now: datetime | None = None,
        calendar: CalendarConvention | None = None,
    ) -> int:
        """Count visits from the start of the window through now.

        The window covers `days` local calendar days including today, so
        `days=7` spans today plus the six days before it.
        """
        now, calendar = cls._resolve(now, calendar)
        window_start = dt_add_days(calendar.local_date(now), -(days - 1))
        return sum(
            1 for visit in visits if calendar.local_date(visit.created_at) >= window_start
        )

    @classmethod
    def weekday_visit_map(
        cls,
        visits: Iterable[VisitRecord],
        now: datetime | None = None,
        calendar: CalendarConvention | None = None,
    ) -> list[WeekdayVisitEntry]:
        """Build the seven-day visit strip, oldest day first, ending today."""
        now, calendar = cls._resolve(now, calendar)
        days = cls.visit_days(visits, calendar)
        today = calendar.local_date(now)

        entries: list[WeekdayVisitEntry] = []
        for days_ago in reversed(range(const.WEEKDAY_MAP_DAYS)):
            day = dt_add_days(today, -days_ago)
            entries.append(
                WeekdayVisitEntry(
                    day_letter=const.WEEKDAY_LETTERS.get(
                        calendar.weekday(day), const.WEEKDAY_LETTER_UNKNOWN
                    ),
                    date=day,
                    has_visit=day in days,
                )
            )
        return entries

    @classmethod
    def todays_visit(
        cls,
        visits: Iterable[VisitRecord],
        now: datetime | None = None,
        calendar: CalendarConvention | None = None,
    ) -> VisitRecord | None:
        """Return the first visit (in input order) logged on today's local date."""
        now, calendar = cls._resolve(now, calendar)
        today = calendar.local_date(now)
        return next(
            (v for v in visits if calendar.local_date(v.created_at) == today), None
        )

    # ────────────────────────────────────────────────────────────────
    # Cafes
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def top_cafes(
        visits: Iterable[VisitRecord],
        cafe_lookup: CafeLookup,
        limit: int = const.DEFAULT_TOP_CAFES_LIMIT,
    ) -> list[TopCafeEntry]:
        """Rank cafes by visit count, then by average overall score.

        Cafes the lookup cannot resolve are skipped.
        """
        visits_by_cafe: dict[CafeId, list[VisitRecord]] = defaultdict(list)
        for visit in visits:
            visits_by_cafe[visit.cafe_id].append(visit)

        ranked: list[TopCafeEntry] = []
        for cafe_id, cafe_visits in visits_by_cafe.items():
            cafe = cafe_lookup(cafe_id)
            if cafe is None:
                continue
            ranked.append(
                TopCafeEntry(
                    cafe=cafe,
                    visit_count=len(cafe_visits),
                    avg_rating=average([v.overall_score for v in cafe_visits]),
                )
            )

        ranked.sort(key=lambda entry: (-entry.visit_count, -entry.avg_rating))
        return ranked[:limit]

    # ────────────────────────────────────────────────────────────────
    # Notes
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def _newest_first(visits: Iterable[VisitRecord]) -> list[VisitRecord]:
        return sorted(
            visits, key=lambda visit: as_local(visit.created_at, UTC), reverse=True
        )

    @staticmethod
    def notes_count(visits: Iterable[VisitRecord]) -> int:
        """Count visits whose notes are non-empty after trimming."""
        return sum(1 for visit in visits if visit.has_notes)

    @classmethod
    def all_visits_with_notes(cls, visits: Iterable[VisitRecord]) -> list[VisitRecord]:
        """Return every visit with notes, newest first."""
        return cls._newest_first(v for v in visits if v.has_notes)

    @classmethod
    def recent_visits_with_notes(
        cls,
        visits: Iterable[VisitRecord],
        limit: int = const.DEFAULT_RECENT_NOTES_LIMIT,
    ) -> list[VisitRecord]:
        """Return the most recent visits with notes."""
        return cls.all_visits_with_notes(visits)[:limit]

    @classmethod
    def group_visits_by_month(
        cls,
        visits: Iterable[VisitRecord],
        calendar: CalendarConvention | None = None,
    ) -> list[MonthGroup]:
        """Bucket visits by local calendar month, newest month first.

        Callers normally pass `all_visits_with_notes()` output; any visit
        list is accepted.
        """
        _, calendar = cls._resolve(None, calendar)
        grouped: dict[str, list[VisitRecord]] = defaultdict(list)
        for visit in visits:
            local_dt = calendar.localize(visit.created_at)
            grouped[local_dt.strftime(const.PERIOD_FORMAT_MONTH_KEY)].append(visit)

        groups: list[MonthGroup] = []
        for key in sorted(grouped, reverse=True):
            month_visits = cls._newest_first(grouped[key])
            display = calendar.localize(month_visits[0].created_at).strftime(
                const.PERIOD_FORMAT_MONTH_DISPLAY
            )
            groups.append(
                MonthGroup(key=key, display_string=display, visits=tuple(month_visits))
            )
        return groups

    @classmethod
    def cafes_with_notes(
        cls,
        visits: Iterable[VisitRecord],
        cafe_lookup: CafeLookup,
    ) -> list[Any]:
        """Return resolvable cafes with at least one noted visit, by name."""
        cafe_ids = {visit.cafe_id for visit in visits if visit.has_notes}
        cafes = [cafe for cafe_id in cafe_ids if (cafe := cafe_lookup(cafe_id)) is not None]
        return sorted(cafes, key=lambda cafe: cafe.name.casefold())

    @classmethod
    def filter_notes_by_cafe(
        cls, visits: Iterable[VisitRecord], cafe_id: CafeId
    ) -> list[VisitRecord]:
        """Return the visits for one cafe, newest first."""
        return cls._newest_first(v for v in visits if v.cafe_id == cafe_id)
