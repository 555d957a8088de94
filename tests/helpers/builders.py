"""Minimal record builders for engine tests.

Reference calendar used throughout the suite (November 2025):

    Sat 08  Sun 09 | Mon 10 ... Fri 14 (REFERENCE_NOW) | Sat 15  Sun 16
    ISO week 45    | ISO week 46                       | ISO week 46
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from itertools import count
from typing import Any
from zoneinfo import ZoneInfo

from mugshot.type_defs import Aggregates, DrinkType, VisitRecord
from mugshot.utils.dt_utils import CalendarConvention

# Friday, 2025-11-14 at noon UTC
REFERENCE_NOW = datetime(2025, 11, 14, 12, 0, tzinfo=UTC)

UTC_CALENDAR = CalendarConvention(ZoneInfo("UTC"))
LA_CALENDAR = CalendarConvention(ZoneInfo("America/Los_Angeles"))

_visit_ids = count(1)


def at(day: date, hour: int = 10, minute: int = 0) -> datetime:
    """Create a UTC datetime on the given day."""
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=UTC)


def make_visit(
    *,
    created_at: datetime = REFERENCE_NOW,
    cafe_id: str = "cafe-1",
    drink_type: DrinkType = DrinkType.COFFEE,
    notes: str | None = None,
    overall_score: float = 0.0,
    visit_id: str | None = None,
) -> VisitRecord:
    """Build a VisitRecord with sensible defaults."""
    return VisitRecord(
        id=visit_id or f"visit-{next(_visit_ids)}",
        cafe_id=cafe_id,
        created_at=created_at,
        drink_type=drink_type,
        notes=notes,
        overall_score=overall_score,
    )


def make_visits_on_days(days: list[date], **kwargs: Any) -> list[VisitRecord]:
    """Build one 10:00 UTC visit per day."""
    return [make_visit(created_at=at(day), **kwargs) for day in days]


def make_aggregates(**overrides: int) -> Aggregates:
    """Build Aggregates with every field zero unless overridden."""
    return Aggregates(**overrides)
