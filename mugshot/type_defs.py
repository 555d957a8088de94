"""Type definitions for Mugshot data structures.

Visit history is owned by the app's visit store; the engines only ever read
a snapshot of it. Every structure here is therefore an immutable value type:
frozen dataclasses built once by `data_builders` (or directly by callers) and
never mutated by the engines.

IMPORTANT: This file must NOT import from the engines or data_builders to
avoid circular dependencies. Only import from const.py and the standard
library.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from . import const

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

VisitId = str  # UUID string
CafeId = str  # UUID string
BadgeId = str  # Stable catalog key, e.g. "first_pour"


# =============================================================================
# Enums
# =============================================================================


class DrinkType(Enum):
    """Drink logged with a visit. Values are the display strings."""

    COFFEE = const.DRINK_TYPE_COFFEE
    MATCHA = const.DRINK_TYPE_MATCHA
    HOJICHA = const.DRINK_TYPE_HOJICHA
    TEA = const.DRINK_TYPE_TEA
    CHAI = const.DRINK_TYPE_CHAI
    HOT_CHOCOLATE = const.DRINK_TYPE_HOT_CHOCOLATE
    OTHER = const.DRINK_TYPE_OTHER

    @classmethod
    def from_value(cls, value: str) -> DrinkType:
        """Look up a drink type by display string or member name.

        Matching ignores case, surrounding whitespace and underscores vs
        spaces, so "hot_chocolate", "Hot Chocolate" and "HOT_CHOCOLATE" all
        resolve to HOT_CHOCOLATE.

        Raises:
            ValueError: If nothing matches.
        """
        normalized = value.strip().replace("_", " ").casefold()
        for member in cls:
            if normalized in (
                member.value.casefold(),
                member.name.replace("_", " ").casefold(),
            ):
                return member
        raise ValueError(f"Unknown drink type: {value}")


# =============================================================================
# Input Records
# =============================================================================


@dataclass(frozen=True)
class VisitRecord:
    """A single logged cafe visit.

    Attributes:
        id: Unique visit identifier
        cafe_id: Identifier of the cafe visited
        created_at: Instant of the visit; drives every time-based statistic.
            Naive values are treated as UTC.
        drink_type: Drink logged with the visit
        notes: Private notes; only presence after trimming matters
        overall_score: Weighted rating average, used for top-cafe ranking
        caption: Public caption, carried through untouched
    """

    id: VisitId
    cafe_id: CafeId
    created_at: datetime
    drink_type: DrinkType
    notes: str | None = None
    overall_score: float = 0.0
    caption: str = ""

    @property
    def has_notes(self) -> bool:
        """True when notes are present and not just whitespace."""
        return bool(self.notes and self.notes.strip())


@dataclass(frozen=True)
class CafeRecord:
    """Minimal cafe shape returned by cafe lookups."""

    id: CafeId
    name: str


# =============================================================================
# Derived Statistics
# =============================================================================


@dataclass(frozen=True)
class Aggregates:
    """Statistics reduced from a visit list, consumed by every badge rule."""

    total_visits: int = 0
    unique_cafe_count: int = 0
    visits_with_notes_count: int = 0
    distinct_drink_types_count: int = 0
    early_morning_visits_count: int = 0
    current_streak_days: int = 0
    longest_streak_days: int = 0
    consecutive_weekends_count: int = 0


@dataclass(frozen=True)
class WeekdayVisitEntry:
    """One cell of the seven-day visit strip."""

    day_letter: str
    date: date
    has_visit: bool


@dataclass(frozen=True)
class TopCafeEntry:
    """A cafe ranked by how often it was visited."""

    cafe: Any
    visit_count: int
    avg_rating: float


@dataclass(frozen=True)
class MonthGroup:
    """Visits bucketed by local calendar month.

    Attributes:
        key: Sortable month key ("2025-11")
        display_string: Human-readable month ("November 2025")
        visits: Visits in the month, newest first
    """

    key: str
    display_string: str
    visits: tuple[VisitRecord, ...] = ()
