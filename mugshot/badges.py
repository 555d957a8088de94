"""Badge model types and the coffee-themed badge catalog.

The catalog is pure data: which badges exist, how they are presented and the
threshold each one targets. How a badge's current value is derived from the
visit aggregates lives in GamificationEngine, keyed by badge id.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from . import const
from .type_defs import BadgeId
from .utils.math_utils import calculate_progress

# =============================================================================
# BADGE CATEGORY
# =============================================================================


class BadgeCategory(Enum):
    """Badge grouping. Values are the display names."""

    MILESTONE = const.BADGE_CATEGORY_MILESTONE
    STREAK = const.BADGE_CATEGORY_STREAK
    EXPLORATION = const.BADGE_CATEGORY_EXPLORATION
    JOURNAL = const.BADGE_CATEGORY_JOURNAL
    VARIETY = const.BADGE_CATEGORY_VARIETY
    TIME_OF_DAY = const.BADGE_CATEGORY_TIME_OF_DAY

    @property
    def display_name(self) -> str:
        """Human-readable category name."""
        return self.value

    @property
    def sort_order(self) -> int:
        """Fixed rank used when ordering badge lists (Milestone first)."""
        return _CATEGORY_SORT_ORDER[self]


_CATEGORY_SORT_ORDER: Final[dict[BadgeCategory, int]] = {
    BadgeCategory.MILESTONE: 0,
    BadgeCategory.STREAK: 1,
    BadgeCategory.EXPLORATION: 2,
    BadgeCategory.JOURNAL: 3,
    BadgeCategory.VARIETY: 4,
    BadgeCategory.TIME_OF_DAY: 5,
}


# =============================================================================
# BADGE DEFINITION / STATE
# =============================================================================


@dataclass(frozen=True)
class BadgeDefinition:
    """Static description of a badge.

    Attributes:
        id: Stable catalog key
        name: Display name, also the final sort key
        description: Short text shown once unlocked
        category: Grouping and sort rank
        icon_name: Symbol name passed through to the presentation layer
        target_value: Threshold the badge's value must reach, if any
    """

    id: BadgeId
    name: str
    description: str
    category: BadgeCategory
    icon_name: str
    target_value: int | None = None

    @property
    def unlock_hint(self) -> str:
        """Human-readable explanation of how to unlock this badge."""
        return _UNLOCK_HINTS.get(self.id, self.description)


@dataclass(frozen=True)
class BadgeState:
    """Evaluated unlock state of one badge for one visit history."""

    definition: BadgeDefinition
    is_unlocked: bool
    current_value: int
    target_value: int | None

    @property
    def id(self) -> BadgeId:
        return self.definition.id

    @property
    def progress(self) -> float:
        """Progress from 0.0 to 1.0."""
        return calculate_progress(
            self.current_value, self.target_value, self.is_unlocked
        )

    @property
    def progress_text(self) -> str:
        """Progress text for display, e.g. "3/10" or "Unlocked"."""
        if self.is_unlocked:
            return const.BADGE_PROGRESS_TEXT_UNLOCKED
        if self.target_value is None:
            return const.BADGE_PROGRESS_TEXT_LOCKED
        return f"{self.current_value}/{self.target_value}"


# =============================================================================
# BADGE CATALOG
# =============================================================================

BADGE_CATALOG: Final[tuple[BadgeDefinition, ...]] = (
    # Milestone / visit count
    BadgeDefinition(
        id=const.BADGE_ID_FIRST_POUR,
        name="First Pour",
        description="Logged your first Mugshot visit.",
        category=BadgeCategory.MILESTONE,
        icon_name="cup.and.saucer.fill",
        target_value=1,
    ),
    BadgeDefinition(
        id=const.BADGE_ID_STEADY_SIPPER,
        name="Steady Sipper",
        description="Logged 10 visits.",
        category=BadgeCategory.MILESTONE,
        icon_name="mug.fill",
        target_value=10,
    ),
    BadgeDefinition(
        id=const.BADGE_ID_REGULAR,
        name="Regular",
        description="Logged 25 visits.",
        category=BadgeCategory.MILESTONE,
        icon_name="star.fill",
        target_value=25,
    ),
    # Streaks / consistency
    BadgeDefinition(
        id=const.BADGE_ID_WEEKEND_WARRIOR,
        name="Weekend Warrior",
        description="Logged visits on 2 consecutive weekends.",
        category=BadgeCategory.STREAK,
        icon_name="sun.max.fill",
        target_value=2,
    ),
    BadgeDefinition(
        id=const.BADGE_ID_DAILY_DRIP_7,
        name="Daily Drip (7)",
        description="7-day visit streak.",
        category=BadgeCategory.STREAK,
        icon_name="flame.fill",
        target_value=7,
    ),
    # Exploration / cafes
    BadgeDefinition(
        id=const.BADGE_ID_NEIGHBORHOOD_SIPPER,
        name="Neighborhood Sipper",
        description="Visited 3 unique cafes.",
        category=BadgeCategory.EXPLORATION,
        icon_name="map.fill",
        target_value=3,
    ),
    BadgeDefinition(
        id=const.BADGE_ID_CAFE_EXPLORER,
        name="Cafe Explorer",
        description="Visited 10 unique cafes.",
        category=BadgeCategory.EXPLORATION,
        icon_name="globe.americas.fill",
        target_value=10,
    ),
    # Journaling / notes
    BadgeDefinition(
        id=const.BADGE_ID_THOUGHTFUL_SIPPER,
        name="Thoughtful Sipper",
        description="Added notes to 3 visits.",
        category=BadgeCategory.JOURNAL,
        icon_name="pencil.line",
        target_value=3,
    ),
    BadgeDefinition(
        id=const.BADGE_ID_COFFEE_CHRONICLER,
        name="Coffee Chronicler",
        description="Added notes to 10 visits.",
        category=BadgeCategory.JOURNAL,
        icon_name="book.fill",
        target_value=10,
    ),
    # Variety / drink style
    BadgeDefinition(
        id=const.BADGE_ID_ADVENTUROUS_PALATE,
        name="Adventurous Palate",
        description="Logged 3 different drink types.",
        category=BadgeCategory.VARIETY,
        icon_name="sparkles",
        target_value=3,
    ),
    # Time / vibe
    BadgeDefinition(
        id=const.BADGE_ID_EARLY_BIRD_BREW,
        name="Early Bird Brew",
        description="Logged 5 visits before 9am.",
        category=BadgeCategory.TIME_OF_DAY,
        icon_name="sunrise.fill",
        target_value=5,
    ),
)

_UNLOCK_HINTS: Final[dict[BadgeId, str]] = {
    const.BADGE_ID_FIRST_POUR: "Log your first visit to any cafe.",
    const.BADGE_ID_STEADY_SIPPER: "Log 10 visits to cafes.",
    const.BADGE_ID_REGULAR: "Log 25 visits to cafes.",
    const.BADGE_ID_WEEKEND_WARRIOR: "Log visits on 2 consecutive weekends.",
    const.BADGE_ID_DAILY_DRIP_7: "Maintain a 7-day visit streak.",
    const.BADGE_ID_NEIGHBORHOOD_SIPPER: "Visit 3 different cafes.",
    const.BADGE_ID_CAFE_EXPLORER: "Visit 10 different cafes.",
    const.BADGE_ID_THOUGHTFUL_SIPPER: "Add notes to 3 of your visits.",
    const.BADGE_ID_COFFEE_CHRONICLER: "Add notes to 10 of your visits.",
    const.BADGE_ID_ADVENTUROUS_PALATE: "Try 3 different drink types.",
    const.BADGE_ID_EARLY_BIRD_BREW: "Log 5 visits before 9am.",
}


def find_badge_definition(badge_id: BadgeId) -> BadgeDefinition | None:
    """Get a catalog badge definition by id."""
    return next((d for d in BADGE_CATALOG if d.id == badge_id), None)
