"""Mugshot badge engine.

Turns a cafe-visit history into achievement badge states and the journal
statistics shown alongside them.

Usage:
    from mugshot import compute_badges

    states = compute_badges(visits, now=now, calendar=calendar)
"""

from .badges import (
    BADGE_CATALOG,
    BadgeCategory,
    BadgeDefinition,
    BadgeState,
    find_badge_definition,
)
from .engines import GamificationEngine, StatisticsEngine, compute_badges
from .type_defs import Aggregates, CafeRecord, DrinkType, VisitRecord
from .utils.dt_utils import CalendarConvention

__all__ = [
    "BADGE_CATALOG",
    "Aggregates",
    "BadgeCategory",
    "BadgeDefinition",
    "BadgeState",
    "CafeRecord",
    "CalendarConvention",
    "DrinkType",
    "GamificationEngine",
    "StatisticsEngine",
    "VisitRecord",
    "compute_badges",
    "find_badge_definition",
]
