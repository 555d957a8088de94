"""Engine modules for the Mugshot badge system.

Contains specialized computation engines:
- statistics_engine: Visit aggregates, streaks and journal summaries
- gamification_engine: Badge value handlers, unlock checks and ordering
"""

# Use relative imports within package to avoid mypy module resolution issues
from .gamification_engine import GamificationEngine, compute_badges
from .statistics_engine import StatisticsEngine

__all__ = [
    "GamificationEngine",
    "StatisticsEngine",
    "compute_badges",
]
