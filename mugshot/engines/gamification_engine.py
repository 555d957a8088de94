"""Gamification Engine - Pure logic for badge unlock evaluation.

This engine provides stateless, pure Python functions for:
- Mapping each catalog badge to the aggregate statistic it tracks
- Unlock checks against the badge's target value (inclusive)
- Ordering badge states for display

ARCHITECTURE: The badge catalog (mugshot.badges) is data. The only logic
attached to a badge id is its value handler, registered below. Adding a
badge means adding a catalog entry and, if it reads a new statistic, one
handler.

Ordering contract for compute_badges():
    1. Unlocked before locked
    2. Category rank (Milestone first ... Time of Day last)
    3. Badge display name
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from typing import Final

from .. import const
from ..badges import BADGE_CATALOG, BadgeDefinition, BadgeState
from ..type_defs import Aggregates, BadgeId, VisitRecord
from ..utils.dt_utils import CalendarConvention
from .statistics_engine import StatisticsEngine

# =============================================================================
# TYPE ALIASES
# =============================================================================

# Handler function signature: (aggregates) -> raw badge value
ValueHandler = Callable[[Aggregates], int]


# =============================================================================
# GAMIFICATION ENGINE
# =============================================================================


class GamificationEngine:
    """Pure logic engine for badge evaluation.

    All methods are class/static methods - no instance state.

    PURITY CONTRACT:
    - All data comes in as arguments (visits, now, calendar, catalog)
    - No side effects beyond debug logging
    - Every call recomputes from scratch; nothing is cached
    """

    # =========================================================================
    # VALUE HANDLER REGISTRY
    # =========================================================================

    # Maps badge id to the aggregate it reads
    _VALUE_HANDLERS: dict[BadgeId, ValueHandler] = {}

    # Badges whose displayed value is capped below the raw value. The unlock
    # check always uses the raw value.
    _DISPLAY_CAPS: Final[dict[BadgeId, int]] = {
        const.BADGE_ID_FIRST_POUR: 1,
    }

    @classmethod
    def _register_handlers(cls) -> None:
        """Register all value handlers.

        Called lazily on first evaluation to populate _VALUE_HANDLERS.
        """
        if cls._VALUE_HANDLERS:
            return  # Already registered

        cls._VALUE_HANDLERS = {
            # Milestones
            const.BADGE_ID_FIRST_POUR: cls._total_visits,
            const.BADGE_ID_STEADY_SIPPER: cls._total_visits,
            const.BADGE_ID_REGULAR: cls._total_visits,
            # Streaks
            const.BADGE_ID_WEEKEND_WARRIOR: cls._consecutive_weekends,
            const.BADGE_ID_DAILY_DRIP_7: cls._best_daily_streak,
            # Exploration
            const.BADGE_ID_NEIGHBORHOOD_SIPPER: cls._unique_cafes,
            const.BADGE_ID_CAFE_EXPLORER: cls._unique_cafes,
            # Journal
            const.BADGE_ID_THOUGHTFUL_SIPPER: cls._visits_with_notes,
            const.BADGE_ID_COFFEE_CHRONICLER: cls._visits_with_notes,
            # Variety
            const.BADGE_ID_ADVENTUROUS_PALATE: cls._distinct_drink_types,
            # Time of day
            const.BADGE_ID_EARLY_BIRD_BREW: cls._early_morning_visits,
        }

    # =========================================================================
    # MAIN EVALUATION METHODS
    # =========================================================================

    @classmethod
    def compute_badges(
        cls,
        visits: Sequence[VisitRecord],
        now: datetime | None = None,
        calendar: CalendarConvention | None = None,
        catalog: Iterable[BadgeDefinition] = BADGE_CATALOG,
    ) -> list[BadgeState]:
        """Compute every badge state from the user's visits.

        Args:
            visits: Visit history in any order (may be empty)
            now: Reference instant for streaks (defaults to wall-clock time)
            calendar: Calendar convention (defaults to the system default)
            catalog: Badge definitions to evaluate

        Returns:
            Badge states, unlocked first, then by category rank, then by name.
        """
        aggregates = StatisticsEngine.compute_aggregates(visits, now, calendar)

        const.LOGGER.debug(
            "Badge aggregates: totalVisits=%d, uniqueCafes=%d, notesCount=%d, "
            "drinkTypes=%d, earlyMorning=%d, currentStreak=%d, longestStreak=%d, "
            "consecutiveWeekends=%d",
            aggregates.total_visits,
            aggregates.unique_cafe_count,
            aggregates.visits_with_notes_count,
            aggregates.distinct_drink_types_count,
            aggregates.early_morning_visits_count,
            aggregates.current_streak_days,
            aggregates.longest_streak_days,
            aggregates.consecutive_weekends_count,
        )

        states = cls.sort_badge_states(
            cls.evaluate_badge(definition, aggregates) for definition in catalog
        )

        unlocked_count = sum(1 for state in states if state.is_unlocked)
        const.LOGGER.debug(
            "Computed %d badges (unlocked: %d, locked: %d)",
            len(states),
            unlocked_count,
            len(states) - unlocked_count,
        )
        return states

    @classmethod
    def evaluate_badge(
        cls,
        definition: BadgeDefinition,
        aggregates: Aggregates,
    ) -> BadgeState:
        """Evaluate one badge definition against precomputed aggregates.

        Pure function - no side effects.

        Unknown badge ids evaluate to a locked state with value 0.
        """
        current_value, is_unlocked = cls.compute_value_and_unlock(
            definition, aggregates
        )
        return BadgeState(
            definition=definition,
            is_unlocked=is_unlocked,
            current_value=current_value,
            target_value=definition.target_value,
        )

    @classmethod
    def compute_value_and_unlock(
        cls,
        definition: BadgeDefinition,
        aggregates: Aggregates,
    ) -> tuple[int, bool]:
        """Return (displayed value, unlocked) for a badge definition."""
        cls._register_handlers()

        handler = cls._VALUE_HANDLERS.get(definition.id)
        if handler is None:
            const.LOGGER.warning("Unknown badge id: %s", definition.id)
            return 0, False

        raw_value = handler(aggregates)
        target = definition.target_value
        # Targetless badges unlock on any progress
        is_unlocked = raw_value >= target if target is not None else raw_value > 0

        cap = cls._DISPLAY_CAPS.get(definition.id)
        current_value = min(raw_value, cap) if cap is not None else raw_value
        return current_value, is_unlocked

    @staticmethod
    def sort_badge_states(states: Iterable[BadgeState]) -> list[BadgeState]:
        """Order badge states: unlocked first, then category rank, then name."""
        return sorted(
            states,
            key=lambda state: (
                not state.is_unlocked,
                state.definition.category.sort_order,
                state.definition.name,
            ),
        )

    # =========================================================================
    # VALUE HANDLERS
    # =========================================================================

    @staticmethod
    def _total_visits(aggregates: Aggregates) -> int:
        return aggregates.total_visits

    @staticmethod
    def _consecutive_weekends(aggregates: Aggregates) -> int:
        return aggregates.consecutive_weekends_count

    @staticmethod
    def _best_daily_streak(aggregates: Aggregates) -> int:
        """Best of the live and all-time daily streaks.

        A badge can show as unlocked from a past streak while the current
        streak is 0.
        """
        return max(aggregates.current_streak_days, aggregates.longest_streak_days)

    @staticmethod
    def _unique_cafes(aggregates: Aggregates) -> int:
        return aggregates.unique_cafe_count

    @staticmethod
    def _visits_with_notes(aggregates: Aggregates) -> int:
        return aggregates.visits_with_notes_count

    @staticmethod
    def _distinct_drink_types(aggregates: Aggregates) -> int:
        return aggregates.distinct_drink_types_count

    @staticmethod
    def _early_morning_visits(aggregates: Aggregates) -> int:
        return aggregates.early_morning_visits_count


def compute_badges(
    visits: Sequence[VisitRecord],
    now: datetime | None = None,
    calendar: CalendarConvention | None = None,
) -> list[BadgeState]:
    """Compute the catalog's badge states for a visit history."""
    return GamificationEngine.compute_badges(visits, now, calendar)
