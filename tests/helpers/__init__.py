"""Test helpers for Mugshot engine tests.

This module re-exports the builders for convenient imports:

    from tests.helpers import (
        REFERENCE_NOW, UTC_CALENDAR, LA_CALENDAR,
        make_visit, make_visits_on_days, make_aggregates,
    )

See builders.py for full documentation.
"""

from tests.helpers.builders import (
    LA_CALENDAR,
    REFERENCE_NOW,
    UTC_CALENDAR,
    at,
    make_aggregates,
    make_visit,
    make_visits_on_days,
)

__all__ = [
    "LA_CALENDAR",
    "REFERENCE_NOW",
    "UTC_CALENDAR",
    "at",
    "make_aggregates",
    "make_visit",
    "make_visits_on_days",
]
