# File: const.py
"""Constants for the Mugshot badge engine.

This file centralizes data keys, defaults, badge identifiers and formats for
consistency across the engines, the data builders and the scenario CLI.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------
MUGSHOT_TITLE = "Mugshot"

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Visit Data Keys (raw dicts from storage / scenario files)
# ------------------------------------------------------------------------------------------------
DATA_VISIT_ID = "id"
DATA_VISIT_CAFE_ID = "cafe_id"
DATA_VISIT_CREATED_AT = "created_at"
DATA_VISIT_DRINK_TYPE = "drink_type"
DATA_VISIT_NOTES = "notes"
DATA_VISIT_OVERALL_SCORE = "overall_score"
DATA_VISIT_CAPTION = "caption"

# ------------------------------------------------------------------------------------------------
# Scenario Keys
# ------------------------------------------------------------------------------------------------
DATA_SCENARIO_TIME_ZONE = "time_zone"
DATA_SCENARIO_NOW = "now"
DATA_SCENARIO_VISITS = "visits"

# ------------------------------------------------------------------------------------------------
# Drink Types (display strings, also accepted case-insensitively on input)
# ------------------------------------------------------------------------------------------------
DRINK_TYPE_COFFEE = "Coffee"
DRINK_TYPE_MATCHA = "Matcha"
DRINK_TYPE_HOJICHA = "Hojicha"
DRINK_TYPE_TEA = "Tea"
DRINK_TYPE_CHAI = "Chai"
DRINK_TYPE_HOT_CHOCOLATE = "Hot Chocolate"
DRINK_TYPE_OTHER = "Other"

# ------------------------------------------------------------------------------------------------
# Badge Categories
# ------------------------------------------------------------------------------------------------
BADGE_CATEGORY_MILESTONE = "Milestone"
BADGE_CATEGORY_STREAK = "Streak"
BADGE_CATEGORY_EXPLORATION = "Exploration"
BADGE_CATEGORY_JOURNAL = "Journal"
BADGE_CATEGORY_VARIETY = "Variety"
BADGE_CATEGORY_TIME_OF_DAY = "Time of Day"

# ------------------------------------------------------------------------------------------------
# Badge Identifiers
# ------------------------------------------------------------------------------------------------
BADGE_ID_FIRST_POUR = "first_pour"
BADGE_ID_STEADY_SIPPER = "steady_sipper"
BADGE_ID_REGULAR = "regular"
BADGE_ID_WEEKEND_WARRIOR = "weekend_warrior"
BADGE_ID_DAILY_DRIP_7 = "daily_drip_7"
BADGE_ID_NEIGHBORHOOD_SIPPER = "neighborhood_sipper"
BADGE_ID_CAFE_EXPLORER = "cafe_explorer"
BADGE_ID_THOUGHTFUL_SIPPER = "thoughtful_sipper"
BADGE_ID_COFFEE_CHRONICLER = "coffee_chronicler"
BADGE_ID_ADVENTUROUS_PALATE = "adventurous_palate"
BADGE_ID_EARLY_BIRD_BREW = "early_bird_brew"

# ------------------------------------------------------------------------------------------------
# Badge Progress Display
# ------------------------------------------------------------------------------------------------
BADGE_PROGRESS_TEXT_UNLOCKED = "Unlocked"
BADGE_PROGRESS_TEXT_LOCKED = "Locked"

# ------------------------------------------------------------------------------------------------
# Statistics Defaults
# ------------------------------------------------------------------------------------------------
# Visits strictly before this local hour count as early morning
EARLY_MORNING_CUTOFF_HOUR = 9

# Rolling visit-count windows (days, inclusive of today)
STATS_WINDOW_WEEK_DAYS = 7
STATS_WINDOW_MONTH_DAYS = 30

# Number of days shown in the weekday strip
WEEKDAY_MAP_DAYS = 7

DEFAULT_TOP_CAFES_LIMIT = 3
DEFAULT_RECENT_NOTES_LIMIT = 3

# Weekday letters keyed by Sunday = 1 ... Saturday = 7
WEEKDAY_LETTERS = {
    1: "S",
    2: "M",
    3: "T",
    4: "W",
    5: "T",
    6: "F",
    7: "S",
}
WEEKDAY_LETTER_UNKNOWN = "?"

# ------------------------------------------------------------------------------------------------
# Period Formats
# ------------------------------------------------------------------------------------------------
PERIOD_FORMAT_MONTH_KEY = "%Y-%m"
PERIOD_FORMAT_MONTH_DISPLAY = "%B %Y"

# ------------------------------------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------------------------------------
CLI_EXIT_OK = 0
CLI_EXIT_INPUT_ERROR = 2
