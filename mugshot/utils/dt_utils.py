# File: utils/dt_utils.py
"""Date and time utilities for Mugshot.

Pure Python date/time functions shared by the engines.
Uses standard library: datetime, zoneinfo, plus dateutil.

Functions:
    - set_default_timezone / get_default_timezone: Module-wide default zone
    - dt_get_timezone: Resolve an IANA zone name
    - dt_now_utc: Current instant
    - as_local: Timezone conversion (naive values are UTC)
    - dt_parse: Normalize string/date/datetime inputs to aware datetimes
    - dt_add_days: Calendar-day arithmetic

Classes:
    - CalendarConvention: Injectable calendar used by every day/week computation
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, tzinfo
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Third-party date utilities
from dateutil import parser as dt_parser, tz
from dateutil.relativedelta import relativedelta

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

# Default timezone - host local zone until overridden by caller
DEFAULT_TIME_ZONE: tzinfo = tz.tzlocal()

# Weekday numbering (Sunday = 1 ... Saturday = 7)
WEEKDAY_SUNDAY = 1
WEEKDAY_SATURDAY = 7


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz_info: tzinfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this once at startup to configure the user's timezone.

    Args:
        tz_info: tzinfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz_info


def get_default_timezone() -> tzinfo:
    """Get the current default timezone.

    Returns:
        The configured default timezone
    """
    return DEFAULT_TIME_ZONE


def dt_get_timezone(name: str | None) -> ZoneInfo | None:
    """Resolve an IANA timezone name.

    Args:
        name: Zone name such as "America/Los_Angeles", or None

    Returns:
        ZoneInfo for the name, or None if the name is empty or unknown.
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        _LOGGER.error("Unknown time zone: %s", name)
        return None


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_local(dt_obj: datetime, tz_info: tzinfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object. Naive values are assumed to be UTC.
        tz_info: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info or DEFAULT_TIME_ZONE)


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
) -> datetime | None:
    """Normalize various datetime input formats to an aware datetime.

    Accepts ISO 8601 strings ("2025-11-14T08:30:00-08:00", "2025-11-14"),
    `date` objects (midnight) and `datetime` objects. Naive results get
    `default_tzinfo` (or DEFAULT_TIME_ZONE) attached.

    Args:
        dt_input: String, date or datetime to normalize, or None
        default_tzinfo: Timezone to use if the input is naive

    Returns:
        Timezone-aware datetime, or None if the input could not be parsed.

    Example:
        >>> dt_parse("2025-11-14", default_tzinfo=ZoneInfo("UTC"))
        datetime.datetime(2025, 11, 14, 0, 0, tzinfo=zoneinfo.ZoneInfo(key='UTC'))
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or DEFAULT_TIME_ZONE
    result: datetime

    if isinstance(dt_input, str):
        try:
            result = dt_parser.isoparse(dt_input.strip())
        except (ValueError, OverflowError):
            _LOGGER.debug("Unparsable datetime string: %s", dt_input)
            return None
    elif isinstance(dt_input, datetime):
        result = dt_input
    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, datetime.min.time())
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)
    return result


def dt_add_days(day: date, days: int) -> date:
    """Add (or subtract) whole calendar days to a date."""
    return day + relativedelta(days=days)


# ==============================================================================
# Calendar Convention
# ==============================================================================


@dataclass(frozen=True)
class CalendarConvention:
    """Calendar used to bucket instants into days and weekends.

    Every day/week computation in the engines goes through one of these so
    tests can pin the zone. Weekdays use Sunday = 1 ... Saturday = 7 and
    weekend keys use ISO week numbering.

    Attributes:
        time_zone: Zone that defines local days and hours
    """

    time_zone: tzinfo = field(default_factory=get_default_timezone)

    @classmethod
    def system_default(cls) -> CalendarConvention:
        """Return a convention for the configured default time zone."""
        return cls(get_default_timezone())

    @classmethod
    def for_zone(cls, name: str) -> CalendarConvention | None:
        """Return a convention for an IANA zone name, or None if unknown."""
        zone = dt_get_timezone(name)
        return cls(zone) if zone is not None else None

    def localize(self, dt_obj: datetime) -> datetime:
        """Convert an instant into this calendar's zone."""
        return as_local(dt_obj, self.time_zone)

    def local_date(self, dt_obj: datetime) -> date:
        """Return the local calendar day containing the instant."""
        return self.localize(dt_obj).date()

    def hour(self, dt_obj: datetime) -> int:
        """Return the local hour-of-day (0-23) of the instant."""
        return self.localize(dt_obj).hour

    def weekday(self, dt_obj: datetime | date) -> int:
        """Return the weekday number, Sunday = 1 ... Saturday = 7."""
        day = self.local_date(dt_obj) if isinstance(dt_obj, datetime) else dt_obj
        return day.isoweekday() % 7 + 1

    def weekend_key(self, dt_obj: datetime) -> int | None:
        """Return the weekend identifier for a Saturday/Sunday instant.

        Sunday is folded onto the preceding Saturday so both days of one
        weekend share a key. The key is `iso_year * 100 + iso_week`.

        Returns:
            Weekend key, or None for weekday instants.
        """
        day = self.local_date(dt_obj)
        weekday = self.weekday(day)
        if weekday not in (WEEKDAY_SATURDAY, WEEKDAY_SUNDAY):
            return None
        if weekday == WEEKDAY_SUNDAY:
            day = dt_add_days(day, -1)
        iso = day.isocalendar()
        return iso.year * 100 + iso.week
