"""Visit record building and scenario loading.

This module is the SINGLE SOURCE OF TRUTH for turning raw visit data (decoded
backend rows, YAML scenario files) into the immutable records the engines
consume:
- Field validation via voluptuous schemas
- Timestamp normalization (naive values take the scenario/default zone)
- Drink type resolution by display string or member name

The engines themselves never validate; anything that reaches them is a
well-formed VisitRecord.

Consumers:
- __main__.py (scenario CLI)
- callers holding raw dict snapshots from the visit store
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Any

import voluptuous as vol
import yaml

from . import const
from .type_defs import DrinkType, VisitRecord
from .utils.dt_utils import CalendarConvention, dt_get_timezone, dt_parse

# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class VisitValidationError(Exception):
    """Validation error with field-specific information.

    Attributes:
        field: The DATA_VISIT_* key that failed validation
        message: Human-readable reason
        index: Position of the visit in a batch, when building many

    Example:
        raise VisitValidationError(
            field=const.DATA_VISIT_DRINK_TYPE,
            message="Unknown drink type: Espresso Tonic",
        )
    """

    def __init__(self, field: str, message: str, index: int | None = None) -> None:
        self.field = field
        self.message = message
        self.index = index
        location = f"visits[{index}].{field}" if index is not None else field
        super().__init__(f"{location}: {message}")


class ScenarioError(Exception):
    """Raised when a scenario document cannot be read or is malformed."""


# ==============================================================================
# VALIDATORS
# ==============================================================================


def _non_empty_string(value: Any) -> str:
    """Coerce ids to stripped, non-empty strings."""
    if value is None:
        raise vol.Invalid("value is required")
    text = str(value).strip()
    if not text:
        raise vol.Invalid("value must not be empty")
    return text


def _drink_type(value: Any) -> DrinkType:
    if isinstance(value, DrinkType):
        return value
    if not isinstance(value, str):
        raise vol.Invalid(f"expected a drink type string, got {type(value).__name__}")
    try:
        return DrinkType.from_value(value)
    except ValueError as err:
        raise vol.Invalid(str(err)) from err


def _timestamp(default_tzinfo: tzinfo | None) -> Any:
    """Build a validator that parses timestamps into aware datetimes."""

    def validate(value: Any) -> datetime:
        if not isinstance(value, (str, date, datetime)):
            raise vol.Invalid(f"expected a timestamp, got {type(value).__name__}")
        parsed = dt_parse(value, default_tzinfo=default_tzinfo)
        if parsed is None:
            raise vol.Invalid(f"invalid timestamp: {value}")
        return parsed

    return validate


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise vol.Invalid("expected text")
    return value


def visit_schema(default_tzinfo: tzinfo | None = None) -> vol.Schema:
    """Return the schema for one raw visit dict.

    Unknown keys (photos, likes, ratings, ...) are dropped.
    """
    return vol.Schema(
        {
            vol.Required(const.DATA_VISIT_ID): _non_empty_string,
            vol.Required(const.DATA_VISIT_CAFE_ID): _non_empty_string,
            vol.Required(const.DATA_VISIT_CREATED_AT): _timestamp(default_tzinfo),
            vol.Required(const.DATA_VISIT_DRINK_TYPE): _drink_type,
            vol.Optional(const.DATA_VISIT_NOTES, default=None): _optional_text,
            vol.Optional(const.DATA_VISIT_OVERALL_SCORE, default=0.0): vol.Coerce(
                float
            ),
            vol.Optional(const.DATA_VISIT_CAPTION, default=""): vol.Any(
                None, vol.Coerce(str)
            ),
        },
        extra=vol.REMOVE_EXTRA,
    )


VISIT_SCHEMA = visit_schema()

SCENARIO_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_SCENARIO_TIME_ZONE): vol.Any(None, str),
        vol.Optional(const.DATA_SCENARIO_NOW): vol.Any(None, str, date, datetime),
        vol.Optional(const.DATA_SCENARIO_VISITS, default=list): vol.Any(
            None, [dict]
        ),
    },
    extra=vol.ALLOW_EXTRA,
)


# ==============================================================================
# VISITS
# ==============================================================================


def build_visit(
    raw: Mapping[str, Any],
    default_tzinfo: tzinfo | None = None,
    index: int | None = None,
) -> VisitRecord:
    """Build a VisitRecord from a raw visit dict.

    Args:
        raw: Dict keyed by DATA_VISIT_* constants
        default_tzinfo: Zone applied to naive timestamps
        index: Position in a batch, reported on failure

    Returns:
        Validated VisitRecord

    Raises:
        VisitValidationError: If a field is missing or invalid
    """
    schema = VISIT_SCHEMA if default_tzinfo is None else visit_schema(default_tzinfo)
    try:
        data = schema(dict(raw))
    except vol.Invalid as err:
        field_name = str(err.path[0]) if err.path else "visit"
        raise VisitValidationError(field_name, err.error_message, index) from err

    return VisitRecord(
        id=data[const.DATA_VISIT_ID],
        cafe_id=data[const.DATA_VISIT_CAFE_ID],
        created_at=data[const.DATA_VISIT_CREATED_AT],
        drink_type=data[const.DATA_VISIT_DRINK_TYPE],
        notes=data[const.DATA_VISIT_NOTES],
        overall_score=data[const.DATA_VISIT_OVERALL_SCORE],
        caption=data[const.DATA_VISIT_CAPTION] or "",
    )


def build_visits(
    raw_visits: Iterable[Mapping[str, Any]],
    default_tzinfo: tzinfo | None = None,
) -> list[VisitRecord]:
    """Build records for a batch of raw visits, failing on the first bad one."""
    return [
        build_visit(raw, default_tzinfo=default_tzinfo, index=index)
        for index, raw in enumerate(raw_visits)
    ]


# ==============================================================================
# SCENARIOS
# ==============================================================================


@dataclass(frozen=True)
class Scenario:
    """A visit history pinned to a calendar and (optionally) a reference time."""

    calendar: CalendarConvention
    now: datetime | None = None
    visits: tuple[VisitRecord, ...] = field(default_factory=tuple)


def parse_scenario(
    data: Mapping[str, Any] | None,
    time_zone: str | None = None,
) -> Scenario:
    """Validate a decoded scenario document.

    Document shape (YAML):

        time_zone: America/Los_Angeles   # optional, defaults to host zone
        now: 2025-11-14T12:00:00         # optional, defaults to wall clock
        visits:
          - id: v1
            cafe_id: blue-bottle
            created_at: 2025-11-14T08:15:00
            drink_type: Matcha
            notes: Grassy, very smooth.

    Args:
        data: Decoded document (None is treated as empty)
        time_zone: Zone name overriding the document's `time_zone`

    Raises:
        ScenarioError: If the document shape or time zone is invalid
        VisitValidationError: If a visit entry is invalid
    """
    try:
        document = SCENARIO_SCHEMA(dict(data or {}))
    except vol.Invalid as err:
        raise ScenarioError(f"Invalid scenario: {err}") from err

    zone_name = time_zone or document.get(const.DATA_SCENARIO_TIME_ZONE)
    if zone_name:
        zone = dt_get_timezone(zone_name)
        if zone is None:
            raise ScenarioError(f"Unknown time zone: {zone_name}")
        calendar = CalendarConvention(zone)
    else:
        calendar = CalendarConvention.system_default()

    now: datetime | None = None
    raw_now = document.get(const.DATA_SCENARIO_NOW)
    if raw_now:
        now = dt_parse(raw_now, default_tzinfo=calendar.time_zone)
        if now is None:
            raise ScenarioError(f"Invalid scenario time: {raw_now}")

    visits = build_visits(
        document.get(const.DATA_SCENARIO_VISITS) or [],
        default_tzinfo=calendar.time_zone,
    )
    return Scenario(calendar=calendar, now=now, visits=tuple(visits))


def load_scenario(path: str | Path, time_zone: str | None = None) -> Scenario:
    """Load and validate a YAML scenario file.

    Raises:
        ScenarioError: If the file cannot be read or parsed
        VisitValidationError: If a visit entry is invalid
    """
    scenario_file = Path(path)
    try:
        with open(scenario_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as err:
        raise ScenarioError(f"Cannot read scenario {scenario_file}: {err}") from err
    except yaml.YAMLError as err:
        raise ScenarioError(f"Invalid YAML in {scenario_file}: {err}") from err

    if data is not None and not isinstance(data, Mapping):
        raise ScenarioError(f"Scenario {scenario_file} must be a mapping")

    return parse_scenario(data, time_zone=time_zone)
