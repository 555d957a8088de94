"""Shared fixtures for Mugshot tests."""

from collections.abc import Iterator
from zoneinfo import ZoneInfo

import pytest

from mugshot.type_defs import CafeRecord
from mugshot.utils import dt_utils


@pytest.fixture(autouse=True)
def pin_default_timezone(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test with UTC as the default zone instead of the host zone."""
    monkeypatch.setattr(dt_utils, "DEFAULT_TIME_ZONE", ZoneInfo("UTC"))
    yield


@pytest.fixture
def cafe_directory() -> dict[str, CafeRecord]:
    """Cafe lookup table keyed by cafe id."""
    return {
        "cafe-1": CafeRecord(id="cafe-1", name="blue bottle"),
        "cafe-2": CafeRecord(id="cafe-2", name="Arabica"),
        "cafe-3": CafeRecord(id="cafe-3", name="Sey Coffee"),
    }
