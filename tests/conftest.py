"""Shared test fixtures."""

from __future__ import annotations

from datetime import timezone, tzinfo

import pytest

from mockclock.core.types import Instant, ZonedDateTime
from mockclock.mock_clock import MockClock
from mockclock.observability.event_bus import InMemoryEventBus

UTC = timezone.utc

# 2015-12-09T12:25:38.000000111Z
YEAR, MONTH, DAY, HOUR, MINUTE, SECOND, NANO = 2015, 12, 9, 12, 25, 38, 111


class FixedClock:
    """Clock-like source that always reports the same instant."""

    def __init__(self, instant: Instant, zone: tzinfo = UTC):
        self._instant = instant
        self._zone = zone

    def instant(self) -> Instant:
        return self._instant

    def zone(self) -> tzinfo:
        return self._zone


def utc_instant(*fields: int) -> Instant:
    return ZonedDateTime.of(*fields, zone=UTC).to_instant()


@pytest.fixture
def date_time_instant():
    return utc_instant(YEAR, MONTH, DAY, HOUR, MINUTE, SECOND, NANO)


@pytest.fixture
def date_only_instant():
    return utc_instant(YEAR, MONTH, DAY)


@pytest.fixture
def clock(date_time_instant):
    return MockClock.at(date_time_instant, UTC)


@pytest.fixture
def event_bus():
    return InMemoryEventBus()
