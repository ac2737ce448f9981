"""mockclock: a settable clock for deterministic time-dependent tests."""

from mockclock.config import ClockConfig, ObservabilityConfig
from mockclock.core.clock import Clock, SystemClock
from mockclock.core.errors import InvalidArgumentError, MockClockError
from mockclock.core.types import Instant, Month, ZonedDateTime
from mockclock.factory import create_mock_clock
from mockclock.mock_clock import MockClock
from mockclock.observability.event_bus import (
    CLOCK_ADVANCED,
    CLOCK_SET,
    ClockEvent,
    EventBus,
    InMemoryEventBus,
)

__all__ = [
    # Clock
    "Clock",
    "SystemClock",
    "MockClock",
    "create_mock_clock",
    # Types
    "Instant",
    "Month",
    "ZonedDateTime",
    # Config
    "ClockConfig",
    "ObservabilityConfig",
    # Errors
    "MockClockError",
    "InvalidArgumentError",
    # Observability
    "ClockEvent",
    "EventBus",
    "InMemoryEventBus",
    "CLOCK_SET",
    "CLOCK_ADVANCED",
]
