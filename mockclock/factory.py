"""One-line factory for a configured MockClock."""

from __future__ import annotations

from mockclock.config import ClockConfig
from mockclock.mock_clock import MockClock
from mockclock.observability.event_bus import EventBus, InMemoryEventBus


def create_mock_clock(
    config: ClockConfig | None = None,
    *,
    event_bus: EventBus | None = None,
) -> MockClock:
    """Create a MockClock from config, with an event bus when events are on."""
    config = config or ClockConfig()
    if config.observability.emit_events:
        event_bus = event_bus or InMemoryEventBus()
    else:
        event_bus = None

    if config.start is None:
        return MockClock.now(config.zone, event_bus=event_bus)
    if config.start.tzinfo is not None:
        return MockClock.at_datetime(config.start, event_bus=event_bus)
    return MockClock.at_datetime(config.start, config.zone, event_bus=event_bus)
