"""Observability module: clock change events."""

from mockclock.observability.event_bus import (
    CLOCK_ADVANCED,
    CLOCK_SET,
    ClockEvent,
    EventBus,
    InMemoryEventBus,
)

__all__ = ["CLOCK_ADVANCED", "CLOCK_SET", "ClockEvent", "EventBus", "InMemoryEventBus"]
