"""Event bus for clock observability."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Callable, Protocol

from mockclock.core.types import Instant

CLOCK_SET = "clock.set"
CLOCK_ADVANCED = "clock.advanced"


@dataclass
class ClockEvent:
    event_type: str
    previous: Instant
    current: Instant
    zone: tzinfo
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def delta_nanos(self) -> int:
        """Signed elapsed time between the two instants."""
        return self.current.epoch_nanos - self.previous.epoch_nanos

    @property
    def operation(self) -> str | None:
        """Name of the MockClock method that produced the event."""
        return self.payload.get("operation")


EventHandler = Callable[[ClockEvent], Any]


class EventBus(Protocol):
    def emit(self, event: ClockEvent) -> None: ...
    def on(self, event_type: str, handler: EventHandler) -> None: ...
    def on_all(self, handler: EventHandler) -> None: ...


class InMemoryEventBus:
    """In-memory event bus; handlers run synchronously in emit order."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._global_handlers: list[EventHandler] = []
        self._history: list[ClockEvent] = []

    def emit(self, event: ClockEvent) -> None:
        self._history.append(event)

        handlers = list(self._global_handlers)
        if event.event_type in self._handlers:
            handlers.extend(self._handlers[event.event_type])

        for handler in handlers:
            handler(event)

    def on(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def on_all(self, handler: EventHandler) -> None:
        self._global_handlers.append(handler)

    @property
    def history(self) -> list[ClockEvent]:
        return list(self._history)

    def history_for(self, operation: str) -> list[ClockEvent]:
        """Recorded events produced by one clock operation, oldest first."""
        return [e for e in self._history if e.operation == operation]

    def elapsed_nanos(self) -> int:
        """Net signed movement across all recorded events."""
        return sum(e.delta_nanos for e in self._history)

    def clear_history(self) -> None:
        self._history.clear()
