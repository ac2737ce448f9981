"""Clock abstraction for injectable time source."""

from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Protocol

from mockclock.core.types import Instant, ZoneLike, coerce_zone


class Clock(Protocol):
    def instant(self) -> Instant: ...

    def zone(self) -> tzinfo: ...


class SystemClock:
    """Default implementation: system clock in a fixed zone."""

    def __init__(self, zone: ZoneLike = timezone.utc) -> None:
        self._zone = coerce_zone(zone)

    def instant(self) -> Instant:
        return Instant.now()

    def zone(self) -> tzinfo:
        return self._zone

    def with_zone(self, zone: ZoneLike) -> SystemClock:
        return SystemClock(zone)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SystemClock):
            return NotImplemented
        return self._zone == other._zone

    def __hash__(self) -> int:
        return hash(self._zone)

    def __repr__(self) -> str:
        return f"SystemClock(zone={self._zone})"
