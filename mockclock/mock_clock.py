"""MockClock: a settable clock for deterministic tests."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo

from mockclock.core.clock import Clock, SystemClock
from mockclock.core.errors import InvalidArgumentError
from mockclock.core.types import (
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MICRO,
    NANOS_PER_MILLI,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    Instant,
    Month,
    ZonedDateTime,
    ZoneLike,
    coerce_zone,
    require,
    require_int,
    timedelta_to_nanos,
    zone_name,
)
from mockclock.observability.event_bus import (
    CLOCK_ADVANCED,
    CLOCK_SET,
    ClockEvent,
    EventBus,
)


def _zoned(
    value: datetime | ZonedDateTime,
    zone: ZoneLike | None,
    nanosecond: int | None,
) -> ZonedDateTime:
    """Resolve a naive datetime in *zone*, or an aware one in its own zone."""
    require(value, "dt")
    if isinstance(value, ZonedDateTime):
        if zone is not None:
            raise InvalidArgumentError("zone must not be given with a ZonedDateTime")
        return value if nanosecond is None else value.replace(nanosecond=nanosecond)
    if not isinstance(value, datetime):
        raise InvalidArgumentError(f"Not a datetime: {value!r}")
    if value.tzinfo is not None:
        if zone is not None:
            raise InvalidArgumentError("zone must not be given with an aware datetime")
        return ZonedDateTime.of_datetime(value, nanosecond)
    return ZonedDateTime.of_datetime(value.replace(tzinfo=coerce_zone(zone)), nanosecond)


def _civil(
    d: date, t: time | None, nanosecond: int | None, zone: ZoneLike
) -> ZonedDateTime:
    require(d, "date")
    if not isinstance(d, date):
        raise InvalidArgumentError(f"Not a date: {d!r}")
    if t is None:
        t = time()
    elif not isinstance(t, time):
        raise InvalidArgumentError(f"Not a time: {t!r}")
    elif t.tzinfo is not None:
        raise InvalidArgumentError("time must be naive; the zone is given separately")
    if nanosecond is None:
        nanosecond = t.microsecond * NANOS_PER_MICRO
    return ZonedDateTime.of(
        d.year, d.month, d.day, t.hour, t.minute, t.second, nanosecond,
        zone=zone, fold=t.fold,
    )


class MockClock:
    """Clock whose current instant is set and advanced by the caller.

    Every mutator changes the clock in place and returns it, so calls chain:

        clock = MockClock.of_fields(2015, 12, 9, 12, 25, zone="UTC")
        clock.set_hour(9).advance_by_minutes(5)

    A mutator converts the instant to civil fields in the clock's zone,
    replaces the requested fields and resolves the result back to an
    instant. If any step fails, an InvalidArgumentError is raised and the
    clock keeps its previous instant.

    With an event bus attached, each successful mutation emits one
    ClockEvent after the new instant is stored. Handlers run synchronously
    and their exceptions propagate to the caller; the clock has already
    moved by then.

    Instances are not thread-safe: there is no internal locking, so each
    test should own its own clock or synchronise access itself.
    """

    def __init__(
        self,
        instant: Instant,
        zone: ZoneLike,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        require(instant, "instant")
        if not isinstance(instant, Instant):
            raise InvalidArgumentError(f"Not an Instant: {instant!r}")
        self._instant = instant
        self._zone = coerce_zone(zone)
        self._event_bus = event_bus

    # --- construction ---

    @classmethod
    def now(cls, zone: ZoneLike, *, event_bus: EventBus | None = None) -> MockClock:
        """Start at the real current time in *zone*."""
        return cls.of(SystemClock(zone), event_bus=event_bus)

    @classmethod
    def of(cls, clock: Clock, *, event_bus: EventBus | None = None) -> MockClock:
        """Snapshot the instant and zone of another clock."""
        require(clock, "clock")
        return cls(clock.instant(), clock.zone(), event_bus=event_bus)

    @classmethod
    def at(
        cls, instant: Instant, zone: ZoneLike, *, event_bus: EventBus | None = None
    ) -> MockClock:
        return cls(instant, zone, event_bus=event_bus)

    @classmethod
    def at_datetime(
        cls,
        dt: datetime | ZonedDateTime,
        zone: ZoneLike | None = None,
        *,
        nanosecond: int | None = None,
        event_bus: EventBus | None = None,
    ) -> MockClock:
        """Start at a datetime.

        An aware datetime (or ZonedDateTime) brings its own zone; a naive
        one is resolved in *zone*.
        """
        zdt = _zoned(dt, zone, nanosecond)
        return cls(zdt.to_instant(), zdt.zone, event_bus=event_bus)

    @classmethod
    def at_date(
        cls,
        d: date,
        zone: ZoneLike,
        t: time | None = None,
        *,
        nanosecond: int | None = None,
        event_bus: EventBus | None = None,
    ) -> MockClock:
        """Start at *t* on *d*, or at the start of that day."""
        zone = coerce_zone(zone)
        zdt = _civil(d, t, nanosecond, zone)
        return cls(zdt.to_instant(), zone, event_bus=event_bus)

    @classmethod
    def of_fields(
        cls,
        year: int,
        month: Month | int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
        *,
        zone: ZoneLike,
        event_bus: EventBus | None = None,
    ) -> MockClock:
        zone = coerce_zone(zone)
        zdt = ZonedDateTime.of(
            year, month, day, hour, minute, second, nanosecond, zone=zone
        )
        return cls(zdt.to_instant(), zone, event_bus=event_bus)

    # --- Clock ---

    def instant(self) -> Instant:
        return self._instant

    def zone(self) -> tzinfo:
        return self._zone

    def millis(self) -> int:
        return self._instant.to_epoch_milli()

    def with_zone(self, zone: ZoneLike) -> MockClock:
        """Copy with the same instant in another zone; this clock is untouched."""
        return MockClock(self._instant, zone, event_bus=self._event_bus)

    def to_zoned_datetime(self) -> ZonedDateTime:
        return ZonedDateTime.of_instant(self._instant, self._zone)

    def to_datetime(self) -> datetime:
        """Current time as an aware datetime, truncated to microseconds."""
        return self._instant.to_datetime(self._zone)

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    # --- absolute set ---

    def set_instant(self, instant: Instant) -> MockClock:
        require(instant, "instant")
        if not isinstance(instant, Instant):
            raise InvalidArgumentError(f"Not an Instant: {instant!r}")
        return self._commit(instant, "set_instant")

    def set_datetime(
        self, dt: datetime | ZonedDateTime, nanosecond: int | None = None
    ) -> MockClock:
        """Set from a datetime.

        A naive datetime is read as wall time in this clock's zone. An aware
        datetime or ZonedDateTime names an absolute instant.
        """
        require(dt, "dt")
        naive = isinstance(dt, datetime) and dt.tzinfo is None
        zdt = _zoned(dt, self._zone if naive else None, nanosecond)
        return self._commit(zdt.to_instant(), "set_datetime")

    def set_date_time(
        self, d: date, t: time, nanosecond: int | None = None
    ) -> MockClock:
        require(t, "time")
        zdt = _civil(d, t, nanosecond, self._zone)
        return self._commit(zdt.to_instant(), "set_date_time")

    # --- partial set ---

    def set_date(self, d: date) -> MockClock:
        """Change the date, keeping the time of day."""
        require(d, "date")
        if not isinstance(d, date):
            raise InvalidArgumentError(f"Not a date: {d!r}")
        now = self.to_zoned_datetime()
        zdt = ZonedDateTime.of(
            d.year, d.month, d.day, now.hour, now.minute, now.second, now.nanosecond,
            zone=self._zone,
        )
        return self._commit(zdt.to_instant(), "set_date")

    def set_time(self, t: time, nanosecond: int | None = None) -> MockClock:
        """Change the time of day, keeping the date."""
        require(t, "time")
        if not isinstance(t, time):
            raise InvalidArgumentError(f"Not a time: {t!r}")
        if t.tzinfo is not None:
            raise InvalidArgumentError("time must be naive; the zone is given separately")
        if nanosecond is None:
            nanosecond = t.microsecond * NANOS_PER_MICRO
        now = self.to_zoned_datetime()
        zdt = ZonedDateTime.of(
            now.year, now.month, now.day, t.hour, t.minute, t.second, nanosecond,
            zone=self._zone,
        )
        return self._commit(zdt.to_instant(), "set_time")

    def set(
        self,
        year: int,
        month: Month | int,
        day: int,
        hour: int | None = None,
        minute: int | None = None,
        second: int | None = None,
        nanosecond: int | None = None,
    ) -> MockClock:
        """Set the date and any time fields given.

        Time fields left as ``None`` keep their current values, so
        ``set(2016, 1, 4, 9, 30)`` keeps the current second and nanosecond.
        """
        require(year, "year")
        require(month, "month")
        require(day, "day")
        now = self.to_zoned_datetime()
        zdt = ZonedDateTime.of(
            year,
            month,
            day,
            now.hour if hour is None else hour,
            now.minute if minute is None else minute,
            now.second if second is None else second,
            now.nanosecond if nanosecond is None else nanosecond,
            zone=self._zone,
        )
        return self._commit(zdt.to_instant(), "set")

    # --- single field ---

    def set_year(self, year: int) -> MockClock:
        """Set the year; Feb 29 becomes Feb 28 in a common year."""
        zdt = self.to_zoned_datetime().with_year(year)
        return self._commit(zdt.to_instant(), "set_year")

    def set_month(self, month: Month | int) -> MockClock:
        """Set the month; the day is clamped to the new month's length."""
        zdt = self.to_zoned_datetime().with_month(month)
        return self._commit(zdt.to_instant(), "set_month")

    def set_day_of_month(self, day: int) -> MockClock:
        return self._set_field("set_day_of_month", day=require(day, "day"))

    def set_hour(self, hour: int) -> MockClock:
        return self._set_field("set_hour", hour=require(hour, "hour"))

    def set_minute(self, minute: int) -> MockClock:
        return self._set_field("set_minute", minute=require(minute, "minute"))

    def set_second(self, second: int) -> MockClock:
        return self._set_field("set_second", second=require(second, "second"))

    def set_milli(self, milli: int) -> MockClock:
        """Set the millisecond of second; the sub-millisecond part is zeroed."""
        require_int(milli, "milli")
        return self._set_field("set_milli", nanosecond=milli * NANOS_PER_MILLI)

    def set_nano(self, nano: int) -> MockClock:
        return self._set_field("set_nano", nanosecond=require(nano, "nano"))

    def _set_field(self, operation: str, **field: int) -> MockClock:
        zdt = self.to_zoned_datetime().replace(**field)
        return self._commit(zdt.to_instant(), operation)

    # --- relative ---

    def advance_by(self, delta: timedelta) -> MockClock:
        """Move by elapsed time; a negative delta moves backwards."""
        require(delta, "delta")
        if not isinstance(delta, timedelta):
            raise InvalidArgumentError(f"Not a timedelta: {delta!r}")
        return self._advance(timedelta_to_nanos(delta), "advance_by")

    def advance_by_days(self, days: int) -> MockClock:
        """Move by whole 24 hour days, regardless of DST changes on the way."""
        return self._advance(require_int(days, "days") * NANOS_PER_DAY, "advance_by_days")

    def advance_by_hours(self, hours: int) -> MockClock:
        return self._advance(require_int(hours, "hours") * NANOS_PER_HOUR, "advance_by_hours")

    def advance_by_minutes(self, minutes: int) -> MockClock:
        return self._advance(
            require_int(minutes, "minutes") * NANOS_PER_MINUTE, "advance_by_minutes"
        )

    def advance_by_seconds(self, seconds: int) -> MockClock:
        return self._advance(
            require_int(seconds, "seconds") * NANOS_PER_SECOND, "advance_by_seconds"
        )

    def advance_by_millis(self, millis: int) -> MockClock:
        return self._advance(
            require_int(millis, "millis") * NANOS_PER_MILLI, "advance_by_millis"
        )

    def advance_by_nanos(self, nanos: int) -> MockClock:
        return self._advance(require_int(nanos, "nanos"), "advance_by_nanos")

    def _advance(self, nanos: int, operation: str) -> MockClock:
        target = self._instant.plus_nanos(nanos)
        # Projecting rejects instants outside the datetime range.
        zdt = ZonedDateTime.of_instant(target, self._zone)
        return self._commit(zdt.to_instant(), operation, CLOCK_ADVANCED)

    # --- internals ---

    def _commit(
        self, instant: Instant, operation: str, event_type: str = CLOCK_SET
    ) -> MockClock:
        """Store *instant*, then emit the event for *operation*."""
        previous = self._instant
        self._instant = instant
        if self._event_bus is not None:
            self._event_bus.emit(
                ClockEvent(
                    event_type=event_type,
                    previous=previous,
                    current=instant,
                    zone=self._zone,
                    payload={"operation": operation},
                )
            )
        return self

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, MockClock):
            return NotImplemented
        return self._instant == other._instant and self._zone == other._zone

    # Mutating a clock changes its hash; do not mutate clocks held in sets.
    def __hash__(self) -> int:
        return hash((self._instant, self._zone))

    def __repr__(self) -> str:
        return f"MockClock(instant={self._instant}, zone={zone_name(self._zone)})"
