"""Time value types: Month, Instant and ZonedDateTime.

Calendar arithmetic is delegated to :mod:`datetime` and :mod:`zoneinfo`.
The types here only add the nanosecond of second that ``datetime`` cannot
hold and translate its errors into :class:`InvalidArgumentError`.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import IntEnum
from time import time_ns
from typing import Any, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mockclock.core.errors import InvalidArgumentError

NANOS_PER_MICRO = 1_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY = 24 * NANOS_PER_HOUR

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)

ZoneLike = Union[tzinfo, str]


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------

def require(value: Any, name: str) -> Any:
    """Return *value*, raising InvalidArgumentError when it is None."""
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
    return value


def require_int(value: Any, name: str) -> int:
    require(value, name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an int, got {value!r}")
    return value


def nano_of_second(value: Any, name: str = "nanosecond") -> int:
    require_int(value, name)
    if not 0 <= value < NANOS_PER_SECOND:
        raise InvalidArgumentError(
            f"{name} must be in 0..{NANOS_PER_SECOND - 1}, got {value}"
        )
    return value


def coerce_zone(zone: ZoneLike | None) -> tzinfo:
    """Accept a tzinfo or an IANA key such as ``"Europe/London"``."""
    require(zone, "zone")
    if isinstance(zone, tzinfo):
        return zone
    if isinstance(zone, str):
        try:
            return ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidArgumentError(f"Unknown zone: {zone!r}") from e
    raise InvalidArgumentError(f"Not a zone: {zone!r}")


def zone_name(zone: tzinfo) -> str:
    return getattr(zone, "key", None) or str(zone)


def timedelta_to_nanos(delta: timedelta) -> int:
    return (delta.days * 86_400 + delta.seconds) * NANOS_PER_SECOND + (
        delta.microseconds * NANOS_PER_MICRO
    )


def _format_fraction(nano: int) -> str:
    if nano == 0:
        return ""
    if nano % NANOS_PER_MILLI == 0:
        return f".{nano // NANOS_PER_MILLI:03d}"
    if nano % NANOS_PER_MICRO == 0:
        return f".{nano // NANOS_PER_MICRO:06d}"
    return f".{nano:09d}"


# ---------------------------------------------------------------------------
# Month
# ---------------------------------------------------------------------------

class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def of(cls, month: Month | int) -> Month:
        """Accept a Month member or a 1-based month number."""
        require_int(month, "month")
        try:
            return cls(month)
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid month: {month}") from e

    def length(self, year: int) -> int:
        return calendar.monthrange(year, self)[1]


# ---------------------------------------------------------------------------
# Instant
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class Instant:
    """A point on the UTC time line, in nanoseconds since the Unix epoch."""

    epoch_nanos: int

    def __post_init__(self) -> None:
        require_int(self.epoch_nanos, "epoch_nanos")

    @classmethod
    def of_epoch_second(cls, seconds: int, nano: int = 0) -> Instant:
        return cls(require_int(seconds, "seconds") * NANOS_PER_SECOND
                   + require_int(nano, "nano"))

    @classmethod
    def of_epoch_milli(cls, millis: int) -> Instant:
        return cls(require_int(millis, "millis") * NANOS_PER_MILLI)

    @classmethod
    def now(cls) -> Instant:
        return cls(time_ns())

    @classmethod
    def from_datetime(cls, dt: datetime, nanosecond: int | None = None) -> Instant:
        """Instant of an aware datetime.

        ``nanosecond`` replaces the nano-of-second, which otherwise comes
        from ``dt.microsecond``.
        """
        require(dt, "dt")
        if not isinstance(dt, datetime):
            raise InvalidArgumentError(f"Not a datetime: {dt!r}")
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise InvalidArgumentError(
                f"Naive datetime {dt.isoformat()} has no instant; supply a zone"
            )
        micros = (dt - _EPOCH) // _MICROSECOND
        nanos = micros * NANOS_PER_MICRO
        if nanosecond is not None:
            nanos += nano_of_second(nanosecond) - dt.microsecond * NANOS_PER_MICRO
        return cls(nanos)

    @property
    def epoch_second(self) -> int:
        return self.epoch_nanos // NANOS_PER_SECOND

    @property
    def nano(self) -> int:
        """Nano-of-second, always in 0..999_999_999."""
        return self.epoch_nanos % NANOS_PER_SECOND

    def to_epoch_milli(self) -> int:
        return self.epoch_nanos // NANOS_PER_MILLI

    def plus_nanos(self, nanos: int) -> Instant:
        return Instant(self.epoch_nanos + require_int(nanos, "nanos"))

    def plus(self, delta: timedelta) -> Instant:
        require(delta, "delta")
        if not isinstance(delta, timedelta):
            raise InvalidArgumentError(f"Not a timedelta: {delta!r}")
        return self.plus_nanos(timedelta_to_nanos(delta))

    def to_datetime(self, zone: ZoneLike = timezone.utc) -> datetime:
        """Aware datetime in *zone*, truncated to microseconds."""
        zone = coerce_zone(zone)
        seconds, nano = divmod(self.epoch_nanos, NANOS_PER_SECOND)
        try:
            utc = _EPOCH + timedelta(
                seconds=seconds, microseconds=nano // NANOS_PER_MICRO
            )
            return utc.astimezone(zone)
        except (OverflowError, ValueError) as e:
            raise InvalidArgumentError(
                f"Instant {self.epoch_nanos}ns is outside the datetime range"
            ) from e

    def __str__(self) -> str:
        try:
            utc = self.to_datetime()
        except InvalidArgumentError:
            return repr(self)
        local = utc.replace(tzinfo=None, microsecond=0).isoformat()
        return f"{local}{_format_fraction(self.nano)}Z"


# ---------------------------------------------------------------------------
# ZonedDateTime
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ZonedDateTime:
    """Civil date and time in a zone, at nanosecond resolution.

    ``dt`` is an aware datetime whose microsecond is the truncated
    ``nanosecond``. Instances are always resolved: the wall time exists in
    the zone and ``dt.fold`` selects the offset used for it.
    """

    dt: datetime
    nanosecond: int = 0

    def __post_init__(self) -> None:
        require(self.dt, "dt")
        if self.dt.tzinfo is None:
            raise InvalidArgumentError("ZonedDateTime needs an aware datetime")
        nano_of_second(self.nanosecond)
        if self.dt.microsecond != self.nanosecond // NANOS_PER_MICRO:
            raise InvalidArgumentError(
                f"microsecond {self.dt.microsecond} does not match "
                f"nanosecond {self.nanosecond}"
            )

    @classmethod
    def of(
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
        fold: int = 0,
    ) -> ZonedDateTime:
        zone = coerce_zone(zone)
        month = Month.of(month)
        nanosecond = nano_of_second(nanosecond)
        try:
            dt = datetime(
                year, month, day, hour, minute, second,
                nanosecond // NANOS_PER_MICRO, tzinfo=zone, fold=fold,
            )
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(str(e)) from e
        return cls._resolve(dt, nanosecond)

    @classmethod
    def of_instant(cls, instant: Instant, zone: ZoneLike) -> ZonedDateTime:
        require(instant, "instant")
        return cls(instant.to_datetime(zone), instant.nano)

    @classmethod
    def of_datetime(
        cls, dt: datetime, nanosecond: int | None = None
    ) -> ZonedDateTime:
        """Resolve an aware datetime, optionally with a full nano-of-second."""
        require(dt, "dt")
        if not isinstance(dt, datetime) or dt.tzinfo is None:
            raise InvalidArgumentError(f"Not an aware datetime: {dt!r}")
        if nanosecond is None:
            nanosecond = dt.microsecond * NANOS_PER_MICRO
        nanosecond = nano_of_second(nanosecond)
        return cls._resolve(
            dt.replace(microsecond=nanosecond // NANOS_PER_MICRO), nanosecond
        )

    @classmethod
    def _resolve(cls, dt: datetime, nanosecond: int) -> ZonedDateTime:
        # A wall time inside a gap moves forward by the length of the gap,
        # whatever fold it carries.
        if dt.fold and dt.replace(fold=0).utcoffset() < dt.utcoffset():
            dt = dt.replace(fold=0)
        instant = Instant.from_datetime(dt, nanosecond)
        return cls.of_instant(instant, dt.tzinfo)

    # --- fields ---

    @property
    def year(self) -> int:
        return self.dt.year

    @property
    def month(self) -> Month:
        return Month(self.dt.month)

    @property
    def day(self) -> int:
        return self.dt.day

    @property
    def hour(self) -> int:
        return self.dt.hour

    @property
    def minute(self) -> int:
        return self.dt.minute

    @property
    def second(self) -> int:
        return self.dt.second

    @property
    def zone(self) -> tzinfo:
        return self.dt.tzinfo

    @property
    def fold(self) -> int:
        return self.dt.fold

    def utcoffset(self) -> timedelta:
        return self.dt.utcoffset()

    def date(self) -> date:
        return self.dt.date()

    def time(self) -> time:
        return self.dt.time()

    def to_datetime(self) -> datetime:
        return self.dt

    def to_instant(self) -> Instant:
        return Instant.from_datetime(self.dt, self.nanosecond)

    # --- field replacement ---

    def replace(
        self,
        year: int | None = None,
        month: Month | int | None = None,
        day: int | None = None,
        hour: int | None = None,
        minute: int | None = None,
        second: int | None = None,
        nanosecond: int | None = None,
    ) -> ZonedDateTime:
        """Copy with the given fields replaced; ``None`` keeps a field.

        The current fold is kept, so a wall time that falls in an overlap
        keeps the offset it has now.
        """
        if nanosecond is None:
            nanosecond = self.nanosecond
        nanosecond = nano_of_second(nanosecond)
        changes: dict[str, int] = {"microsecond": nanosecond // NANOS_PER_MICRO}
        if month is not None:
            changes["month"] = int(Month.of(month))
        fields = (("year", year), ("day", day), ("hour", hour),
                  ("minute", minute), ("second", second))
        for name, value in fields:
            if value is not None:
                changes[name] = require_int(value, name)
        try:
            dt = self.dt.replace(**changes)
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e
        return self._resolve(dt, nanosecond)

    def with_year(self, year: int) -> ZonedDateTime:
        """Change the year, clamping Feb 29 to Feb 28 when needed."""
        require_int(year, "year")
        try:
            day = min(self.day, self.month.length(year))
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e
        return self.replace(year=year, day=day)

    def with_month(self, month: Month | int) -> ZonedDateTime:
        """Change the month, clamping the day to the month's last day."""
        month = Month.of(month)
        return self.replace(month=month, day=min(self.day, month.length(self.year)))

    # --- dunder ---

    def _key(self) -> tuple:
        return (
            self.dt.replace(tzinfo=None, fold=0),
            self.utcoffset(),
            self.nanosecond,
            self.zone,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZonedDateTime):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        wall = self.dt.replace(microsecond=0)
        local = wall.replace(tzinfo=None).isoformat()
        offset = wall.isoformat()[len(local):]
        return (
            f"{local}{_format_fraction(self.nanosecond)}{offset}"
            f"[{zone_name(self.zone)}]"
        )
