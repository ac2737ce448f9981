"""Tests for Instant, ZonedDateTime and Month."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from mockclock.core.errors import InvalidArgumentError
from mockclock.core.types import Instant, Month, ZonedDateTime, coerce_zone


# ---- Instant ----

@pytest.mark.parametrize(
    "instant, text",
    [
        (Instant(0), "1970-01-01T00:00:00Z"),
        (Instant.of_epoch_milli(1500), "1970-01-01T00:00:01.500Z"),
        (Instant(1_000), "1970-01-01T00:00:00.000001Z"),
        (Instant(1), "1970-01-01T00:00:00.000000001Z"),
        (Instant(-1), "1969-12-31T23:59:59.999999999Z"),
    ],
)
def test_instant_str(instant, text):
    assert str(instant) == text


def test_instant_negative_fields():
    instant = Instant(-1)

    assert instant.epoch_second == -1
    assert instant.nano == 999_999_999


def test_instant_of_epoch_second():
    assert Instant.of_epoch_second(2, 5).epoch_nanos == 2_000_000_005


def test_instant_ordering():
    assert Instant(1) < Instant(2)
    assert Instant(5).plus_nanos(-5) == Instant(0)


def test_instant_plus_timedelta():
    assert Instant(0).plus(timedelta(days=1, microseconds=2)).epoch_nanos == (
        86_400_000_002_000
    )


def test_instant_from_aware_datetime():
    dt = datetime(1970, 1, 1, 1, 0, 0, 7, tzinfo=timezone(timedelta(hours=1)))

    assert Instant.from_datetime(dt) == Instant(7_000)
    assert Instant.from_datetime(dt, nanosecond=42) == Instant(42)


def test_instant_from_naive_datetime_fails():
    with pytest.raises(InvalidArgumentError):
        Instant.from_datetime(datetime(2016, 1, 4))


def test_instant_rejects_non_int():
    with pytest.raises(InvalidArgumentError):
        Instant(1.5)


def test_instant_to_datetime():
    dt = Instant(1_999).to_datetime(ZoneInfo("Asia/Tokyo"))

    assert dt == datetime(1970, 1, 1, 9, 0, 0, 1, tzinfo=ZoneInfo("Asia/Tokyo"))


def test_instant_out_of_datetime_range():
    instant = Instant.of_epoch_second(10**12)

    with pytest.raises(InvalidArgumentError):
        instant.to_datetime()
    assert str(instant) == repr(instant)


# ---- Month ----

def test_month_of_accepts_member_and_int():
    assert Month.of(Month.MARCH) is Month.MARCH
    assert Month.of(3) is Month.MARCH


@pytest.mark.parametrize("value", [0, 13, -1, "3", None, True])
def test_month_of_rejects_invalid(value):
    with pytest.raises(InvalidArgumentError):
        Month.of(value)


def test_month_length_knows_leap_years():
    assert Month.FEBRUARY.length(2016) == 29
    assert Month.FEBRUARY.length(2015) == 28
    assert Month.FEBRUARY.length(1900) == 28
    assert Month.FEBRUARY.length(2000) == 29


# ---- Zones ----

def test_coerce_zone_accepts_key_and_tzinfo():
    assert coerce_zone("Europe/London") == ZoneInfo("Europe/London")
    assert coerce_zone(timezone.utc) is timezone.utc


@pytest.mark.parametrize("value", [None, "Not/AZone", "", 5])
def test_coerce_zone_rejects_invalid(value):
    with pytest.raises(InvalidArgumentError):
        coerce_zone(value)


# ---- ZonedDateTime ----

def test_zoned_date_time_of():
    zdt = ZonedDateTime.of(2015, Month.DECEMBER, 9, 12, 25, 38, 111, zone="UTC")

    assert zdt.date() == date(2015, 12, 9)
    assert zdt.time() == time(12, 25, 38)
    assert zdt.nanosecond == 111
    assert str(zdt) == "2015-12-09T12:25:38.000000111+00:00[UTC]"


@pytest.mark.parametrize(
    "fields",
    [
        (2015, 2, 29),
        (2015, 4, 31),
        (2015, 13, 1),
        (2015, 1, 1, 24),
        (2015, 1, 1, 0, 60),
        (2015, 1, 1, 0, 0, 60),
        (2015, 1, 1, 0, 0, 0, -1),
        (0, 1, 1),
    ],
)
def test_zoned_date_time_of_rejects_invalid_fields(fields):
    with pytest.raises(InvalidArgumentError):
        ZonedDateTime.of(*fields, zone=timezone.utc)


def test_zoned_date_time_replace_keeps_unset_fields():
    zdt = ZonedDateTime.of(2015, 12, 9, 12, 25, 38, 111, zone=timezone.utc)

    replaced = zdt.replace(hour=1)

    assert replaced == ZonedDateTime.of(2015, 12, 9, 1, 25, 38, 111, zone=timezone.utc)


def test_zoned_date_time_with_year_clamps():
    zdt = ZonedDateTime.of(2016, 2, 29, zone=timezone.utc)

    assert zdt.with_year(2015).day == 28
    assert zdt.with_year(2020).day == 29


def test_zoned_date_time_requires_aware_datetime():
    with pytest.raises(InvalidArgumentError):
        ZonedDateTime(datetime(2016, 1, 4))


def test_zoned_date_time_equality_includes_zone():
    instant = Instant(0)

    assert ZonedDateTime.of_instant(instant, "UTC") != ZonedDateTime.of_instant(
        instant, "Europe/London"
    )
    assert ZonedDateTime.of_instant(instant, "UTC") == ZonedDateTime.of_instant(
        instant, "UTC"
    )
