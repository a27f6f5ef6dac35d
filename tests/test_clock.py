from datetime import date, datetime, timedelta, timezone

import pytest

from dosetrack.core.clock import FixedClock, SystemClock, as_utc
from dosetrack.core.exceptions import ValidationError


def test_fixed_clock_today_in_utc():
    clock = FixedClock(datetime(2025, 3, 10, 23, 59, tzinfo=timezone.utc))
    assert clock.today() == date(2025, 3, 10)


def test_day_of_uses_reference_timezone():
    # Mexico City is UTC-6 all year since 2022
    clock = FixedClock(datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc), "America/Mexico_City")
    assert clock.day_of(datetime(2025, 3, 10, 5, 59, tzinfo=timezone.utc)) == date(2025, 3, 9)
    assert clock.day_of(datetime(2025, 3, 10, 6, 0, tzinfo=timezone.utc)) == date(2025, 3, 10)


def test_day_of_ignores_offset_of_the_input():
    clock = FixedClock(datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc))
    tokyo = timezone(timedelta(hours=9))
    # 2025-03-11 02:00 in Tokyo is still 2025-03-10 in UTC
    assert clock.day_of(datetime(2025, 3, 11, 2, 0, tzinfo=tokyo)) == date(2025, 3, 10)


def test_naive_datetimes_are_utc():
    naive = datetime(2025, 3, 10, 9, 30)
    assert as_utc(naive) == datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)

    clock = FixedClock(naive)
    assert clock.now().tzinfo is not None
    assert clock.now() == datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)


def test_advance_and_set():
    clock = FixedClock(datetime(2025, 3, 10, 23, 0, tzinfo=timezone.utc))
    clock.advance(hours=2)
    assert clock.today() == date(2025, 3, 11)

    clock.set(datetime(2025, 1, 1, tzinfo=timezone.utc))
    assert clock.today() == date(2025, 1, 1)


def test_unknown_timezone_is_a_configuration_error():
    with pytest.raises(ValueError):
        SystemClock("Mars/Olympus_Mons")


def test_as_utc_out_of_range():
    plus_five = timezone(timedelta(hours=5))
    with pytest.raises(ValidationError):
        as_utc(datetime(1, 1, 1, 0, 0, tzinfo=plus_five))
    with pytest.raises(ValidationError):
        as_utc(datetime(9999, 12, 31, 23, 0, tzinfo=timezone(timedelta(hours=-5))))


def test_checked_instant():
    clock = FixedClock(datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc), "America/Mexico_City")
    tokyo = timezone(timedelta(hours=9))

    assert clock.checked_instant(datetime(2025, 3, 10, 9, 0, tzinfo=tokyo)) == datetime(2025, 3, 10, 0, 0, tzinfo=timezone.utc)
    # Valid in UTC, but the day cannot be computed in Mexico City
    with pytest.raises(ValidationError):
        clock.checked_instant(datetime(1, 1, 1, 1, 0, tzinfo=timezone.utc))


def test_system_clock_is_aware():
    assert SystemClock().now().tzinfo is not None
