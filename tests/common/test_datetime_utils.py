from datetime import date, datetime, timedelta, timezone

import pytest

from punchly.common.datetime_utils import (
    day_bounds,
    ensure_utc,
    format_hours_minutes,
    iter_days,
    overlaps,
    parse_iso_datetime,
    worked_minutes,
)
from punchly.common.validators import require_timezone
from punchly.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((date(2024, 3, 1), date(2024, 3, 5)), (date(2024, 3, 5), date(2024, 3, 9)), True),
        ((date(2024, 3, 1), date(2024, 3, 5)), (date(2024, 3, 6), date(2024, 3, 9)), False),
        ((date(2024, 3, 1), date(2024, 3, 31)), (date(2024, 3, 10), date(2024, 3, 12)), True),
        ((date(2024, 3, 3), date(2024, 3, 3)), (date(2024, 3, 3), date(2024, 3, 3)), True),
    ],
)
def test_overlaps_is_closed_and_symmetric(a, b, expected):
    assert overlaps(*a, *b) is expected
    assert overlaps(*b, *a) is expected


def test_day_bounds_covers_whole_utc_day():
    start, end = day_bounds(datetime(2024, 3, 12, 23, 30, tzinfo=timezone(timedelta(hours=-2))))

    # 23:30 at UTC-2 is already the 13th in UTC
    assert start == datetime(2024, 3, 13, tzinfo=timezone.utc)
    assert end == datetime(2024, 3, 13, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_naive_datetimes_are_read_as_utc():
    assert ensure_utc(datetime(2024, 3, 12, 8, 0)) == datetime(2024, 3, 12, 8, 0, tzinfo=timezone.utc)
    assert parse_iso_datetime("2024-03-12T08:00:00Z") == datetime(2024, 3, 12, 8, 0, tzinfo=timezone.utc)


def test_parse_iso_datetime_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_iso_datetime("yesterday-ish")


def test_worked_minutes_floors_and_ignores_open_sessions():
    check_in = datetime(2024, 3, 12, 8, 0, tzinfo=timezone.utc)

    assert worked_minutes(check_in, check_in + timedelta(minutes=125, seconds=59)) == 125
    assert worked_minutes(check_in, None) == 0
    assert worked_minutes(check_in, check_in - timedelta(minutes=5)) == 0


def test_format_hours_minutes():
    assert format_hours_minutes(160) == "2,40"
    assert format_hours_minutes(5) == "0,05"
    assert format_hours_minutes(0) == "0,00"


def test_iter_days_is_inclusive():
    assert list(iter_days(date(2024, 2, 28), date(2024, 3, 1))) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]


def test_require_timezone():
    assert require_timezone("Europe/Zagreb").key == "Europe/Zagreb"
    with pytest.raises(ValidationError) as exc:
        require_timezone("Mars/Olympus_Mons")
    assert exc.value.field == "timezone"
