from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional, Tuple, TypeVar, Union

from ..core.constants import MINUTES_PER_HOUR
from ..core.exceptions import ValidationError

C = TypeVar("C", date, datetime)


def overlaps(a_start: C, a_end: C, b_start: C, b_end: C) -> bool:
    """Closed-interval overlap: ranges sharing a single day/instant conflict."""
    return a_start <= b_end and a_end >= b_start


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return ensure_utc(value).date()
    return value


def day_bounds(value: Union[date, datetime]) -> Tuple[datetime, datetime]:
    """Inclusive UTC window [00:00:00.000, 23:59:59.999] of the day of ``value``."""
    day = utc_date(value)
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = datetime.combine(day, time(23, 59, 59, 999000), tzinfo=timezone.utc)
    return start, end


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 instant; values without offset are taken as UTC."""
    if not isinstance(value, str):
        raise ValidationError(f"Invalid datetime: {value!r}")
    v = value.strip()
    if v.endswith(("Z", "z")):
        v = v[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(v))
    except ValueError:
        raise ValidationError(f"Invalid datetime: {value!r}")


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def worked_minutes(check_in: datetime, check_out: Optional[datetime]) -> int:
    """Whole minutes between check-in and check-out; open sessions count 0."""
    if check_out is None:
        return 0
    seconds = (ensure_utc(check_out) - ensure_utc(check_in)).total_seconds()
    return max(int(seconds // 60), 0)


def format_hours_minutes(minutes: int) -> str:
    """160 -> '2,40'."""
    return f"{minutes // MINUTES_PER_HOUR},{minutes % MINUTES_PER_HOUR:02d}"
