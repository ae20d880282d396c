from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt


def from_epoch_nanos(value: int) -> datetime:
    """
    Convert integer nanoseconds since the Unix epoch to a UTC datetime.

    The backend stamps files, notes, photos and tasks this way. Sub-microsecond
    precision is truncated.
    """
    return _EPOCH + timedelta(microseconds=int(value) // 1000)


def to_epoch_nanos(dt: datetime) -> int:
    delta = normalize_dt(dt).astimezone(timezone.utc) - _EPOCH
    return (delta // timedelta(microseconds=1)) * 1000


def from_epoch_millis(value: int) -> datetime:
    """Convert integer milliseconds since the Unix epoch (expense dates)."""
    return _EPOCH + timedelta(milliseconds=int(value))


def to_epoch_millis(dt: datetime) -> int:
    delta = normalize_dt(dt).astimezone(timezone.utc) - _EPOCH
    return delta // timedelta(milliseconds=1)


def start_of_day(day: date) -> datetime:
    """Return midnight UTC at the start of *day*."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    """Return the last representable instant (UTC) of *day*."""
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def as_utc_bound(value: date | datetime, *, upper: bool) -> datetime:
    """
    Normalize a date-range bound.

    A plain ``date`` covers the whole day: as a lower bound it means the start
    of the day, as an upper bound the end of it.
    """
    if isinstance(value, datetime):
        return normalize_dt(value).astimezone(timezone.utc)
    if isinstance(value, date):
        return end_of_day(value) if upper else start_of_day(value)
    raise TypeError("bound must be a date or datetime")
