from datetime import date, datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Time source for everything date-dependent. Returns naive UTC datetimes."""

    def now(self) -> datetime:
        ...


def to_naive_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


class FixedClock:
    """Clock pinned to a given instant; `advance` moves it forward."""

    def __init__(self, instant: datetime):
        self.instant = to_naive_utc(instant)

    def now(self) -> datetime:
        return self.instant

    def advance(self, **kwargs) -> datetime:
        self.instant = self.instant + timedelta(**kwargs)
        return self.instant


def today(clock: Clock) -> date:
    """Calendar day of the clock's current instant"""
    return clock.now().date()


def to_date_string(value: date | datetime) -> str:
    """Format as YYYY-MM-DD"""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def as_date(value) -> date | None:
    """Normalize a DATE() result, which some backends return as text"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


system_clock = SystemClock()
