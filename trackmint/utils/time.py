"""Time utilities (app-local timezone)."""

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from trackmint.config import settings

LOCAL_TZ = ZoneInfo(settings.TIMEZONE)


def now_local_naive() -> datetime:
    """
    Current local time, returned as naive datetime for DB storage.
    """
    return datetime.now(LOCAL_TZ).replace(tzinfo=None)


def to_local(dt: datetime, naive_assumed_tz: tzinfo = timezone.utc) -> datetime:
    """Convert datetime to the app timezone, timezone-aware."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=naive_assumed_tz)
    return dt.astimezone(LOCAL_TZ)


def as_db_naive(dt: datetime) -> datetime:
    """
    Normalize an incoming datetime to naive local time.

    Naive values are taken to be local already.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(LOCAL_TZ).replace(tzinfo=None)


def month_start(dt: datetime) -> datetime:
    return dt.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def shift_months(dt: datetime, months: int) -> datetime:
    """First day of the month `months` away from dt's month."""
    index = dt.year * 12 + (dt.month - 1) + months
    return datetime(index // 12, index % 12 + 1, 1)
