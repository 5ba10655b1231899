"""
Shared time-zone policy.

Every "which day is this" question in the journal is answered in one shared
zone (JournalConfig.timezone), so both writers agree on what "today" means.
"""
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, Optional

import pytz

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_zone(name: str) -> tzinfo:
    """Resolve a zone name, raising ValueError for unknown zones."""
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown time zone: {name}") from e


def ensure_aware(moment: datetime) -> datetime:
    """Naive timestamps coming back from storage are UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def local_day(moment: datetime, tz: tzinfo) -> date:
    return ensure_aware(moment).astimezone(tz).date()


def today_in(tz: tzinfo, clock: Optional[Clock] = None) -> date:
    now = (clock or utc_now)()
    return local_day(now, tz)


def window_start(now: datetime, days: int) -> datetime:
    """Start instant of the trailing load window."""
    if days < 1:
        raise ValueError(f"window must be at least one day, got {days}")
    return ensure_aware(now) - timedelta(days=days)
