"""Shared fixtures for the couple_journal tests."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List, Optional

import pytest
import pytz

# Add src directory to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from couple_journal.models import Author, JournalRecord, TimePeriod

SHANGHAI = pytz.timezone("Asia/Shanghai")

# 2026-10-19 12:00 in Shanghai
FIXED_NOW = datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc)


@pytest.fixture
def tz():
    return SHANGHAI


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def local_time() -> Callable[..., datetime]:
    """Aware Shanghai datetime, relative to the fixed "today"."""

    def _make(hour: int, minute: int = 0, days_ago: int = 0) -> datetime:
        day = datetime(2026, 10, 19) - timedelta(days=days_ago)
        return SHANGHAI.localize(day.replace(hour=hour, minute=minute))

    return _make


@pytest.fixture
def record_factory() -> Callable[..., JournalRecord]:
    def _make(
        record_id: int,
        author: Author,
        created_at: datetime,
        text: str = "",
        image: Optional[str] = None,
        time_period: TimePeriod = TimePeriod.MORNING,
    ) -> JournalRecord:
        return JournalRecord(
            id=record_id,
            author=author,
            time_period=time_period,
            text=text,
            image=image,
            created_at=created_at,
            record_date=created_at.astimezone(SHANGHAI).date().isoformat(),
        )

    return _make


@pytest.fixture
def scenario_records(record_factory, local_time) -> List[JournalRecord]:
    """Newest first: evening image today, morning coffee today, noon five days ago."""
    t0 = record_factory(1, Author.GIRL, local_time(8), text="coffee", time_period=TimePeriod.MORNING)
    t1 = record_factory(
        2, Author.BOY, local_time(20), text="", image="data:image/png;base64,AAAA",
        time_period=TimePeriod.EVENING,
    )
    t2 = record_factory(3, Author.GIRL, local_time(12, days_ago=5), text="old", time_period=TimePeriod.NOON)
    return [t1, t0, t2]
