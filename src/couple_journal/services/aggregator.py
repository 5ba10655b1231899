"""
Per-author tallies and the daily report.
"""
from collections import Counter
from datetime import date, tzinfo
from typing import Dict, Final, Sequence

from ..models.record import Author, JournalRecord
from ..models.report import DailyReport
from ..models.state import AuthorFilter, ScopeFilter
from .filter_engine import select_display_records

SHARE_TITLE: Final[str] = "📝 情侣日常报告"
SHARE_TAGLINE: Final[str] = "记录我们的每一天 💕"


def count_by_author(records: Sequence[JournalRecord]) -> Dict[Author, int]:
    """Count records per author over the whole set; both authors always present."""
    counter = Counter(record.author for record in records)
    return {author: counter.get(author, 0) for author in Author}


def build_daily_report(
    records: Sequence[JournalRecord], today: date, tz: tzinfo
) -> DailyReport:
    todays = select_display_records(records, AuthorFilter.ALL, ScopeFilter.TODAY, today, tz)
    return DailyReport(
        day=today,
        counts=count_by_author(todays),
        records=todays,
        is_empty=not todays,
    )


def format_share_text(report: DailyReport, date_label: str) -> str:
    """Short plain-text summary of a daily report, for copying or sharing."""
    girl_count = report.counts.get(Author.GIRL, 0)
    boy_count = report.counts.get(Author.BOY, 0)
    return (
        f"{SHARE_TITLE} {date_label}\n"
        f"我的记录: {girl_count}条\n"
        f"他的记录: {boy_count}条\n"
        f"\n"
        f"{SHARE_TAGLINE}"
    )
