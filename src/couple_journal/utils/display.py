"""
zh-CN labels and date formatting for the feed and the daily report.

Formatting is done by hand so output does not depend on the process locale.
"""
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Dict, Final, Optional

from ..models.record import Author, JournalRecord, TimePeriod
from .clock import ensure_aware

AUTHOR_LABELS: Final[Dict[Author, str]] = {
    Author.GIRL: "我",
    Author.BOY: "他",
}

TIME_PERIOD_LABELS: Final[Dict[TimePeriod, str]] = {
    TimePeriod.MORNING: "早晨",
    TimePeriod.NOON: "中午",
    TimePeriod.AFTERNOON: "下午",
    TimePeriod.EVENING: "晚上",
    TimePeriod.NIGHT: "深夜",
}

_WEEKDAY_LABELS: Final = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")


############################################################################################################
def long_date_label(day: date) -> str:
    """例如 2026年10月19日星期一"""
    return f"{day.year}年{day.month}月{day.day}日{_WEEKDAY_LABELS[day.weekday()]}"


############################################################################################################
def short_date_label(day: date) -> str:
    """例如 2026/10/19"""
    return f"{day.year}/{day.month}/{day.day}"


############################################################################################################
@dataclass(frozen=True)
class RecordView:
    record_id: int
    author: Author
    author_label: str
    period_label: str
    date_text: str
    time_text: str
    text: str
    image: Optional[str]

    @property
    def feed_line(self) -> str:
        return f"{self.date_text} {self.time_text} · {self.period_label}"

    @property
    def report_line(self) -> str:
        return f"{self.time_text} · {self.period_label}"


def to_record_view(record: JournalRecord, tz: tzinfo) -> RecordView:
    local = ensure_aware(record.created_at).astimezone(tz)
    return RecordView(
        record_id=record.id,
        author=record.author,
        author_label=AUTHOR_LABELS[record.author],
        period_label=TIME_PERIOD_LABELS[record.time_period],
        date_text=f"{local.month}月{local.day}日",
        time_text=f"{local.hour:02d}:{local.minute:02d}",
        text=record.text,
        image=record.image,
    )
