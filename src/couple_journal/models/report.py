"""
Report, notice and change-event models.
"""
from datetime import date
from enum import Enum
from typing import Dict, List, Literal, Optional, final

from pydantic import BaseModel, Field

from .record import Author, JournalRecord
from .registry import register_base_model_class

__all__ = [
    "DailyReport",
    "NoticeSeverity",
    "Notice",
    "ChangeEvent",
]


@final
@register_base_model_class
class DailyReport(BaseModel):
    """Per-author breakdown and listing of a single calendar day."""
    day: date
    counts: Dict[Author, int]
    records: List[JournalRecord] = Field(default_factory=list)
    is_empty: bool = True


@final
class NoticeSeverity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@final
@register_base_model_class
class Notice(BaseModel):
    message: str
    severity: NoticeSeverity = NoticeSeverity.SUCCESS


@final
@register_base_model_class
class ChangeEvent(BaseModel):
    """A "record set may have changed" signal from the change feed."""
    event_type: Literal["INSERT", "UPDATE", "DELETE", "*"] = "*"
    table: str = "couple_records"
    record_id: Optional[int] = None
