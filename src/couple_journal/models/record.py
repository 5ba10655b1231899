"""
Journal record models.
"""
from datetime import datetime
from enum import Enum
from typing import Optional, final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .registry import register_base_model_class

__all__ = [
    "Author",
    "TimePeriod",
    "RecordDraft",
    "JournalRecord",
]


@final
class Author(str, Enum):
    GIRL = "girl"
    BOY = "boy"


@final
class TimePeriod(str, Enum):
    MORNING = "morning"
    NOON = "noon"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


@final
@register_base_model_class
class RecordDraft(BaseModel):
    """Unvalidated user input for a new record."""
    author: Author
    time_period: TimePeriod
    text: str = ""
    image: Optional[str] = Field(default=None, description="Opaque image payload, e.g. a data URL")


@final
@register_base_model_class
class JournalRecord(BaseModel):
    """One immutable journal entry."""
    model_config = ConfigDict(frozen=True)

    id: int
    author: Author
    time_period: TimePeriod
    text: str = ""
    image: Optional[str] = None
    created_at: datetime = Field(description="Creation instant, timezone-aware")
    record_date: str = Field(description="ISO date of created_at in the shared journal time zone")

    @field_validator("created_at")
    @classmethod
    def _require_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("created_at must be timezone-aware")
        return value

    @property
    def has_image(self) -> bool:
        return bool(self.image)
