"""
Filter state and application state.

The presentation layer owns AppState; the core only ever receives the filter
values as parameters.
"""
from enum import Enum
from typing import Optional, final

from pydantic import BaseModel

from .record import Author
from .registry import register_base_model_class

__all__ = [
    "AuthorFilter",
    "ScopeFilter",
    "AppState",
]


@final
class AuthorFilter(str, Enum):
    ALL = "all"
    GIRL = "girl"
    BOY = "boy"

    def matches(self, author: Author) -> bool:
        return self is AuthorFilter.ALL or self.value == author.value


@final
class ScopeFilter(str, Enum):
    TODAY = "today"
    ALL_TIME = "all_time"


@final
@register_base_model_class
class AppState(BaseModel):
    current_user: Author = Author.GIRL
    author_filter: AuthorFilter = AuthorFilter.ALL
    scope_filter: ScopeFilter = ScopeFilter.TODAY
    current_image: Optional[str] = None
