"""
Display filtering over the record set.
"""
from datetime import date, tzinfo
from typing import Callable, List, Sequence

from ..models.record import JournalRecord
from ..models.state import AuthorFilter, ScopeFilter
from ..utils.clock import local_day


def build_display_predicate(
    author_filter: AuthorFilter,
    scope_filter: ScopeFilter,
    today: date,
    tz: tzinfo,
) -> Callable[[JournalRecord], bool]:
    """Compose the author and scope filters into one predicate."""

    def _matches(record: JournalRecord) -> bool:
        if not author_filter.matches(record.author):
            return False
        if scope_filter is ScopeFilter.TODAY:
            return local_day(record.created_at, tz) == today
        return True

    return _matches


def select_display_records(
    records: Sequence[JournalRecord],
    author_filter: AuthorFilter,
    scope_filter: ScopeFilter,
    today: date,
    tz: tzinfo,
) -> List[JournalRecord]:
    """
    Records to show for the given filters, in the order of `records`.

    An empty list means "nothing to show"; callers render an empty state.
    """
    predicate = build_display_predicate(author_filter, scope_filter, today, tz)
    return [record for record in records if predicate(record)]
