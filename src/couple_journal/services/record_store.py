"""
Record store: the canonical newest-first record set and its persistence.
"""
import asyncio
from datetime import tzinfo
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

from loguru import logger

from ..errors import (
    InvalidRecord,
    PersistError,
    ProviderError,
    ProviderTimeout,
    StoreTimeout,
    StoreUnavailable,
)
from ..models.record import JournalRecord, RecordDraft
from ..utils.clock import Clock, local_day, utc_now, window_start
from .providers import RecordProvider

T = TypeVar("T")


def _newest_first(records: Sequence[JournalRecord]) -> List[JournalRecord]:
    seen = set()
    unique: List[JournalRecord] = []
    for record in sorted(records, key=lambda r: r.created_at, reverse=True):
        if record.id in seen:
            continue
        seen.add(record.id)
        unique.append(record)
    return unique


class RecordStore:
    """
    Holds the record set and performs create / load / clear against a provider.

    The set is only ever replaced by a single assignment to a new tuple, so
    readers always see a complete snapshot, and a failed provider call leaves
    the previous snapshot in place.
    """

    def __init__(
        self,
        provider: RecordProvider,
        *,
        tz: tzinfo,
        load_window_days: int = 7,
        timeout_seconds: Optional[float] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.provider = provider
        self.tz = tz
        self.load_window_days = load_window_days
        self.timeout_seconds = timeout_seconds
        self._clock = clock or utc_now
        self._records: Tuple[JournalRecord, ...] = ()
        self._last_id = 0

    @property
    def records(self) -> Tuple[JournalRecord, ...]:
        return self._records

    async def _call(self, operation: str, make_call: Callable[[], Awaitable[T]]) -> T:
        timeout = self.timeout_seconds
        try:
            if timeout is None or self.provider.bounds_own_timeout:
                return await make_call()
            return await asyncio.wait_for(make_call(), timeout=timeout)
        except (asyncio.TimeoutError, ProviderTimeout) as e:
            logger.error(f"{operation} on {self.provider.name} provider timed out")
            raise StoreTimeout(operation, timeout or 0.0) from e

    def _next_id(self, created_ms: int) -> int:
        # 同一毫秒内连续创建时顺延, 保证唯一
        record_id = max(created_ms, self._last_id + 1)
        self._last_id = record_id
        return record_id

    async def load(self, window_days: Optional[int] = None) -> Tuple[JournalRecord, ...]:
        days = window_days if window_days is not None else self.load_window_days
        since = window_start(self._clock(), days)
        try:
            fetched = await self._call("load", lambda: self.provider.fetch_since(since))
        except ProviderError as e:
            logger.error(f"Failed to load records from {self.provider.name} provider: {e}")
            raise StoreUnavailable(str(e)) from e

        self._records = tuple(_newest_first(fetched))
        logger.info(f"Loaded {len(self._records)} record(s) from the last {days} day(s)")
        return self._records

    async def create(self, draft: RecordDraft) -> JournalRecord:
        text = draft.text.strip()
        if not text and not draft.image:
            raise InvalidRecord("a record needs text or an image")

        created_at = self._clock()
        record = JournalRecord(
            id=self._next_id(int(created_at.timestamp() * 1000)),
            author=draft.author,
            time_period=draft.time_period,
            text=text,
            image=draft.image,
            created_at=created_at,
            record_date=local_day(created_at, self.tz).isoformat(),
        )

        try:
            stored = await self._call("create", lambda: self.provider.insert(record))
        except ProviderError as e:
            logger.error(f"Failed to save record {record.id}: {e}")
            raise PersistError(str(e)) from e

        self._records = (stored,) + tuple(r for r in self._records if r.id != stored.id)
        logger.info(f"Saved record {stored.id} by {stored.author.value}")
        return stored

    async def clear_all(self) -> None:
        try:
            await self._call("clear_all", self.provider.delete_all)
        except ProviderError as e:
            logger.error(f"Failed to clear records: {e}")
            raise PersistError(str(e)) from e

        self._records = ()
        logger.info("Cleared all records")
