"""
Persistence providers behind the record store.

Both providers expose the same async contract and the same JournalRecord
shape; the store never knows which one it talks to.
"""
import asyncio
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, List, Optional

from loguru import logger
from psycopg2.errors import QueryCanceled
from pydantic import TypeAdapter, ValidationError
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..db.local_slot import JsonFileSlot
from ..db.pgsql_object import CoupleRecordDB
from ..errors import ProviderError, ProviderTimeout
from ..models.record import Author, JournalRecord, TimePeriod
from ..models.report import ChangeEvent
from ..utils.clock import ensure_aware

_RECORD_LIST = TypeAdapter(List[JournalRecord])


class RecordProvider(ABC):
    """Async persistence contract for the record set."""

    name: str = "provider"
    # True when the backend enforces its own time bound on every call
    bounds_own_timeout: bool = False

    @abstractmethod
    async def fetch_since(self, since: datetime) -> List[JournalRecord]:
        """Records created at or after `since`, newest first."""

    @abstractmethod
    async def insert(self, record: JournalRecord) -> JournalRecord:
        """Persist one record and return the stored shape."""

    @abstractmethod
    async def delete_all(self) -> None:
        """Delete every record."""


############################################################################################################
class LocalRecordProvider(RecordProvider):
    """Whole record set serialized into a single local slot."""

    name = "local"

    def __init__(self, slot: JsonFileSlot, slot_key: str = "couple_records") -> None:
        self.slot = slot
        self.slot_key = slot_key

    def _read_records(self) -> List[JournalRecord]:
        try:
            raw = self.slot.read(self.slot_key)
            if raw is None:
                return []
            return _RECORD_LIST.validate_json(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Failed to read local slot {self.slot_key}: {e}")
            raise ProviderError(f"local slot unreadable: {e}") from e

    def _write_records(self, records: List[JournalRecord]) -> None:
        try:
            payload = _RECORD_LIST.dump_json(records).decode("utf-8")
            self.slot.write(self.slot_key, payload)
        except OSError as e:
            logger.error(f"Failed to write local slot {self.slot_key}: {e}")
            raise ProviderError(f"local slot unwritable: {e}") from e

    async def fetch_since(self, since: datetime) -> List[JournalRecord]:
        records = [r for r in self._read_records() if r.created_at >= since]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records

    async def insert(self, record: JournalRecord) -> JournalRecord:
        records = self._read_records()
        self._write_records([record] + records)
        return record

    async def delete_all(self) -> None:
        self._write_records([])


############################################################################################################
def row_to_record(row: CoupleRecordDB) -> JournalRecord:
    """Convert a couple_records row to a JournalRecord."""
    return JournalRecord(
        id=row.id,
        author=Author(row.user_type),
        time_period=TimePeriod(row.time_period),
        text=row.content or "",
        image=row.image_url,
        created_at=ensure_aware(row.created_at),
        record_date=row.record_date,
    )


def record_to_row(record: JournalRecord) -> CoupleRecordDB:
    """Convert a JournalRecord to a couple_records row, timestamps in UTC."""
    return CoupleRecordDB(
        id=record.id,
        user_type=record.author.value,
        time_period=record.time_period.value,
        content=record.text,
        image_url=record.image,
        record_date=record.record_date,
        created_at=record.created_at.astimezone(timezone.utc),
    )


def _provider_error(action: str, e: Exception) -> ProviderError:
    # statement_timeout 触发时 postgres 回滚该语句, 写入不会落库
    if isinstance(getattr(e, "orig", None), QueryCanceled):
        return ProviderTimeout(f"{action} cancelled by the database: {e}")
    return ProviderError(f"{action} failed: {e}")


class RemoteRecordProvider(RecordProvider):
    """The shared couple_records table, with change-feed publishing."""

    name = "remote"
    # 工作线程无法取消, 时限由数据库驱动 (connect_timeout, statement_timeout) 保证
    bounds_own_timeout = True

    def __init__(
        self,
        session_factory: "sessionmaker[Session]",
        publisher: Optional[Callable[[ChangeEvent], None]] = None,
        table_name: str = "couple_records",
    ) -> None:
        self.session_factory = session_factory
        self.publisher = publisher
        self.table_name = table_name

    def _publish(self, event: ChangeEvent) -> None:
        if self.publisher is None:
            return
        try:
            self.publisher(event)
        except Exception as e:
            # 写入已经成功, 推送失败只影响对方的实时刷新
            logger.warning(f"Failed to publish {event.event_type} change event: {e}")

    def _fetch_since(self, since: datetime) -> List[JournalRecord]:
        db = self.session_factory()
        try:
            rows = (
                db.query(CoupleRecordDB)
                .filter(CoupleRecordDB.created_at >= since.astimezone(timezone.utc))
                .order_by(desc(CoupleRecordDB.created_at))
                .all()
            )
            return [row_to_record(row) for row in rows]
        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Error loading {self.table_name}: {e}")
            raise _provider_error("fetch", e) from e
        finally:
            db.close()

    def _insert(self, record: JournalRecord) -> JournalRecord:
        db = self.session_factory()
        try:
            row = record_to_row(record)
            db.add(row)
            db.commit()
            db.refresh(row)
            stored = row_to_record(row)
            logger.info(f"Inserted record {record.id} into {self.table_name}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error inserting record {record.id}: {e}")
            raise _provider_error("insert", e) from e
        finally:
            db.close()
        self._publish(ChangeEvent(event_type="INSERT", table=self.table_name, record_id=stored.id))
        return stored

    def _delete_all(self) -> None:
        db = self.session_factory()
        try:
            deleted = (
                db.query(CoupleRecordDB)
                .filter(CoupleRecordDB.id != 0)
                .delete(synchronize_session=False)
            )
            db.commit()
            logger.info(f"Deleted {deleted} record(s) from {self.table_name}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error clearing {self.table_name}: {e}")
            raise _provider_error("delete", e) from e
        finally:
            db.close()
        self._publish(ChangeEvent(event_type="DELETE", table=self.table_name))

    async def fetch_since(self, since: datetime) -> List[JournalRecord]:
        return await asyncio.to_thread(self._fetch_since, since)

    async def insert(self, record: JournalRecord) -> JournalRecord:
        return await asyncio.to_thread(self._insert, record)

    async def delete_all(self) -> None:
        await asyncio.to_thread(self._delete_all)
