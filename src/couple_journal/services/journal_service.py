"""
Presentation-facing facade over the journal core.

The presentation adapter calls these methods for user actions and registers
listeners for the two notifications the core emits: "records changed" (with
the current snapshot) and user-visible notices.
"""
import asyncio
from datetime import date, tzinfo
from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger

from ..errors import InvalidRecord, PersistError, StoreUnavailable, SubscriptionError
from ..models.record import Author, JournalRecord, RecordDraft
from ..models.report import ChangeEvent, DailyReport, Notice, NoticeSeverity
from ..models.state import AppState, AuthorFilter, ScopeFilter
from ..utils.clock import Clock, today_in, utc_now
from ..utils.display import RecordView, short_date_label, to_record_view
from . import aggregator, filter_engine
from .change_notifier import ChangeSubscription, RecordChangeNotifier
from .record_store import RecordStore

RecordsListener = Callable[[Tuple[JournalRecord, ...]], None]
NoticeListener = Callable[[Notice], None]

# 提示文案
MSG_LOAD_FAILED = "加载数据失败，请检查网络连接"
MSG_SAVED = "记录已保存！"
MSG_INVALID = "请输入内容或上传图片！"
MSG_SAVE_FAILED = "保存失败，请检查网络连接"
MSG_CLEARED = "所有记录已清除！"
MSG_CLEAR_FAILED = "清除数据失败"
MSG_REMOTE_UPDATE = "收到新的记录更新!"


class JournalService:
    def __init__(
        self,
        store: RecordStore,
        *,
        tz: tzinfo,
        notifier: Optional[RecordChangeNotifier] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.store = store
        self.tz = tz
        self.notifier = notifier
        self._clock = clock or utc_now
        self._records_listeners: List[RecordsListener] = []
        self._notice_listeners: List[NoticeListener] = []
        self._subscription: Optional[ChangeSubscription] = None
        self._watch_task: Optional["asyncio.Task[None]"] = None
        # 上一次加载失败时界面显示空集合, store 仍保留最后一次成功的快照
        self._load_failed = False

    ############################################################################################################
    # listeners

    def add_records_listener(self, listener: RecordsListener) -> None:
        self._records_listeners.append(listener)

    def add_notice_listener(self, listener: NoticeListener) -> None:
        self._notice_listeners.append(listener)

    def _visible_records(self) -> Tuple[JournalRecord, ...]:
        return () if self._load_failed else self.store.records

    def _emit_records_changed(self) -> None:
        snapshot = self._visible_records()
        for listener in self._records_listeners:
            listener(snapshot)

    def _notify(self, message: str, severity: NoticeSeverity = NoticeSeverity.SUCCESS) -> None:
        notice = Notice(message=message, severity=severity)
        for listener in self._notice_listeners:
            listener(notice)

    ############################################################################################################
    # store operations

    @property
    def records(self) -> Tuple[JournalRecord, ...]:
        return self._visible_records()

    def today(self) -> date:
        return today_in(self.tz, self._clock)

    async def _reload(self) -> bool:
        try:
            await self.store.load()
        except StoreUnavailable as e:
            logger.warning(f"Showing an empty set, keeping {len(self.store.records)} cached record(s): {e}")
            self._load_failed = True
            self._notify(MSG_LOAD_FAILED, NoticeSeverity.WARNING)
            self._emit_records_changed()
            return False
        self._load_failed = False
        self._emit_records_changed()
        return True

    async def load_records(self) -> Tuple[JournalRecord, ...]:
        await self._reload()
        return self._visible_records()

    async def create_record(self, draft: RecordDraft) -> Optional[JournalRecord]:
        try:
            record = await self.store.create(draft)
        except InvalidRecord:
            self._notify(MSG_INVALID, NoticeSeverity.ERROR)
            return None
        except PersistError as e:
            logger.error(f"保存失败: {e}")
            self._notify(MSG_SAVE_FAILED, NoticeSeverity.ERROR)
            return None
        self._load_failed = False
        self._emit_records_changed()
        self._notify(MSG_SAVED)
        return record

    async def clear_all_records(self, confirmed: bool) -> bool:
        if not confirmed:
            logger.debug("Clear-all not confirmed, nothing deleted")
            return False
        try:
            await self.store.clear_all()
        except PersistError as e:
            logger.error(f"清除数据失败: {e}")
            self._notify(MSG_CLEAR_FAILED, NoticeSeverity.ERROR)
            return False
        self._load_failed = False
        self._emit_records_changed()
        self._notify(MSG_CLEARED)
        return True

    ############################################################################################################
    # derived views

    def select_display_records(
        self, author_filter: AuthorFilter, scope_filter: ScopeFilter
    ) -> List[JournalRecord]:
        return filter_engine.select_display_records(
            self._visible_records(), author_filter, scope_filter, self.today(), self.tz
        )

    def display_records(self, state: AppState) -> List[JournalRecord]:
        return self.select_display_records(state.author_filter, state.scope_filter)

    def display_views(self, state: AppState) -> List[RecordView]:
        return [to_record_view(record, self.tz) for record in self.display_records(state)]

    def count_by_author(self) -> Dict[Author, int]:
        return aggregator.count_by_author(self._visible_records())

    def build_daily_report(self, today: Optional[date] = None) -> DailyReport:
        return aggregator.build_daily_report(self._visible_records(), today or self.today(), self.tz)

    def format_share_text(
        self, report: Optional[DailyReport] = None, date_label: Optional[str] = None
    ) -> str:
        report = report or self.build_daily_report()
        return aggregator.format_share_text(report, date_label or short_date_label(report.day))

    ############################################################################################################
    # realtime

    async def handle_remote_change(self, event: ChangeEvent) -> None:
        """Any change on the remote table means: reload everything."""
        logger.info(f"收到实时更新: {event.event_type} on {event.table}")
        if await self._reload():
            self._notify(MSG_REMOTE_UPDATE)

    async def _consume(self, subscription: ChangeSubscription) -> None:
        try:
            async for event in subscription:
                try:
                    await self.handle_remote_change(event)
                except Exception as e:
                    # 单个事件处理失败不中断实时更新
                    logger.error(f"Failed to handle {event.event_type} change event: {e}")
        except SubscriptionError as e:
            logger.warning(f"Realtime updates stopped: {e}")
        finally:
            await subscription.close()

    async def start_watching(self) -> bool:
        """
        Attach to the change feed. Returns False (and keeps working without
        realtime updates) when there is no notifier or it cannot attach.
        """
        if self.notifier is None:
            return False
        if self._watch_task is not None and not self._watch_task.done():
            return True
        try:
            subscription = await self.notifier.subscribe()
        except SubscriptionError as e:
            logger.warning(f"Realtime updates unavailable, continuing without them: {e}")
            return False
        self._subscription = subscription
        self._watch_task = asyncio.create_task(self._consume(subscription))
        return True

    async def stop_watching(self) -> None:
        task, self._watch_task = self._watch_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if self._subscription is not None:
            await self._subscription.close()
            self._subscription = None
