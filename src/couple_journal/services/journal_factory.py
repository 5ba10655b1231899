"""
Startup wiring: pick the persistence provider from config and assemble the
journal service around it.
"""
from typing import Optional

from loguru import logger

from ..config.configuration import JournalConfig
from ..db.local_slot import JsonFileSlot
from ..db.pgsql_client import create_session_factory
from ..db.redis_client import get_async_redis, get_redis, make_change_publisher
from ..utils.clock import Clock, get_zone
from .change_notifier import RecordChangeNotifier
from .journal_service import JournalService
from .providers import LocalRecordProvider, RecordProvider, RemoteRecordProvider
from .record_store import RecordStore


############################################################################################################
def create_record_provider(config: JournalConfig) -> RecordProvider:
    if config.provider == "local":
        logger.info(f"Using local record slot {config.local.path}")
        return LocalRecordProvider(JsonFileSlot(config.local.path), config.local.slot_key)

    if config.provider == "remote":
        logger.info(f"Using remote table {config.postgres.table_name}")
        session_factory = create_session_factory(
            config.postgres.database_url, timeout_seconds=config.operation_timeout_seconds
        )
        publisher = make_change_publisher(get_redis(config.redis), config.redis.change_channel)
        return RemoteRecordProvider(
            session_factory, publisher=publisher, table_name=config.postgres.table_name
        )

    raise ValueError(f"Unknown record provider: {config.provider}")


############################################################################################################
def create_journal_service(
    config: JournalConfig,
    provider: Optional[RecordProvider] = None,
    notifier: Optional[RecordChangeNotifier] = None,
    clock: Optional[Clock] = None,
) -> JournalService:
    """
    Assemble store, provider and (remote only) change notifier.

    Args:
        config: Journal configuration
        provider: Override the provider selected by config.provider
        notifier: Override the notifier built for the remote provider
        clock: Override the UTC clock
    """
    tz = get_zone(config.timezone)
    if provider is None:
        provider = create_record_provider(config)
    if notifier is None and config.provider == "remote":
        notifier = RecordChangeNotifier(get_async_redis(config.redis), config.redis.change_channel)

    store = RecordStore(
        provider,
        tz=tz,
        load_window_days=config.load_window_days,
        timeout_seconds=config.operation_timeout_seconds,
        clock=clock,
    )
    return JournalService(store, tz=tz, notifier=notifier, clock=clock)
