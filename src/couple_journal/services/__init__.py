"""
Journal services for the couple_journal package.

This module contains:
- Persistence providers (local slot, remote table)
- The record store
- The change notifier
- Filtering and aggregation
- The presentation-facing journal service and its startup wiring
"""

# Import service modules
from . import (
    aggregator,
    change_notifier,
    filter_engine,
    journal_factory,
    journal_service,
    providers,
    record_store,
)

__all__ = [
    "aggregator",
    "change_notifier",
    "filter_engine",
    "journal_factory",
    "journal_service",
    "providers",
    "record_store",
]
