"""
couple_journal - A shared two-person journaling core.

This package provides:
- Models: Record, filter state and report models
- DB: Local slot, PostgreSQL table and Redis change-feed access
- Services: Record store, change notifier, filtering and aggregation
- Config: Configuration management
- Utils: Time-zone and display helpers
"""

__version__ = "0.1.0"

from .config import *

# Import main models for easy access
from .models import *

__all__ = [
    "__version__",
]
