"""
Data models for the couple_journal package.

This module contains:
- Record models (authors, time periods, drafts, records)
- Filter and application state models
- Report, notice and change-event models
"""

from .record import *
from .report import *
from .state import *

__all__ = [
    # Record, state and report models will be exported via star imports
]
