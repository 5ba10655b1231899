"""
Configuration management for the couple_journal package.

This module provides:
- Store configuration (local slot, PostgreSQL, Redis)
- Journal settings (provider, window, time zone, timeouts)
- Environment loading
"""

from typing import List

from .configuration import *

__all__: List[str] = [
    # Configuration components will be exported via star imports
]
