"""
Utility functions for the couple_journal package.

This module provides:
- Shared time-zone helpers
- zh-CN display formatting
- Logging setup
"""

# Import utility modules
from . import clock, display, logging_setup

__all__ = [
    "clock",
    "display",
    "logging_setup",
]
