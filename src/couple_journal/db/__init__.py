"""
Persistence access for the couple_journal package.

This module contains:
- Local JSON slot storage
- PostgreSQL table definition and session factory
- Redis clients and change-feed publishing
"""
