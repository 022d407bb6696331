"""Data models for fileshred.

This module exports the history models used to record shred sessions.
"""

from fileshred.models.history import (
    HistoryEntry,
    HistoryItem,
    SessionMode,
    create_history_entry,
)

__all__ = [
    "HistoryEntry",
    "HistoryItem",
    "SessionMode",
    "create_history_entry",
]
