"""History entry model for recording shred sessions.

This module defines data structures for recording completed shred
sessions in a history file, giving users an audit trail of what was
destroyed and what could not be.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class SessionMode(str, Enum):
    """How the targets of a shred session were selected.

    Attributes:
        FILES: An explicit list of files.
        FOLDER: Every file below a traversal root.
    """

    FILES = "files"
    FOLDER = "folder"


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """Single target recorded in a history entry.

    Attributes:
        path: Target path as submitted.
        success: Whether the target was shredded.
        reason: Failure reason value for failed targets.
    """

    path: str
    success: bool
    reason: str | None = None

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.path:
            msg = "History item path cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the history item.
        """
        result: dict[str, Any] = {"path": self.path, "success": self.success}
        if self.reason is not None:
            result["reason"] = self.reason
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryItem:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
        """
        return cls(
            path=data["path"],
            success=bool(data["success"]),
            reason=data.get("reason"),
        )


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Record of a single shred session.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the session completed (ISO 8601 format with timezone).
        mode: How targets were selected.
        fill_mode: Fill mode value used for overwriting.
        items: Targets processed by the session.
        root: Traversal root for folder sessions.
        metadata: Additional context (command, folders removed, etc.).
    """

    id: str
    timestamp: str
    mode: SessionMode
    fill_mode: str
    items: tuple[HistoryItem, ...]
    root: str | None = None
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.id:
            msg = "History entry ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.items:
            msg = "History entry must have at least one item"
            raise ValueError(msg)

    @property
    def succeeded(self) -> int:
        """Number of targets shredded in this session."""
        return sum(1 for item in self.items if item.success)

    @property
    def failed(self) -> int:
        """Number of targets that could not be shredded."""
        return sum(1 for item in self.items if not item.success)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "mode": self.mode.value,
            "fill_mode": self.fill_mode,
            "items": [item.to_dict() for item in self.items],
            "root": self.root,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If mode or item data is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            mode=SessionMode(data["mode"]),
            fill_mode=data["fill_mode"],
            items=tuple(HistoryItem.from_dict(item) for item in data["items"]),
            root=data.get("root"),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage.

        Returns:
            Single JSON line (no trailing newline).
        """
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> HistoryEntry:
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line.strip()))


def create_history_entry(
    mode: SessionMode,
    fill_mode: str,
    items: list[HistoryItem],
    root: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Factory function to create a new HistoryEntry.

    Automatically generates a unique ID and current timestamp.

    Args:
        mode: How targets were selected.
        fill_mode: Fill mode value used for overwriting.
        items: Targets processed by the session.
        root: Traversal root for folder sessions.
        metadata: Optional additional context.

    Returns:
        New HistoryEntry with auto-generated ID and timestamp.

    Raises:
        ValueError: If items list is empty.
    """
    if not items:
        msg = "Cannot create history entry with no items"
        raise ValueError(msg)

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        mode=mode,
        fill_mode=fill_mode,
        items=tuple(items),
        root=root,
        metadata=metadata or {},
    )
