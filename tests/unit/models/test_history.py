"""Unit tests for history models."""

import pytest
from fileshred.models.history import (
    HistoryEntry,
    HistoryItem,
    SessionMode,
    create_history_entry,
)


class TestHistoryItem:
    """Tests for HistoryItem."""

    def test_empty_path_rejected(self) -> None:
        """Items need a path."""
        with pytest.raises(ValueError, match="path"):
            HistoryItem(path="", success=True)

    def test_reason_omitted_on_success(self) -> None:
        """Successful items serialize without a reason."""
        assert HistoryItem(path="/a", success=True).to_dict() == {"path": "/a", "success": True}


class TestHistoryEntry:
    """Tests for HistoryEntry."""

    def test_factory_generates_id_and_timestamp(self) -> None:
        """create_history_entry fills id and timestamp."""
        entry = create_history_entry(
            mode=SessionMode.FOLDER,
            fill_mode="zero",
            items=[HistoryItem(path="/a", success=False, reason="io_error")],
            root="/",
        )
        assert len(entry.id) == 12
        assert "T" in entry.timestamp
        assert entry.failed == 1

    def test_factory_requires_items(self) -> None:
        """Entries need at least one item."""
        with pytest.raises(ValueError):
            create_history_entry(mode=SessionMode.FILES, fill_mode="zero", items=[])

    def test_json_line_round_trip(self) -> None:
        """A JSON line restores an equal entry."""
        entry = create_history_entry(
            mode=SessionMode.FILES,
            fill_mode="max",
            items=[HistoryItem(path="/a", success=True)],
            metadata={"command": "fileshred files"},
        )
        line = entry.to_json_line()
        assert "\n" not in line
        assert HistoryEntry.from_json_line(line) == entry

    def test_invalid_mode_rejected(self) -> None:
        """Unknown modes fail to deserialize."""
        with pytest.raises(ValueError):
            HistoryEntry.from_dict(
                {
                    "id": "abc",
                    "timestamp": "2026-01-01T00:00:00+00:00",
                    "mode": "bogus",
                    "fill_mode": "zero",
                    "items": [{"path": "/a", "success": True}],
                }
            )
