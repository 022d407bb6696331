"""Unit tests for the history command."""

import json

from fileshred.cli.main import app
from fileshred.core.state import StateManager
from fileshred.models.history import HistoryItem, SessionMode, create_history_entry
from typer.testing import CliRunner

runner = CliRunner()


def _record(success: bool = True, root: str | None = None) -> str:
    entry = create_history_entry(
        mode=SessionMode.FOLDER if root else SessionMode.FILES,
        fill_mode="zero",
        items=[HistoryItem(path="/data/a.txt", success=success)],
        root=root,
    )
    StateManager().record_action(entry)
    return entry.id


class TestHistoryCommand:
    """Tests for fileshred history."""

    def test_empty(self) -> None:
        """No history prints a friendly message."""
        result = runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "No shred history found." in result.output

    def test_table(self) -> None:
        """Sessions are listed in a table."""
        _record()

        result = runner.invoke(app, ["history"])

        assert result.exit_code == 0, result.output
        assert "Shred History" in result.output
        assert "files" in result.output

    def test_json(self) -> None:
        """--json prints raw entries."""
        entry_id = _record(root="/data")

        result = runner.invoke(app, ["history", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data[0]["id"] == entry_id
        assert data[0]["mode"] == "folder"

    def test_failed_filter(self) -> None:
        """--failed keeps only sessions with failures."""
        _record(success=True)
        failed_id = _record(success=False)

        result = runner.invoke(app, ["history", "--failed", "--json"])

        data = json.loads(result.stdout)
        assert [e["id"] for e in data] == [failed_id]

    def test_failed_filter_looks_past_limit(self) -> None:
        """--failed finds failures older than the newest N sessions."""
        failed_id = _record(success=False)
        for _ in range(3):
            _record(success=True)

        result = runner.invoke(app, ["history", "--failed", "-n", "1", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [e["id"] for e in data] == [failed_id]

    def test_limit_must_be_positive(self) -> None:
        """A negative limit is rejected."""
        _record()

        result = runner.invoke(app, ["history", "-n", "-1"])

        assert result.exit_code != 0
