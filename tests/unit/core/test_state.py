"""Unit tests for StateManager."""

from pathlib import Path

from fileshred.core.state import StateManager
from fileshred.models.history import HistoryItem, SessionMode, create_history_entry


def _entry(path: str = "/tmp/a"):
    return create_history_entry(
        mode=SessionMode.FILES,
        fill_mode="random",
        items=[HistoryItem(path=path, success=True)],
    )


class TestStateManager:
    """Tests for StateManager."""

    def test_history_path(self, tmp_path: Path) -> None:
        """History lives in history.jsonl inside the state dir."""
        assert StateManager(tmp_path).history_path == tmp_path / "history.jsonl"

    def test_empty_history(self, tmp_path: Path) -> None:
        """No file means no history."""
        assert StateManager(tmp_path).get_history() == []

    def test_record_and_read_newest_first(self, tmp_path: Path) -> None:
        """Entries come back newest first."""
        state = StateManager(tmp_path / "nested")
        first = _entry("/a")
        second = _entry("/b")
        state.record_action(first)
        state.record_action(second)

        assert [e.id for e in state.get_history()] == [second.id, first.id]

    def test_limit(self, tmp_path: Path) -> None:
        """limit caps the number of returned entries."""
        state = StateManager(tmp_path)
        for i in range(5):
            state.record_action(_entry(f"/f{i}"))

        assert len(state.get_history(limit=2)) == 2

    def test_corrupt_lines_skipped(self, tmp_path: Path) -> None:
        """Corrupt lines are skipped with a warning."""
        state = StateManager(tmp_path)
        state.record_action(_entry())
        with state.history_path.open("a", encoding="utf-8") as f:
            f.write("not json\n\n")
            f.write('{"id": "x"}\n')

        assert len(state.get_history()) == 1

    def test_default_state_dir_uses_xdg(self, isolated_xdg: Path) -> None:
        """The default state dir honours XDG_STATE_HOME."""
        state = StateManager()
        state.record_action(_entry())
        assert (isolated_xdg / "state" / "fileshred" / "history.jsonl").exists()
