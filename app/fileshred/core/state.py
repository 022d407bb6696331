"""Append-only storage for the shred history.

Each completed session becomes one JSON object on its own line in
history.jsonl. Earlier sessions are never rewritten, so a crash while
recording can at worst leave one truncated trailing line, which readers
skip.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from fileshred.core.paths import HISTORY_FILENAME, ensure_dir, get_history_path
from fileshred.models.history import HistoryEntry

logger = logging.getLogger(__name__)


class StateManager:
    """Reads and appends shred history entries.

    Args:
        state_dir: Directory holding history.jsonl. Defaults to the XDG
            state directory.
    """

    def __init__(self, state_dir: Path | None = None) -> None:
        if state_dir is None:
            self._history_path = get_history_path()
        else:
            self._history_path = state_dir / HISTORY_FILENAME

    @property
    def history_path(self) -> Path:
        """Location of the history file."""
        return self._history_path

    def record_action(self, entry: HistoryEntry) -> None:
        """Append one session to the history.

        Args:
            entry: Session to record.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the history file cannot be written.
        """
        ensure_dir(self._history_path.parent)
        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(entry.to_json_line() + "\n")

    def get_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Return recorded sessions, most recent first.

        Args:
            limit: Maximum number of sessions to return, None for all.

        Returns:
            History entries; empty when nothing has been recorded yet.
        """
        entries = list(self._read_entries())
        entries.reverse()
        return entries if limit is None else entries[:limit]

    def _read_entries(self) -> Iterator[HistoryEntry]:
        """Yield entries in file order, skipping blank and corrupt lines."""
        if not self.history_path.exists():
            return

        with self.history_path.open(encoding="utf-8") as f:
            for line_num, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line:
                    continue
                try:
                    yield HistoryEntry.from_json_line(line)
                except (json.JSONDecodeError, KeyError, ValueError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, e)
