"""Shred history recording.

Records completed shred sessions to the history file, enabling an
audit trail of destroyed files.
"""

from pathlib import Path

from fileshred.core.state import StateManager
from fileshred.models.history import (
    HistoryEntry,
    HistoryItem,
    SessionMode,
    create_history_entry,
)
from fileshred.shredder.models import ShredConfig, ShredReport


def record_shred_session(
    report: ShredReport,
    config: ShredConfig,
    command: str = "fileshred files",
    state_dir: Path | None = None,
) -> HistoryEntry | None:
    """Record a completed shred session to history.

    Dry-run sessions and sessions without outcomes are not recorded.

    Args:
        report: Report returned by ShredSession.run().
        config: Configuration the session ran with.
        command: Command that triggered the session.
        state_dir: Optional override for the state directory.

    Returns:
        The recorded entry, or None if nothing was recorded.

    Raises:
        RuntimeError: If the state directory cannot be created.
        OSError: If the history file cannot be written.
    """
    if config.dry_run or not report.outcomes:
        return None

    items = [
        HistoryItem(
            path=outcome.path,
            success=outcome.success,
            reason=outcome.reason.value if outcome.reason else None,
        )
        for outcome in report.outcomes
    ]

    entry = create_history_entry(
        mode=SessionMode.FOLDER if report.root is not None else SessionMode.FILES,
        fill_mode=config.fill_mode.value,
        items=items,
        root=report.root,
        metadata={
            "command": command,
            "rename_passes": config.rename_passes if config.rename_enabled else 0,
            "overwrite_passes": config.overwrite_passes,
            "folders_removed": report.folders_removed,
        },
    )

    StateManager(state_dir).record_action(entry)
    return entry
