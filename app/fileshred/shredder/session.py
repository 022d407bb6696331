"""Shred session orchestration.

A ShredSession takes one batch of targets through collection,
confirmation and shredding under a single immutable ShredConfig. Every
target yields exactly one ShredOutcome; failures are recorded per file
and never abort the batch.

State machine::

    IDLE -> COLLECTING -> CONFIRMED -> SHREDDING -> COMPLETED
                     \\-> ABORTED
"""

import logging
import os
import stat
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from fileshred.shredder.errors import (
    ConfigurationError,
    NotFoundError,
    SessionStateError,
    ShredError,
    ShredIOError,
    from_os_error,
)
from fileshred.shredder.models import (
    FailureReason,
    SessionState,
    ShredConfig,
    ShredOutcome,
    ShredReport,
)
from fileshred.shredder.obfuscator import PathObfuscator
from fileshred.shredder.overwriter import Overwriter
from fileshred.shredder.reaper import FolderReaper
from fileshred.shredder.walker import DirectoryWalker

logger = logging.getLogger(__name__)

# Called after each target with (completed, total, outcome)
ProgressCallback = Callable[[int, int, ShredOutcome], None]


class ShredSession:
    """Runs one batch of targets through the shredding pipeline.

    Args:
        config: Configuration shared by every target in the batch.
        cancel_event: Optional event; when set, targets that have not
            started yet are reported as cancelled. A file that is
            already being overwritten always finishes.
        progress: Optional callback invoked after each target.
    """

    def __init__(
        self,
        config: ShredConfig,
        *,
        cancel_event: threading.Event | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self._config = config
        self._cancel_event = cancel_event or threading.Event()
        self._progress = progress

        self._obfuscator = PathObfuscator()
        self._overwriter = Overwriter(
            chunk_size=max(config.chunk_size, 1),
            passes=max(config.overwrite_passes, 1),
            sync=config.sync,
        )
        self._walker = DirectoryWalker()
        self._reaper = FolderReaper()

        self._state = SessionState.IDLE
        self._targets: tuple[Path, ...] = ()
        self._root: Path | None = None
        self._delete_folders = False

    @property
    def config(self) -> ShredConfig:
        """Configuration used for this session."""
        return self._config

    @property
    def state(self) -> SessionState:
        """Current session state."""
        return self._state

    @property
    def targets(self) -> tuple[Path, ...]:
        """Targets collected for this session, in processing order."""
        return self._targets

    @property
    def root(self) -> Path | None:
        """Traversal root for folder sessions, None for file lists."""
        return self._root

    # === Collecting ===

    def collect_files(self, paths: Iterable[str | Path]) -> tuple[Path, ...]:
        """Collect an explicit list of files.

        Duplicates are dropped; the first occurrence keeps its position.

        Args:
            paths: Files to shred.

        Returns:
            The collected targets.
        """
        self._require(SessionState.IDLE, "collect targets")
        self._state = SessionState.COLLECTING
        self._targets = tuple(dict.fromkeys(Path(p) for p in paths))
        logger.debug("Collected %d file target(s)", len(self._targets))
        return self._targets

    def collect_directory(
        self,
        root: str | Path,
        *,
        delete_folders: bool = True,
        accept: Callable[[Path], bool] | None = None,
    ) -> tuple[Path, ...]:
        """Collect every regular file below a traversal root.

        Args:
            root: Directory to expand.
            delete_folders: Remove emptied subfolders after shredding,
                provided the config allows it as well.
            accept: Optional filter; files it rejects are left untouched.

        Returns:
            The collected targets, sorted by path.

        Raises:
            NotFoundError: If root does not exist or is not a directory.
            ShredIOError: If root is a symbolic link.
        """
        self._require(SessionState.IDLE, "collect targets")
        root_path = Path(root)
        if root_path.is_symlink():
            raise ShredIOError(f"Symbolic link not followed: {root_path}", str(root_path))
        if not root_path.is_dir():
            raise NotFoundError(f"Not a directory: {root_path}", str(root_path))

        self._state = SessionState.COLLECTING
        self._root = root_path
        self._delete_folders = delete_folders
        found = self._walker.walk(root_path)
        if accept is not None:
            found = {path for path in found if accept(path)}
        self._targets = tuple(sorted(found))
        logger.debug("Collected %d file(s) below %s", len(self._targets), root_path)
        return self._targets

    # === Confirmation ===

    def confirm(self, approved: bool = True) -> SessionState:
        """Record the caller's confirmation decision.

        Args:
            approved: True to allow shredding, False to abort without
                touching any target.

        Returns:
            The new state (CONFIRMED or ABORTED).
        """
        self._require(SessionState.COLLECTING, "confirm")
        self._state = SessionState.CONFIRMED if approved else SessionState.ABORTED
        if not approved:
            logger.info("Shred session aborted before any target was touched")
        return self._state

    def cancel(self) -> None:
        """Stop the session before the next target starts."""
        self._cancel_event.set()

    def set_progress(self, progress: ProgressCallback | None) -> None:
        """Replace the per-target progress callback."""
        self._progress = progress

    # === Shredding ===

    def run(self) -> ShredReport:
        """Shred every collected target and return the report.

        Returns:
            ShredReport with one outcome per target, in collection order.

        Raises:
            SessionStateError: If the session was not confirmed.
        """
        self._require(SessionState.CONFIRMED, "run")
        self._state = SessionState.SHREDDING
        report = ShredReport(root=str(self._root) if self._root is not None else None)

        try:
            self._config.validate()
        except ConfigurationError as e:
            logger.warning("Refusing to shred: %s", e)
            report.outcomes = [
                ShredOutcome.failure(str(p), e.reason, str(e)) for p in self._targets
            ]
            self._state = report.state = SessionState.COMPLETED
            return report

        if self._config.workers > 1 and len(self._targets) > 1:
            report.outcomes = self._run_parallel()
        else:
            report.outcomes = self._run_sequential()

        if self._should_reap():
            assert self._root is not None
            report.folders_removed = self._reaper.reap(self._root, self._root)

        self._state = report.state = SessionState.COMPLETED
        logger.info(
            "Shred session completed: %d succeeded, %d failed",
            report.succeeded,
            report.failed,
        )
        return report

    def _run_sequential(self) -> list[ShredOutcome]:
        """Process targets one after another."""
        outcomes: list[ShredOutcome] = []
        total = len(self._targets)
        for target in self._targets:
            outcome = self._process_guarded(target)
            outcomes.append(outcome)
            if self._progress:
                self._progress(len(outcomes), total, outcome)
        return outcomes

    def _run_parallel(self) -> list[ShredOutcome]:
        """Process targets on a bounded thread pool.

        Each worker owns one target at a time, so the per-file
        rename -> overwrite -> delete order is kept. Results go into one
        slot per submission index.
        """
        total = len(self._targets)
        slots: list[ShredOutcome | None] = [None] * total
        completed = 0

        with ThreadPoolExecutor(max_workers=self._config.workers) as executor:
            futures = {
                executor.submit(self._process_guarded, target): index
                for index, target in enumerate(self._targets)
            }
            for future in as_completed(futures):
                outcome = future.result()
                slots[futures[future]] = outcome
                completed += 1
                if self._progress:
                    self._progress(completed, total, outcome)

        return [outcome for outcome in slots if outcome is not None]

    def _process_guarded(self, target: Path) -> ShredOutcome:
        """Process one target unless the session has been cancelled."""
        if self._cancel_event.is_set():
            return ShredOutcome.failure(
                str(target), FailureReason.CANCELLED, "Session cancelled before start"
            )
        return self._process(target)

    def _process(self, target: Path) -> ShredOutcome:
        """Rename, overwrite and delete a single target."""
        config = self._config
        current = target

        try:
            size = _check_regular_file(target)

            if config.dry_run:
                logger.info("Dry-run: would shred %s (%d bytes)", target, size)
                return ShredOutcome.succeeded(str(target), bytes_overwritten=size, dry_run=True)

            if config.rename_enabled and config.rename_passes:
                logger.debug("Renaming %s", target)
                current = self._obfuscator.obfuscate(target, config.rename_passes)

            logger.debug("Overwriting %s", current)
            written = self._overwriter.shred(current, config.fill_mode)

        except ShredError as e:
            if e.last_path is not None:
                current = Path(e.last_path)
            logger.warning("Failed to shred %s: %s", target, e)
            return ShredOutcome.failure(
                str(target),
                e.reason,
                str(e),
                final_path=str(current) if current != target else None,
            )

        logger.info("Shredded %s", target)
        return ShredOutcome.succeeded(
            str(target),
            final_path=str(current) if current != target else None,
            bytes_overwritten=written,
        )

    def _should_reap(self) -> bool:
        """Check whether emptied subfolders should be removed."""
        return (
            self._root is not None
            and self._delete_folders
            and self._config.delete_container_folder
            and not self._config.dry_run
        )

    def _require(self, expected: SessionState, action: str) -> None:
        """Raise SessionStateError unless the session is in the expected state."""
        if self._state != expected:
            msg = f"Cannot {action} in state {self._state.value!r} (expected {expected.value!r})"
            raise SessionStateError(msg)


def _check_regular_file(path: Path) -> int:
    """Re-check that a target still exists and is a regular file.

    Returns:
        The file size in bytes.

    Raises:
        NotFoundError: If the path does not exist.
        PermissionDeniedError: If the path cannot be inspected or written.
        ShredIOError: If the path is not a regular file.
    """
    try:
        info = os.lstat(path)
    except OSError as e:
        raise from_os_error(e, "access", str(path)) from e
    if not stat.S_ISREG(info.st_mode):
        raise ShredIOError(f"Not a regular file: {path}", str(path))
    return info.st_size


def shred_files(
    targets: Iterable[str | Path],
    config: ShredConfig,
    *,
    cancel_event: threading.Event | None = None,
    progress: ProgressCallback | None = None,
) -> list[ShredOutcome]:
    """Shred an explicit list of files.

    The caller is responsible for obtaining confirmation beforehand.

    Args:
        targets: Files to shred.
        config: Shred configuration.
        cancel_event: Optional cancellation signal checked between files.
        progress: Optional per-file progress callback.

    Returns:
        One outcome per distinct target, in submission order.
    """
    session = ShredSession(config, cancel_event=cancel_event, progress=progress)
    session.collect_files(targets)
    session.confirm()
    return session.run().outcomes


def shred_directory(
    root: str | Path,
    recursive_delete_folder: bool,
    config: ShredConfig,
    *,
    cancel_event: threading.Event | None = None,
    progress: ProgressCallback | None = None,
) -> list[ShredOutcome]:
    """Shred every file below a directory and optionally its subfolders.

    The root directory itself is never removed. The caller is
    responsible for obtaining confirmation beforehand.

    Args:
        root: Traversal root.
        recursive_delete_folder: Remove emptied subfolders afterwards
            (only if config.delete_container_folder is also set).
        config: Shred configuration.
        cancel_event: Optional cancellation signal checked between files.
        progress: Optional per-file progress callback.

    Returns:
        One outcome per discovered file. A root that is missing or not a
        directory yields a single NOT_FOUND outcome for the root, a
        symlinked root a single IO_ERROR outcome.
    """
    session = ShredSession(config, cancel_event=cancel_event, progress=progress)
    try:
        session.collect_directory(root, delete_folders=recursive_delete_folder)
    except ShredError as e:
        return [ShredOutcome.failure(str(root), e.reason, str(e))]
    session.confirm()
    return session.run().outcomes
