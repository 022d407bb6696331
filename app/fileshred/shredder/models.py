"""Shredding domain models.

This module defines the configuration and result structures shared by
the shredding components: fill modes, the immutable ShredConfig, the
per-target ShredOutcome, and the session state machine states.
"""

from dataclasses import dataclass, field
from enum import Enum

from fileshred.shredder.errors import ConfigurationError, FailureReason


class FillMode(str, Enum):
    """Byte pattern used to overwrite file contents.

    Attributes:
        ZERO: Every byte becomes 0x00.
        MAX: Every byte becomes 0xFF.
        RANDOM: Bytes come from a cryptographically secure source.
        NONE: No pattern selected; rejected as a configuration error.
    """

    ZERO = "zero"
    MAX = "max"
    RANDOM = "random"
    NONE = "none"


class SessionState(str, Enum):
    """Lifecycle states of a ShredSession."""

    IDLE = "idle"
    COLLECTING = "collecting"
    CONFIRMED = "confirmed"
    SHREDDING = "shredding"
    COMPLETED = "completed"
    ABORTED = "aborted"


DEFAULT_RENAME_PASSES = 25
DEFAULT_CHUNK_SIZE = 4096


@dataclass(frozen=True, slots=True)
class ShredConfig:
    """Immutable configuration for one shred session.

    Attributes:
        fill_mode: Byte pattern used for overwriting.
        rename_enabled: Rename each file to random names before overwriting.
        rename_passes: Number of obfuscation renames per file.
        delete_container_folder: Remove emptied subfolders after a folder run.
        overwrite_passes: Number of full-length overwrite passes per file.
        chunk_size: Size in bytes of each write.
        sync: fsync the file after every overwrite pass.
        workers: Number of files processed in parallel.
        dry_run: Report what would happen without touching any file.
    """

    fill_mode: FillMode = FillMode.RANDOM
    rename_enabled: bool = True
    rename_passes: int = DEFAULT_RENAME_PASSES
    delete_container_folder: bool = True
    overwrite_passes: int = 1
    chunk_size: int = DEFAULT_CHUNK_SIZE
    sync: bool = True
    workers: int = 1
    dry_run: bool = False

    def validate(self) -> None:
        """Check the configuration for ambiguous or out-of-range values.

        Raises:
            ConfigurationError: If no fill mode is selected or a numeric
                setting is out of range.
        """
        if self.fill_mode == FillMode.NONE:
            raise ConfigurationError("No fill mode selected")
        if self.rename_passes < 0:
            raise ConfigurationError(f"rename_passes must be >= 0, got {self.rename_passes}")
        if self.overwrite_passes < 1:
            raise ConfigurationError(
                f"overwrite_passes must be >= 1, got {self.overwrite_passes}"
            )
        if self.chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")


@dataclass(frozen=True, slots=True)
class ShredOutcome:
    """Result of shredding a single target.

    Attributes:
        path: The target path exactly as submitted.
        success: Whether the file was overwritten and deleted.
        reason: Failure classification, None on success.
        error: Human-readable failure detail, None on success.
        final_path: Path the file had after obfuscation, if renamed.
        bytes_overwritten: Bytes written per overwrite pass.
        dry_run: Whether this was a dry-run (nothing touched).
    """

    path: str
    success: bool
    reason: FailureReason | None = None
    error: str | None = None
    final_path: str | None = None
    bytes_overwritten: int = 0
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the target could not be shredded."""
        return not self.success

    @classmethod
    def succeeded(
        cls,
        path: str,
        *,
        final_path: str | None = None,
        bytes_overwritten: int = 0,
        dry_run: bool = False,
    ) -> "ShredOutcome":
        """Create a successful outcome."""
        return cls(
            path=path,
            success=True,
            final_path=final_path,
            bytes_overwritten=bytes_overwritten,
            dry_run=dry_run,
        )

    @classmethod
    def failure(
        cls,
        path: str,
        reason: FailureReason,
        error: str,
        *,
        final_path: str | None = None,
    ) -> "ShredOutcome":
        """Create a failed outcome."""
        return cls(path=path, success=False, reason=reason, error=error, final_path=final_path)


@dataclass(slots=True)
class ShredReport:
    """Aggregated result of a shred session.

    Attributes:
        outcomes: One outcome per target, in submission order.
        state: Final session state.
        root: Traversal root for folder runs, None for file lists.
        folders_removed: Number of subfolders removed after shredding.
    """

    outcomes: list[ShredOutcome] = field(default_factory=list)
    state: SessionState = SessionState.IDLE
    root: str | None = None
    folders_removed: int = 0

    @property
    def succeeded(self) -> int:
        """Number of targets shredded successfully."""
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        """Number of targets that could not be shredded."""
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def all_succeeded(self) -> bool:
        """Check if every target was shredded."""
        return self.failed == 0
