"""Exception taxonomy for the shredding engine.

Components raise these; ShredSession converts them into per-file
ShredOutcome values so that no failure crosses the batch boundary.
"""

import errno
from enum import Enum


class FailureReason(str, Enum):
    """Classification of a failed shred outcome.

    Attributes:
        NOT_FOUND: Target vanished before processing.
        PERMISSION_DENIED: The OS refused access to the target.
        IO_ERROR: A seek, write, rename or delete failed.
        CONFIGURATION_ERROR: The configuration did not select a usable fill mode.
        CANCELLED: The session was cancelled before this target started.
    """

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    IO_ERROR = "io_error"
    CONFIGURATION_ERROR = "configuration_error"
    CANCELLED = "cancelled"


class ShredError(Exception):
    """Base exception for shredding failures.

    Attributes:
        reason: Failure classification reported in the outcome.
        path: Path the failure relates to, if known.
        last_path: Where the file was left when the failure interrupted
            a rename sequence, None if it was not moved.
    """

    reason: FailureReason = FailureReason.IO_ERROR

    def __init__(
        self,
        message: str,
        path: str | None = None,
        *,
        last_path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.last_path = last_path


class NotFoundError(ShredError):
    """Raised when a target vanished before or during processing."""

    reason = FailureReason.NOT_FOUND


class PermissionDeniedError(ShredError):
    """Raised when the OS refuses access to a target."""

    reason = FailureReason.PERMISSION_DENIED


class ShredIOError(ShredError):
    """Raised when a seek, write, rename or delete fails."""

    reason = FailureReason.IO_ERROR


class ConfigurationError(ShredError):
    """Raised when a ShredConfig is ambiguous or out of range."""

    reason = FailureReason.CONFIGURATION_ERROR


class SessionStateError(Exception):
    """Raised when a ShredSession method is called in the wrong state."""


_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT})
_PERMISSION_ERRNOS = frozenset({errno.EACCES, errno.EPERM})


def from_os_error(exc: OSError, action: str, path: str) -> ShredError:
    """Map an OSError onto the shred error taxonomy.

    Args:
        exc: The original OS error.
        action: Short verb phrase for the message (e.g. "rename").
        path: Path the action was applied to.

    Returns:
        A ShredError subclass instance chained to nothing; callers
        should raise it ``from exc``.
    """
    message = f"Cannot {action} {path}: {exc.strerror or exc}"
    if isinstance(exc, FileNotFoundError) or exc.errno in _NOT_FOUND_ERRNOS:
        return NotFoundError(message, path)
    if isinstance(exc, PermissionError) or exc.errno in _PERMISSION_ERRNOS:
        return PermissionDeniedError(message, path)
    return ShredIOError(message, path)
