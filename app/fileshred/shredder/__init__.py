"""Secure shredding engine.

This module provides the pattern filler, name obfuscator, overwriter,
directory walker, folder reaper, and the session that orchestrates them.
"""

from fileshred.shredder.errors import (
    ConfigurationError,
    NotFoundError,
    PermissionDeniedError,
    SessionStateError,
    ShredError,
    ShredIOError,
)
from fileshred.shredder.filler import PatternFiller, fill
from fileshred.shredder.models import (
    FailureReason,
    FillMode,
    SessionState,
    ShredConfig,
    ShredOutcome,
    ShredReport,
)
from fileshred.shredder.obfuscator import PathObfuscator
from fileshred.shredder.overwriter import Overwriter
from fileshred.shredder.reaper import FolderReaper
from fileshred.shredder.session import ShredSession, shred_directory, shred_files
from fileshred.shredder.walker import DirectoryWalker

__all__ = [
    "ConfigurationError",
    "DirectoryWalker",
    "FailureReason",
    "FillMode",
    "FolderReaper",
    "NotFoundError",
    "Overwriter",
    "PathObfuscator",
    "PatternFiller",
    "PermissionDeniedError",
    "SessionState",
    "SessionStateError",
    "ShredConfig",
    "ShredError",
    "ShredIOError",
    "ShredOutcome",
    "ShredReport",
    "ShredSession",
    "fill",
    "shred_directory",
    "shred_files",
]
