"""In-place content overwrite and unlink.

The Overwriter streams a file's full length in fixed-size chunks,
writing filler bytes at every offset, and then removes the file from
the filesystem namespace. The file length never changes: the last chunk
is truncated to the bytes that remain.
"""

import logging
import os
import stat
from pathlib import Path
from typing import BinaryIO

from fileshred.shredder.errors import ShredIOError, from_os_error
from fileshred.shredder.filler import PatternFiller, RandomSource
from fileshred.shredder.models import DEFAULT_CHUNK_SIZE, FillMode

logger = logging.getLogger(__name__)

# Refuse to open symlinks where the platform supports it
_OPEN_FLAGS = os.O_RDWR | getattr(os, "O_NOFOLLOW", 0) | getattr(os, "O_BINARY", 0)


class Overwriter:
    """Overwrites and deletes single files.

    Attributes:
        _chunk_size: Size of each write in bytes.
        _passes: Number of full-length overwrite passes.
        _sync: Whether to fsync after each pass.
        _rng: Optional random source for FillMode.RANDOM.
    """

    def __init__(
        self,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        passes: int = 1,
        sync: bool = True,
        rng: RandomSource | None = None,
    ) -> None:
        """Initialize the Overwriter.

        Args:
            chunk_size: Size of each write in bytes.
            passes: Number of full-length overwrite passes (at least 1).
            sync: If True, fsync the file after every pass.
            rng: Optional random source for FillMode.RANDOM.
        """
        if passes < 1:
            msg = f"passes must be >= 1, got {passes}"
            raise ValueError(msg)
        self._chunk_size = chunk_size
        self._passes = passes
        self._sync = sync
        self._rng = rng

    def shred(self, path: Path, mode: FillMode) -> int:
        """Overwrite a file's content and then delete it.

        Args:
            path: Regular file to shred.
            mode: Byte pattern to overwrite with.

        Returns:
            Number of bytes overwritten per pass (the file length).

        Raises:
            ConfigurationError: If mode is FillMode.NONE.
            NotFoundError: If the file vanished.
            PermissionDeniedError: If the file cannot be opened or removed.
            ShredIOError: If a write fails or the final delete fails.
        """
        length = self.overwrite(path, mode)
        try:
            os.unlink(path)
        except OSError as e:
            raise from_os_error(e, "delete", str(path)) from e
        logger.debug("Deleted %s", path)
        return length

    def overwrite(self, path: Path, mode: FillMode) -> int:
        """Overwrite a file's full length in place without deleting it.

        Args:
            path: Regular file to overwrite.
            mode: Byte pattern to overwrite with.

        Returns:
            Number of bytes overwritten per pass (the file length).

        Raises:
            ConfigurationError: If mode is FillMode.NONE.
            NotFoundError: If the file vanished.
            PermissionDeniedError: If the file cannot be opened.
            ShredIOError: If the path is not a regular file or a write fails.
        """
        filler = PatternFiller(mode, self._chunk_size, self._rng)
        path_str = str(path)

        try:
            info = os.lstat(path)
        except OSError as e:
            raise from_os_error(e, "stat", path_str) from e
        if not stat.S_ISREG(info.st_mode):
            raise ShredIOError(f"Not a regular file: {path_str}", path_str)

        length = info.st_size
        buffer = filler.new_buffer()

        try:
            fd = os.open(path, _OPEN_FLAGS)
        except OSError as e:
            raise from_os_error(e, "open", path_str) from e

        try:
            with os.fdopen(fd, "r+b", buffering=0) as fh:
                for pass_num in range(1, self._passes + 1):
                    self._overwrite_pass(fh, buffer, filler, length)
                    if self._sync:
                        os.fsync(fh.fileno())
                    logger.debug(
                        "Pass %d/%d (%s) wrote %d bytes to %s",
                        pass_num,
                        self._passes,
                        mode.value,
                        length,
                        path_str,
                    )
        except OSError as e:
            raise from_os_error(e, "overwrite", path_str) from e

        return length

    def _overwrite_pass(
        self,
        fh: BinaryIO,
        buffer: bytearray,
        filler: PatternFiller,
        length: int,
    ) -> None:
        """Write one full-length pass of filler bytes."""
        chunk = len(buffer)
        for offset in range(0, length, chunk):
            filler.fill(buffer)
            fh.seek(offset)
            _write_fully(fh, buffer, min(chunk, length - offset))


def _write_fully(fh: BinaryIO, buffer: bytearray, count: int) -> None:
    """Write the first ``count`` bytes of buffer, retrying short writes.

    Raises:
        OSError: If the file accepts no bytes.
    """
    with memoryview(buffer) as view:
        remaining = view[:count]
        while remaining:
            written = fh.write(remaining)
            if not written:
                raise OSError(f"Short write with {len(remaining)} bytes remaining")
            remaining = remaining[written:]
