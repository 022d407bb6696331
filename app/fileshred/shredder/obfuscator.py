"""File name obfuscation through repeated renaming.

Renaming a file many times to random names before its content is
destroyed breaks the link between the original name and the data in
filesystem journals.
"""

import logging
import os
import uuid
from collections.abc import Callable
from pathlib import Path

from fileshred.shredder.errors import ShredIOError, from_os_error
from fileshred.shredder.models import DEFAULT_RENAME_PASSES

logger = logging.getLogger(__name__)


class PathObfuscator:
    """Renames files to random names within their own directory.

    Args:
        name_factory: Callable returning a fresh random file name.
            Defaults to a 128-bit random hex identifier.
    """

    def __init__(self, name_factory: Callable[[], str] | None = None) -> None:
        self._name_factory = name_factory or (lambda: uuid.uuid4().hex)

    def obfuscate(self, path: Path, passes: int = DEFAULT_RENAME_PASSES) -> Path:
        """Rename a file ``passes`` times and return its final path.

        If a rename fails, the raised ShredError carries ``last_path``,
        the name the file had when the sequence stopped.

        Args:
            path: File to rename.
            passes: Number of renames. Zero returns ``path`` unchanged.

        Returns:
            Path of the file after the last rename.

        Raises:
            ValueError: If passes is negative.
            NotFoundError: If the file vanished.
            PermissionDeniedError: If a rename is refused.
            ShredIOError: If a rename fails or the random name is taken.
        """
        if passes < 0:
            msg = f"passes must be >= 0, got {passes}"
            raise ValueError(msg)

        current = Path(path)
        parent = current.parent

        for _ in range(passes):
            candidate = parent / self._name_factory()
            # os.rename silently replaces existing files on POSIX
            if candidate.exists() or candidate.is_symlink():
                raise ShredIOError(
                    f"Cannot rename {current}: name collision on {candidate.name}",
                    str(current),
                    last_path=str(current),
                )
            try:
                os.rename(current, candidate)
            except OSError as e:
                error = from_os_error(e, "rename", str(current))
                error.last_path = str(current)
                raise error from e
            current = candidate

        if passes:
            logger.debug("Renamed %s %d times, now %s", path, passes, current.name)
        return current
