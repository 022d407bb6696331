"""Recursive discovery of files to shred.

Walks a directory tree iteratively with an explicit stack so that very
deep trees cannot exhaust the interpreter's recursion limit.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class DirectoryWalker:
    """Collects every regular file below a traversal root.

    Symbolic links are neither followed nor collected: a symlinked
    directory could loop back into the tree or lead onto another volume,
    and shredding through a file symlink would destroy data outside the
    root.
    """

    def walk(self, root: Path) -> set[Path]:
        """Return the set of regular files reachable from root.

        Args:
            root: Traversal root. A missing path or a non-directory
                yields an empty set.

        Returns:
            Paths of all regular files below root. Directories are
            never included.
        """
        files: set[Path] = set()
        stack: list[Path] = []

        root = Path(root)
        if root.is_dir() and not root.is_symlink():
            stack.append(root)

        while stack:
            directory = stack.pop()
            try:
                with os.scandir(directory) as entries:
                    for entry in entries:
                        try:
                            if entry.is_dir(follow_symlinks=False):
                                stack.append(Path(entry.path))
                            elif entry.is_file(follow_symlinks=False):
                                files.add(Path(entry.path))
                        except OSError:
                            logger.warning("Cannot determine type of: %s", entry.path)
            except PermissionError:
                logger.warning("Permission denied scanning directory: %s", directory)
            except OSError as e:
                logger.warning("Cannot scan directory %s: %s", directory, e)

        logger.debug("Found %d file(s) below %s", len(files), root)
        return files
