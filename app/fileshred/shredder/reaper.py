"""Bottom-up removal of emptied folder trees.

After a folder run the subdirectories below the traversal root are
removed children-first. Cleanup is best-effort: a directory that still
holds a file from a failed shred is simply left in place.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FolderReaper:
    """Removes emptied subdirectories while keeping the traversal root."""

    def reap(self, folder: Path, root: Path) -> int:
        """Remove every directory below folder, deepest first.

        Args:
            folder: Directory whose subtree should be removed.
            root: Traversal root; never removed, even when empty.

        Returns:
            Number of directories removed. Never raises for filesystem
            failures.
        """
        folder = Path(folder)
        root_key = _normalize(root)
        removed = 0

        # (directory, children_pushed) pairs give post-order without recursion
        stack: list[tuple[Path, bool]] = [(folder, False)]

        while stack:
            directory, expanded = stack.pop()

            if expanded:
                if _normalize(directory) == root_key:
                    continue
                try:
                    os.rmdir(directory)
                    removed += 1
                    logger.debug("Removed folder %s", directory)
                except OSError as e:
                    logger.debug("Skipping folder %s: %s", directory, e)
                continue

            if directory.is_symlink() or not directory.is_dir():
                continue

            stack.append((directory, True))
            try:
                with os.scandir(directory) as entries:
                    for entry in entries:
                        try:
                            if entry.is_dir(follow_symlinks=False):
                                stack.append((Path(entry.path), False))
                        except OSError as e:
                            logger.debug("Cannot inspect %s: %s", entry.path, e)
            except OSError as e:
                logger.debug("Cannot list folder %s: %s", directory, e)

        return removed


def _normalize(path: Path) -> str:
    """Normalize a path for identity comparison."""
    return os.path.normcase(os.path.abspath(path))
