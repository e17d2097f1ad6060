"""
Empty directory removal after a flatten run.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from flattree.core.models import DirectoryNode
from flattree.shared.errors import CleanupError, create_cleanup_error
from flattree.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


@dataclass
class PruneResult:
    """Directories removed and removals that failed."""

    removed: list[Path] = field(default_factory=list)
    retained: list[Path] = field(default_factory=list)
    errors: list[CleanupError] = field(default_factory=list)


def _is_empty(directory: Path) -> bool:
    with os.scandir(directory) as entries:
        return next(entries, None) is None


class DirectoryPruner:
    """
    Removes visited directories that are empty after the moves.

    Directories are processed deepest first, so removing a leaf can make its
    parent empty and removable in the same pass. A directory that still
    holds anything (an excluded subtree, a file that failed to move, a
    directory beyond the depth limit) is kept, and so are its ancestors.
    The root is never removed, even if it appears among the nodes.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def prune(self, visited: Iterable[DirectoryNode]) -> PruneResult:
        """
        Remove the empty directories among ``visited``.

        Args:
            visited: Directories entered by the walker

        Returns:
            PruneResult listing removed and retained directories and errors
        """
        result = PruneResult()
        root_key = os.path.normcase(os.path.abspath(self.root))
        nodes = sorted(
            set(visited),
            key=lambda node: (-node.depth, str(node.path)),
        )

        for node in nodes:
            directory = node.path
            if os.path.normcase(os.path.abspath(directory)) == root_key:
                continue
            try:
                if not _is_empty(directory):
                    result.retained.append(directory)
                    continue
                os.rmdir(directory)
            except FileNotFoundError:
                logger.debug("Directory already gone: %s", directory)
                continue
            except OSError as e:
                error = create_cleanup_error(directory, e)
                result.errors.append(error)
                result.retained.append(directory)
                log_operation_error(logger, error, level=logging.WARNING)
                continue

            result.removed.append(directory)
            logger.debug("Removed empty directory: %s", directory)

        return result
