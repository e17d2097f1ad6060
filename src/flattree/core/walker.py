"""Directory walker for flattree.

This module enumerates the files that a flatten run will move. It uses
os.scandir() with an explicit stack instead of recursion, so deep trees do
not grow the call stack, and it records every directory it enters so the
pruner only ever considers directories that were actually traversed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from flattree.core.matcher import DirectoryFilter
from flattree.core.models import DirectoryNode, FileCandidate
from flattree.shared.errors import (
    ErrorCode,
    TraversalError,
    create_configuration_error,
    create_traversal_error,
)
from flattree.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


def _sorted_entries(directory: Path) -> list[os.DirEntry[str]]:
    """List a directory in name order so traversal order is reproducible."""
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


class DirectoryWalker:
    """Enumerates file candidates below a root directory.

    Traversal is depth-first and pre-order: the files of a directory are
    yielded before any of its subdirectories are entered, and siblings are
    visited in name order.

    Rules:
    - Files directly in the root (depth 0) are never yielded.
    - Directories deeper than ``max_depth`` are never entered; ``None``
      means unbounded and ``0`` yields nothing.
    - Depth-1 directories rejected by ``directory_filter`` are skipped
      together with their whole subtree.
    - Symbolic links are neither followed nor yielded.
    - An unreadable subdirectory is recorded as a TraversalError and its
      subtree is skipped.

    A walker is single-use; create a new one to walk again.

    Attributes:
        root: Root directory being flattened
        max_depth: Maximum directory depth to enter, or None
        directory_filter: Include/exclude decision for top-level directories
        visited: Directories entered so far, in traversal order
        errors: Traversal errors recorded so far
    """

    def __init__(
        self,
        root: Path,
        max_depth: int | None = None,
        directory_filter: DirectoryFilter | None = None,
    ) -> None:
        if max_depth is not None and max_depth < 0:
            raise create_configuration_error(
                f"Depth must be zero or positive, got {max_depth}",
                code=ErrorCode.INVALID_DEPTH,
                config_key="max_depth",
            )
        self.root = Path(root)
        self.max_depth = max_depth
        self.directory_filter = directory_filter or DirectoryFilter()
        self.visited: list[DirectoryNode] = []
        self.errors: list[TraversalError] = []
        self.skipped_top_level: list[str] = []
        self._started = False

    def walk(self) -> Iterator[FileCandidate]:
        """Lazily yield the files to move.

        Returns:
            Iterator of FileCandidate objects in traversal order

        Raises:
            RuntimeError: If this walker has already been used
        """
        if self._started:
            msg = "DirectoryWalker.walk() can only be called once per instance"
            raise RuntimeError(msg)
        self._started = True
        return self._iter_candidates()

    def _within_depth(self, depth: int) -> bool:
        return self.max_depth is None or depth <= self.max_depth

    def _iter_candidates(self) -> Iterator[FileCandidate]:
        if not self._within_depth(1):
            logger.debug("Depth limit %s leaves nothing to traverse", self.max_depth)
            return

        try:
            root_entries = _sorted_entries(self.root)
        except OSError as e:
            raise create_configuration_error(
                f"Cannot read directory {self.root}: {e}",
                code=ErrorCode.DIRECTORY_READ_DENIED,
                path=self.root,
                original_error=e,
            ) from e

        # Stack of (node, top-level name); reversed so pops follow name order
        stack: list[tuple[DirectoryNode, str]] = []
        for entry in reversed(root_entries):
            if entry.is_symlink() or not entry.is_dir(follow_symlinks=False):
                continue
            if not self.directory_filter.allows(entry.name):
                logger.debug("Skipping top-level directory: %s", entry.name)
                self.skipped_top_level.append(entry.name)
                continue
            stack.append((DirectoryNode(path=Path(entry.path), depth=1), entry.name))
        self.skipped_top_level.reverse()

        while stack:
            node, top_level = stack.pop()
            try:
                entries = _sorted_entries(node.path)
            except OSError as e:
                error = create_traversal_error(node.path, node.depth, e)
                self.errors.append(error)
                log_operation_error(logger, error, level=logging.WARNING)
                continue

            self.visited.append(node)
            child_depth = node.depth + 1
            subdirectories: list[DirectoryNode] = []

            for entry in entries:
                if entry.is_symlink():
                    logger.debug("Ignoring symbolic link: %s", entry.path)
                    continue
                if entry.is_dir(follow_symlinks=False):
                    if self._within_depth(child_depth):
                        subdirectories.append(
                            DirectoryNode(path=Path(entry.path), depth=child_depth)
                        )
                    continue
                if entry.is_file(follow_symlinks=False):
                    yield FileCandidate(
                        source_path=Path(entry.path),
                        name=entry.name,
                        depth=node.depth,
                        top_level=top_level,
                    )

            for child in reversed(subdirectories):
                stack.append((child, top_level))
