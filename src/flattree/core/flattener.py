"""
Flatten orchestration for flattree.

This module provides the DirectoryFlattener class that sequences the
pipeline: walk the tree, (optionally) ask for confirmation, resolve a name
and move each file, then prune the directories left empty.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from flattree.core.cleanup import DirectoryPruner, PruneResult
from flattree.core.matcher import DirectoryFilter
from flattree.core.models import DirectoryNode, FileCandidate
from flattree.core.mover import FileMover, MoveOutcome, MoveStatus
from flattree.core.name_resolver import NameResolver, ReservedNameSet
from flattree.core.walker import DirectoryWalker
from flattree.shared.errors import (
    ErrorCode,
    FlattreeError,
    TraversalError,
    create_configuration_error,
)

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[int], bool]
ProgressFn = Callable[[Sequence[FileCandidate]], Iterable[FileCandidate]]


def validate_root(root: str | Path) -> Path:
    """
    Resolve and validate the directory to flatten.

    Args:
        root: User-supplied directory, absolute or relative

    Returns:
        Absolute, canonical path of the directory

    Raises:
        ConfigurationError: If the path does not exist or is not a directory
    """
    path = Path(root).expanduser()

    if not path.exists():
        raise create_configuration_error(
            f"Directory '{path}' does not exist",
            code=ErrorCode.DIRECTORY_NOT_FOUND,
            path=path,
        )

    if not path.is_dir():
        raise create_configuration_error(
            f"'{path}' is not a directory",
            code=ErrorCode.NOT_A_DIRECTORY,
            path=path,
        )

    return path.resolve()


@dataclass
class FlattenPlan:
    """Everything the walker found, before any file is moved."""

    root: Path
    candidates: list[FileCandidate] = field(default_factory=list)
    visited: list[DirectoryNode] = field(default_factory=list)
    traversal_errors: list[TraversalError] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.candidates)

    @property
    def top_level_directories(self) -> list[str]:
        """Sorted names of the top-level directories that contribute files."""
        return sorted({candidate.top_level for candidate in self.candidates})


@dataclass
class FlattenReport:
    """Aggregated result of a flatten run.

    Per-file and per-directory failures never abort a run; they are
    collected here and surfaced through ``has_errors``.
    """

    root: Path
    files_found: int = 0
    outcomes: list[MoveOutcome] = field(default_factory=list)
    traversal_errors: list[TraversalError] = field(default_factory=list)
    cleanup: PruneResult = field(default_factory=PruneResult)
    cancelled: bool = False
    dry_run: bool = False

    def _with_status(self, status: MoveStatus) -> list[MoveOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is status]

    @property
    def moved(self) -> list[MoveOutcome]:
        return self._with_status(MoveStatus.MOVED)

    @property
    def partial(self) -> list[MoveOutcome]:
        return self._with_status(MoveStatus.PARTIAL)

    @property
    def failed(self) -> list[MoveOutcome]:
        return self._with_status(MoveStatus.FAILED)

    @property
    def planned(self) -> list[MoveOutcome]:
        return self._with_status(MoveStatus.SKIPPED)

    @property
    def renamed_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.renamed)

    @property
    def removed_directories(self) -> list[Path]:
        return self.cleanup.removed

    @property
    def errors(self) -> list[FlattreeError]:
        """All recoverable errors recorded during the run."""
        collected: list[FlattreeError] = list(self.traversal_errors)
        collected.extend(
            outcome.error for outcome in self.outcomes if outcome.error is not None
        )
        collected.extend(self.cleanup.errors)
        return collected

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the report for JSON output."""
        return {
            "root": str(self.root),
            "dry_run": self.dry_run,
            "cancelled": self.cancelled,
            "files_found": self.files_found,
            "moved": len(self.moved),
            "renamed": self.renamed_count,
            "partial": len(self.partial),
            "failed": len(self.failed),
            "removed_directories": [str(path) for path in self.removed_directories],
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
            "errors": [error.to_dict() for error in self.errors],
        }


class DirectoryFlattener:
    """
    Moves every file below a root directory into the root.

    Rules enforced by the pipeline:
    - Names are reserved before a file is moved, so no two files ever share
      a destination and nothing is overwritten.
    - Files already in the root are reserved up front and never touched.
    - Only directories the walker entered are considered for removal.

    Example:
        >>> flattener = DirectoryFlattener("photos", max_depth=2)
        >>> report = flattener.run(confirm=lambda count: count < 1000)
        >>> print(len(report.moved), report.has_errors)
    """

    def __init__(
        self,
        root: str | Path,
        *,
        max_depth: int | None = None,
        directory_filter: DirectoryFilter | None = None,
        dry_run: bool = False,
        mover: FileMover | None = None,
        resolver: NameResolver | None = None,
        pruner: DirectoryPruner | None = None,
    ) -> None:
        """
        Initialize the DirectoryFlattener.

        Args:
            root: Directory to flatten
            max_depth: Maximum depth to traverse; None means unbounded
            directory_filter: Include/exclude filter for top-level directories
            dry_run: Resolve names and report planned moves without moving
            mover: FileMover to use; defaults to one honouring ``dry_run``
            resolver: NameResolver to use
            pruner: DirectoryPruner to use

        Raises:
            ConfigurationError: If the root or depth limit is invalid
        """
        if max_depth is not None and max_depth < 0:
            raise create_configuration_error(
                f"Depth must be zero or positive, got {max_depth}",
                code=ErrorCode.INVALID_DEPTH,
                config_key="max_depth",
            )
        self.root = validate_root(root)
        self.max_depth = max_depth
        self.directory_filter = directory_filter or DirectoryFilter()
        self.dry_run = dry_run
        self.mover = mover or FileMover(dry_run=dry_run)
        self.resolver = resolver or NameResolver()
        self.pruner = pruner or DirectoryPruner(self.root)

    def scan(self) -> FlattenPlan:
        """
        Walk the tree and collect the files to move.

        Returns:
            FlattenPlan with candidates, visited directories and errors
        """
        walker = DirectoryWalker(self.root, self.max_depth, self.directory_filter)
        candidates = list(walker.walk())
        logger.info(
            "Found %d file(s) under %s in %d director(y/ies)",
            len(candidates),
            self.root,
            len(walker.visited),
        )
        return FlattenPlan(
            root=self.root,
            candidates=candidates,
            visited=list(walker.visited),
            traversal_errors=list(walker.errors),
        )

    def execute(
        self,
        plan: FlattenPlan,
        *,
        progress: ProgressFn | None = None,
    ) -> FlattenReport:
        """
        Move the planned files into the root and prune empty directories.

        Args:
            plan: Result of ``scan()``
            progress: Optional wrapper around the candidate sequence, e.g. a
                progress bar's ``track``

        Returns:
            FlattenReport with one outcome per candidate

        Raises:
            ConfigurationError: If the root can no longer be listed
        """
        report = FlattenReport(
            root=self.root,
            files_found=plan.file_count,
            traversal_errors=list(plan.traversal_errors),
            dry_run=self.dry_run,
        )

        try:
            reserved = ReservedNameSet.from_directory(self.root)
        except OSError as e:
            raise create_configuration_error(
                f"Cannot read directory {self.root}: {e}",
                code=ErrorCode.DIRECTORY_READ_DENIED,
                path=self.root,
                original_error=e,
            ) from e

        candidates: Iterable[FileCandidate] = (
            progress(plan.candidates) if progress else plan.candidates
        )
        for candidate in candidates:
            final_name = self.resolver.resolve(candidate.name, reserved)
            outcome = self.mover.move(candidate.source_path, self.root / final_name)
            report.outcomes.append(outcome)
            if outcome.renamed and outcome.status is not MoveStatus.FAILED:
                logger.info(
                    "Renamed on conflict: %s -> %s",
                    candidate.source_path,
                    final_name,
                )

        if not self.dry_run:
            report.cleanup = self.pruner.prune(plan.visited)

        logger.info(
            "Flatten finished: %d moved, %d renamed, %d partial, %d failed, "
            "%d director(y/ies) removed",
            len(report.moved),
            report.renamed_count,
            len(report.partial),
            len(report.failed),
            len(report.removed_directories),
        )
        return report

    def run(
        self,
        confirm: ConfirmFn | None = None,
        *,
        progress: ProgressFn | None = None,
    ) -> FlattenReport:
        """
        Scan, confirm and execute in one call.

        Args:
            confirm: Decision function called with the number of files found;
                returning False cancels the run. None means proceed.
            progress: Optional wrapper passed on to ``execute``

        Returns:
            FlattenReport; ``cancelled`` is set when confirmation was refused
        """
        plan = self.scan()
        if not plan.candidates:
            return FlattenReport(
                root=self.root,
                traversal_errors=list(plan.traversal_errors),
                dry_run=self.dry_run,
            )

        if confirm is not None and not confirm(plan.file_count):
            logger.info("Flatten cancelled before moving %d file(s)", plan.file_count)
            return FlattenReport(
                root=self.root,
                files_found=plan.file_count,
                traversal_errors=list(plan.traversal_errors),
                cancelled=True,
                dry_run=self.dry_run,
            )

        return self.execute(plan, progress=progress)
