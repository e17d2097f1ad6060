"""File relocation for flattree.

This module provides the FileMover class, which relocates one file into the
root under a name that has already been reserved, and the MoveOutcome
record describing what happened.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from flattree.shared.errors import ErrorCode, MoveError, create_move_error
from flattree.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


class MoveStatus(str, Enum):
    """Result category of a single move."""

    MOVED = "moved"
    PARTIAL = "partial"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class MoveOutcome:
    """Result of relocating one file.

    Attributes:
        source_path: Where the file was found
        destination_path: Where the file was (or would be) placed
        status: MOVED, PARTIAL (copied but the source could not be removed),
            FAILED (source left untouched) or SKIPPED (dry run)
        error: The MoveError for PARTIAL and FAILED outcomes
    """

    source_path: Path
    destination_path: Path
    status: MoveStatus
    error: MoveError | None = None

    @property
    def success(self) -> bool:
        """Whether the file now lives only at its destination."""
        return self.status is MoveStatus.MOVED

    @property
    def renamed(self) -> bool:
        """Whether the file got a conflict-suffixed name."""
        return self.source_path.name != self.destination_path.name

    @property
    def reason(self) -> str | None:
        """Failure reason, if any."""
        return self.error.message if self.error else None

    def to_dict(self) -> dict[str, Any]:
        """Serialise the outcome for JSON output."""
        return {
            "source": str(self.source_path),
            "destination": str(self.destination_path),
            "status": self.status.value,
            "renamed": self.renamed,
            "error": self.error.to_dict() if self.error else None,
        }


class FileMover:
    """Moves single files into the root directory.

    Same-filesystem moves hard-link the file under its new name and then
    unlink the source; linking fails on an existing name, so a destination
    that appears after its name was reserved is never replaced. When the
    source and destination are on different devices the file is copied
    into an exclusively created destination (with metadata) and the source
    is then removed; if that removal fails the outcome is PARTIAL so the
    duplicate is reported instead of hidden. File systems without hard
    links fall back to a checked rename.

    The destination name must already be reserved. An existing destination
    therefore means the reservation bookkeeping is broken or another
    process raced us; the move is refused and reported as FAILED with
    ``DESTINATION_EXISTS``, and nothing is ever overwritten.

    Attributes:
        dry_run: If True, report SKIPPED outcomes without touching files
    """

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def move(self, source: Path, destination: Path) -> MoveOutcome:
        """Relocate ``source`` to ``destination``.

        Args:
            source: File to move
            destination: Full destination path inside the root

        Returns:
            MoveOutcome describing the result; errors are reported in the
            outcome instead of being raised
        """
        source = Path(source)
        destination = Path(destination)

        if self.dry_run:
            return MoveOutcome(source, destination, MoveStatus.SKIPPED)

        try:
            os.link(source, destination)
        except FileExistsError:
            return self._destination_exists(source, destination)
        except FileNotFoundError as e:
            return self._source_missing(source, destination, e)
        except OSError as e:
            if e.errno == errno.EXDEV:
                return self._copy_then_delete(source, destination)
            logger.debug("Cannot hard-link %s (%s), renaming instead", source, e)
            return self._rename(source, destination)

        try:
            os.unlink(source)
        except OSError as e:
            return self._undo_link(source, destination, e)

        logger.debug("Moved: %s -> %s", source, destination)
        return MoveOutcome(source, destination, MoveStatus.MOVED)

    def _rename(self, source: Path, destination: Path) -> MoveOutcome:
        """Checked rename for file systems that cannot hard-link."""
        if os.path.lexists(destination):
            return self._destination_exists(source, destination)

        try:
            os.rename(source, destination)
        except FileNotFoundError as e:
            return self._source_missing(source, destination, e)
        except OSError as e:
            return self._failed(
                source,
                destination,
                create_move_error(
                    source,
                    destination,
                    f"Cannot move {source}: {e}",
                    original_error=e,
                ),
            )

        logger.debug("Renamed: %s -> %s", source, destination)
        return MoveOutcome(source, destination, MoveStatus.MOVED)

    def _undo_link(self, source: Path, destination: Path, cause: OSError) -> MoveOutcome:
        """Drop the new link after the source could not be unlinked."""
        try:
            os.unlink(destination)
        except OSError as e:
            error = create_move_error(
                source,
                destination,
                f"Linked {source} but could not remove either name: {cause}; {e}",
                code=ErrorCode.PARTIAL_MOVE,
                original_error=cause,
            )
            log_operation_error(logger, error, level=logging.WARNING)
            return MoveOutcome(source, destination, MoveStatus.PARTIAL, error)

        return self._failed(
            source,
            destination,
            create_move_error(
                source,
                destination,
                f"Cannot move {source}: {cause}",
                original_error=cause,
            ),
        )

    def _copy_then_delete(self, source: Path, destination: Path) -> MoveOutcome:
        """Cross-device fallback: copy with metadata, then remove the source."""
        try:
            src = open(source, "rb")
        except FileNotFoundError as e:
            return self._source_missing(source, destination, e)
        except OSError as e:
            return self._copy_failed(source, destination, e)

        with src:
            try:
                dst = open(destination, "xb")
            except FileExistsError:
                return self._destination_exists(source, destination)
            except OSError as e:
                return self._copy_failed(source, destination, e)

            try:
                with dst:
                    shutil.copyfileobj(src, dst)
                shutil.copystat(source, destination)
            except OSError as e:
                self._remove_partial_copy(destination)
                return self._copy_failed(source, destination, e)

        try:
            os.unlink(source)
        except OSError as e:
            error = create_move_error(
                source,
                destination,
                f"Copied {source} but could not remove the original: {e}",
                code=ErrorCode.PARTIAL_MOVE,
                original_error=e,
            )
            log_operation_error(logger, error, level=logging.WARNING)
            return MoveOutcome(source, destination, MoveStatus.PARTIAL, error)

        logger.debug("Copied across devices: %s -> %s", source, destination)
        return MoveOutcome(source, destination, MoveStatus.MOVED)

    def _remove_partial_copy(self, destination: Path) -> None:
        # Only called once the exclusive create succeeded, so the file is ours
        try:
            if os.path.lexists(destination):
                os.unlink(destination)
        except OSError as e:
            logger.warning("Could not remove partial copy %s: %s", destination, e)

    def _destination_exists(self, source: Path, destination: Path) -> MoveOutcome:
        return self._failed(
            source,
            destination,
            create_move_error(
                source,
                destination,
                f"Refusing to overwrite existing file: {destination}",
                code=ErrorCode.DESTINATION_EXISTS,
            ),
        )

    def _source_missing(self, source: Path, destination: Path, e: OSError) -> MoveOutcome:
        return self._failed(
            source,
            destination,
            create_move_error(
                source,
                destination,
                f"Source file not found: {source}",
                code=ErrorCode.SOURCE_NOT_FOUND,
                original_error=e,
            ),
        )

    def _copy_failed(self, source: Path, destination: Path, e: OSError) -> MoveOutcome:
        return self._failed(
            source,
            destination,
            create_move_error(
                source,
                destination,
                f"Cannot copy {source} across devices: {e}",
                original_error=e,
            ),
        )

    def _failed(self, source: Path, destination: Path, error: MoveError) -> MoveOutcome:
        log_operation_error(logger, error)
        return MoveOutcome(source, destination, MoveStatus.FAILED, error)
