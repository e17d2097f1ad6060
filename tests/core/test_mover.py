"""
Unit tests for FileMover.

This module tests same-device moves, the rename and cross-device copy fallbacks,
refusal to overwrite, dry runs and failure reporting.
"""

import errno
import os

import pytest

from flattree.core import mover as mover_module
from flattree.core.mover import FileMover, MoveStatus
from flattree.shared.errors import ErrorCode


@pytest.fixture
def source_file(temp_dir):
    source = temp_dir / "sub" / "file.txt"
    source.parent.mkdir()
    source.write_text("payload", encoding="utf-8")
    return source


class TestFileMover:
    """Test cases for FileMover."""

    def test_move_success(self, temp_dir, source_file):
        """Test a plain same-device move."""
        destination = temp_dir / "file.txt"

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.MOVED
        assert outcome.success
        assert not outcome.renamed
        assert not source_file.exists()
        assert destination.read_text(encoding="utf-8") == "payload"

    def test_renamed_outcome(self, temp_dir, source_file):
        """Test that a different destination name is reported as renamed."""
        outcome = FileMover().move(source_file, temp_dir / "file_1.txt")

        assert outcome.renamed
        assert outcome.to_dict()["renamed"] is True

    def test_refuses_to_overwrite(self, temp_dir, source_file):
        """Test that an existing destination is never overwritten."""
        destination = temp_dir / "file.txt"
        destination.write_text("original", encoding="utf-8")

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.FAILED
        assert outcome.error.code == ErrorCode.DESTINATION_EXISTS
        assert destination.read_text(encoding="utf-8") == "original"
        assert source_file.exists()

    def test_missing_source(self, temp_dir):
        """Test that a vanished source is reported, not raised."""
        outcome = FileMover().move(temp_dir / "gone.txt", temp_dir / "dest.txt")

        assert outcome.status is MoveStatus.FAILED
        assert outcome.error.code == ErrorCode.SOURCE_NOT_FOUND
        assert outcome.reason

    def test_dry_run_touches_nothing(self, temp_dir, source_file):
        """Test that a dry run only reports the planned move."""
        destination = temp_dir / "file.txt"

        outcome = FileMover(dry_run=True).move(source_file, destination)

        assert outcome.status is MoveStatus.SKIPPED
        assert source_file.exists()
        assert not destination.exists()

    def test_destination_created_after_check_is_kept(self, temp_dir, source_file, mocker):
        """Test that a destination appearing after a stale existence check survives."""
        destination = temp_dir / "file.txt"
        destination.write_text("original", encoding="utf-8")
        mocker.patch.object(mover_module.os.path, "lexists", return_value=False)

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.FAILED
        assert outcome.error.code == ErrorCode.DESTINATION_EXISTS
        assert destination.read_text(encoding="utf-8") == "original"
        assert source_file.read_text(encoding="utf-8") == "payload"

    def test_source_unlink_failure_undoes_link(self, temp_dir, source_file, mocker):
        """Test that a source that cannot be removed leaves only the source."""
        real_unlink = os.unlink

        def refuse_source(path, *args, **kwargs):
            if os.fspath(path) == os.fspath(source_file):
                raise PermissionError(errno.EACCES, "Permission denied")
            return real_unlink(path, *args, **kwargs)

        mocker.patch.object(mover_module.os, "unlink", side_effect=refuse_source)
        destination = temp_dir / "file.txt"

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.FAILED
        assert outcome.error.code == ErrorCode.MOVE_FAILED
        assert source_file.exists()
        assert not os.path.lexists(destination)


class TestRenameFallback:
    """Test cases for file systems without hard links."""

    @pytest.fixture(autouse=True)
    def no_hard_links(self, mocker):
        mocker.patch.object(
            mover_module.os,
            "link",
            side_effect=OSError(errno.EPERM, "Operation not permitted"),
        )

    def test_rename_when_links_are_unsupported(self, temp_dir, source_file):
        """Test that the move still succeeds through a rename."""
        destination = temp_dir / "file.txt"

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.MOVED
        assert not source_file.exists()
        assert destination.read_text(encoding="utf-8") == "payload"

    def test_rename_refuses_to_overwrite(self, temp_dir, source_file):
        """Test that the rename path checks for an existing destination."""
        destination = temp_dir / "file.txt"
        destination.write_text("original", encoding="utf-8")

        outcome = FileMover().move(source_file, destination)

        assert outcome.error.code == ErrorCode.DESTINATION_EXISTS
        assert destination.read_text(encoding="utf-8") == "original"

    def test_other_rename_failure(self, temp_dir, source_file, mocker):
        """Test that other OS errors produce a FAILED outcome."""
        mocker.patch.object(
            mover_module.os,
            "rename",
            side_effect=OSError(errno.EIO, "I/O error"),
        )

        outcome = FileMover().move(source_file, temp_dir / "file.txt")

        assert outcome.status is MoveStatus.FAILED
        assert outcome.error.code == ErrorCode.MOVE_FAILED
        assert source_file.exists()


class TestCrossDeviceMove:
    """Test cases for the copy-then-delete fallback."""

    @pytest.fixture(autouse=True)
    def cross_device(self, mocker):
        mocker.patch.object(
            mover_module.os,
            "link",
            side_effect=OSError(errno.EXDEV, "Invalid cross-device link"),
        )

    def test_copy_then_delete(self, temp_dir, source_file):
        """Test that EXDEV falls back to copying and removing the source."""
        destination = temp_dir / "file.txt"

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.MOVED
        assert not source_file.exists()
        assert destination.read_text(encoding="utf-8") == "payload"

    def test_unlink_failure_is_partial(self, temp_dir, source_file, mocker):
        """Test that a source that cannot be removed yields PARTIAL."""
        real_unlink = os.unlink

        def refuse_source(path, *args, **kwargs):
            if os.fspath(path) == os.fspath(source_file):
                raise PermissionError(errno.EACCES, "Permission denied")
            return real_unlink(path, *args, **kwargs)

        mocker.patch.object(mover_module.os, "unlink", side_effect=refuse_source)
        destination = temp_dir / "file.txt"

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.PARTIAL
        assert outcome.error.code == ErrorCode.PARTIAL_MOVE
        assert not outcome.success
        assert source_file.exists()
        assert destination.exists()

    def test_copy_failure_removes_partial_copy(self, temp_dir, source_file, mocker):
        """Test that a failed copy leaves neither a partial file nor a lost source."""
        destination = temp_dir / "file.txt"

        def broken_copy(fsrc, fdst, *args):
            fdst.write(b"pay")
            raise OSError(errno.ENOSPC, "No space left on device")

        mocker.patch.object(mover_module.shutil, "copyfileobj", side_effect=broken_copy)

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.FAILED
        assert outcome.error.code == ErrorCode.MOVE_FAILED
        assert not os.path.lexists(destination)
        assert source_file.read_text(encoding="utf-8") == "payload"

    def test_copy_never_overwrites(self, temp_dir, source_file):
        """Test that the copy creates the destination exclusively."""
        destination = temp_dir / "file.txt"
        destination.write_text("original", encoding="utf-8")

        outcome = FileMover().move(source_file, destination)

        assert outcome.status is MoveStatus.FAILED
        assert outcome.error.code == ErrorCode.DESTINATION_EXISTS
        assert destination.read_text(encoding="utf-8") == "original"
        assert source_file.exists()

    def test_copy_keeps_modification_time(self, temp_dir, source_file):
        """Test that file metadata is copied along with the content."""
        os.utime(source_file, (1_000_000_000, 1_000_000_000))
        destination = temp_dir / "file.txt"

        FileMover().move(source_file, destination)

        assert int(destination.stat().st_mtime) == 1_000_000_000
