"""
Unit tests for DirectoryPruner.
"""

import errno
import os

from flattree.core import cleanup as cleanup_module
from flattree.core.cleanup import DirectoryPruner
from flattree.core.models import DirectoryNode
from flattree.shared.errors import ErrorCode


def node(path, depth):
    return DirectoryNode(path=path, depth=depth)


class TestDirectoryPruner:
    """Test cases for empty directory removal."""

    def test_removes_nested_empty_directories(self, temp_dir):
        """Test that leaves go first so emptied parents are removed too."""
        (temp_dir / "a" / "b" / "c").mkdir(parents=True)
        visited = [
            node(temp_dir / "a", 1),
            node(temp_dir / "a" / "b", 2),
            node(temp_dir / "a" / "b" / "c", 3),
        ]

        result = DirectoryPruner(temp_dir).prune(visited)

        assert result.removed == [
            temp_dir / "a" / "b" / "c",
            temp_dir / "a" / "b",
            temp_dir / "a",
        ]
        assert list(temp_dir.iterdir()) == []

    def test_keeps_non_empty_directories_and_ancestors(self, temp_dir, make_tree):
        """Test that a directory holding anything is retained with its parents."""
        make_tree(temp_dir, ["a/b/left.txt", "a/empty/"])
        visited = [
            node(temp_dir / "a", 1),
            node(temp_dir / "a" / "b", 2),
            node(temp_dir / "a" / "empty", 2),
        ]

        result = DirectoryPruner(temp_dir).prune(visited)

        assert result.removed == [temp_dir / "a" / "empty"]
        assert set(result.retained) == {temp_dir / "a", temp_dir / "a" / "b"}
        assert (temp_dir / "a" / "b" / "left.txt").exists()

    def test_unvisited_directories_are_untouched(self, temp_dir):
        """Test that only visited directories are considered."""
        (temp_dir / "visited").mkdir()
        (temp_dir / "other").mkdir()

        DirectoryPruner(temp_dir).prune([node(temp_dir / "visited", 1)])

        assert not (temp_dir / "visited").exists()
        assert (temp_dir / "other").is_dir()

    def test_root_is_never_removed(self, temp_dir):
        """Test that the root survives even when passed in and empty."""
        result = DirectoryPruner(temp_dir).prune([node(temp_dir, 1)])

        assert result.removed == []
        assert temp_dir.is_dir()

    def test_missing_directory_is_ignored(self, temp_dir):
        """Test that an already removed directory is not an error."""
        result = DirectoryPruner(temp_dir).prune([node(temp_dir / "gone", 1)])

        assert result.removed == []
        assert result.errors == []

    def test_removal_failure_is_recorded(self, temp_dir, mocker):
        """Test that rmdir failures are collected instead of raised."""
        (temp_dir / "stuck").mkdir()
        real_rmdir = os.rmdir

        def refuse(path, *args, **kwargs):
            if os.fspath(path) == os.fspath(temp_dir / "stuck"):
                raise PermissionError(errno.EACCES, "Permission denied")
            return real_rmdir(path, *args, **kwargs)

        mocker.patch.object(cleanup_module.os, "rmdir", side_effect=refuse)

        result = DirectoryPruner(temp_dir).prune([node(temp_dir / "stuck", 1)])

        assert result.removed == []
        assert result.retained == [temp_dir / "stuck"]
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.CLEANUP_FAILED
