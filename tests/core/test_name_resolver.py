"""
Unit tests for ReservedNameSet and NameResolver.
"""

import os

import pytest

from flattree.core.name_resolver import NameResolver, ReservedNameSet, split_name


class TestSplitName:
    """Test cases for stem/extension splitting."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("report.pdf", ("report", ".pdf")),
            ("archive.tar.gz", ("archive.tar", ".gz")),
            ("Makefile", ("Makefile", "")),
            (".bashrc", (".bashrc", "")),
            ("notes.", ("notes.", "")),
            ("..hidden", (".", ".hidden")),
        ],
    )
    def test_split(self, name, expected):
        """Test that only the last extension is split off."""
        assert split_name(name) == expected


class TestReservedNameSet:
    """Test cases for ReservedNameSet."""

    def test_seeded_from_directory(self, temp_dir, make_tree):
        """Test that files and directories in the root are all reserved."""
        make_tree(temp_dir, ["a.txt", "sub/inner.txt"])

        reserved = ReservedNameSet.from_directory(temp_dir)

        assert "a.txt" in reserved
        assert "sub" in reserved
        assert "inner.txt" not in reserved
        assert len(reserved) == 2

    def test_add_and_contains(self):
        """Test that added names are reserved."""
        reserved = ReservedNameSet(["one.txt"])
        reserved.add("two.txt")

        assert list(reserved) == ["one.txt", "two.txt"]
        assert 42 not in reserved

    def test_existing_entry_on_disk_is_taken(self, temp_dir, mocker):
        """Test that a name the file system reports as existing is taken."""
        (temp_dir / "README.md").write_text("root", encoding="utf-8")
        reserved = ReservedNameSet.from_directory(temp_dir)
        listing = {name.casefold() for name in os.listdir(temp_dir)}
        mocker.patch(
            "flattree.core.name_resolver.os.path.lexists",
            side_effect=lambda path: os.path.basename(path).casefold() in listing,
        )

        assert "readme.md" in reserved
        assert "other.md" not in reserved

    def test_unbound_set_ignores_disk(self, temp_dir):
        """Test that a set without a root only knows its own names."""
        (temp_dir / "a.txt").write_text("a", encoding="utf-8")
        reserved = ReservedNameSet()

        assert "a.txt" not in reserved


class TestNameResolver:
    """Test cases for NameResolver."""

    def test_free_name_is_kept(self):
        """Test that a non-conflicting name is used as is and reserved."""
        resolver = NameResolver()
        reserved = ReservedNameSet()

        assert resolver.resolve("a.txt", reserved) == "a.txt"
        assert "a.txt" in reserved

    def test_conflicts_get_numbered_suffixes(self):
        """Test that repeated names become stem_1, stem_2, ..."""
        resolver = NameResolver()
        reserved = ReservedNameSet(["a.txt"])

        results = [resolver.resolve("a.txt", reserved) for _ in range(3)]

        assert results == ["a_1.txt", "a_2.txt", "a_3.txt"]

    def test_suffix_skips_taken_numbers(self):
        """Test that an existing stem_N name is never reused."""
        resolver = NameResolver()
        reserved = ReservedNameSet(["a.txt", "a_1.txt"])

        assert resolver.resolve("a.txt", reserved) == "a_2.txt"

    def test_multi_dot_and_no_extension(self):
        """Test the suffix position for compound and missing extensions."""
        resolver = NameResolver()
        reserved = ReservedNameSet(["data.tar.gz", "README"])

        assert resolver.resolve("data.tar.gz", reserved) == "data.tar_1.gz"
        assert resolver.resolve("README", reserved) == "README_1"

    def test_directory_name_collision(self):
        """Test that a file never takes the name of a reserved directory."""
        resolver = NameResolver()
        reserved = ReservedNameSet(["notes"])

        assert resolver.resolve("notes", reserved) == "notes_1"

    def test_custom_separator(self):
        """Test that the separator is configurable."""
        resolver = NameResolver(separator="-")
        reserved = ReservedNameSet(["a.txt"])

        assert resolver.resolve("a.txt", reserved) == "a-1.txt"

    def test_trailing_dot_name(self):
        """Test that a trailing dot stays part of the stem."""
        resolver = NameResolver()
        reserved = ReservedNameSet(["notes."])

        assert resolver.resolve("notes.", reserved) == "notes._1"

    def test_case_insensitive_file_system(self, temp_dir, mocker):
        """Test that a name differing only in case from a root file is renamed."""
        (temp_dir / "README.md").write_text("root", encoding="utf-8")
        reserved = ReservedNameSet.from_directory(temp_dir)
        listing = {name.casefold() for name in os.listdir(temp_dir)}
        mocker.patch(
            "flattree.core.name_resolver.os.path.lexists",
            side_effect=lambda path: os.path.basename(path).casefold() in listing,
        )

        assert NameResolver().resolve("readme.md", reserved) == "readme_1.md"
