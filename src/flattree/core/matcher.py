"""
Top-level directory matching for flattree.

``DirectoryMatcher`` answers whether a directory name matches a pattern set;
``DirectoryFilter`` turns that answer into an include/exclude decision.
Both are only ever consulted for depth-1 directory names.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from flattree.core.models import FilterMode, MatchMode
from flattree.shared.constants import CLIDefaults
from flattree.shared.errors import ErrorCode, create_configuration_error


def split_patterns(raw: str | Iterable[str] | None) -> list[str]:
    """
    Split a comma-separated pattern list into clean patterns.

    Blank entries and surrounding whitespace are dropped, so ``"doc, ,src"``
    yields ``["doc", "src"]``.

    Args:
        raw: Comma-separated string, an iterable of strings, or None

    Returns:
        List of non-empty patterns in their original order
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        items: Iterable[str] = raw.split(CLIDefaults.PATTERN_DELIMITER)
    else:
        items = raw
    return [item.strip() for item in items if item and item.strip()]


class DirectoryMatcher:
    """
    Case-insensitive matcher for directory names.

    In ``MatchMode.SUBSTRING`` a pattern matches when it occurs anywhere in
    the name (``doc`` matches ``docs`` and ``documentation``). In
    ``MatchMode.PREFIX`` it must occur at the start of the name. A name
    matches a pattern set when ANY pattern matches.
    """

    def __init__(self, mode: MatchMode = MatchMode.SUBSTRING) -> None:
        self.mode = MatchMode(mode)

    def matches(self, directory_name: str, patterns: Iterable[str]) -> bool:
        """
        Check a directory name against a set of patterns.

        Args:
            directory_name: Name of the directory (not a path)
            patterns: Patterns to test; empty patterns never match

        Returns:
            True if at least one pattern matches
        """
        name = directory_name.casefold()
        for pattern in patterns:
            if not pattern:
                continue
            needle = pattern.casefold()
            if self.mode is MatchMode.PREFIX:
                if name.startswith(needle):
                    return True
            elif needle in name:
                return True
        return False

    def __repr__(self) -> str:
        """Return a string representation of the matcher."""
        return f"DirectoryMatcher(mode={self.mode.value})"


class DirectoryFilter:
    """
    Include/exclude decision for top-level directories.

    With no patterns every directory is processed. In include mode only
    matching directories are processed, in exclude mode only non-matching
    ones.
    """

    def __init__(
        self,
        patterns: Iterable[str] = (),
        filter_mode: FilterMode = FilterMode.INCLUDE,
        match_mode: MatchMode = MatchMode.SUBSTRING,
    ) -> None:
        self.patterns = split_patterns(patterns)
        self.filter_mode = FilterMode(filter_mode)
        self.matcher = DirectoryMatcher(match_mode)

    @classmethod
    def from_options(
        cls,
        include: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None,
        match_mode: MatchMode = MatchMode.SUBSTRING,
    ) -> DirectoryFilter:
        """
        Build a filter from include/exclude option values.

        ``None`` means the option was not given. Mutual exclusion of the two
        options is validated upstream; when both are somehow given, include
        wins.

        Raises:
            ConfigurationError: If a given option holds no non-blank pattern
        """
        if include is not None:
            return cls(_require_patterns(include, "include"), FilterMode.INCLUDE, match_mode)
        if exclude is not None:
            return cls(_require_patterns(exclude, "exclude"), FilterMode.EXCLUDE, match_mode)
        return cls((), FilterMode.INCLUDE, match_mode)

    @property
    def is_active(self) -> bool:
        """Whether any pattern restricts the traversal."""
        return bool(self.patterns)

    def allows(self, directory_name: str) -> bool:
        """
        Decide whether a top-level directory should be processed.

        Args:
            directory_name: Name of a depth-1 directory

        Returns:
            True if the directory and its subtree should be flattened
        """
        if not self.patterns:
            return True
        matched = self.matcher.matches(directory_name, self.patterns)
        if self.filter_mode is FilterMode.INCLUDE:
            return matched
        return not matched

    def summary(self) -> dict[str, Any]:
        """Return the filter configuration for logging and JSON output."""
        return {
            "patterns": list(self.patterns),
            "filter_mode": self.filter_mode.value if self.patterns else None,
            "match_mode": self.matcher.mode.value,
        }

    def __repr__(self) -> str:
        """Return a string representation of the filter."""
        return (
            f"DirectoryFilter("
            f"mode={self.filter_mode.value}, "
            f"patterns={self.patterns!r}, "
            f"match={self.matcher.mode.value}"
            f")"
        )


def _require_patterns(raw: str | Iterable[str], option: str) -> list[str]:
    patterns = split_patterns(raw)
    if not patterns:
        raise create_configuration_error(
            f"{option} needs at least one non-blank pattern",
            code=ErrorCode.EMPTY_FILTER,
            config_key=option,
        )
    return patterns
