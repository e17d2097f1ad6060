"""
Collision-free naming for files moved into the root.

``ReservedNameSet`` tracks every name occupying (or claimed in) the root
during a run, and ``NameResolver`` picks the destination name for each
candidate using the ``stem_N.ext`` conflict suffix scheme.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from flattree.shared.constants import ConflictNaming

logger = logging.getLogger(__name__)


class ReservedNameSet:
    """
    Append-only set of names that are taken in the root directory.

    Names are compared after ``os.path.normcase`` so the set follows the
    platform's filename case rules. When the set is bound to a root, a name
    that already exists there is also taken, which covers case-insensitive
    file systems where ``normcase`` is the identity (macOS). The set never
    shrinks during a run: a name claimed for a move stays reserved even if
    that move fails.
    """

    def __init__(self, names: Iterable[str] = (), root: Path | None = None) -> None:
        self.root = root
        self._names: set[str] = set()
        for name in names:
            self.add(name)

    @classmethod
    def from_directory(cls, root: Path) -> ReservedNameSet:
        """
        Seed the set from every entry currently in ``root`` and bind it there.

        Files, directories and any other entry kind are all reserved, so a
        moved file can never take the name of a directory left in the root.

        Raises:
            OSError: If the root cannot be listed
        """
        with os.scandir(root) as entries:
            return cls((entry.name for entry in entries), root=root)

    @staticmethod
    def _key(name: str) -> str:
        return os.path.normcase(name)

    def add(self, name: str) -> None:
        """Reserve a name."""
        self._names.add(self._key(name))

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        if self._key(name) in self._names:
            return True
        return self.root is not None and os.path.lexists(self.root / name)

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __repr__(self) -> str:
        return f"ReservedNameSet(size={len(self._names)}, root={self.root})"


def split_name(name: str) -> tuple[str, str]:
    """
    Split a filename into stem and extension (extension includes the dot).

    The extension starts at the last dot. A leading dot (``.bashrc``) or a
    trailing one (``notes.``) does not start an extension, so ``a.tar.gz``
    splits into ``a.tar`` and ``.gz`` while ``notes.`` keeps its whole name
    as the stem.
    """
    dot = name.rfind(".")
    if dot <= 0 or dot == len(name) - 1:
        return name, ""
    return name[:dot], name[dot:]


class NameResolver:
    """
    Picks a collision-free destination name for each moved file.

    If the desired name is free it is used as is. Otherwise ``stem_1.ext``,
    ``stem_2.ext``, ... are tried until a free name is found. Numbering
    starts again at 1 on every call, so the result depends only on the
    reserved names at that moment; calling ``resolve`` once per candidate in
    traversal order makes the numbering reproducible.
    """

    def __init__(self, separator: str = ConflictNaming.SEPARATOR) -> None:
        self.separator = separator

    def candidate_name(self, desired_name: str, index: int) -> str:
        """Build the ``index``-th conflict name for ``desired_name``."""
        stem, suffix = split_name(desired_name)
        return f"{stem}{self.separator}{index}{suffix}"

    def resolve(self, desired_name: str, reserved: ReservedNameSet) -> str:
        """
        Resolve and reserve the destination name for one file.

        Args:
            desired_name: Original filename of the candidate
            reserved: Names already taken; the result is added to it

        Returns:
            The name the file will have in the root
        """
        if desired_name not in reserved:
            reserved.add(desired_name)
            return desired_name

        index = ConflictNaming.FIRST_INDEX
        while True:
            candidate = self.candidate_name(desired_name, index)
            if candidate not in reserved:
                reserved.add(candidate)
                logger.debug("Name conflict: %s resolved to %s", desired_name, candidate)
                return candidate
            index += 1
