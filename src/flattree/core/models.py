"""
Data models for flattree core operations.

This module defines the values that flow through the flatten pipeline:
the directories the walker enters and the files it hands to the mover.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class FilterMode(str, Enum):
    """How top-level directory patterns are applied."""

    INCLUDE = "include"
    EXCLUDE = "exclude"


class MatchMode(str, Enum):
    """How a single pattern is compared with a directory name."""

    SUBSTRING = "substring"
    PREFIX = "prefix"


class DirectoryNode(BaseModel):
    """
    A directory entered during traversal.

    The root itself has depth 0 and is never represented by a node;
    its immediate children have depth 1.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(
        ...,
        description="Absolute path of the directory",
    )
    depth: int = Field(
        ...,
        ge=1,
        description="Number of directory levels below the root",
    )

    @property
    def is_top_level(self) -> bool:
        """Whether this directory sits directly under the root."""
        return self.depth == 1

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return f"{self.path} (depth {self.depth})"


class FileCandidate(BaseModel):
    """
    A file found strictly below the root that will be moved into it.

    ``depth`` is the depth of the containing directory and ``top_level``
    is the name of its depth-1 ancestor.
    """

    model_config = ConfigDict(frozen=True)

    source_path: Path = Field(
        ...,
        description="Current path of the file",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Original filename",
    )
    depth: int = Field(
        ...,
        ge=1,
        description="Depth of the directory containing the file",
    )
    top_level: str = Field(
        ...,
        description="Name of the top-level directory the file lives under",
    )

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return f"FileCandidate: {self.source_path}"
