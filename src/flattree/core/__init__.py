"""
Core components for flattree.

This package contains the flatten pipeline: matching, walking, name
resolution, moving and cleanup, plus the orchestrator that sequences them.
"""

from .cleanup import DirectoryPruner, PruneResult
from .flattener import DirectoryFlattener, FlattenPlan, FlattenReport, validate_root
from .matcher import DirectoryFilter, DirectoryMatcher, split_patterns
from .models import DirectoryNode, FileCandidate, FilterMode, MatchMode
from .mover import FileMover, MoveOutcome, MoveStatus
from .name_resolver import NameResolver, ReservedNameSet
from .walker import DirectoryWalker

__all__ = [
    "DirectoryFilter",
    "DirectoryFlattener",
    "DirectoryMatcher",
    "DirectoryNode",
    "DirectoryPruner",
    "DirectoryWalker",
    "FileCandidate",
    "FileMover",
    "FilterMode",
    "FlattenPlan",
    "FlattenReport",
    "MatchMode",
    "MoveOutcome",
    "MoveStatus",
    "NameResolver",
    "PruneResult",
    "ReservedNameSet",
    "split_patterns",
    "validate_root",
]
