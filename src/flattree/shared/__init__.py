"""flattree Shared Module.

This package contains constants, error handling and logging used across flattree.
"""

__all__ = ["constants", "errors", "logging"]
