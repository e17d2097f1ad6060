"""
flattree - flatten a directory tree into its root.

Every file below a directory is moved into that directory, name conflicts
are resolved with numeric suffixes and the subdirectories left empty are
removed.
"""

from flattree.shared.constants import Application

__version__ = Application.VERSION

__all__ = ["__version__"]
