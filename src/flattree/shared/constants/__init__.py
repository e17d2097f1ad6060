"""
flattree Constants Module

Centralized constants for flattree. Magic values used by more than one
module live here so the CLI, configuration and core agree on them.
"""

from .cli import CLIDefaults, CLIHelp, CLIMessages, CLIOptions
from .core import Application, ConflictNaming, Logging

__all__ = [
    "Application",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "CLIOptions",
    "ConflictNaming",
    "Logging",
]
