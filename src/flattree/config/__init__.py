"""flattree Configuration Module

Settings models and the loader used by the CLI.
"""

from __future__ import annotations

from .settings import FlattenSettings, LoggingSettings, Settings, load_settings

__all__ = [
    "FlattenSettings",
    "LoggingSettings",
    "Settings",
    "load_settings",
]
