"""
CLI Configuration Constants

Option names, help texts, defaults and message templates for the
command-line interface.
"""

from typing import Literal

from .core import Application


class CLIOptions:
    """CLI option names and flags."""

    # Common options
    VERBOSE = "--verbose"
    VERBOSE_SHORT = "-v"
    LOG_LEVEL = "--log-level"
    LOG_FILE = "--log-file"
    CONFIG = "--config"
    JSON = "--json"
    VERSION = "--version"

    # Flatten options
    DEPTH = "--depth"
    DEPTH_SHORT = "-n"
    YES = "--yes"
    YES_SHORT = "-y"
    QUIET = "--quiet"
    QUIET_SHORT = "-q"
    INCLUDE = "--include"
    INCLUDE_SHORT = "-i"
    EXCLUDE = "--exclude"
    EXCLUDE_SHORT = "-e"
    PREFIX = "--prefix"
    DRY_RUN = "--dry-run"


class CLIHelp:
    """CLI help text and descriptions."""

    VERSION_HELP = "Print version information and exit."
    VERSION_TEXT = "flattree v{version}"

    APP_NAME = Application.NAME
    APP_DESCRIPTION = "Flatten subdirectories by moving all files to the root directory"
    APP_STYLE: Literal["rich"] = "rich"

    DIRECTORY_HELP = "Directory to flatten"
    DEPTH_HELP = "Maximum depth to traverse (default: unlimited)"
    YES_HELP = "Skip confirmation prompt"
    QUIET_HELP = "Suppress non-error output (implies --yes)"
    INCLUDE_HELP = (
        "Include only top-level directories that match these patterns (comma-separated)"
    )
    EXCLUDE_HELP = "Exclude top-level directories that match these patterns (comma-separated)"
    PREFIX_HELP = "Match patterns against the start of directory names instead of anywhere"
    DRY_RUN_HELP = "Show what would be moved without touching any file"
    JSON_HELP = "Output results in JSON format"
    VERBOSE_HELP = "Increase verbosity (print every move)"
    LOG_LEVEL_HELP = "Logging level"
    LOG_FILE_HELP = "Write JSON log lines to this file"
    CONFIG_HELP = "TOML settings file"


class CLIDefaults:
    """CLI default values."""

    VERSION = Application.VERSION
    COMMAND = "flatten"
    PATTERN_DELIMITER = ","

    DEFAULT_YES = False
    DEFAULT_QUIET = False
    DEFAULT_JSON = False
    DEFAULT_DRY_RUN = False
    DEFAULT_VERBOSE = 0

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130


class CLIMessages:
    """CLI message templates."""

    FOUND_FILES = "Found {count} file(s) to move to '{root}'"
    TOP_LEVEL_HEADER = "Top-level directories to be flattened:"
    TOP_LEVEL_ITEM = "  - {name}"
    NO_FILES = "No files found in subdirectories to flatten."
    CONFIRM_PROMPT = "Proceed with flatten?"
    CANCELLED = "Flatten cancelled."
    MOVED = "Moved: {source} -> {destination}"
    WOULD_MOVE = "Would move: {source} -> {destination}"
    PARTIAL = "Copied but could not remove source: {source} -> {destination}"
    MOVE_FAILED = "Error moving {source}: {reason}"
    SUMMARY = "Successfully moved {count} file(s)"
    DRY_RUN_SUMMARY = "Dry run: {count} file(s) would be moved"
    RENAMED_SUMMARY = "{count} file(s) renamed to avoid conflicts"
    REMOVED_DIRS_SUMMARY = "Removed {count} empty director(y/ies)"
    ERROR_SUMMARY = "{count} error(s) occurred; see messages above"
    PROGRESS = "Flattening..."
