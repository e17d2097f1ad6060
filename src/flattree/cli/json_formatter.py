"""
JSON Output Formatter for the flattree CLI

This module provides the envelope used for machine-readable output when the
--json flag is used, for both successful runs and errors.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import orjson


def _default(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "flatten")
        data: The command's output data
        errors: List of error messages
        warnings: List of warning messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(
        ...     success=True,
        ...     command="flatten",
        ...     data={"files_found": 3, "moved": 3},
        ... )
        >>> print(output.decode())
        {
          "command": "flatten",
          "data": {
            "files_found": 3,
            "moved": 3
          },
          "errors": [],
          "success": true,
          "timestamp": "2026-01-05T10:30:00+00:00",
          "warnings": []
        }
    """
    if errors is None:
        errors = []
    if warnings is None:
        warnings = []

    # Any error turns the envelope into a failure
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
        "warnings": warnings,
    }

    return orjson.dumps(
        json_data,
        default=_default,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
    )
