"""flattree Error Handling Module

This module defines the error handling system for flattree, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Fatal vs. recoverable: ApplicationError aborts a run before traversal,
  InfrastructureError subclasses are recorded per file or directory
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for flattree.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONFLICTING_FILTERS = "CONFLICTING_FILTERS"
    EMPTY_FILTER = "EMPTY_FILTER"
    INVALID_DEPTH = "INVALID_DEPTH"
    INVALID_CONFIG = "INVALID_CONFIG"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    DIRECTORY_NOT_FOUND = "DIRECTORY_NOT_FOUND"
    NOT_A_DIRECTORY = "NOT_A_DIRECTORY"

    # Traversal Errors
    TRAVERSAL_ERROR = "TRAVERSAL_ERROR"
    DIRECTORY_READ_DENIED = "DIRECTORY_READ_DENIED"

    # Move Errors
    MOVE_FAILED = "MOVE_FAILED"
    DESTINATION_EXISTS = "DESTINATION_EXISTS"
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
    PARTIAL_MOVE = "PARTIAL_MOVE"

    # Cleanup Errors
    CLEANUP_FAILED = "CLEANUP_FAILED"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_COMMAND_INTERRUPTED = "CLI_COMMAND_INTERRUPTED"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path and Enum values to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are kept in additional_data
    so the context can always be serialised for logs and JSON output.

    Attributes:
        file_path: Optional file or directory path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Coerce additional_data to primitives."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict; additional_data is never None."""
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = self.additional_data or {}
        return data


class FlattreeError(Exception):
    """Base exception class for all flattree errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize FlattreeError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging and JSON output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ApplicationError(FlattreeError):
    """Application-level errors.

    These errors occur at the application layer, typically related to
    configuration or command handling. They are fatal for a run.
    """


class ConfigurationError(ApplicationError):
    """Invalid run configuration, raised before any traversal starts.

    Examples:
    - Both include and exclude patterns given
    - Target directory missing or not a directory
    - Negative depth limit
    """


class InfrastructureError(FlattreeError):
    """Filesystem errors that are recorded and skipped rather than raised."""


class TraversalError(InfrastructureError):
    """A subdirectory could not be read; its subtree is skipped."""


class MoveError(InfrastructureError):
    """A single file could not be relocated into the root."""


class CleanupError(InfrastructureError):
    """A visited directory could not be removed after the moves."""


class CliError(ApplicationError):
    """CLI-specific error with enhanced context for command-line operations."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def create_configuration_error(
    message: str,
    code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
    path: str | Path | None = None,
    config_key: str | None = None,
    original_error: Exception | None = None,
) -> ConfigurationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        file_path=str(path) if path is not None else None,
        operation="validate_configuration",
        additional_data=additional_data,
    )
    return ConfigurationError(code, message, context, original_error)


def create_traversal_error(
    directory: Path,
    depth: int,
    original_error: Exception | None = None,
) -> TraversalError:
    """Create a traversal error for an unreadable directory."""
    code = (
        ErrorCode.DIRECTORY_READ_DENIED
        if isinstance(original_error, PermissionError)
        else ErrorCode.TRAVERSAL_ERROR
    )
    context = ErrorContext(
        file_path=str(directory),
        operation="walk",
        additional_data={"depth": depth},
    )
    return TraversalError(
        code,
        f"Cannot read directory {directory}: {original_error}",
        context,
        original_error,
    )


def create_move_error(
    source: Path,
    destination: Path,
    message: str,
    code: ErrorCode = ErrorCode.MOVE_FAILED,
    original_error: Exception | None = None,
) -> MoveError:
    """Create a move error carrying both paths."""
    context = ErrorContext(
        file_path=str(source),
        operation="move",
        additional_data={"destination": destination},
    )
    return MoveError(code, message, context, original_error)


def create_cleanup_error(
    directory: Path,
    original_error: Exception | None = None,
) -> CleanupError:
    """Create a cleanup error for a directory that could not be removed."""
    context = ErrorContext(file_path=str(directory), operation="prune")
    return CleanupError(
        ErrorCode.CLEANUP_FAILED,
        f"Cannot remove directory {directory}: {original_error}",
        context,
        original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return CliError(
        code,
        message,
        context,
        original_error,
        command,
        exit_code,
    )
