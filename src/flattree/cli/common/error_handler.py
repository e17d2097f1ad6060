"""
CLI Error Handling Utilities

This module maps exceptions raised while running a command to CliError
instances with an exit code, logs them with structured context and writes
the user-facing message to stderr (or a JSON envelope to stdout).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from flattree.cli.json_formatter import format_json_output
from flattree.shared.constants import CLIDefaults
from flattree.shared.errors import (
    ApplicationError,
    CliError,
    ErrorCode,
    InfrastructureError,
    create_cli_error,
)

logger = logging.getLogger(__name__)


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)

    return cli_error.exit_code


def _create_error_context(
    error: BaseException,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    """Create structured error context for logging."""
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    # Configuration problems are reported with their own message, unprefixed
    if isinstance(error, ApplicationError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=error.message,
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, InfrastructureError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Infrastructure error: {error.message}",
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
            code=ErrorCode.CLI_COMMAND_INTERRUPTED,
        )

    if isinstance(error, OSError):
        error_context["error_category"] = "file_system"
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            original_error=error,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context."""
    if isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, ApplicationError):
        # Expected user errors need no traceback
        logger.debug(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"error_code": cli_error.code.value, "context": error_context},
        )
    else:
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            exc_info=error,
            extra={"error_code": cli_error.code.value, "context": error_context},
        )


def _output_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if json_output:
        _output_json_error(cli_error, error, command, error_context)
    else:
        sys.stderr.write(f"Error: {cli_error.message}\n")
        sys.stderr.flush()


def _output_json_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> None:
    """Output error in JSON format, falling back to plain stderr."""
    try:
        error_output = format_json_output(
            success=False,
            command=command,
            errors=[cli_error.message],
            data={
                "error_code": cli_error.code.value,
                "error_type": type(error).__name__,
                "exit_code": cli_error.exit_code,
                "context": error_context,
            },
        )
        sys.stdout.buffer.write(error_output)
        sys.stdout.buffer.write(b"\n")
        sys.stdout.buffer.flush()
    except (OSError, TypeError) as output_error:
        logger.warning(
            "Failed to write JSON error output: %s",
            output_error,
            extra={"error_code": ErrorCode.CLI_OUTPUT_ERROR.value},
        )
        sys.stderr.write(f"Error: {cli_error.message}\n")
