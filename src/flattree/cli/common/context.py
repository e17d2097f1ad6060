"""
CLI Context Management Module

This module keeps the options shared by the whole command invocation in a
Pydantic model stored in a ContextVar, so helpers can read them without
threading every flag through every call.

The context includes:
- verbose: Verbosity level (int, count-based)
- log_level: Logging level (enum-based, optional)
- json_output: JSON output mode (bool)
- quiet: Suppress non-error output (bool)
"""

from __future__ import annotations

import contextvars
from enum import Enum

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """
    CLI context model for managing global state.

    Attributes:
        verbose: Verbosity level (0 = normal, 1 = print every move, 2+ = debug logs)
        log_level: Explicit logging level, None to use the configured one
        json_output: Whether to output in JSON format
        quiet: Whether non-error output is suppressed
    """

    verbose: int = Field(
        default=0,
        ge=0,
        description="Verbosity level",
    )

    log_level: LogLevel | None = Field(
        default=None,
        description="Explicit logging level",
    )

    json_output: bool = Field(
        default=False,
        description="Whether to output in JSON format",
    )

    quiet: bool = Field(
        default=False,
        description="Suppress non-error output",
    )

    def get_effective_log_level(self, configured: str = LogLevel.WARNING.value) -> str:
        """
        Get the effective log level.

        ``-vv`` forces DEBUG, ``--quiet`` raises the floor to ERROR, and an
        explicit ``--log-level`` wins over the configured level.

        Args:
            configured: Level from the settings

        Returns:
            str: Effective log level
        """
        if self.verbose >= 2:
            return LogLevel.DEBUG.value
        if self.log_level is not None:
            return self.log_level.value
        if self.quiet:
            return LogLevel.ERROR.value
        return configured.upper()


# Global context variable for thread-safe access
cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """
    Get the current CLI context.

    Returns:
        CliContext: Current CLI context

    Raises:
        RuntimeError: If context has not been initialized
    """
    context = cli_context_var.get()
    if context is None:
        raise RuntimeError(
            "CLI context has not been initialized. "
            "Make sure the command has parsed its options before accessing context.",
        )
    return context


def set_cli_context(context: CliContext) -> None:
    """
    Set the current CLI context.

    Args:
        context: The CLI context to set
    """
    cli_context_var.set(context)


def clear_cli_context() -> None:
    """Clear the current CLI context."""
    cli_context_var.set(None)
