"""Shared CLI helpers: invocation context, option models and error handling."""

from .context import CliContext, LogLevel, clear_cli_context, get_cli_context, set_cli_context
from .error_handler import handle_cli_error
from .models import FlattenOptions, build_flatten_options

__all__ = [
    "CliContext",
    "FlattenOptions",
    "LogLevel",
    "build_flatten_options",
    "clear_cli_context",
    "get_cli_context",
    "handle_cli_error",
    "set_cli_context",
]
