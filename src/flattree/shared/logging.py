"""
Structured logging for flattree.

This module configures the ``flattree`` logger namespace and provides
helpers that record errors together with their structured context.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from flattree.shared.constants import Logging
from flattree.shared.errors import ErrorContext, FlattreeError


class StructuredFormatter(logging.Formatter):
    """
    Formatter that renders each record as one JSON object.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Log record

        Returns:
            JSON encoded log line
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created,
                tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "error_code"):
            log_entry["error_code"] = record.error_code

        if hasattr(record, "context"):
            log_entry["context"] = record.context

        if hasattr(record, "operation"):
            log_entry["operation"] = record.operation

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def _create_rich_console() -> Console:
    """
    Create the Rich console used for log output.

    Returns:
        Console writing to stderr with the flattree log theme
    """
    custom_theme = Theme(
        {
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "logging.level.critical": "red bold reverse",
            "log.time": "dim cyan",
            "log.message": "white",
            "log.path": "dim blue",
        }
    )
    return Console(theme=custom_theme, stderr=True)


def setup_structured_logger(
    name: str = Logging.ROOT_LOGGER,
    level: str = Logging.DEFAULT_LEVEL,
    log_file: str | Path | None = None,
    *,
    use_rich_console: bool = True,
    console_output: bool = True,
    max_bytes: int = Logging.MAX_BYTES,
    backup_count: int = Logging.BACKUP_COUNT,
) -> logging.Logger:
    """
    Configure the flattree logger.

    Args:
        name: Logger name (default: "flattree")
        level: Log level name (default: "INFO")
        log_file: Optional log file path; written as rotating JSON lines
        use_rich_console: Use the Rich console handler instead of JSON lines
        console_output: Attach a console handler at all
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated log files to keep

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Reconfiguring replaces handlers instead of stacking them
    if logger.handlers:
        for existing in list(logger.handlers):
            existing.close()
        logger.handlers.clear()

    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    if console_output:
        if use_rich_console:
            handler: logging.Handler = RichHandler(
                console=_create_rich_console(),
                show_time=True,
                show_level=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
                tracebacks_show_locals=False,
                log_time_format="[%H:%M:%S]",
            )
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
        handler.setLevel(log_level)
        logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.propagate = False

    return logger


def log_operation_error(
    logger: logging.Logger,
    error: FlattreeError,
    operation: str | None = None,
    additional_context: (dict[str, Any] | ErrorContext) | None = None,
    *,
    level: int = logging.ERROR,
) -> None:
    """
    Record a FlattreeError with its structured context.

    Args:
        logger: Logger instance
        error: Error to record
        operation: Operation name, defaults to the error context's operation
        additional_context: Extra context merged into the record
        level: Log level, recoverable errors are usually logged as WARNING
    """
    context_dict: dict[str, Any] = dict(error.context.safe_dict())

    if additional_context:
        if isinstance(additional_context, ErrorContext):
            context_dict.update(additional_context.safe_dict())
        else:
            context_dict.update(additional_context)

    logger.log(
        level,
        error.message,
        extra={
            "error_code": error.code.value,
            "context": context_dict,
            "operation": operation or error.context.operation,
        },
    )
