"""
flattree Typer CLI Application

Single-command Typer application: ``flattree DIRECTORY [OPTIONS]`` moves
every file below DIRECTORY into DIRECTORY and removes the subdirectories
left empty.
"""

from __future__ import annotations

from pathlib import Path

import typer

from flattree.cli.common.context import (
    CliContext,
    LogLevel,
    clear_cli_context,
    get_cli_context,
    set_cli_context,
)
from flattree.cli.common.error_handler import handle_cli_error
from flattree.cli.common.models import build_flatten_options
from flattree.cli.flatten_handler import handle_flatten_command
from flattree.config.settings import Settings, load_settings
from flattree.shared.constants import CLIDefaults, CLIHelp, CLIOptions
from flattree.shared.logging import setup_structured_logger

# Version information
__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def configure_logging(
    settings: Settings | None = None,
    log_file: Path | None = None,
) -> None:
    """Configure the flattree logger from the current CLI context and settings."""
    context = get_cli_context()
    if settings is None:
        setup_structured_logger(
            level=context.get_effective_log_level(),
            log_file=log_file,
        )
        return

    logging_settings = settings.logging
    setup_structured_logger(
        level=context.get_effective_log_level(logging_settings.level),
        log_file=log_file or logging_settings.file,
        console_output=logging_settings.console_output,
        max_bytes=logging_settings.max_bytes,
        backup_count=logging_settings.backup_count,
    )


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
)


@app.command(CLIDefaults.COMMAND, no_args_is_help=True)
def flatten_command(
    directory: Path = typer.Argument(
        ...,
        help=CLIHelp.DIRECTORY_HELP,
        show_default=False,
    ),
    depth: int | None = typer.Option(
        None,
        CLIOptions.DEPTH,
        CLIOptions.DEPTH_SHORT,
        help=CLIHelp.DEPTH_HELP,
        min=0,
    ),
    yes: bool = typer.Option(
        CLIDefaults.DEFAULT_YES,
        CLIOptions.YES,
        CLIOptions.YES_SHORT,
        help=CLIHelp.YES_HELP,
    ),
    quiet: bool = typer.Option(
        CLIDefaults.DEFAULT_QUIET,
        CLIOptions.QUIET,
        CLIOptions.QUIET_SHORT,
        help=CLIHelp.QUIET_HELP,
    ),
    include: str | None = typer.Option(
        None,
        CLIOptions.INCLUDE,
        CLIOptions.INCLUDE_SHORT,
        help=CLIHelp.INCLUDE_HELP,
    ),
    exclude: str | None = typer.Option(
        None,
        CLIOptions.EXCLUDE,
        CLIOptions.EXCLUDE_SHORT,
        help=CLIHelp.EXCLUDE_HELP,
    ),
    prefix: bool = typer.Option(
        False,
        CLIOptions.PREFIX,
        help=CLIHelp.PREFIX_HELP,
    ),
    dry_run: bool = typer.Option(
        CLIDefaults.DEFAULT_DRY_RUN,
        CLIOptions.DRY_RUN,
        help=CLIHelp.DRY_RUN_HELP,
    ),
    json_output: bool = typer.Option(
        CLIDefaults.DEFAULT_JSON,
        CLIOptions.JSON,
        help=CLIHelp.JSON_HELP,
    ),
    verbose: int = typer.Option(
        CLIDefaults.DEFAULT_VERBOSE,
        CLIOptions.VERBOSE,
        CLIOptions.VERBOSE_SHORT,
        count=True,
        help=CLIHelp.VERBOSE_HELP,
    ),
    log_level: LogLevel | None = typer.Option(
        None,
        CLIOptions.LOG_LEVEL,
        case_sensitive=False,
        help=CLIHelp.LOG_LEVEL_HELP,
    ),
    log_file: Path | None = typer.Option(
        None,
        CLIOptions.LOG_FILE,
        help=CLIHelp.LOG_FILE_HELP,
    ),
    config: Path | None = typer.Option(
        None,
        CLIOptions.CONFIG,
        help=CLIHelp.CONFIG_HELP,
    ),
    version: bool = typer.Option(  # noqa: ARG001
        False,
        CLIOptions.VERSION,
        callback=version_callback,
        is_eager=True,
        help=CLIHelp.VERSION_HELP,
    ),
) -> None:
    """Flatten subdirectories by moving all files to the root directory.

    Files already in DIRECTORY are never touched. A file whose name is
    taken gets a numeric suffix (report.pdf becomes report_1.pdf) instead
    of overwriting anything. Directories left empty are removed.
    """
    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
        quiet=quiet,
    )
    set_cli_context(context)

    try:
        configure_logging(log_file=log_file)
        settings = load_settings(config)
        configure_logging(settings, log_file)

        options = build_flatten_options(
            directory,
            depth=depth,
            include=include,
            exclude=exclude,
            prefix=prefix,
            yes=yes,
            quiet=quiet,
            dry_run=dry_run,
            json_output=json_output,
            verbose=verbose,
            defaults=settings.flatten,
        )
        exit_code = handle_flatten_command(options)
    except (Exception, KeyboardInterrupt) as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, CLIDefaults.COMMAND, json_output=json_output)
    finally:
        clear_cli_context()

    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)


def main() -> None:
    """Console script entry point."""
    app()
