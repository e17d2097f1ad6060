"""Flatten command handler for the flattree CLI.

Runs the scan, shows the plan, asks for confirmation, executes the moves and
reports the outcome as text or as a JSON envelope.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.prompt import Confirm

from flattree.cli.common.models import FlattenOptions
from flattree.cli.json_formatter import format_json_output
from flattree.cli.progress import create_progress_manager
from flattree.core.flattener import DirectoryFlattener, FlattenPlan, FlattenReport
from flattree.core.mover import MoveStatus
from flattree.shared.constants import CLIDefaults, CLIMessages

logger = logging.getLogger(__name__)


def handle_flatten_command(
    options: FlattenOptions,
    *,
    console: Console | None = None,
    err_console: Console | None = None,
) -> int:
    """Handle the flatten command.

    Args:
        options: Validated flatten options
        console: Console for regular output
        err_console: Console for warnings, errors and the JSON-mode prompt

    Returns:
        Exit code (0 for success, 1 if any file or directory failed)

    Raises:
        ConfigurationError: If the directory is missing or unreadable
    """
    console = console or Console(highlight=False, soft_wrap=True, emoji=False)
    err_console = err_console or Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)
    show_text = not (options.quiet or options.json_output)

    directory_filter = options.directory_filter()
    flattener = DirectoryFlattener(
        options.directory,
        max_depth=options.max_depth,
        directory_filter=directory_filter,
        dry_run=options.dry_run,
    )
    logger.debug("Flattening %s with %r", flattener.root, directory_filter)

    plan = flattener.scan()
    if not options.json_output:
        for error in plan.traversal_errors:
            err_console.print(f"Warning: {error.message}", style="yellow", markup=False)

    if not plan.candidates:
        report = FlattenReport(
            root=flattener.root,
            traversal_errors=list(plan.traversal_errors),
            dry_run=options.dry_run,
        )
        if options.json_output:
            _write_json(report, directory_filter.summary(), warnings=[CLIMessages.NO_FILES])
        elif show_text:
            console.print(CLIMessages.NO_FILES, markup=False)
        return _exit_code(report)

    if show_text:
        _print_plan(console, plan)

    if not options.skip_confirmation:
        prompt_console = err_console if options.json_output else console
        if not confirm_flatten(prompt_console):
            report = FlattenReport(
                root=flattener.root,
                files_found=plan.file_count,
                traversal_errors=list(plan.traversal_errors),
                cancelled=True,
            )
            if options.json_output:
                _write_json(report, directory_filter.summary(), warnings=[CLIMessages.CANCELLED])
            else:
                console.print(CLIMessages.CANCELLED, style="yellow", markup=False)
            return CLIDefaults.EXIT_SUCCESS

    # Per-move lines and a progress bar would interleave
    progress = create_progress_manager(
        disabled=not show_text or options.verbose > 0 or options.dry_run,
        console=err_console,
    )
    report = flattener.execute(
        plan,
        progress=lambda candidates: progress.track(candidates, CLIMessages.PROGRESS),
    )

    if options.json_output:
        _write_json(report, directory_filter.summary())
    else:
        _print_outcomes(console, err_console, report, options)
        if show_text:
            _print_summary(console, report)
        if report.has_errors:
            err_console.print(
                CLIMessages.ERROR_SUMMARY.format(count=len(report.errors)),
                style="red",
                markup=False,
            )

    return _exit_code(report)


def confirm_flatten(console: Console) -> bool:
    """Ask for confirmation.

    Args:
        console: Rich console the prompt is written to

    Returns:
        True if confirmed; an interrupted or closed prompt counts as no
    """
    try:
        return Confirm.ask(CLIMessages.CONFIRM_PROMPT, default=False, console=console)
    except (KeyboardInterrupt, EOFError):
        console.print()
        return False


def _print_plan(console: Console, plan: FlattenPlan) -> None:
    console.print(
        CLIMessages.FOUND_FILES.format(count=plan.file_count, root=plan.root),
        markup=False,
    )
    console.print(CLIMessages.TOP_LEVEL_HEADER, style="bold", markup=False)
    for name in plan.top_level_directories:
        console.print(CLIMessages.TOP_LEVEL_ITEM.format(name=name), markup=False)


def _print_outcomes(
    console: Console,
    err_console: Console,
    report: FlattenReport,
    options: FlattenOptions,
) -> None:
    """Print per-file lines: failures always, moves when asked for."""
    show_moves = not options.quiet and (options.verbose > 0 or options.dry_run)
    for outcome in report.outcomes:
        fields = {
            "source": outcome.source_path,
            "destination": outcome.destination_path,
        }
        if outcome.status is MoveStatus.MOVED and show_moves:
            console.print(CLIMessages.MOVED.format(**fields), markup=False)
        elif outcome.status is MoveStatus.SKIPPED and show_moves:
            console.print(CLIMessages.WOULD_MOVE.format(**fields), markup=False)
        elif outcome.status is MoveStatus.PARTIAL:
            err_console.print(CLIMessages.PARTIAL.format(**fields), style="yellow", markup=False)
        elif outcome.status is MoveStatus.FAILED:
            err_console.print(
                CLIMessages.MOVE_FAILED.format(source=outcome.source_path, reason=outcome.reason),
                style="red",
                markup=False,
            )

    for error in report.cleanup.errors:
        err_console.print(f"Warning: {error.message}", style="yellow", markup=False)


def _print_summary(console: Console, report: FlattenReport) -> None:
    if report.dry_run:
        console.print(
            CLIMessages.DRY_RUN_SUMMARY.format(count=len(report.planned)),
            style="cyan",
            markup=False,
        )
    else:
        console.print(
            CLIMessages.SUMMARY.format(count=len(report.moved)),
            style="green",
            markup=False,
        )
    if report.renamed_count:
        console.print(
            CLIMessages.RENAMED_SUMMARY.format(count=report.renamed_count),
            markup=False,
        )
    if report.removed_directories:
        console.print(
            CLIMessages.REMOVED_DIRS_SUMMARY.format(count=len(report.removed_directories)),
            markup=False,
        )


def _write_json(
    report: FlattenReport,
    filter_summary: dict[str, object],
    warnings: list[str] | None = None,
) -> None:
    data = report.to_dict()
    data["filter"] = filter_summary
    output = format_json_output(
        success=not report.has_errors,
        command=CLIDefaults.COMMAND,
        data=data,
        errors=[error.message for error in report.errors],
        warnings=warnings,
    )
    sys.stdout.buffer.write(output)
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()


def _exit_code(report: FlattenReport) -> int:
    return CLIDefaults.EXIT_ERROR if report.has_errors else CLIDefaults.EXIT_SUCCESS
