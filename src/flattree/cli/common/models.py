"""
Pydantic models for CLI argument validation.

Options are validated at the command boundary so the core pipeline only
ever sees consistent values.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from flattree.config.settings import FlattenSettings
from flattree.core.matcher import DirectoryFilter, split_patterns
from flattree.core.models import MatchMode
from flattree.shared.errors import ErrorCode, create_configuration_error


class FlattenOptions(BaseModel):
    """Validated options for the flatten command."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    max_depth: int | None = Field(default=None, ge=0)
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    match_mode: MatchMode = MatchMode.SUBSTRING
    assume_yes: bool = False
    quiet: bool = False
    dry_run: bool = False
    json_output: bool = False
    verbose: int = Field(default=0, ge=0)

    @property
    def skip_confirmation(self) -> bool:
        """Quiet implies yes; dry runs never modify anything."""
        return self.assume_yes or self.quiet or self.dry_run

    def directory_filter(self) -> DirectoryFilter:
        return DirectoryFilter.from_options(
            self.include or None, self.exclude or None, self.match_mode
        )


def build_flatten_options(
    directory: Path,
    *,
    depth: int | None = None,
    include: str | list[str] | None = None,
    exclude: str | list[str] | None = None,
    prefix: bool = False,
    yes: bool = False,
    quiet: bool = False,
    dry_run: bool = False,
    json_output: bool = False,
    verbose: int = 0,
    defaults: FlattenSettings | None = None,
) -> FlattenOptions:
    """
    Build FlattenOptions from raw command-line values.

    Pattern lists are comma-split; blank entries are dropped. Values left
    unset on the command line fall back to ``defaults``; an include or
    exclude option given on the command line replaces both configured
    pattern lists.

    Raises:
        ConfigurationError: If both --include and --exclude are given, a
            given pattern option holds no pattern, or the depth is negative
    """
    if include is not None and exclude is not None:
        raise create_configuration_error(
            "Cannot use both --include and --exclude options at the same time",
            code=ErrorCode.CONFLICTING_FILTERS,
        )

    include_patterns = _given_patterns(include, "--include")
    exclude_patterns = _given_patterns(exclude, "--exclude")

    if defaults is not None:
        if include is None and exclude is None:
            include_patterns = split_patterns(defaults.include)
            exclude_patterns = split_patterns(defaults.exclude)
        if depth is None:
            depth = defaults.max_depth
        yes = yes or defaults.assume_yes
        if not prefix:
            prefix = defaults.match_mode is MatchMode.PREFIX

    if depth is not None and depth < 0:
        raise create_configuration_error(
            f"Depth must be zero or positive, got {depth}",
            code=ErrorCode.INVALID_DEPTH,
            config_key="max_depth",
        )

    return FlattenOptions(
        directory=directory,
        max_depth=depth,
        include=tuple(include_patterns),
        exclude=tuple(exclude_patterns),
        match_mode=MatchMode.PREFIX if prefix else MatchMode.SUBSTRING,
        assume_yes=yes,
        quiet=quiet,
        dry_run=dry_run,
        json_output=json_output,
        verbose=verbose,
    )


def _given_patterns(raw: str | list[str] | None, option: str) -> list[str]:
    if raw is None:
        return []
    patterns = split_patterns(raw)
    if not patterns:
        raise create_configuration_error(
            f"{option} needs at least one non-blank pattern, got {raw!r}",
            code=ErrorCode.EMPTY_FILTER,
            config_key=option.lstrip("-"),
        )
    return patterns
