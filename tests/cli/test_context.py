"""
Tests for the CLI context model.
"""

import pytest

from flattree.cli.common.context import (
    CliContext,
    LogLevel,
    clear_cli_context,
    get_cli_context,
    set_cli_context,
)


class TestCliContext:
    """Test CliContext behaviour."""

    def test_defaults(self):
        """Test default values."""
        context = CliContext()

        assert context.verbose == 0
        assert context.log_level is None
        assert context.json_output is False
        assert context.quiet is False

    def test_effective_log_level_uses_configured(self):
        """Test that the configured level applies when nothing overrides it."""
        assert CliContext().get_effective_log_level("info") == "INFO"

    def test_explicit_log_level_wins(self):
        """Test that --log-level overrides the configured level."""
        context = CliContext(log_level=LogLevel.ERROR)

        assert context.get_effective_log_level("DEBUG") == "ERROR"

    def test_double_verbose_forces_debug(self):
        """Test that -vv turns on debug logging."""
        context = CliContext(verbose=2, log_level=LogLevel.ERROR)

        assert context.get_effective_log_level() == "DEBUG"

    def test_single_verbose_keeps_level(self):
        """Test that -v alone only affects per-move output."""
        context = CliContext(verbose=1)

        assert context.get_effective_log_level() == "WARNING"

    def test_quiet_raises_floor(self):
        """Test that quiet mode only logs errors."""
        context = CliContext(quiet=True)

        assert context.get_effective_log_level() == "ERROR"


class TestContextVar:
    """Test context storage."""

    def test_set_get_clear(self):
        """Test the context lifecycle."""
        context = CliContext(verbose=1)
        set_cli_context(context)

        assert get_cli_context() is context

        clear_cli_context()
        with pytest.raises(RuntimeError):
            get_cli_context()
