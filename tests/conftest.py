"""
Pytest configuration and shared fixtures for flattree tests.

This module provides common fixtures and configuration that can be used
across all test modules in the project.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Generator, Iterable
from pathlib import Path

import pytest

from flattree.cli.common.context import clear_cli_context
from flattree.shared.constants import Application, Logging


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep FLATTREE_ variables and logger state from leaking between tests."""
    for key in list(os.environ):
        if key.startswith(Application.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)

    yield

    clear_cli_context()
    logger = logging.getLogger(Logging.ROOT_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Resolved path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path).resolve()


@pytest.fixture
def make_tree() -> Callable[[Path, Iterable[str]], list[Path]]:
    """Return a helper that creates files (and their parents) below a root.

    Each relative path becomes a file whose content is its own path, so
    tests can tell moved files apart after renames. Paths ending in "/"
    create empty directories.
    """

    def _make_tree(root: Path, paths: Iterable[str]) -> list[Path]:
        created = []
        for relative in paths:
            target = root / relative
            if relative.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(relative, encoding="utf-8")
            created.append(target)
        return created

    return _make_tree
