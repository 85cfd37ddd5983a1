"""Shared pytest fixtures for logstage tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_logstage_logger() -> Generator[None, None, None]:
    """Undo handler changes made by the CLI's logging setup."""
    logstage_logger = logging.getLogger("logstage")
    level = logstage_logger.level
    yield
    for handler in logstage_logger.handlers[:]:
        logstage_logger.removeHandler(handler)
    logstage_logger.setLevel(level)
    logstage_logger.propagate = True


@pytest.fixture
def make_file() -> Callable[[Path, str], Path]:
    """Create a file with text content, including parent directories."""

    def _make_file(path: Path, content: str = "log line\n") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _make_file


@pytest.fixture
def local_dir(tmp_path: Path) -> Path:
    """Create an empty local log directory."""
    path = tmp_path / "local"
    path.mkdir()
    return path


@pytest.fixture
def remote_dir(tmp_path: Path) -> Path:
    """Path of the remote log directory (not created)."""
    return tmp_path / "remote"


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    """Create a parent directory for staging areas."""
    path = tmp_path / "tmp"
    path.mkdir()
    return path
