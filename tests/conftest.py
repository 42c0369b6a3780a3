"""
Pytest configuration and shared fixtures for confmgr tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from confmgr.logging import SilentLogger, set_global_logger


class RecordingLogger:
    """Logger that records every message as (level, prefix, message)."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, str]] = []

    def verbose(self, prefix: str, message: str) -> None:
        self.records.append(("verbose", prefix, message))

    def debug(self, prefix: str, message: str) -> None:
        self.records.append(("debug", prefix, message))

    def warning(self, prefix: str, message: str) -> None:
        self.records.append(("warning", prefix, message))

    def error(self, prefix: str, message: str) -> None:
        self.records.append(("error", prefix, message))

    @property
    def errors(self) -> list[str]:
        return [message for level, _, message in self.records if level == "error"]


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Restore the silent global logger after each test (the CLI replaces it)."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Provide a logger that captures messages for assertions."""
    return RecordingLogger()


@pytest.fixture
def sample_config_text() -> str:
    """
    Provide a representative configuration file.

    Contains comments, a section header, quoted values and inline comments.
    """
    return """\
###################################
# WORLDSERVER SETTINGS
###################################

[worldserver]

#    DataDir
#        Description: Data directory setting.
DataDir = "."

WorldServerPort = 8085      # default port
Console.Enable = 1
Rate.XP.Kill = 1.5
MOTD = "Welcome to the server"
"""


@pytest.fixture
def create_config_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary configuration files.

    Usage:
        path = create_config_file("world.conf", "Key = Value\\n")
    """

    def _create(filename: str, content: str) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _create
