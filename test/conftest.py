"""Shared fixtures for watchdog tests."""

from unittest.mock import MagicMock

import pytest


class FakeClock:
    """Wall clock whose sleep advances time instantly and records each sleep."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_tmux():
    tmux = MagicMock()
    tmux.session_exists.return_value = True
    return tmux


@pytest.fixture
def task_dir(tmp_path):
    path = tmp_path / "task"
    path.mkdir()
    return path
