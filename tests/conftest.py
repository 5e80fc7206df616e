"""Shared fixtures for commit log tests."""

import pytest

from commit_log.core.ids import reset_commit_ids
from commit_log.settings import CommitLogSettings


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1) -> int:
        self.now += ms
        return self.now

    def set(self, ms: int) -> None:
        self.now = ms


@pytest.fixture(autouse=True)
def fresh_commit_ids():
    """Start every test with commit ids counting from zero."""
    reset_commit_ids()
    yield
    reset_commit_ids()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def utc_settings():
    return CommitLogSettings(timezone="UTC")
