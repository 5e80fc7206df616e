"""Tests for the Commit model and commit id sequences."""

from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from commit_log.core.ids import CommitIdSequence, default_sequence, reset_commit_ids
from commit_log.models import DEFAULT_TIMESTAMP_FORMAT, Commit


def test_commit_describe_utc():
    commit = Commit(id="7", timestamp=1_000, message="hello")

    assert commit.describe(tz=timezone.utc) == "7 at 1970-01-01 at 00:00:01 UTC: hello"


def test_commit_describe_fixed_offset():
    commit = Commit(id="0", timestamp=0, message="init")
    tz = timezone(timedelta(hours=2), "CEST")

    assert commit.describe(tz=tz) == "0 at 1970-01-01 at 02:00:00 CEST: init"


def test_commit_str_uses_default_format():
    commit = Commit(id="1", timestamp=0, message="init")

    assert str(commit) == commit.describe(DEFAULT_TIMESTAMP_FORMAT)
    assert str(commit).startswith("1 at ")
    assert str(commit).endswith(": init")


def test_commit_is_immutable():
    commit = Commit(id="1", timestamp=0, message="init")

    with pytest.raises(ValidationError):
        commit.message = "changed"


def test_commit_rejects_negative_timestamp():
    with pytest.raises(ValidationError):
        Commit(id="1", timestamp=-1, message="init")


def test_created_at_is_aware():
    commit = Commit(id="1", timestamp=1_500, message="init")

    assert commit.created_at.tzinfo is not None
    assert commit.created_at.timestamp() == 1.5


class TestCommitIdSequence:
    """Test id generation."""

    def test_counts_from_zero(self):
        sequence = CommitIdSequence()
        assert [sequence.next_id() for _ in range(3)] == ["0", "1", "2"]

    def test_custom_start(self):
        sequence = CommitIdSequence(start=5)
        assert sequence.next_id() == "5"
        assert sequence.next_id() == "6"

    def test_reset(self):
        sequence = CommitIdSequence()
        sequence.next_id()
        sequence.next_id()
        sequence.reset()
        assert sequence.next_id() == "0"

    def test_reset_commit_ids_resets_default(self):
        default_sequence().next_id()
        default_sequence().next_id()

        reset_commit_ids()

        assert default_sequence().next_id() == "0"
