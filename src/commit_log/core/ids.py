"""Commit id generation shared across commit logs."""


class CommitIdSequence:
    """Hands out commit ids as decimal strings starting at ``"0"``.

    Every log created without an explicit sequence shares the process-wide
    default one, so ids are unique across logs.
    """

    def __init__(self, start: int = 0):
        self._next = start

    def next_id(self) -> str:
        """Return the next id and advance the counter."""
        commit_id = str(self._next)
        self._next += 1
        return commit_id

    def reset(self) -> None:
        """Start counting from zero again. Only meant for tests."""
        self._next = 0


_default_sequence = CommitIdSequence()


def default_sequence() -> CommitIdSequence:
    """Get the process-wide id sequence."""
    return _default_sequence


def reset_commit_ids() -> None:
    """Reset the process-wide id sequence to zero.

    Intended for deterministic test setups. Not safe while other threads are
    creating commits.
    """
    _default_sequence.reset()
