"""In-memory commit log: a named, singly linked history of commits."""

import itertools
import logging
import time
from typing import Callable, Dict, Iterator, Optional

from commit_log.core.ids import CommitIdSequence, default_sequence
from commit_log.exceptions import InvalidArgumentError
from commit_log.models.commit import Commit
from commit_log.settings import DEFAULT_SETTINGS, CommitLogSettings

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class CommitLog:
    """A named history of commits ordered from most recent to oldest.

    Every commit held by the log sits in a node identified by a private key
    that only this log hands out. The chain is a table mapping each node to
    the node of the commit made before it, so repeated commit ids never
    share a node. Nodes are only reachable through the log that owns them.
    """

    def __init__(
        self,
        name: str,
        *,
        id_sequence: Optional[CommitIdSequence] = None,
        clock: Optional[Clock] = None,
        settings: Optional[CommitLogSettings] = None,
    ):
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("Repository name must be a non-empty string")

        self._name = name
        self._ids = id_sequence if id_sequence is not None else default_sequence()
        self._clock = clock if clock is not None else wall_clock_ms
        self._settings = settings if settings is not None else DEFAULT_SETTINGS

        self._node_keys = itertools.count()
        self._commits: Dict[int, Commit] = {}
        self._previous: Dict[int, Optional[int]] = {}
        self._head: Optional[int] = None
        self._size = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def head(self) -> Optional[str]:
        """Id of the most recent commit, or None when the log is empty."""
        if self._head is None:
            return None
        return self._commits[self._head].id

    @property
    def size(self) -> int:
        return self._size

    @property
    def settings(self) -> CommitLogSettings:
        return self._settings

    def get_repo_head(self) -> Optional[str]:
        return self.head

    def get_repo_size(self) -> int:
        return self.size

    def describe(self) -> str:
        """Summarize the log and its current head."""
        if self._head is None:
            return f"{self._name} - No commits"
        return f"{self._name} - Current head: {self._describe_commit(self._head)}"

    def contains(self, target_id: str) -> bool:
        """Check whether a commit with ``target_id`` is reachable from head."""
        return self.get_commit(target_id) is not None

    def get_commit(self, target_id: str) -> Optional[Commit]:
        """Get the newest commit with ``target_id``, or None if there is none."""
        if target_id is None:
            raise InvalidArgumentError("Commit id must not be None")
        return next(
            (commit for commit in self.iter_commits() if commit.id == target_id),
            None,
        )

    def get_history(self, n: int) -> str:
        """Describe up to ``n`` of the most recent commits, newest first.

        Each description is terminated by a newline. An empty log yields an
        empty string.
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidArgumentError("History length must be an integer")
        if n <= 0:
            raise InvalidArgumentError(f"History length must be positive, got {n}")

        lines = []
        for node in self._iter_nodes():
            if len(lines) == n:
                break
            lines.append(self._describe_commit(node) + "\n")
        return "".join(lines)

    def commit(self, message: str) -> str:
        """Record a new commit on top of the current head and return its id."""
        if message is None:
            raise InvalidArgumentError("Commit message must not be None")
        if not isinstance(message, str):
            raise InvalidArgumentError("Commit message must be a string")

        new_commit = Commit(
            id=self._ids.next_id(),
            timestamp=self._clock(),
            message=message,
        )
        node = next(self._node_keys)
        self._commits[node] = new_commit
        self._previous[node] = self._head
        self._head = node
        self._size += 1

        logger.debug("%s: committed %s (size=%d)", self._name, new_commit.id, self._size)
        return new_commit.id

    def drop(self, target_id: str) -> bool:
        """Remove the newest commit with ``target_id`` from the chain.

        Returns True when a commit was removed and False when no commit in
        this log has that id, in which case nothing changes.
        """
        if target_id is None:
            raise InvalidArgumentError("Commit id must not be None")

        if self._head is not None and self._commits[self._head].id == target_id:
            self._head = self._unlink(self._head)
            logger.debug("%s: dropped head %s", self._name, target_id)
            return True

        current = self._head
        while current is not None and self._previous[current] is not None:
            older = self._previous[current]
            if self._commits[older].id == target_id:
                self._previous[current] = self._unlink(older)
                logger.debug("%s: dropped %s", self._name, target_id)
                return True
            current = older

        logger.debug("%s: nothing to drop for %s", self._name, target_id)
        return False

    def synchronize(self, other: "CommitLog") -> None:
        """Move every commit of ``other`` into this log.

        Both chains are already ordered newest first, so they are spliced
        together in a single pass. A commit from ``other`` is placed ahead of
        one from this log only when its timestamp is strictly greater; on
        equal timestamps this log's commit stays first. ``other`` is left
        empty.
        """
        if other is None:
            raise InvalidArgumentError("Cannot synchronize with None")
        if not isinstance(other, CommitLog):
            raise InvalidArgumentError(
                f"Cannot synchronize with {type(other).__name__}"
            )
        if other is self:
            return

        moved = other._size
        pending = self._adopt_nodes(other)
        self._size += moved
        other._clear()

        if self._head is None:
            self._head = pending
            pending = None
        elif pending is not None and self._timestamp(self._head) < self._timestamp(
            pending
        ):
            rest = self._previous[pending]
            self._previous[pending] = self._head
            self._head = pending
            pending = rest

        cursor = self._head
        while pending is not None and self._previous[cursor] is not None:
            older = self._previous[cursor]
            if self._timestamp(older) < self._timestamp(pending):
                rest = self._previous[pending]
                self._previous[pending] = older
                self._previous[cursor] = pending
                pending = rest
            cursor = self._previous[cursor]

        if pending is not None:
            self._previous[cursor] = pending

        logger.debug(
            "%s: synchronized %d commits from %s (size=%d)",
            self._name,
            moved,
            other.name,
            self._size,
        )

    def iter_commits(self) -> Iterator[Commit]:
        """Yield commits from head to oldest."""
        for node in self._iter_nodes():
            yield self._commits[node]

    def _iter_nodes(self) -> Iterator[int]:
        current = self._head
        while current is not None:
            yield current
            current = self._previous[current]

    def _adopt_nodes(self, other: "CommitLog") -> Optional[int]:
        """Re-key ``other``'s chain into this log and return its new head."""
        keys = {node: next(self._node_keys) for node in other._iter_nodes()}
        for node, key in keys.items():
            older = other._previous[node]
            self._commits[key] = other._commits[node]
            self._previous[key] = None if older is None else keys[older]
        return None if other._head is None else keys[other._head]

    def _unlink(self, node: int) -> Optional[int]:
        """Forget ``node`` and return the node that preceded it."""
        older = self._previous.pop(node)
        del self._commits[node]
        self._size -= 1
        return older

    def _clear(self) -> None:
        self._commits = {}
        self._previous = {}
        self._head = None
        self._size = 0

    def _timestamp(self, node: int) -> int:
        return self._commits[node].timestamp

    def _describe_commit(self, node: int) -> str:
        return self._commits[node].describe(
            self._settings.timestamp_format, self._settings.tzinfo
        )

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Commit]:
        return self.iter_commits()

    def __contains__(self, target_id: object) -> bool:
        return self.contains(target_id)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"CommitLog(name={self.name!r}, head={self.head!r}, size={self._size})"
