from __future__ import annotations

import logging
from enum import Enum
from typing import Literal, Optional

from tributary.errors import InvalidStateError
from tributary.store import PendingOffsetStore
from tributary.types import OffsetCommitter, OffsetDescriptor
from tributary.utils.clock import Clock, SystemClock
from tributary.utils.logging import format_offsets
from tributary.utils.metrics import get_metrics, timed
from tributary.utils.timer import Timer, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_INTERVAL_MS = 5000

FlushTrigger = Literal["immediate", "timer", "rebalance"]


class CommitManagerState(Enum):
    IDLE = "idle"
    ARMED = "armed"


class CommitManager:
    """
    Coalesces per-partition "ready to commit" signals into batched commits.

    Every call to ``ready_to_commit`` records the offset in a pending store.
    If no flush happened within the last ``commit_interval_ms`` (which is
    always the case before the first flush) the store is committed right
    away. Otherwise a single deferred flush is scheduled ``commit_interval_ms``
    from now, and further signals are absorbed into the store until it runs.
    Scheduling a deferred flush never moves an already scheduled one.

    Deferred flushes are cooperative: they run from ``poll``, which the
    consumer loop is expected to call on every iteration. ``on_rebalance``
    flushes unconditionally and must be called before partition ownership
    changes.

    A failing commit propagates to whichever call triggered the flush. The
    drained offsets are not restored.
    """

    def __init__(
        self,
        committer: OffsetCommitter,
        commit_interval_ms: int = DEFAULT_COMMIT_INTERVAL_MS,
        clock: Optional[Clock] = None,
    ) -> None:
        if commit_interval_ms <= 0:
            raise ValueError("commit_interval_ms must be positive")

        self.__committer = committer
        self.__interval = commit_interval_ms / 1000.0
        self.__clock = clock if clock is not None else SystemClock()
        self.__timer = Timer(self.__clock)
        self.__metrics = get_metrics()

        self.__store = PendingOffsetStore()
        self.__deferred_flush: Optional[TimerHandle] = None
        # None means nothing was ever flushed, so a commit is overdue.
        self.__last_commit_timestamp: Optional[float] = None

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} state={self.state.value} "
            f"pending={self.pending} interval={self.__interval}s>"
        )

    @property
    def state(self) -> CommitManagerState:
        if self.__deferred_flush is None:
            return CommitManagerState.IDLE
        return CommitManagerState.ARMED

    @property
    def pending(self) -> int:
        return len(self.__store)

    @property
    def last_commit_timestamp(self) -> Optional[float]:
        return self.__last_commit_timestamp

    def ready_to_commit(self, descriptor: OffsetDescriptor) -> None:
        """
        Mark ``descriptor`` as processed. Called once per processed message.
        """
        self.__store.record(descriptor)

        if self.__is_due():
            self._flush("immediate")
        elif self.__deferred_flush is None:
            self.__schedule_flush()

    def on_rebalance(self) -> None:
        """
        Commit everything pending before partition ownership changes.
        """
        self._flush("rebalance")

    def poll(self) -> None:
        """
        Run the deferred flush if it is due.
        """
        self.__timer.run_pending()

    def __is_due(self) -> bool:
        if self.__last_commit_timestamp is None:
            return True
        return self.__clock.time() - self.__last_commit_timestamp >= self.__interval

    def __schedule_flush(self) -> None:
        if self.__deferred_flush is not None:
            raise InvalidStateError("a deferred flush is already scheduled")

        self.__deferred_flush = self.__timer.call_later(
            self.__interval, self.__run_deferred_flush
        )

    def __run_deferred_flush(self) -> None:
        self.__deferred_flush = None
        self._flush("timer")

    def __cancel_deferred_flush(self) -> None:
        if self.__deferred_flush is not None:
            self.__deferred_flush.cancel()
            self.__deferred_flush = None

    def _flush(self, trigger: FlushTrigger) -> None:
        self.__cancel_deferred_flush()

        offsets = self.__store.drain()
        self.__metrics.increment("tributary.commit.trigger", tags={"trigger": trigger})

        if offsets:
            with timed(self.__metrics, "tributary.commit.time"):
                self.__committer.commit(offsets)
            self.__metrics.increment("tributary.commit.count")
            self.__metrics.timing("tributary.commit.batch_size", len(offsets))
            logger.debug(
                "Committed %d offsets (%s): %s",
                len(offsets),
                trigger,
                format_offsets(offsets),
            )
        else:
            self.__metrics.increment("tributary.commit.empty_flush")

        self.__last_commit_timestamp = self.__clock.time()


def create_commit_manager(
    consumer: OffsetCommitter,
    commit_interval_ms: int = DEFAULT_COMMIT_INTERVAL_MS,
    clock: Optional[Clock] = None,
) -> CommitManager:
    return CommitManager(consumer, commit_interval_ms, clock)
