from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional, Tuple

from tributary.utils.clock import Clock, SystemClock


class TimerHandle:
    """
    A callback scheduled to run once, no earlier than ``deadline``.
    """

    __slots__ = ["deadline", "__callback", "__cancelled", "__fired"]

    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.__callback = callback
        self.__cancelled = False
        self.__fired = False

    def __repr__(self) -> str:
        if self.__fired:
            status = "fired"
        elif self.__cancelled:
            status = "cancelled"
        else:
            status = "pending"
        return f"<{type(self).__name__} deadline={self.deadline:.3f} {status}>"

    @property
    def cancelled(self) -> bool:
        return self.__cancelled

    @property
    def fired(self) -> bool:
        return self.__fired

    @property
    def active(self) -> bool:
        return not (self.__cancelled or self.__fired)

    def cancel(self) -> None:
        self.__cancelled = True

    def _run(self) -> None:
        # Marked as fired before running so that a callback which raises is
        # never retried.
        self.__fired = True
        self.__callback()


class Timer:
    """
    Cooperative scheduler for deferred callbacks.

    Nothing runs in the background: callbacks whose deadline has passed are
    executed by ``run_pending``, which the owner calls from its own loop
    (typically on every consumer poll). Callbacks therefore never run
    concurrently with the owner, and any exception raised by a callback
    propagates out of ``run_pending``.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.__clock = clock if clock is not None else SystemClock()
        self.__handles: List[Tuple[float, int, TimerHandle]] = []
        self.__sequence = itertools.count()

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self.__handles if handle.active)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        self.__prune()
        handle = TimerHandle(self.__clock.time() + delay, callback)
        # The sequence number keeps handles with equal deadlines in
        # scheduling order and avoids comparing handles.
        heapq.heappush(self.__handles, (handle.deadline, next(self.__sequence), handle))
        return handle

    def __prune(self) -> None:
        # Cancelled handles are otherwise only dropped by run_pending, which
        # the owner may never call.
        if any(not handle.active for _, _, handle in self.__handles):
            self.__handles = [entry for entry in self.__handles if entry[2].active]
            heapq.heapify(self.__handles)

    def run_pending(self) -> int:
        """
        Run every callback that is due, in deadline order. Returns the number
        of callbacks that were run.
        """
        fired = 0
        while self.__handles:
            deadline, _, handle = self.__handles[0]
            if not handle.active:
                heapq.heappop(self.__handles)
                continue
            if deadline > self.__clock.time():
                break
            heapq.heappop(self.__handles)
            fired += 1
            handle._run()
        return fired
