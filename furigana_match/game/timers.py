"""
Single-threaded deferred task queue.

The error-flash cooldown and the completion settle delay are the only
delayed transitions in a game. They are queued here and run on the caller's
thread when due, so every state update goes through one serialized path.
Tests drive the queue with a ManualClock instead of sleeping.
"""

import heapq
import itertools
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple


logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    """Monotonic wall clock in milliseconds."""
    return time.monotonic() * 1000.0


class Scheduler(ABC):
    """Base interface for deferred callbacks."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        """
        Run callback once, no earlier than delay_ms from now.

        Args:
            delay_ms: Delay in milliseconds
            callback: Zero-argument callable
        """
        pass


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        if ms < 0:
            raise ValueError("Cannot move a clock backwards")
        self.now_ms += ms


class TimerQueue(Scheduler):
    """
    Heap-ordered timer queue.

    Callbacks with equal due times run in the order they were scheduled.
    Nothing runs until run_due() or run_until_idle() is called.
    """

    def __init__(self, clock: Callable[[], float] = monotonic_ms):
        self.clock = clock
        self._heap: List[Tuple[float, int, Callable[[], None]]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        due = self.clock() + max(0.0, delay_ms)
        heapq.heappush(self._heap, (due, next(self._sequence), callback))
        logger.debug(f"Scheduled timer due at {due:.0f}ms ({len(self._heap)} pending)")

    @property
    def pending(self) -> int:
        return len(self._heap)

    def next_due_in(self) -> Optional[float]:
        """Milliseconds until the next timer is due, or None when idle."""
        if not self._heap:
            return None
        return max(0.0, self._heap[0][0] - self.clock())

    def run_due(self) -> int:
        """
        Run every callback whose due time has passed.

        Callbacks scheduled by a running callback are picked up in the same
        pass when they are already due.

        Returns:
            Number of callbacks run
        """
        ran = 0
        while self._heap and self._heap[0][0] <= self.clock():
            _, _, callback = heapq.heappop(self._heap)
            callback()
            ran += 1
        return ran

    def run_until_idle(self, sleep: Callable[[float], None] = time.sleep) -> int:
        """
        Block until the queue is empty, sleeping until each timer is due.

        Args:
            sleep: Sleep function taking seconds

        Returns:
            Number of callbacks run
        """
        ran = 0
        while self._heap:
            wait_ms = self.next_due_in()
            if wait_ms:
                sleep(wait_ms / 1000.0)
            ran += self.run_due()
        return ran
