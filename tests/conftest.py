"""Shared test fixtures for the rsvp_reader test suite.

WHY: Timer and driver tests must be deterministic and fast. Real event
loops sleep and jitter; a manual clock lets tests advance time exactly
and inject callback latency on purpose.

HOW: FakeScheduler implements BaseScheduler over a virtual clock. Pending
calls sit in a heap ordered by due time; advance() fires them in order,
moving the clock to each due time before the callback runs.

RULES:
- No test sleeps or touches a real event loop for timing
- Callbacks may move the clock forward to simulate slow work
- Cancelled calls never fire
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Tuple

import pytest

from rsvp_reader.storage.preferences import MemoryPreferenceStore
from rsvp_reader.timing.schedulers import BaseScheduler


class FakeScheduler(BaseScheduler):
    """Deterministic scheduler driven by a manual millisecond clock."""

    def __init__(self, start_ms: float = 1000.0) -> None:
        self.clock = start_ms
        self.delays: List[float] = []
        self._queue: List[Tuple[float, int, list]] = []
        self._seq = itertools.count()

    def now_ms(self) -> float:
        return self.clock

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> list:
        self.delays.append(delay_ms)
        entry = [callback, False]  # [callback, cancelled]
        heapq.heappush(self._queue, (self.clock + delay_ms, next(self._seq), entry))
        return entry

    def cancel(self, handle: list) -> None:
        handle[1] = True

    @property
    def pending(self) -> int:
        return sum(1 for _, _, entry in self._queue if not entry[1])

    def advance(self, ms: float) -> int:
        """Move the clock forward ``ms``, firing everything due; returns fire count."""
        deadline = self.clock + ms
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, entry = heapq.heappop(self._queue)
            if entry[1]:
                continue
            self.clock = max(self.clock, due)
            entry[1] = True
            entry[0]()
            fired += 1
        self.clock = max(self.clock, deadline)
        return fired

    def run_until_idle(self, limit: int = 10_000) -> int:
        """Fire pending calls until none remain (bounded by ``limit``)."""
        fired = 0
        while self.pending and fired < limit:
            due = min(d for d, _, entry in self._queue if not entry[1])
            fired += self.advance(max(0.0, due - self.clock))
        return fired


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def memory_store():
    return MemoryPreferenceStore()
