"""Event-loop adapters used by the drift-corrected timer.

WHY: The timer only needs three things from its host: the current time,
a way to run a callback once after a delay, and a way to cancel that
callback. Tk and asyncio both offer them under different names.

HOW: BaseScheduler is an ABC with ``now_ms()``, ``call_later()`` and
``cancel()``. Each concrete scheduler wraps one event loop.

RULES:
- now_ms() is monotonic (time.perf_counter), never wall-clock time
- call_later() schedules exactly one call and returns an opaque handle
- cancel() on an already-fired or already-cancelled handle is harmless
- Callbacks run on the event loop's own thread, never concurrently

To add a new host:
1. Subclass BaseScheduler
2. Implement now_ms(), call_later(), cancel()
"""

from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class BaseScheduler(ABC):
    """Abstract one-shot scheduler."""

    @abstractmethod
    def now_ms(self) -> float:
        """Current monotonic time in milliseconds."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Any:
        """Run ``callback`` once after ``delay_ms`` and return a cancel handle."""

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a handle returned by call_later()."""


class AsyncioScheduler(BaseScheduler):
    """Scheduler backed by an asyncio event loop.

    The loop is resolved lazily so the scheduler can be created before
    ``asyncio.run()`` starts; it must be used from inside that loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now_ms(self) -> float:
        return time.perf_counter() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(delay_ms / 1000.0, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class TkScheduler(BaseScheduler):
    """Scheduler backed by a Tk widget's ``after`` queue.

    Tk only accepts whole milliseconds, so each delay is rounded; the
    timer's target time keeps full precision, so rounding never
    accumulates.
    """

    def __init__(self, widget: Any) -> None:
        self._widget = widget

    def now_ms(self) -> float:
        return time.perf_counter() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> str:
        return self._widget.after(int(round(delay_ms)), callback)

    def cancel(self, handle: str) -> None:
        self._widget.after_cancel(handle)
