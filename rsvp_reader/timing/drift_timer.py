"""Drift-corrected tick timer.

WHY: A reading session can run for thousands of words. Scheduling each
tick "interval ms after the last one fired" lets every bit of callback
time and scheduler jitter pile up, so 300 WPM slowly becomes 290. The
timer must keep its ticks on an ideal schedule instead.

HOW: A self-correcting chain of one-shot calls. ``start()`` records the
current time as the target. Before every fire the interval is re-read,
added to the *target* (not to the actual fire time), and the delay is
whatever remains until that target. A late tick therefore shortens the
next delay instead of pushing every later tick back.

RULES:
- Only one fire is ever pending
- on_tick() returning False ends the chain; True schedules the next fire
- get_interval_ms() is re-read before every fire, so rate changes apply
  on the next tick without a restart
- on_tick and get_interval_ms are plain attributes; reassigning them
  takes effect on the next cycle without restarting the chain
- start() while running replaces the running chain
- stop() is idempotent and wins over any fire that has not begun
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from rsvp_reader.timing.schedulers import BaseScheduler

logger = logging.getLogger(__name__)


class DriftTimer:
    """Repeatedly call ``on_tick`` every ``get_interval_ms()`` milliseconds.

    Args:
        on_tick: Called on every fire. Return True to continue.
        get_interval_ms: Returns the interval before the next fire.
        scheduler: Event-loop adapter that performs the actual waits.
    """

    def __init__(
        self,
        on_tick: Callable[[], bool],
        get_interval_ms: Callable[[], float],
        scheduler: BaseScheduler,
    ) -> None:
        self.on_tick = on_tick
        self.get_interval_ms = get_interval_ms
        self._scheduler = scheduler
        self._handle: Optional[Any] = None
        self._target_ms = 0.0
        # Bumped on every start/stop; a fire from an older chain is ignored
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def target_ms(self) -> float:
        """Ideal time of the next (or most recent) fire."""
        return self._target_ms

    def start(self) -> None:
        """Start a new chain, replacing any chain already running."""
        self.stop()
        self._target_ms = self._scheduler.now_ms()
        logger.debug("Timer started at %.1f ms", self._target_ms)
        self._schedule_next()

    def stop(self) -> None:
        """Cancel the pending fire, if any."""
        self._generation += 1
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None
            logger.debug("Timer stopped")

    def _schedule_next(self) -> None:
        self._target_ms += float(self.get_interval_ms())
        delay_ms = max(0.0, self._target_ms - self._scheduler.now_ms())
        generation = self._generation
        self._handle = self._scheduler.call_later(
            delay_ms, lambda: self._fire(generation)
        )

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        should_continue = self.on_tick()
        # on_tick may itself have called stop() or start()
        if should_continue and generation == self._generation:
            self._schedule_next()
