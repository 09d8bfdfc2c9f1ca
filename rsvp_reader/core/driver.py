"""Presentation driver: transport state machine over the token sequence.

WHY: Every reading surface needs the same transport rules: hold to play,
release to pause, step with the arrow keys, drag to seek, stop at the
last word. Putting those rules in one place keeps the GUI, terminal
reader, and tests in agreement and leaves the surfaces as thin wrappers.

HOW: The driver owns a PlaybackState and a DriftTimer. The timer calls
tick() while playing; tick() advances the index or, at the last token,
switches to FINISHED and ends the chain. Manual operations stop the
timer first, so the timer is the only writer of the index during play.

Transitions:
  idle     --play-->                  playing   (no-op when finished)
  playing  --tick-->                  playing   (index + 1)
  playing  --tick at last token-->    finished  (index unchanged)
  playing  --pause/seek/step-->       idle      (timer stopped)
  idle     --step_forward at last-->  finished
  finished --step_back-->             idle      (index - 1)
  any      --seek(i)-->               idle      (index clamped)

RULES:
- Stepping while playing pauses first, then steps
- step_forward/step_back at their boundary return the state unchanged,
  except step_forward at the last token, which finishes
- set_wpm() clamps; a running chain picks up the new interval on its
  next tick
- on_change is called with the state after every mutation; it is a
  plain attribute so surfaces can swap it at any time
- If on_change raises during a tick, playback drops to idle and the
  error propagates to the event loop
- An empty token sequence is never played; indexing on it stays at 0
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from rsvp_reader.config import clamp_wpm, interval_ms_for_wpm
from rsvp_reader.core.models import PlaybackPhase, PlaybackState, prepare_reading
from rsvp_reader.timing.drift_timer import DriftTimer
from rsvp_reader.timing.schedulers import BaseScheduler

logger = logging.getLogger(__name__)


class PresentationDriver:
    """Advance a reading position under timer or manual control.

    Args:
        scheduler: Event-loop adapter for the drift-corrected timer.
        state: Initial playback state; defaults to an empty session.
        on_change: Optional callback receiving the state after changes.
    """

    def __init__(
        self,
        scheduler: BaseScheduler,
        state: Optional[PlaybackState] = None,
        on_change: Optional[Callable[[PlaybackState], Any]] = None,
    ) -> None:
        self.state = state if state is not None else PlaybackState()
        self.on_change = on_change
        self._timer = DriftTimer(self.tick, self.interval_ms, scheduler)

    # ------------------------------------------------------------------
    # Session setup
    # ------------------------------------------------------------------

    def load_text(self, text: str) -> PlaybackState:
        """Replace the session with freshly prepared ``text``.

        Raises:
            EmptyTextError: If the text contains no words. The current
                session is left untouched.
        """
        prepared = prepare_reading(text, self.state.wpm)
        return self.load(prepared)

    def load(self, state: PlaybackState) -> PlaybackState:
        self._timer.stop()
        self.state = state
        self.state.phase = PlaybackPhase.IDLE
        logger.debug("Loaded %d tokens", len(state.tokens))
        return self._changed()

    def close(self) -> None:
        """Stop the timer; call when the reading screen goes away."""
        self._timer.stop()
        if self.state.playing:
            self._set_phase(PlaybackPhase.IDLE)

    # ------------------------------------------------------------------
    # Timer accessors
    # ------------------------------------------------------------------

    def interval_ms(self) -> float:
        return interval_ms_for_wpm(self.state.wpm)

    def tick(self) -> bool:
        """Advance one token; return False when playback must stop."""
        state = self.state
        if not state.playing:
            return False
        if state.index >= state.last_index:
            self._set_phase(PlaybackPhase.FINISHED)
            self._changed()
            return False
        state.index += 1
        try:
            self._changed()
        except Exception:
            # No further fire is scheduled once the tick raises
            self._timer.stop()
            self._set_phase(PlaybackPhase.IDLE)
            raise
        return True

    # ------------------------------------------------------------------
    # Transport controls
    # ------------------------------------------------------------------

    def play(self) -> PlaybackState:
        state = self.state
        if state.playing or state.finished or not state.tokens:
            return state
        self._set_phase(PlaybackPhase.PLAYING)
        self._timer.start()
        return self._changed()

    def pause(self) -> PlaybackState:
        if not self.state.playing:
            return self.state
        self._timer.stop()
        self._set_phase(PlaybackPhase.IDLE)
        return self._changed()

    def step_forward(self) -> PlaybackState:
        self.pause()
        state = self.state
        if not state.tokens or state.finished:
            return state
        if state.index >= state.last_index:
            self._set_phase(PlaybackPhase.FINISHED)
        else:
            state.index += 1
        return self._changed()

    def step_back(self) -> PlaybackState:
        self.pause()
        state = self.state
        if state.finished:
            self._set_phase(PlaybackPhase.IDLE)
            state.index = max(0, state.index - 1)
            return self._changed()
        if state.index <= 0:
            return state
        state.index -= 1
        return self._changed()

    def seek(self, index: int) -> PlaybackState:
        self._timer.stop()
        state = self.state
        state.index = max(0, min(int(index), state.last_index))
        self._set_phase(PlaybackPhase.IDLE)
        return self._changed()

    def set_wpm(self, value: Any) -> int:
        """Clamp and apply a new rate; returns the value actually used."""
        self.state.wpm = clamp_wpm(value)
        self._changed()
        return self.state.wpm

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _set_phase(self, phase: PlaybackPhase) -> None:
        if self.state.phase is not phase:
            logger.debug(
                "Phase %s -> %s at index %d",
                self.state.phase.value, phase.value, self.state.index,
            )
            self.state.phase = phase

    def _changed(self) -> PlaybackState:
        if self.on_change is not None:
            self.on_change(self.state)
        return self.state
