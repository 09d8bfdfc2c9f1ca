"""Scheduling primitives for the presentation loop.

WHY: Word timing must stay accurate over long sessions no matter which
event loop hosts it: Tk's ``after`` in the desktop GUI, asyncio in the
terminal reader, a manual clock in tests.

HOW: schedulers.py adapts each event loop to one small interface;
drift_timer.py builds the self-correcting tick chain on top of it.
"""

from rsvp_reader.timing.drift_timer import DriftTimer
from rsvp_reader.timing.schedulers import AsyncioScheduler, BaseScheduler, TkScheduler

__all__ = ["AsyncioScheduler", "BaseScheduler", "DriftTimer", "TkScheduler"]
