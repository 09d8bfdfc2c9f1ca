"""Hold-to-read keyboard handling, independent of any GUI toolkit.

WHY: Reading is driven by holding a key: press Space to play, release to
pause. Keyboards auto-repeat held keys, windows lose focus mid-hold, and
arrow keys should not fire while the user is typing in a text field.
Those rules are fiddly and worth testing without a display.

HOW: HoldKeyTracker receives normalized key events ("space", "left",
"right", "escape") and calls the matching handler. Handlers live in a
single replaceable KeyHandlers slot, read at the moment each event is
handled, so a surface can swap them without re-binding any listener.

RULES:
- Auto-repeated presses of a held key never call on_hold_start again
- Releasing the key, or losing focus while it is held, calls on_hold_end
- Events are ignored while focus is in a text entry
- key_down() returns True when the event was consumed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

HOLD_KEY = "space"
STEP_BACK_KEY = "left"
STEP_FORWARD_KEY = "right"
EXIT_KEY = "escape"


def _noop() -> None:
    return None


@dataclass
class KeyHandlers:
    """Callbacks invoked by HoldKeyTracker."""

    on_hold_start: Callable[[], None] = _noop
    on_hold_end: Callable[[], None] = _noop
    on_step_back: Callable[[], None] = _noop
    on_step_forward: Callable[[], None] = _noop
    on_exit: Callable[[], None] = _noop


class HoldKeyTracker:
    """Translate key events into hold/step/exit calls."""

    def __init__(self, handlers: Optional[KeyHandlers] = None) -> None:
        self.handlers = handlers if handlers is not None else KeyHandlers()
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    def key_down(self, key: str, in_text_entry: bool = False) -> bool:
        if in_text_entry:
            return False
        key = key.lower()
        if key == HOLD_KEY:
            if not self._held:
                self._held = True
                self.handlers.on_hold_start()
            return True
        if key == STEP_BACK_KEY:
            self.handlers.on_step_back()
            return True
        if key == STEP_FORWARD_KEY:
            self.handlers.on_step_forward()
            return True
        if key == EXIT_KEY:
            self.handlers.on_exit()
            return True
        return False

    def key_up(self, key: str) -> bool:
        if key.lower() != HOLD_KEY:
            return False
        self.release()
        return True

    def focus_lost(self) -> None:
        self.release()

    def release(self) -> None:
        if self._held:
            self._held = False
            self.handlers.on_hold_end()
