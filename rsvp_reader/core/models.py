"""Playback data model shared by the driver and every display surface.

WHY: The GUI, terminal reader, and HTTP API all need the same picture of
a reading session: the tokens, their render models, where the reader is,
how fast it goes, and whether the text is done. Keeping that in one set
of dataclasses decouples the transport logic from every display.

HOW: Three types form the model:
  RenderModel    prefix / highlight / suffix for one token (immutable)
  PlaybackPhase  explicit IDLE | PLAYING | FINISHED tag
  PlaybackState  tokens + models + index + wpm + phase

prepare_reading() is the single constructor used when new text is
submitted; it builds tokens and models together and resets the index.

RULES:
- tokens and models are tuples of equal length, created atomically
- 0 <= index < len(tokens) whenever tokens is non-empty
- wpm is always within [MIN_WPM, MAX_WPM]
- finished is derived from the phase, never stored separately
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Tuple

from rsvp_reader.config import DEFAULT_WPM, clamp_wpm
from rsvp_reader.errors import EmptyTextError


@dataclass(frozen=True)
class RenderModel:
    """One token split around its optimal recognition point.

    RULES:
    - prefix + highlight + suffix reconstructs the source token
    - highlight is a single character, "" only for an empty token
    """

    prefix: str
    highlight: str
    suffix: str

    @property
    def text(self) -> str:
        return self.prefix + self.highlight + self.suffix

    def to_dict(self) -> dict:
        return {"prefix": self.prefix, "highlight": self.highlight, "suffix": self.suffix}


class PlaybackPhase(str, enum.Enum):
    """Transport state of a reading session.

    WHY: An explicit tag rules out combinations such as "finished while
    playing" that independent boolean flags would allow.

    RULES:
    - idle: not advancing; manual stepping and seeking allowed
    - playing: the timer owns the index
    - finished: the last token was reached; play is a no-op
    """

    IDLE = "idle"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass
class PlaybackState:
    """Everything a display needs to render the current reading position."""

    tokens: Tuple[str, ...] = ()
    models: Tuple[RenderModel, ...] = ()
    index: int = 0
    wpm: int = DEFAULT_WPM
    phase: PlaybackPhase = field(default=PlaybackPhase.IDLE)

    @property
    def finished(self) -> bool:
        return self.phase is PlaybackPhase.FINISHED

    @property
    def playing(self) -> bool:
        return self.phase is PlaybackPhase.PLAYING

    @property
    def total(self) -> int:
        return len(self.tokens)

    @property
    def last_index(self) -> int:
        return max(0, len(self.tokens) - 1)

    @property
    def current_model(self) -> RenderModel | None:
        if not self.models:
            return None
        return self.models[self.index]

    @property
    def progress_percent(self) -> float:
        return progress_percent(self.index, len(self.tokens))


def prepare_reading(text: str, wpm: int = DEFAULT_WPM) -> PlaybackState:
    """Tokenize ``text`` and build its render models in one step.

    Raises:
        EmptyTextError: If the text contains no tokens. Callers at the
            editing boundary turn this into a user-visible message.
    """
    # Imported here to keep models.py importable from render_model.py
    from rsvp_reader.core.render_model import build_render_models
    from rsvp_reader.core.tokenizer import tokenize

    tokens = tuple(tokenize(text))
    if not tokens:
        raise EmptyTextError()
    return PlaybackState(
        tokens=tokens,
        models=tuple(build_render_models(tokens)),
        index=0,
        wpm=clamp_wpm(wpm),
        phase=PlaybackPhase.IDLE,
    )


def progress_percent(index: int, total: int) -> float:
    """Percentage of the text shown, 0.0 at the first token, 100.0 at the last.

    A single-token text is reported as 100.0 since its only token is
    also its last.
    """
    if total <= 0:
        return 0.0
    if total == 1:
        return 100.0
    bounded = max(0, min(index, total - 1))
    return bounded / (total - 1) * 100.0


def index_for_ratio(ratio: float, total: int) -> int:
    """Map a 0..1 position on a progress bar to a token index."""
    if total <= 0:
        return 0
    bounded = max(0.0, min(1.0, ratio))
    # Half-way positions round up, towards the later token
    return int(math.floor(bounded * (total - 1) + 0.5))
