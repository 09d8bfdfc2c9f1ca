"""Render model builder: split each token around its ORP character.

WHY: The display layers only need three strings per word: what comes
before the fixation point, the fixation character itself, and what comes
after. Computing this once per text means playback is a plain lookup.

HOW: compute_orp_index() picks the highlight position; the token is
sliced into prefix / highlight / suffix around it.

RULES:
- prefix + highlight + suffix == token for every token
- highlight is one character, or "" only for the empty token
- build_render_models() returns a new list, same order and length
"""

from __future__ import annotations

from typing import Iterable, List

from rsvp_reader.core.models import RenderModel
from rsvp_reader.core.orp import compute_orp_index


def build_render_model(token: str) -> RenderModel:
    """Build the prefix/highlight/suffix triple for one token."""
    orp_idx = compute_orp_index(token)
    return RenderModel(
        prefix=token[:orp_idx],
        highlight=token[orp_idx:orp_idx + 1],
        suffix=token[orp_idx + 1:],
    )


def build_render_models(tokens: Iterable[str]) -> List[RenderModel]:
    """Build render models for a token sequence, preserving order."""
    return [build_render_model(token) for token in tokens]
