"""Optimal Recognition Point (ORP) calculator.

WHY: The eye recognises a word fastest when it fixates slightly left of
the word's centre. Highlighting that character in every word keeps the
reader's gaze pinned to one spot while words change underneath it.

HOW: The word's "core" is the span between its first and last
alphanumeric character (any script). The core length is mapped through a
fixed band table to an offset, and the offset is shifted by any leading
decoration such as quotes or brackets.

RULES:
- Alphanumeric means a Unicode letter or number (str.isalnum)
- Leading/trailing punctuation never changes the length band
- Leading punctuation shifts the returned index by its length
- Tokens without any alphanumeric character use floor(len / 2)
- The band table is a design constant; breakpoints must not drift
"""

from __future__ import annotations

from typing import List, Tuple

ORP_BANDS: List[Tuple[int, int]] = [
    (1, 0),
    (5, 1),
    (9, 2),
    (13, 3),
]
"""(max core length, offset) pairs, checked in order."""

ORP_MAX_OFFSET = 4
"""Offset used for cores longer than the last band (14+ characters)."""


def _offset_for_core_length(core_length: int) -> int:
    for max_length, offset in ORP_BANDS:
        if core_length <= max_length:
            return offset
    return ORP_MAX_OFFSET


def core_span(token: str) -> Tuple[int, int]:
    """Return (core_start, core_end) indices of the alphanumeric core.

    core_end is inclusive. When the token has no alphanumeric character,
    core_start == len(token) and core_end == len(token) - 1, which gives a
    core length of zero.
    """
    core_start = 0
    while core_start < len(token) and not token[core_start].isalnum():
        core_start += 1

    core_end = len(token) - 1
    while core_end > core_start and not token[core_end].isalnum():
        core_end -= 1

    return core_start, core_end


def compute_orp_index(token: str) -> int:
    """Compute the index of the highlighted character in ``token``.

    Examples::

        compute_orp_index("I")              → 0
        compute_orp_index("hello,")         → 1
        compute_orp_index('"hello')         → 2
        compute_orp_index("implementation") → 4
        compute_orp_index("...")            → 1
    """
    core_start, core_end = core_span(token)
    core_length = core_end - core_start + 1

    if core_length <= 0:
        return len(token) // 2

    return core_start + _offset_for_core_length(core_length)
