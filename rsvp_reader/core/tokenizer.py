"""Whitespace tokenizer for RSVP display units.

WHY: RSVP shows one unit at a time. Each unit must be a word exactly as it
appeared in the source, with its punctuation still attached ("Hei," not
"Hei" + ","), so the reader sees commas and full stops as part of the
rhythm of the text.

HOW: Every run of Unicode whitespace collapses to a single space, the
result is trimmed, then split on the space. Python's ``str`` already works
on code points, so accented and non-Latin characters are never cut apart.

RULES:
- Whitespace type (tab, newline, non-breaking space) is not preserved
- A byte order mark is whitespace, so a BOM from piped input never
  sticks to the first word
- Punctuation stays attached to the word it touches
- Empty or whitespace-only input yields []
- No empty strings ever appear in the result
"""

from __future__ import annotations

import re
from typing import List

# U+FEFF (byte order mark) counts as whitespace
_WHITESPACE_RUN = re.compile(r"[\s\ufeff]+")


def tokenize(text: str) -> List[str]:
    """Split raw text into punctuation-preserving word tokens.

    Example: ``tokenize("Hei,  maailma!\\n")`` → ``["Hei,", "maailma!"]``.
    """
    normalized = _WHITESPACE_RUN.sub(" ", text).strip()
    return [token for token in normalized.split(" ") if token]
