"""Exception hierarchy for the reader's outer surfaces.

WHY: The core pipeline never raises, but the surfaces around it do need
to report a few user-facing conditions (nothing to read, unreadable
source). A shared base class lets the CLI, GUI, and HTTP API catch them
in one place and show a plain message.

RULES:
- Core functions (tokenize, compute_orp_index, build_render_model) never
  raise these
- EmptyTextError is also a ValueError so generic handlers still work
"""

from __future__ import annotations


class RsvpReaderError(Exception):
    """Base class for reader errors shown to the user."""


class EmptyTextError(RsvpReaderError, ValueError):
    """Raised when submitted text contains no words to read."""

    def __init__(self, message: str = "There is nothing to read. Enter some text first.") -> None:
        super().__init__(message)


class TextSourceError(RsvpReaderError):
    """Raised when a text file, stdin, or URL cannot be read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__("Could not read text from {}: {}".format(source, reason))
