"""RSVP Reader: one-word-at-a-time speed reading with ORP highlighting.

WHY: Rapid Serial Visual Presentation shows words one at a time in a fixed
position so the eyes never have to move across a line. Highlighting the
optimal recognition point (ORP) of each word gives the eye a stable anchor.

HOW: Three-stage pipeline: prepare (tokenize text and build render models
once), drive (a drift-corrected timer advances a position index), present
(GUI, terminal or HTTP surfaces look up render models by index). Each stage
is independently testable.

RULES:
- Core functions are pure and total over every string input
- Render models are built once per text, never during playback
- Only the timer tick advances the index while playing
"""

__version__ = "0.1.0"
