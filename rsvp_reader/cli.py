"""Command-line interface for the RSVP reader.

WHY: Not every reading session needs a window. The CLI reads a file, a
URL, or stdin and flashes its words in the terminal at the chosen rate,
and it doubles as a tool for inspecting tokens and ORP choices.

HOW: Uses argparse for options, loads text through sources.load_text(),
prepares a PlaybackState, then either dumps it (--dump / --export) or
plays it with a PresentationDriver whose DriftTimer runs on asyncio via
asyncio.run(). Status messages go to stderr; words and dumps go to
stdout.

RULES:
- Positional argument: text file path, URL, or "-" for stdin
- --demo reads the built-in sample text instead
- --wpm is clamped and saved as the new preference (unless --no-save),
  and only once the text has loaded
- --start seeks before playback (clamped to the text)
- Empty text prints "Error: ..." and exits 1, never starts playback
- Ctrl-C stops playback and exits 130
- Words are drawn on one line with the ORP character at a fixed column
  when stdout is a terminal; one plain word per line otherwise
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rsvp_reader import __version__
from rsvp_reader.config import (
    MAX_WPM,
    MIN_WPM,
    PREFERENCES_PATH,
    SAMPLE_TEXT,
    clamp_wpm,
)
from rsvp_reader.core.driver import PresentationDriver
from rsvp_reader.core.models import PlaybackPhase, PlaybackState, RenderModel, prepare_reading
from rsvp_reader.core.orp import compute_orp_index
from rsvp_reader.errors import RsvpReaderError
from rsvp_reader.export import export_session_json
from rsvp_reader.sources import load_text
from rsvp_reader.storage.preferences import JsonFilePreferenceStore, WpmPreference
from rsvp_reader.timing.schedulers import AsyncioScheduler

_HIGHLIGHT_ON = "\033[1;31m"
_HIGHLIGHT_OFF = "\033[0m"
_CLEAR_LINE = "\r\033[K"

PIVOT_COLUMN = 12
"""Terminal column (0-based) where the highlighted character is drawn."""


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def format_word(model: RenderModel, color: bool = True, pivot_column: int = PIVOT_COLUMN) -> str:
    """Lay out one render model so its highlight lands on ``pivot_column``.

    Prefixes longer than the pivot column are not truncated; the word is
    simply shifted right.
    """
    padding = " " * max(0, pivot_column - len(model.prefix))
    if color and model.highlight:
        highlight = "{}{}{}".format(_HIGHLIGHT_ON, model.highlight, _HIGHLIGHT_OFF)
    else:
        highlight = model.highlight
    return "{}{}{}{}".format(padding, model.prefix, highlight, model.suffix)


def format_progress(state: PlaybackState) -> str:
    return "{}/{} {:3.0f}%".format(state.index + 1, state.total, state.progress_percent)


def dump_tokens(state: PlaybackState) -> str:
    """JSON list of tokens with their ORP index and render model."""
    rows = [
        {
            "index": i,
            "token": token,
            "orp_index": compute_orp_index(token),
            **model.to_dict(),
        }
        for i, (token, model) in enumerate(zip(state.tokens, state.models))
    ]
    return json.dumps(rows, indent=2, ensure_ascii=False)


class TerminalView:
    """Draw driver state changes to a text stream."""

    def __init__(self, stream, interactive: bool) -> None:
        self._stream = stream
        self._interactive = interactive
        self._last_index: Optional[int] = None

    def render(self, state: PlaybackState) -> None:
        model = state.current_model
        if model is None:
            return
        if self._interactive:
            line = "{}{}   {}".format(_CLEAR_LINE, format_word(model), format_progress(state))
            self._stream.write(line)
            self._stream.flush()
        elif state.index != self._last_index:
            self._stream.write(model.text + "\n")
        self._last_index = state.index

    def close(self) -> None:
        if self._interactive:
            self._stream.write("\n")
            self._stream.flush()


async def play_in_terminal(
    state: PlaybackState,
    start_index: int = 0,
    stream=None,
    interactive: Optional[bool] = None,
) -> PlaybackState:
    """Play ``state`` from ``start_index`` until the last token is shown."""
    if stream is None:
        stream = sys.stdout
    if interactive is None:
        interactive = stream.isatty()

    view = TerminalView(stream, interactive)
    done = asyncio.Event()

    def on_change(current: PlaybackState) -> None:
        view.render(current)
        if current.phase is PlaybackPhase.FINISHED:
            done.set()

    driver = PresentationDriver(AsyncioScheduler(), state=state, on_change=on_change)
    driver.seek(start_index)
    driver.play()
    try:
        await done.wait()
    finally:
        driver.close()
        view.close()
    return driver.state


def _read_source(args: argparse.Namespace) -> tuple:
    if args.demo:
        return SAMPLE_TEXT, None
    if args.source is None:
        print("Error: Give a text file, URL, or '-' for stdin (or use --demo).", file=sys.stderr)
        sys.exit(1)
    return load_text(args.source), args.source


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without reading anything.
    """
    parser = argparse.ArgumentParser(
        prog="rsvp_reader",
        description="Read text one word at a time with the optimal "
                    "recognition point highlighted.",
    )

    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="Text file path, http(s) URL, or '-' to read standard input.",
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Read the built-in sample text.",
    )

    parser.add_argument(
        "--wpm",
        type=float,
        default=None,
        help="Words per minute ({}-{}). Defaults to the saved preference.".format(MIN_WPM, MAX_WPM),
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not remember --wpm as the new preference.",
    )

    parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="Token index to start from (default: %(default)s).",
    )

    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print tokens and their render models as JSON instead of playing.",
    )

    parser.add_argument(
        "--export",
        default=None,
        metavar="PATH",
        help="Write the prepared session as schema-validated JSON to PATH.",
    )

    parser.add_argument(
        "--preferences",
        default=str(PREFERENCES_PATH),
        help="Preferences file (default: %(default)s).",
    )

    parser.add_argument(
        "--gui",
        action="store_true",
        help="Open the desktop reader window instead.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.gui:
        from rsvp_reader.gui import main as gui_main
        gui_main()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    preference = WpmPreference(JsonFilePreferenceStore(args.preferences))
    wpm = clamp_wpm(args.wpm) if args.wpm is not None else preference.value

    try:
        text, source = _read_source(args)
        state = prepare_reading(text, wpm)
    except RsvpReaderError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    # Only a speed that was actually used for reading becomes the preference
    if args.wpm is not None and not args.no_save:
        preference.set(wpm)

    if args.dump:
        print(dump_tokens(state))
        return

    if args.export:
        out_path = Path(args.export)
        out_path.write_text(export_session_json(state, source), encoding="utf-8")
        _status("Saved {} tokens to {}".format(state.total, out_path))
        return

    _status("{} words at {} WPM. Ctrl-C to stop.".format(state.total, state.wpm))
    try:
        asyncio.run(play_in_terminal(state, args.start))
    except KeyboardInterrupt:
        _status("\nStopped.")
        sys.exit(130)


if __name__ == "__main__":
    main()
