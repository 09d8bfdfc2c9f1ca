"""Tkinter desktop GUI for the RSVP reader.

WHY: Hold-to-read needs immediate keyboard feedback and a fixed spot on
screen for the words, which a desktop window gives with nothing to
install beyond Python itself.

HOW: A single ReaderApp class builds two screens in one window:
  EDITOR: text area, Open/Sample buttons, error label, "Let's read"
  READER: word canvas, counter, seekable progress bar, play button,
           WPM spinbox, Back button
The PresentationDriver runs its DriftTimer on Tk's ``after`` queue via
TkScheduler, so every tick runs on the main thread. Key events go
through HoldKeyTracker; the driver's on_change redraws the reader.

RULES:
- tkinter widgets are ONLY touched from the main thread
- Empty text shows a message on the editor and never opens the reader
- Holding Space or the play button plays; releasing pauses
- Left/Right step, Escape returns to the editor, clicks on the progress
  bar seek; all of them stop playback first
- Return in the WPM spinbox, or a click on the reading area, gives focus
  back to the word canvas
- WPM changes are clamped, applied live, and saved to the preferences file
- Tk reports an auto-repeated key as release+press pairs; a release is
  only acted on if no press follows within _RELEASE_DEBOUNCE_MS
"""

from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, font as tkfont, messagebox, ttk
from typing import Optional

from rsvp_reader.config import (
    MAX_WPM,
    MIN_WPM,
    PREFERENCES_PATH,
    SAMPLE_TEXT,
    WPM_STEP,
)
from rsvp_reader.core.driver import PresentationDriver
from rsvp_reader.core.models import PlaybackState, index_for_ratio
from rsvp_reader.errors import EmptyTextError, TextSourceError
from rsvp_reader.keyboard import HoldKeyTracker, KeyHandlers
from rsvp_reader.sources import load_file
from rsvp_reader.storage.preferences import JsonFilePreferenceStore, WpmPreference
from rsvp_reader.timing.schedulers import TkScheduler

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE = "RSVP Reader"
_WINDOW_MIN_WIDTH = 640
_WINDOW_MIN_HEIGHT = 420
_PAD = 8

_BACKGROUND = "#0b1622"
_FOREGROUND = "#d8dee9"
_HIGHLIGHT = "#f5a623"
_MUTED = "#5c6b7a"

_WORD_FONT = ("Helvetica", 40)
_WORD_CANVAS_HEIGHT = 140
_PROGRESS_HEIGHT = 8

_RELEASE_DEBOUNCE_MS = 40

_TEXT_WIDGETS = (tk.Text, tk.Entry, ttk.Entry, ttk.Spinbox)


class ReaderApp:
    """Main tkinter application: an editing screen and a reading screen.

    RULES:
    - self._driver is the only owner of playback state
    - Key bindings are attached once; HoldKeyTracker.handlers is swapped
      instead of re-binding
    """

    def __init__(self, root: tk.Tk, preference: Optional[WpmPreference] = None) -> None:
        self._root = root
        self._root.title(_WINDOW_TITLE)
        self._root.minsize(_WINDOW_MIN_WIDTH, _WINDOW_MIN_HEIGHT)

        if preference is None:
            preference = WpmPreference(JsonFilePreferenceStore(PREFERENCES_PATH))
        self._preference = preference

        self._driver = PresentationDriver(TkScheduler(root))
        self._driver.set_wpm(self._preference.value)
        self._driver.on_change = self._render_reader

        self._keys = HoldKeyTracker()
        self._pending_release: Optional[str] = None
        self._word_font = tkfont.Font(family=_WORD_FONT[0], size=_WORD_FONT[1])

        self._build_ui()
        self._bind_keys()
        self._show_editor()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self._editor = ttk.Frame(self._root, padding=_PAD)
        self._reader = tk.Frame(self._root, background=_BACKGROUND)
        self._build_editor(self._editor)
        self._build_reader(self._reader)

    def _build_editor(self, main: ttk.Frame) -> None:
        ttk.Label(main, text=_WINDOW_TITLE, font=("Helvetica", 18, "bold")).pack(
            anchor=tk.W, pady=(0, _PAD)
        )

        text_frame = ttk.Frame(main)
        text_frame.pack(fill=tk.BOTH, expand=True)
        self._text = tk.Text(text_frame, wrap=tk.WORD, height=12, undo=True)
        scrollbar = ttk.Scrollbar(text_frame, orient=tk.VERTICAL, command=self._text.yview)
        self._text.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self._text.pack(fill=tk.BOTH, expand=True)

        self._error_label = ttk.Label(main, text="", foreground="#c77700")
        self._error_label.pack(anchor=tk.W, pady=(4, 0))

        btn_frame = ttk.Frame(main)
        btn_frame.pack(fill=tk.X, pady=(_PAD, 0))
        ttk.Button(btn_frame, text="Open File...", command=self._open_file).pack(side=tk.LEFT)
        ttk.Button(btn_frame, text="Sample Text", command=self._insert_sample).pack(
            side=tk.LEFT, padx=(_PAD, 0)
        )
        ttk.Button(btn_frame, text="Let's read", command=self._submit_text).pack(side=tk.RIGHT)

    def _build_reader(self, main: tk.Frame) -> None:
        top = tk.Frame(main, background=_BACKGROUND)
        top.pack(fill=tk.X, padx=_PAD, pady=_PAD)
        ttk.Button(top, text="Back", command=self._back_to_editor).pack(side=tk.LEFT)
        self._counter_label = tk.Label(top, text="", background=_BACKGROUND, foreground=_MUTED)
        self._counter_label.pack(side=tk.RIGHT)

        self._word_canvas = tk.Canvas(
            main,
            height=_WORD_CANVAS_HEIGHT,
            background=_BACKGROUND,
            highlightthickness=0,
            takefocus=True,
        )
        self._word_canvas.pack(fill=tk.BOTH, expand=True, padx=_PAD)
        self._word_canvas.bind("<Button-1>", self._focus_reader)
        main.bind("<Button-1>", self._focus_reader)
        self._word_canvas.bind("<Configure>", lambda _e: self._render_reader(self._driver.state))

        self._progress = tk.Canvas(
            main,
            height=_PROGRESS_HEIGHT,
            background=_MUTED,
            highlightthickness=0,
            cursor="hand2",
        )
        self._progress.pack(fill=tk.X, padx=_PAD * 2, pady=(0, _PAD))
        self._progress_fill = self._progress.create_rectangle(
            0, 0, 0, _PROGRESS_HEIGHT, fill=_HIGHLIGHT, width=0
        )
        self._progress.bind("<ButtonPress-1>", self._on_progress_drag)
        self._progress.bind("<B1-Motion>", self._on_progress_drag)
        self._progress.bind("<Configure>", lambda _e: self._render_reader(self._driver.state))

        self._play_btn = ttk.Button(main, text="Hold to read")
        self._play_btn.pack(pady=(0, 4))
        self._play_btn.bind("<ButtonPress-1>", lambda _e: self._driver.play())
        self._play_btn.bind("<ButtonRelease-1>", lambda _e: self._driver.pause())

        tk.Label(
            main,
            text="Hold the button or Space to read",
            background=_BACKGROUND,
            foreground=_MUTED,
        ).pack()

        bottom = tk.Frame(main, background=_BACKGROUND)
        bottom.pack(fill=tk.X, padx=_PAD, pady=_PAD)
        tk.Label(bottom, text="WPM", background=_BACKGROUND, foreground=_FOREGROUND).pack(
            side=tk.LEFT
        )
        self._wpm_var = tk.StringVar(value=str(self._driver.state.wpm))
        self._wpm_spin = ttk.Spinbox(
            bottom,
            from_=MIN_WPM,
            to=MAX_WPM,
            increment=WPM_STEP,
            textvariable=self._wpm_var,
            width=6,
            command=self._commit_wpm,
        )
        self._wpm_spin.pack(side=tk.LEFT, padx=(4, 0))
        self._wpm_spin.bind("<Return>", self._on_wpm_return)
        self._wpm_spin.bind("<FocusOut>", lambda _e: self._commit_wpm())
        tk.Label(
            bottom,
            text="Left/Right to step · Esc to go back",
            background=_BACKGROUND,
            foreground=_MUTED,
        ).pack(side=tk.RIGHT)

    def _bind_keys(self) -> None:
        self._root.bind("<KeyPress>", self._on_key_press)
        self._root.bind("<KeyRelease>", self._on_key_release)
        self._root.bind("<FocusOut>", self._on_focus_out)

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    def _show_editor(self) -> None:
        self._reader.pack_forget()
        self._editor.pack(fill=tk.BOTH, expand=True)
        self._keys.handlers = KeyHandlers()
        self._text.focus_set()

    def _show_reader(self) -> None:
        self._editor.pack_forget()
        self._reader.pack(fill=tk.BOTH, expand=True)
        self._keys.handlers = KeyHandlers(
            on_hold_start=self._driver.play,
            on_hold_end=self._driver.pause,
            on_step_back=self._driver.step_back,
            on_step_forward=self._driver.step_forward,
            on_exit=self._back_to_editor,
        )
        self._word_canvas.focus_set()
        self._render_reader(self._driver.state)

    def _back_to_editor(self) -> None:
        self._driver.close()
        self._show_editor()

    # ------------------------------------------------------------------
    # Editor actions
    # ------------------------------------------------------------------

    def _submit_text(self) -> None:
        text = self._text.get("1.0", tk.END)
        try:
            self._driver.load_text(text)
        except EmptyTextError as exc:
            self._error_label.configure(text=str(exc))
            return
        self._error_label.configure(text="")
        self._show_reader()

    def _insert_sample(self) -> None:
        self._text.delete("1.0", tk.END)
        self._text.insert("1.0", SAMPLE_TEXT)
        self._error_label.configure(text="")

    def _open_file(self) -> None:
        path = filedialog.askopenfilename(
            title="Open text file",
            filetypes=[("Text files", "*.txt *.md"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            content = load_file(Path(path))
        except TextSourceError as exc:
            messagebox.showerror("Open File", str(exc))
            return
        self._text.delete("1.0", tk.END)
        self._text.insert("1.0", content)
        self._error_label.configure(text="")

    # ------------------------------------------------------------------
    # Reader actions
    # ------------------------------------------------------------------

    def _commit_wpm(self) -> None:
        wpm = self._driver.set_wpm(self._wpm_var.get())
        self._preference.set(wpm)
        self._wpm_var.set(str(wpm))

    def _on_wpm_return(self, _event: tk.Event) -> None:
        self._commit_wpm()
        self._focus_reader()

    def _focus_reader(self, _event: Optional[tk.Event] = None) -> None:
        """Take focus away from the spinbox so Space and the arrows work again."""
        self._word_canvas.focus_set()

    def _on_progress_drag(self, event: tk.Event) -> None:
        width = self._progress.winfo_width()
        if width <= 0:
            return
        state = self._driver.state
        self._driver.seek(index_for_ratio(event.x / width, state.total))

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def _focus_in_text_entry(self) -> bool:
        try:
            focused = self._root.focus_get()
        except (KeyError, tk.TclError):
            return False
        return isinstance(focused, _TEXT_WIDGETS)

    def _on_key_press(self, event: tk.Event) -> Optional[str]:
        if event.keysym.lower() == "space" and self._pending_release is not None:
            # Auto-repeat: the release we just saw was not a real one
            self._root.after_cancel(self._pending_release)
            self._pending_release = None
        if self._keys.key_down(event.keysym, self._focus_in_text_entry()):
            return "break"
        return None

    def _on_key_release(self, event: tk.Event) -> None:
        if event.keysym.lower() != "space" or not self._keys.held:
            return
        if self._pending_release is not None:
            self._root.after_cancel(self._pending_release)
        self._pending_release = self._root.after(_RELEASE_DEBOUNCE_MS, self._release_hold)

    def _release_hold(self) -> None:
        self._pending_release = None
        self._keys.key_up("space")

    def _on_focus_out(self, event: tk.Event) -> None:
        if event.widget is self._root:
            self._keys.focus_lost()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_reader(self, state: PlaybackState) -> None:
        canvas = self._word_canvas
        canvas.delete("word")
        width = canvas.winfo_width()
        height = canvas.winfo_height()
        cx, cy = width / 2, height / 2

        model = state.current_model
        if model is not None:
            half = self._word_font.measure(model.highlight) / 2
            canvas.create_text(
                cx - half, cy, text=model.prefix, anchor=tk.E,
                font=self._word_font, fill=_FOREGROUND, tags="word",
            )
            canvas.create_text(
                cx, cy, text=model.highlight, anchor=tk.CENTER,
                font=self._word_font, fill=_HIGHLIGHT, tags="word",
            )
            canvas.create_text(
                cx + half, cy, text=model.suffix, anchor=tk.W,
                font=self._word_font, fill=_FOREGROUND, tags="word",
            )
        if state.finished:
            canvas.create_text(
                cx, cy + _WORD_FONT[1], text="Finished", anchor=tk.N,
                fill=_MUTED, tags="word",
            )

        if state.total:
            self._counter_label.configure(text="{} / {}".format(state.index + 1, state.total))
        bar_width = self._progress.winfo_width() * state.progress_percent / 100.0
        self._progress.coords(self._progress_fill, 0, 0, bar_width, _PROGRESS_HEIGHT)
        self._play_btn.configure(state=tk.DISABLED if state.finished else tk.NORMAL)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Launch the Tkinter GUI application.

    RULES:
    - This function blocks until the window is closed
    - Must be called from the main thread
    """
    root = tk.Tk()
    ReaderApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
