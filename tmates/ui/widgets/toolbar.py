"""
Fixed bottom toolbar - the only writer to the terminal.

Layout (interactive terminal):

    rows 1 .. N-3   content region (scroll region, redrawn per screen)
    row  N-2        status line: spinner, ✓/✗ message, or blank
    row  N-1        prompt line: "❯ " + current input
    row  N          help line

The content cursor is kept with DECSC/DECRC (save/restore cursor) so
status redraws never disturb content output. On a non-terminal stream
every operation degrades to plain sequential writes.
"""

import sys
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TextIO

from ...core.logging import debug_log
from ..primitives import (
    Colors,
    gray,
    green,
    red,
    get_terminal_width,
    get_terminal_height,
    read_key,
    flush_input,
    KEY_ENTER,
    KEY_BACKSPACE,
    KEY_CTRL_C,
    KEY_CTRL_D,
    KEY_CTRL_U,
    KEY_EOF,
)
from ..primitives.terminal import (
    CLEAR_SCREEN,
    CLEAR_LINE,
    SAVE_CURSOR,
    RESTORE_CURSOR,
    RESET_SCROLL_REGION,
    move_to,
    set_scroll_region,
    truncate_text,
)
from .spinner import Spinner

PROMPT_PREFIX = "❯ "
DEFAULT_HELP_TEXT = "/quit to exit the Tmates CLI"
STATUS_REVERT_SECONDS = 2.0
BOTTOM_LINES = 3


class Toolbar:
    """
    Renderer with a fixed status/prompt/help area.

    Usage:
        toolbar = Toolbar()
        toolbar.init()
        toolbar.render_content("...")
        with toolbar.spinner("Loading pinboard"):
            posts = fetch_pinboard_posts(api)
        line = toolbar.prompt_user()   # None when cancelled
        toolbar.cleanup()
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        input_stream: Optional[TextIO] = None,
        is_tty: Optional[bool] = None,
        key_reader: Optional[Callable[[], str]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.stream = stream or sys.stdout
        self.input_stream = input_stream or sys.stdin
        if is_tty is None:
            is_tty = self.stream.isatty() and self.input_stream.isatty()
        self.is_tty = is_tty
        self._key_reader = key_reader or read_key
        self._flush_input = flush_input if key_reader is None else None
        self._clock = clock

        self._lock = threading.RLock()
        self._active = False
        self._help_text = DEFAULT_HELP_TEXT

        # Status line
        self._spinner: Spinner | None = None
        self._spinner_label: str | None = None
        self._spinner_frame = ""
        self._message: str | None = None
        self._message_until = 0.0
        self._revert_timer: threading.Timer | None = None

        # Prompt line
        self._prompting = False
        self._buffer = ""
        self.active_readers = 0

    # -------------------------------------------------------------------------
    # Low-level output
    # -------------------------------------------------------------------------

    def _write(self, text: str):
        """Best-effort write; a closed terminal is ignored."""
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError):
            pass

    def _rows(self) -> int:
        return max(get_terminal_height(), BOTTOM_LINES + 2)

    def _status_text(self) -> str:
        if self._spinner is not None:
            return f"{Colors.CYAN}{self._spinner_frame}{Colors.RESET} {self._spinner_label}..."
        if self._message and self._clock() < self._message_until:
            return self._message
        return ""

    def _prompt_text(self) -> str:
        width = get_terminal_width()
        room = max(1, width - len(PROMPT_PREFIX) - 1)
        shown = self._buffer[-room:] if self._prompting else ""
        return f"{Colors.BOLD}{PROMPT_PREFIX}{Colors.RESET}{shown}"

    def _place_cursor(self, rows: int) -> str:
        """Where the cursor rests after a bottom-area redraw."""
        if self._prompting:
            width = get_terminal_width()
            room = max(1, width - len(PROMPT_PREFIX) - 1)
            col = len(PROMPT_PREFIX) + len(self._buffer[-room:]) + 1
            return move_to(rows - 1, col)
        return RESTORE_CURSOR

    def _draw_status(self):
        if not (self.is_tty and self._active):
            return
        with self._lock:
            rows = self._rows()
            self._write(
                f"{move_to(rows - 2)}{CLEAR_LINE}{self._status_text()}"
                f"{self._place_cursor(rows)}"
            )

    def _draw_bottom(self):
        if not (self.is_tty and self._active):
            return
        with self._lock:
            rows = self._rows()
            help_line = truncate_text(self._help_text, get_terminal_width() - 1)
            self._write(
                f"{move_to(rows - 2)}{CLEAR_LINE}{self._status_text()}"
                f"{move_to(rows - 1)}{CLEAR_LINE}{self._prompt_text()}"
                f"{move_to(rows)}{CLEAR_LINE}{gray(help_line)}"
                f"{self._place_cursor(rows)}"
            )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def init(self):
        """Take over the terminal. No-op positioning on a non-terminal stream."""
        with self._lock:
            self._active = True
            if not self.is_tty:
                return
            rows = self._rows()
            self._write(f"{set_scroll_region(1, rows - BOTTOM_LINES)}{CLEAR_SCREEN}{SAVE_CURSOR}")
            self._draw_bottom()

    def cleanup(self):
        """Stop animations and give the terminal back."""
        with self._lock:
            self._stop_spinner()
            self._cancel_revert()
            if self._active and self.is_tty:
                rows = self._rows()
                self._write(f"{RESET_SCROLL_REGION}{move_to(rows)}{CLEAR_LINE}\n")
            self._active = False

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def render_content(self, text: str):
        """Clear the content region and write text from the top."""
        with self._lock:
            if not self.is_tty:
                self._write(text if text.endswith("\n") else f"{text}\n")
                return
            body = text.replace("\r\n", "\n").replace("\n", "\r\n")
            self._write(f"{CLEAR_SCREEN}{body}\r\n{SAVE_CURSOR}")
            self._draw_bottom()

    def append_content(self, text: str):
        """Write text below the current content."""
        with self._lock:
            if not self.is_tty:
                self._write(text if text.endswith("\n") else f"{text}\n")
                return
            body = text.replace("\r\n", "\n").replace("\n", "\r\n")
            self._write(f"{RESTORE_CURSOR}{body}\r\n{SAVE_CURSOR}")
            self._draw_bottom()

    # -------------------------------------------------------------------------
    # Status line
    # -------------------------------------------------------------------------

    def _on_frame(self, source: Spinner, frame: str):
        with self._lock:
            if self._spinner is not source:
                return
            self._spinner_frame = frame
            self._draw_status()

    def _stop_spinner(self):
        spinner = self._spinner
        self._spinner = None
        self._spinner_label = None
        if spinner is not None:
            spinner.stop(wait=False)

    def _cancel_revert(self):
        if self._revert_timer is not None:
            self._revert_timer.cancel()
            self._revert_timer = None

    def show_spinner(self, label: str):
        """Animate label on the status line until cleared."""
        with self._lock:
            if not self.is_tty:
                self._write(f"{label}...\n")
                return
            self._stop_spinner()
            self._spinner_label = label
            spinner = Spinner(lambda frame: self._on_frame(spinner, frame))
            self._spinner = spinner
        spinner.start()

    def clear_spinner(self):
        """Stop the animation and repaint the status line."""
        with self._lock:
            self._stop_spinner()
            self._draw_status()

    @contextmanager
    def spinner(self, label: str) -> Iterator[None]:
        """Show a spinner for the duration of the block."""
        self.show_spinner(label)
        try:
            yield
        finally:
            self.clear_spinner()

    def _show_message(self, text: str):
        with self._lock:
            self._stop_spinner()
            self._cancel_revert()
            self._message = text
            self._message_until = self._clock() + STATUS_REVERT_SECONDS
            if not self.is_tty:
                return
            self._draw_status()
            self._revert_timer = threading.Timer(STATUS_REVERT_SECONDS, self._draw_status)
            self._revert_timer.daemon = True
            self._revert_timer.start()

    def show_success(self, text: str):
        if not self.is_tty:
            self._write(f"✓ {text}\n")
        self._show_message(green(f"✓ {text}"))

    def show_error(self, text: str):
        if not self.is_tty:
            self._write(f"✗ {text}\n")
        self._show_message(red(f"✗ {text}"))

    # -------------------------------------------------------------------------
    # Help line
    # -------------------------------------------------------------------------

    def set_help_text(self, hint: str):
        with self._lock:
            self._help_text = hint
            self._draw_bottom()

    def reset_help_text(self):
        self.set_help_text(DEFAULT_HELP_TEXT)

    @property
    def status_line(self) -> str:
        """Text currently shown on the status line (empty when idle)."""
        with self._lock:
            return self._status_text()

    @property
    def current_help_text(self) -> str:
        return self._help_text

    @contextmanager
    def help_text(self, hint: str) -> Iterator[None]:
        """Override the help line for the duration of the block."""
        self.set_help_text(hint)
        try:
            yield
        finally:
            self.reset_help_text()

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def prompt_user(self) -> Optional[str]:
        """
        Block until the user submits a line.

        Returns:
            The submitted text, or None on Ctrl+C, Ctrl+D on an empty line,
            or end of input
        """
        with self._lock:
            self._stop_spinner()
            self.active_readers += 1
        try:
            if self.is_tty:
                line = self._read_line_raw()
            else:
                line = self._read_line_plain()
        except (KeyboardInterrupt, EOFError):
            line = None
        finally:
            with self._lock:
                self.active_readers -= 1
                self._prompting = False
                self._buffer = ""
                self._draw_bottom()
        debug_log("Prompt cancelled" if line is None else f"Prompt submitted ({len(line)} chars)")
        return line

    def _read_line_plain(self) -> Optional[str]:
        if self._help_text:
            self._write(f"{self._help_text}\n")
        self._write(PROMPT_PREFIX)
        line = self.input_stream.readline()
        if line == "":
            self._write("\n")
            return None
        return line.rstrip("\r\n")

    def _read_line_raw(self) -> Optional[str]:
        if self._flush_input:
            self._flush_input()
        with self._lock:
            self._prompting = True
            self._buffer = ""
            self._draw_bottom()

        while True:
            key = self._key_reader()
            if key == KEY_ENTER:
                return self._buffer
            if key in (KEY_CTRL_C, KEY_EOF):
                return None
            if key == KEY_CTRL_D:
                if not self._buffer:
                    return None
                continue
            with self._lock:
                if key == KEY_BACKSPACE:
                    self._buffer = self._buffer[:-1]
                elif key == KEY_CTRL_U:
                    self._buffer = ""
                elif len(key) == 1 and key.isprintable():
                    self._buffer += key
                else:
                    continue  # Escape sequences and other control keys
                self._draw_bottom()
