"""
Spinner animation.

Spinner runs a daemon thread that hands each frame to a callback; it owns
no terminal state itself. LineSpinner is the single-line variant used by
the one-shot commands (login, logout).
"""

import sys
import threading
from typing import Callable, Optional, TextIO

from ..primitives import Colors, green, red, strip_ansi

FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
FRAME_INTERVAL = 0.08


class Spinner:
    """Cancellable repeating frame ticker."""

    def __init__(self, on_frame: Callable[[str], None], interval: float = FRAME_INTERVAL):
        self._on_frame = on_frame
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def start(self):
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._on_frame(FRAMES[0])
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        index = 1
        while not self._stop_event.wait(self._interval):
            self._on_frame(FRAMES[index % len(FRAMES)])
            index += 1

    def stop(self, wait: bool = True):
        """
        Stop ticking.

        With wait=False a frame already in flight may still be delivered.
        """
        self._stop_event.set()
        if self._thread:
            if wait and self._thread is not threading.current_thread():
                self._thread.join(timeout=1.0)
            self._thread = None


class LineSpinner:
    """
    Spinner on the current output line, resolved with succeed() or fail().

    On a non-terminal stream it prints "label..." once instead of animating.
    """

    def __init__(self, label: str, stream: Optional[TextIO] = None):
        self.label = label
        self.stream = stream or sys.stdout
        self._is_tty = self.stream.isatty()
        self._lock = threading.Lock()
        self._spinner: Spinner | None = None

    def _write(self, text: str):
        with self._lock:
            try:
                self.stream.write(text)
                self.stream.flush()
            except OSError:
                pass  # Terminal closed

    def _frame(self, frame: str):
        self._write(f"\r\033[2K{Colors.CYAN}{frame}{Colors.RESET} {self.label}")

    def start(self) -> "LineSpinner":
        if not self._is_tty:
            self._write(f"{self.label}...\n")
            return self
        self._spinner = Spinner(self._frame)
        self._spinner.start()
        return self

    def _finish(self, line: str):
        if self._spinner:
            self._spinner.stop()
            self._spinner = None
            self._write(f"\r\033[2K{line}\n")
        else:
            self._write(f"{strip_ansi(line)}\n")

    def succeed(self, text: str):
        self._finish(green(f"✓ {text}"))

    def fail(self, text: str):
        self._finish(red(f"✗ {text}"))
