"""
Keyboard input handling for Tmates CLI.

Reads single keys in raw mode so the toolbar can edit the prompt line
itself. In raw mode Ctrl+C arrives as a key (KEY_CTRL_C) instead of
SIGINT, which lets the prompt cancel cleanly.
"""

import sys
import os
from contextlib import contextmanager

# Platform-specific imports
if os.name == 'nt':
    import msvcrt
else:
    import fcntl
    import termios
    import tty
    import select


@contextmanager
def raw_terminal():
    """Context manager for raw terminal mode (Unix only, no-op on Windows)."""
    if os.name == 'nt':
        yield None
    else:
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            # TCSANOW keeps keys typed between two reads
            tty.setraw(fd, termios.TCSANOW)
            yield fd
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def read_escape_sequence(fd) -> str:
    """
    Read remaining characters of an escape sequence after ESC was detected.

    Returns the extra characters (not including the initial ESC).
    Unix only - Windows handles escape sequences differently.
    """
    if os.name == 'nt':
        return ''

    flags = fcntl.fcntl(fd, fcntl.F_GETFL)
    fcntl.fcntl(fd, fcntl.F_SETFL, flags | os.O_NONBLOCK)
    try:
        select.select([sys.stdin], [], [], 0.005)
        extra = ''
        try:
            extra = sys.stdin.read(10) or ''
        except (IOError, BlockingIOError):
            pass
        return extra
    finally:
        fcntl.fcntl(fd, fcntl.F_SETFL, flags)


# Special key constants
KEY_ENTER = "KEY_ENTER"
KEY_BACKSPACE = "KEY_BACKSPACE"
KEY_ESC = "KEY_ESC"
KEY_CTRL_C = "KEY_CTRL_C"
KEY_CTRL_D = "KEY_CTRL_D"
KEY_CTRL_U = "KEY_CTRL_U"
KEY_EOF = "KEY_EOF"

UNIX_SPECIAL_CHARS = {
    '\r': KEY_ENTER,
    '\n': KEY_ENTER,
    '\x7f': KEY_BACKSPACE,
    '\x08': KEY_BACKSPACE,
    '\x03': KEY_CTRL_C,
    '\x04': KEY_CTRL_D,
    '\x15': KEY_CTRL_U,
}

WINDOWS_SPECIAL_CHARS = {
    b'\r': KEY_ENTER,
    b'\x08': KEY_BACKSPACE,
    b'\x03': KEY_CTRL_C,
    b'\x04': KEY_CTRL_D,
    b'\x15': KEY_CTRL_U,
}


def read_key() -> str:
    """
    Read a single key from stdin without echo.

    Returns the character, a KEY_* constant for editing/control keys,
    KEY_EOF when stdin is closed, or '' for ignored escape sequences
    (arrow keys and the like).
    """
    if os.name == 'nt':
        ch = msvcrt.getch()
        # Arrow/page keys send two bytes: 0xe0 or 0x00 followed by key code
        if ch in (b'\xe0', b'\x00'):
            msvcrt.getch()
            return ''
        if ch == b'\x1b':
            return KEY_ESC
        if ch in WINDOWS_SPECIAL_CHARS:
            return WINDOWS_SPECIAL_CHARS[ch]
        return ch.decode('utf-8', errors='ignore')

    with raw_terminal() as fd:
        ch = sys.stdin.read(1)
        if ch == '':
            return KEY_EOF
        if ch in UNIX_SPECIAL_CHARS:
            return UNIX_SPECIAL_CHARS[ch]
        if ch == '\x1b':
            extra = read_escape_sequence(fd)
            return '' if extra else KEY_ESC
        return ch


def flush_input():
    """
    Flush any pending input from stdin.

    Call this before a prompt so keys typed during a spinner don't leak
    into the next line.
    """
    if os.name == 'nt':
        while msvcrt.kbhit():
            msvcrt.getch()
        return

    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    flags = fcntl.fcntl(fd, fcntl.F_GETFL)
    try:
        tty.setraw(fd)
        fcntl.fcntl(fd, fcntl.F_SETFL, flags | os.O_NONBLOCK)
        while True:
            try:
                ch = sys.stdin.read(1)
                if not ch:
                    break
            except (IOError, BlockingIOError):
                break
    finally:
        fcntl.fcntl(fd, fcntl.F_SETFL, flags)
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
