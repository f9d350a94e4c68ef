"""
Terminal utilities for Tmates CLI.

Handles terminal size, ANSI stripping, and control sequences. Only the
toolbar writes these sequences to the terminal.
"""

import os
import re

ANSI_PATTERN = re.compile(r'\x1b\[[0-9;?]*[A-Za-z]|\x1b[78]')

# Control sequences
CLEAR_SCREEN = "\033[2J\033[H"
CLEAR_LINE = "\033[2K"
SAVE_CURSOR = "\0337"
RESTORE_CURSOR = "\0338"
RESET_SCROLL_REGION = "\033[r"

DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 24


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return ANSI_PATTERN.sub('', text)


def visible_len(text: str) -> int:
    return len(strip_ansi(text))


def get_terminal_width() -> int:
    """Get terminal width, with fallback."""
    try:
        return os.get_terminal_size().columns
    except OSError:
        return DEFAULT_COLUMNS


def get_terminal_height() -> int:
    """Get terminal height, with fallback."""
    try:
        return os.get_terminal_size().lines
    except OSError:
        return DEFAULT_ROWS


def move_to(row: int, col: int = 1) -> str:
    """Absolute cursor position (1-based)."""
    return f"\033[{row};{col}H"


def set_scroll_region(top: int, bottom: int) -> str:
    return f"\033[{top};{bottom}r"


def truncate_text(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text to max_len, adding suffix if truncated. Returns plain text (no ANSI)."""
    text = strip_ansi(text)  # Colors should be added after truncation, not before
    if len(text) <= max_len:
        return text
    if max_len <= len(suffix):
        return text[:max_len]
    return text[:max_len - len(suffix)] + suffix
