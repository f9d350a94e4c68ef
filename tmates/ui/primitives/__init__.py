"""
Terminal I/O primitives.

Low-level terminal control, keyboard input, and color handling.
"""

from .terminal import (
    strip_ansi,
    visible_len,
    get_terminal_width,
    get_terminal_height,
    truncate_text,
)
from .keyboard_input import (
    raw_terminal,
    read_key,
    flush_input,
    KEY_ENTER,
    KEY_BACKSPACE,
    KEY_ESC,
    KEY_CTRL_C,
    KEY_CTRL_D,
    KEY_CTRL_U,
    KEY_EOF,
)
from .colors import (
    Colors,
    rgb,
    lerp_color,
    get_gradient_color,
    paint,
    primary,
    primary_bold,
    secondary_bold,
    bold,
    gray,
    yellow,
    red,
    green,
)

__all__ = [
    # Terminal
    "strip_ansi",
    "visible_len",
    "get_terminal_width",
    "get_terminal_height",
    "truncate_text",
    # Keyboard input
    "raw_terminal",
    "read_key",
    "flush_input",
    "KEY_ENTER",
    "KEY_BACKSPACE",
    "KEY_ESC",
    "KEY_CTRL_C",
    "KEY_CTRL_D",
    "KEY_CTRL_U",
    "KEY_EOF",
    # Colors
    "Colors",
    "rgb",
    "lerp_color",
    "get_gradient_color",
    "paint",
    "primary",
    "primary_bold",
    "secondary_bold",
    "bold",
    "gray",
    "yellow",
    "red",
    "green",
]
