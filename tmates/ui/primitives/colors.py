"""
Shared color definitions for terminal output.

Brand palette: lavender primary (#c4b5fd), sky-blue secondary (#93c5fd).
"""


class Colors:
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"
    PRIMARY = "\x1b[38;2;196;181;253m"
    SECONDARY = "\x1b[38;2;147;197;253m"
    GRAY = "\x1b[38;2;148;163;184m"
    YELLOW = "\x1b[38;2;250;204;21m"
    RED = "\x1b[38;2;239;68;68m"
    GREEN = "\x1b[38;2;34;197;94m"
    CYAN = "\x1b[38;2;34;211;238m"


PRIMARY_RGB = (196, 181, 253)
SECONDARY_RGB = (147, 197, 253)


def rgb(r: int, g: int, b: int) -> str:
    return f"\x1b[38;2;{r};{g};{b}m"


def lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    return (
        int(c1[0] + (c2[0] - c1[0]) * t),
        int(c1[1] + (c2[1] - c1[1]) * t),
        int(c1[2] + (c2[2] - c1[2]) * t),
    )


def get_gradient_color(pos: float) -> tuple:
    """Get the brand gradient color at position 0.0-1.0."""
    pos = max(0.0, min(1.0, pos))
    return lerp_color(PRIMARY_RGB, SECONDARY_RGB, pos)


def paint(text: str, *codes: str) -> str:
    """Wrap text in the given ANSI codes, resetting afterwards."""
    return f"{''.join(codes)}{text}{Colors.RESET}"


def primary(text: str) -> str:
    return paint(text, Colors.PRIMARY)


def primary_bold(text: str) -> str:
    return paint(text, Colors.PRIMARY, Colors.BOLD)


def secondary_bold(text: str) -> str:
    return paint(text, Colors.SECONDARY, Colors.BOLD)


def bold(text: str) -> str:
    return paint(text, Colors.BOLD)


def gray(text: str) -> str:
    return paint(text, Colors.GRAY)


def yellow(text: str) -> str:
    return paint(text, Colors.YELLOW)


def red(text: str) -> str:
    return paint(text, Colors.RED)


def green(text: str) -> str:
    return paint(text, Colors.GREEN)
