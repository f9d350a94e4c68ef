"""
Command parsing shared by the screens.

Global commands match the whole trimmed, lowercased input exactly:
/quit (/exit), /back, /home, /refresh (/r).
"""

from enum import Enum
from typing import Optional


class GlobalCommand(Enum):
    QUIT = "quit"
    BACK = "back"
    HOME = "home"
    REFRESH = "refresh"


GLOBAL_COMMANDS = {
    "/quit": GlobalCommand.QUIT,
    "/exit": GlobalCommand.QUIT,
    "/back": GlobalCommand.BACK,
    "/home": GlobalCommand.HOME,
    "/refresh": GlobalCommand.REFRESH,
    "/r": GlobalCommand.REFRESH,
}


def normalize(raw: str) -> str:
    return raw.strip().lower()


def match_global(text: str) -> Optional[GlobalCommand]:
    """Match normalized input against the global commands."""
    return GLOBAL_COMMANDS.get(text)


def split_command(text: str) -> tuple[str, str]:
    """Split 'add 2' into ('add', '2'); the argument keeps inner spaces."""
    parts = text.strip().split(None, 1)
    if not parts:
        return "", ""
    return parts[0].lower(), parts[1].strip() if len(parts) > 1 else ""


def parse_index(text: str, count: int) -> Optional[int]:
    """
    Parse a 1-based selection.

    Returns:
        0-based index, or None if text is not a number in 1..count
    """
    text = text.strip()
    if not text.isdigit():
        return None
    number = int(text)
    if 1 <= number <= count:
        return number - 1
    return None
