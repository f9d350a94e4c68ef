"""
User interface module.

Organized into layers:
- primitives/: Terminal I/O (keyboard, colors, terminal control)
- components/: Visual building blocks (header, box/table, formatting)
- widgets/: Stateful pieces that own the terminal (spinner, toolbar)
- screens/: Screen handlers, navigator, login flow
"""

from .primitives import Colors, strip_ansi
from .widgets import Toolbar, LineSpinner
from .screens import (
    Navigator,
    ScreenContext,
    ScreenRouter,
    LoginFlow,
    ensure_interactive_session,
)

__all__ = [
    "Colors",
    "strip_ansi",
    "Toolbar",
    "LineSpinner",
    "Navigator",
    "ScreenContext",
    "ScreenRouter",
    "LoginFlow",
    "ensure_interactive_session",
]
