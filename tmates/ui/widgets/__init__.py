"""
Interactive UI widgets.

Reusable pieces that own terminal state: spinners and the fixed toolbar.
"""

from .spinner import Spinner, LineSpinner, FRAMES
from .toolbar import Toolbar, PROMPT_PREFIX, DEFAULT_HELP_TEXT

__all__ = [
    "Spinner",
    "LineSpinner",
    "FRAMES",
    "Toolbar",
    "PROMPT_PREFIX",
    "DEFAULT_HELP_TEXT",
]
