"""
Shared plumbing for screen handlers.

A handler renders its screen through the toolbar, prompts once and
returns a navigation action. API failures never escape a handler: they
become an error status plus Back.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from ...api import ApiClient, ApiError
from ..components import format_api_error
from ..widgets import Toolbar, DEFAULT_HELP_TEXT
from .commands import GlobalCommand
from .state import Action, Back, Home, Quit, Screen, Stay


@dataclass
class ScreenContext:
    """Collaborators shared by every handler."""
    toolbar: Toolbar
    api: ApiClient
    poll_attempts: int = 8
    poll_delay: float = 1.2
    sleep: Callable[[float], None] = time.sleep


class BaseScreen:
    """Base class for screen handlers."""

    help_text = DEFAULT_HELP_TEXT

    def __init__(self, ctx: ScreenContext):
        self.ctx = ctx
        self.toolbar = ctx.toolbar
        self.api = ctx.api

    def handle(self, state: Screen) -> Action:
        """Run the screen with its help line; the default is restored on every exit."""
        with self.toolbar.help_text(self.help_text):
            return self.run(state)

    def run(self, state: Screen) -> Action:
        raise NotImplementedError

    def fetch(self, label: str, func, *args):
        """Call an endpoint function with a spinner on the status line."""
        with self.toolbar.spinner(label):
            return func(self.api, *args)

    def report(self, message: str, error: Exception):
        """Show a failure on the status line and its details in the content area."""
        self.toolbar.show_error(message)
        self.toolbar.append_content(format_api_error(error))

    def fail(self, message: str, error: ApiError) -> Back:
        self.report(message, error)
        return Back()

    def unknown(self, message: str = "Unknown command.") -> Stay:
        self.toolbar.show_error(message)
        return Stay()

    def prompt(self) -> Optional[str]:
        return self.toolbar.prompt_user()


def navigation_action(command: Optional[GlobalCommand]) -> Optional[Action]:
    """Map /quit, /home and /back to their actions."""
    if command is GlobalCommand.QUIT:
        return Quit()
    if command is GlobalCommand.HOME:
        return Home()
    if command is GlobalCommand.BACK:
        return Back()
    return None
