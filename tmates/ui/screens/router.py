"""
Screen router - dispatches the current screen to its handler.

The dispatch is an exhaustive isinstance chain: a new screen type fails
type checking (assert_never) until it gets a handler here.
"""
from __future__ import annotations

import traceback
from typing import assert_never

from ...core.logging import debug_log
from .base import BaseScreen, ScreenContext
from .files import FilesScreen
from .home import HomeScreen
from .messages import MessagesScreen
from .pinboard import PinboardDetailScreen, PinboardScreen
from .settings import SettingsScreen
from .state import (
    Action,
    Back,
    FilesListState,
    HomeState,
    MessageThreadState,
    MessagesListState,
    PinboardDetailState,
    PinboardListState,
    Screen,
    SettingsState,
    TeammatesState,
    screen_name,
)
from .teammates import TeammatesScreen
from .thread import MessageThreadScreen


class ScreenRouter:
    """Callable handed to Navigator.run()."""

    def __init__(self, ctx: ScreenContext):
        self.ctx = ctx
        self.home = HomeScreen(ctx)
        self.pinboard = PinboardScreen(ctx)
        self.pinboard_detail = PinboardDetailScreen(ctx)
        self.teammates = TeammatesScreen(ctx)
        self.messages = MessagesScreen(ctx)
        self.thread = MessageThreadScreen(ctx)
        self.files = FilesScreen(ctx)
        self.settings = SettingsScreen(ctx)

    def handler_for(self, screen: Screen) -> BaseScreen:
        if isinstance(screen, HomeState):
            return self.home
        elif isinstance(screen, PinboardListState):
            return self.pinboard
        elif isinstance(screen, PinboardDetailState):
            return self.pinboard_detail
        elif isinstance(screen, TeammatesState):
            return self.teammates
        elif isinstance(screen, MessagesListState):
            return self.messages
        elif isinstance(screen, MessageThreadState):
            return self.thread
        elif isinstance(screen, FilesListState):
            return self.files
        elif isinstance(screen, SettingsState):
            return self.settings
        else:
            assert_never(screen)

    def __call__(self, screen: Screen) -> Action:
        handler = self.handler_for(screen)
        debug_log(f"Rendering {screen_name(screen)}")
        try:
            return handler.handle(screen)
        except Exception as e:
            debug_log(f"Unhandled error on {screen_name(screen)}: {e!r}\n{traceback.format_exc()}")
            self.ctx.toolbar.show_error(f"Unexpected error: {e}")
            return Back()
