"""
Interactive screens.

Screen/action types, the navigator, one handler class per screen, and
the inline login flow.
"""

from .state import (
    Screen,
    Action,
    HomeState,
    PinboardListState,
    PinboardDetailState,
    TeammatesState,
    MessagesListState,
    MessageThreadState,
    FilesListState,
    SettingsState,
    Push,
    Replace,
    Stay,
    Back,
    Home,
    Quit,
)
from .navigator import Navigator
from .base import ScreenContext, BaseScreen
from .router import ScreenRouter
from .login import LoginFlow, LoginStep, ensure_interactive_session

__all__ = [
    # Types
    "Screen",
    "Action",
    "HomeState",
    "PinboardListState",
    "PinboardDetailState",
    "TeammatesState",
    "MessagesListState",
    "MessageThreadState",
    "FilesListState",
    "SettingsState",
    "Push",
    "Replace",
    "Stay",
    "Back",
    "Home",
    "Quit",
    # Navigation
    "Navigator",
    "ScreenContext",
    "BaseScreen",
    "ScreenRouter",
    # Login
    "LoginFlow",
    "LoginStep",
    "ensure_interactive_session",
]
