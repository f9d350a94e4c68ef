"""
Screen and navigation action types.

Screens carry only what is needed to re-render without a network round
trip when re-entered via "back". Actions are returned by every screen
handler and applied by the Navigator.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ...auth import Session


# =============================================================================
# Screens
# =============================================================================

@dataclass
class HomeState:
    session: Session


@dataclass
class PinboardListState:
    limit: int = 10


@dataclass
class PinboardDetailState:
    post: dict


@dataclass
class TeammatesState:
    pass


@dataclass
class MessagesListState:
    pass


@dataclass
class MessageThreadState:
    """
    An open conversation.

    Mutable: the thread handler writes its message cache back here on exit
    so the stacked screen is caught up when re-entered.
    """
    thread_id: str
    title: str
    messages: Optional[list] = None
    total_messages: Optional[int] = None
    needs_refresh: bool = False


@dataclass
class FilesListState:
    limit: int = 25


@dataclass
class SettingsState:
    pass


Screen = Union[
    HomeState,
    PinboardListState,
    PinboardDetailState,
    TeammatesState,
    MessagesListState,
    MessageThreadState,
    FilesListState,
    SettingsState,
]


def screen_name(screen: Screen) -> str:
    """Short name for logging, e.g. 'MessageThread'."""
    return type(screen).__name__.removesuffix("State")


# =============================================================================
# Actions
# =============================================================================

@dataclass(frozen=True)
class Push:
    """Open a screen on top of the current one."""
    screen: Screen


@dataclass(frozen=True)
class Replace:
    """Swap the current screen without touching history."""
    screen: Screen


@dataclass(frozen=True)
class Stay:
    """Run the current screen again (optionally with a new state)."""
    screen: Optional[Screen] = field(default=None)


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Action = Union[Push, Replace, Stay, Back, Home, Quit]
