"""
Home screen - main menu of the application.

Shows the header, who is signed in, and the five sections.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..components import render_header, render_box
from ..primitives import bold, gray, primary, primary_bold
from .base import BaseScreen
from .commands import GlobalCommand, match_global, normalize
from .state import (
    Action,
    FilesListState,
    HomeState,
    MessagesListState,
    PinboardListState,
    Push,
    Quit,
    Screen,
    SettingsState,
    Stay,
    TeammatesState,
)


@dataclass(frozen=True)
class MenuEntry:
    key: str
    label: str
    summary: str
    screen: Callable[[], Screen]


MENU_ENTRIES = (
    MenuEntry("1", "Pinboard", "Latest highlights from your agents.", PinboardListState),
    MenuEntry("2", "Teammates", "Enable or disable agents for your organization.", TeammatesState),
    MenuEntry("3", "Messages", "Chat with your AI teammates.", MessagesListState),
    MenuEntry("4", "Files", "Review generated assets and downloads.", FilesListState),
    MenuEntry("5", "Settings", "Profile and notification preferences.", SettingsState),
)


class HomeScreen(BaseScreen):
    """Main menu: number or section name opens a screen."""

    help_text = "1-5 or a section name to open it • /quit to exit the Tmates CLI"

    def render(self, state: HomeState) -> str:
        email = state.session.email or "unknown user"
        welcome = render_box([
            bold("Welcome back!"),
            f"{gray('Signed in as ')}{bold(email)}",
        ])
        lines = [render_header(), "", welcome, "", primary_bold("Home")]
        for entry in MENU_ENTRIES:
            lines.append(f"{primary(entry.key)} {bold(entry.label)} {gray('- ' + entry.summary)}")
        return "\n".join(lines)

    def run(self, state: HomeState) -> Action:
        self.toolbar.render_content(self.render(state))
        raw = self.prompt()
        if raw is None:
            return Quit()

        choice = normalize(raw)
        if not choice:
            return Stay()
        command = match_global(choice)
        if command is GlobalCommand.QUIT:
            return Quit()
        if command is not None:
            return Stay()

        for entry in MENU_ENTRIES:
            if choice in (entry.key, entry.label.lower()):
                return Push(entry.screen())
        return self.unknown("Unknown option. Try again.")
