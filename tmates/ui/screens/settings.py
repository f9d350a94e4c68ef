"""
Settings screen - profile and mobile preferences (read-only).

Both documents are fetched concurrently.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from ...api import ApiError
from ...api.profile import fetch_mobile_settings, fetch_user_profile
from ...core.formatting import humanize_key
from ..components import format_setting_value
from ..primitives import gray, primary_bold
from .base import BaseScreen, navigation_action
from .commands import GlobalCommand, match_global, normalize
from .state import Action, Quit, SettingsState, Stay


class SettingsScreen(BaseScreen):

    help_text = "/refresh • /back • /home • /quit"

    def load(self) -> tuple[dict, dict]:
        with self.toolbar.spinner("Loading settings"):
            with ThreadPoolExecutor(max_workers=2) as executor:
                profile = executor.submit(fetch_user_profile, self.api)
                preferences = executor.submit(fetch_mobile_settings, self.api)
                return profile.result(), preferences.result()

    def render(self, profile: dict, preferences: dict) -> str:
        lines = [
            primary_bold("Profile"),
            f"Name: {profile.get('display_name') or gray('Not set')}",
            f"Email: {profile.get('email') or gray('Unknown')}",
            f"Role: {profile.get('role') or gray('Unknown')}",
            "",
            primary_bold("Mobile Settings"),
        ]
        for key, value in preferences.items():
            lines.append(f"- {humanize_key(key)}: {format_setting_value(value)}")
        return "\n".join(lines)

    def run(self, state: SettingsState) -> Action:
        try:
            profile, preferences = self.load()
        except ApiError as e:
            return self.fail("Failed to load settings.", e)

        self.toolbar.render_content(self.render(profile, preferences))
        raw = self.prompt()
        if raw is None:
            return Quit()

        text = normalize(raw)
        command = match_global(text)
        action = navigation_action(command)
        if action is not None:
            return action
        if not text or command is GlobalCommand.REFRESH:
            return Stay(state)
        return self.unknown()
