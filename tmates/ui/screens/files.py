"""
Files screen - read-only listing of generated files.
"""
from __future__ import annotations

from ...api import ApiError
from ...api.files import fetch_files
from ..components import format_numbered
from ..primitives import bold, gray, primary_bold
from .base import BaseScreen, navigation_action
from .commands import GlobalCommand, match_global, normalize
from .state import Action, FilesListState, Quit, Stay


class FilesScreen(BaseScreen):

    help_text = "/refresh • /back • /home • /quit"

    def render(self, listing: dict) -> str:
        files = listing.get("files") or []
        if not files:
            return gray("No files found.")
        lines = [primary_bold("Files")]
        for i, entry in enumerate(files, 1):
            details = f"({entry.get('modified_display', '')}, {entry.get('size_display', '')})"
            lines.append(f"{format_numbered(i)} {bold(entry.get('name', ''))} {gray(details)}")
        total = listing.get("total_count")
        if listing.get("has_more") and total:
            lines.append(gray(f"Showing {len(files)} of {total} files."))
        return "\n".join(lines)

    def run(self, state: FilesListState) -> Action:
        try:
            listing = self.fetch("Loading files", fetch_files, state.limit)
        except ApiError as e:
            return self.fail("Failed to load files.", e)

        self.toolbar.render_content(self.render(listing))
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
