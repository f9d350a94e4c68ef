"""
Teammates screen - the agent catalog.

"add <number|key>" hires an agent, "remove <number|key>" releases it.
The screen always stays put so the catalog can be reviewed after a change.
"""
from __future__ import annotations

from typing import Optional

from ...api import ApiError
from ...api.teammates import fetch_agent_store, manage_agent
from ..components import render_table
from ..primitives import bold, gray, primary, primary_bold
from .base import BaseScreen, navigation_action
from .commands import GlobalCommand, match_global, parse_index, split_command
from .state import Action, Quit, Stay, TeammatesState

COLUMN_WIDTHS = [4, 30, 40]


def resolve_agent(target: str, agents: list) -> Optional[dict]:
    """Find an agent by 1-based position or case-insensitive key."""
    if not target:
        return None
    index = parse_index(target, len(agents))
    if index is not None:
        return agents[index]
    wanted = target.strip().lower()
    for agent in agents:
        if str(agent.get("key", "")).lower() == wanted:
            return agent
    return None


class TeammatesScreen(BaseScreen):

    help_text = "add <number|key> • remove <number|key> • /refresh • /back • /home • /quit"

    def render(self, agents: list) -> str:
        if not agents:
            return f"{primary_bold('Teammates')}\n{gray('No agents available.')}"
        rows = []
        for i, agent in enumerate(agents, 1):
            name = agent.get("name") or agent.get("key", "")
            if agent.get("description"):
                name = f"{name}\n{gray(agent['description'])}"
            status = primary("Enabled") if agent.get("hired") else gray("Disabled")
            rows.append([str(i), name, status])
        table = render_table([bold("#"), bold("Agent"), bold("Status")], rows, COLUMN_WIDTHS)
        return f"{primary_bold('Teammates')}\n{table}"

    def run(self, state: TeammatesState) -> Action:
        try:
            agents = self.fetch("Loading teammates", fetch_agent_store)
        except ApiError as e:
            return self.fail("Failed to load teammates.", e)

        self.toolbar.render_content(self.render(agents))
        raw = self.prompt()
        if raw is None:
            return Quit()

        text = raw.strip()
        command = match_global(text.lower())
        action = navigation_action(command)
        if action is not None:
            return action
        if not text or command is GlobalCommand.REFRESH:
            return Stay(state)

        verb, target = split_command(text)
        if verb not in ("add", "remove"):
            return self.unknown()

        agent = resolve_agent(target, agents)
        if agent is None:
            self.toolbar.show_error("No matching agent found.")
            return Stay(state)

        self._toggle(agent, verb)
        return Stay(state)

    def _toggle(self, agent: dict, action: str):
        name = agent.get("name") or agent["key"]
        progress = "Enabling" if action == "add" else "Disabling"
        try:
            with self.toolbar.spinner(f"{progress} {name}"):
                response = manage_agent(self.api, agent["key"], action)
            if not response.get("success"):
                raise ApiError(response.get("message") or "Request failed")
        except ApiError as e:
            self.report("Operation failed.", e)
            return
        self.toolbar.show_success(f"{name} {'enabled' if action == 'add' else 'disabled'}.")
