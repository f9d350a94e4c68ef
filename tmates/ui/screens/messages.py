"""
Messages screen - conversation list.

A number opens a thread; "new <agent_key>" starts one; "delete <n>" and
"clear <n>" act on the nth listed thread and stay on the list.
"""
from __future__ import annotations

from ...api import ApiError
from ...api.messages import (
    clear_chat_history,
    create_chat_thread,
    delete_chat_thread,
    fetch_chat_threads,
)
from ...core.formatting import format_datetime, truncate
from ...core.logging import debug_log
from ..components import format_numbered
from ..primitives import bold, gray, primary_bold
from .base import BaseScreen, navigation_action
from .commands import GlobalCommand, match_global, parse_index, split_command
from .state import Action, MessageThreadState, MessagesListState, Push, Quit, Stay

PREVIEW_LENGTH = 80


def thread_title(thread: dict) -> str:
    return thread.get("title") or ", ".join(thread.get("agent_keys") or [])


class MessagesScreen(BaseScreen):

    help_text = "[number] open • new <agent_key> • delete <n> • clear <n> • /refresh • /back • /home • /quit"

    def render(self, threads: list) -> str:
        if not threads:
            return f'{gray("No conversations yet.")} Start one with "new <agent_key>".'
        lines = [primary_bold("Messages")]
        for i, thread in enumerate(threads, 1):
            last_activity = format_datetime(thread.get("last_activity"))
            preview = thread.get("last_message_preview")
            preview = truncate(preview, PREVIEW_LENGTH) if preview else "-"
            lines.append(f"{format_numbered(i)} {bold(thread_title(thread))} {gray(f'({last_activity})')}")
            lines.append(f"   {gray(preview)}")
        return "\n".join(lines)

    def run(self, state: MessagesListState) -> Action:
        try:
            threads = self.fetch("Loading conversations", fetch_chat_threads)
        except ApiError as e:
            return self.fail("Failed to load conversations.", e)
        debug_log(f"Messages screen rendered {len(threads)} threads")

        self.toolbar.render_content(self.render(threads))
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

        if text.isdigit():
            index = parse_index(text, len(threads))
            if index is None:
                self.toolbar.show_error("Invalid thread selection.")
                return Stay(state)
            thread = threads[index]
            return Push(MessageThreadState(thread_id=thread["id"], title=thread_title(thread)))

        verb, argument = split_command(text)
        if verb == "new":
            if not argument:
                self.toolbar.show_error('Specify an agent key, e.g. "new adam".')
                return Stay(state)
            return self._create(argument, state)
        if verb in ("delete", "clear"):
            self._maintain(verb, argument, threads)
            return Stay(state)
        return self.unknown()

    def _create(self, agent_key: str, state: MessagesListState) -> Action:
        try:
            thread = self.fetch(f"Creating conversation with {agent_key}", create_chat_thread, agent_key)
        except ApiError as e:
            self.report("Failed to create conversation.", e)
            return Stay(state)
        self.toolbar.show_success("Conversation created.")
        return Push(MessageThreadState(thread_id=thread["id"], title=thread.get("title") or agent_key))

    def _maintain(self, verb: str, argument: str, threads: list):
        if not argument:
            self.toolbar.show_error("Specify the thread number.")
            return
        index = parse_index(argument, len(threads))
        if index is None:
            self.toolbar.show_error("Invalid thread number.")
            return

        thread = threads[index]
        try:
            if verb == "delete":
                self.fetch("Deleting conversation", delete_chat_thread, thread["id"])
                self.toolbar.show_success("Conversation deleted.")
            else:
                self.fetch("Clearing conversation", clear_chat_history, thread["id"])
                self.toolbar.show_success("Conversation history cleared.")
        except ApiError as e:
            self.report("Operation failed.", e)
