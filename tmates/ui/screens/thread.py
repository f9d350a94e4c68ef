"""
Message thread screen - an open conversation.

Unlike the other screens this one loops on its own prompt: every line is
either a command or a message to send. After sending, the thread is polled
a bounded number of times for agent replies. Messages already printed are
tracked by key so refreshes and polls never print them twice.

On every exit (except a failed initial load) the message cache is written
back to the MessageThreadState so re-entering via /back skips the fetch.
"""
from __future__ import annotations

from ...api import ApiError
from ...api.messages import fetch_chat_thread, send_chat_message
from ...core.formatting import format_datetime
from ...core.logging import debug_log
from ..primitives import bold, gray, primary_bold
from .base import BaseScreen
from .commands import GlobalCommand, match_global
from .state import Action, Back, Home, MessageThreadState, Quit

MAX_HISTORY = 10


def message_key(message: dict, index: int) -> str:
    """Stable identity of a message: its id, else timestamp + position + content prefix."""
    if message.get("id"):
        return str(message["id"])
    created = message.get("created_at") or "unknown"
    content = (message.get("content") or "")[:30] or "content"
    return f"{created}:{index}:{content}"


def format_message(message: dict) -> str:
    author = message.get("author") or message.get("role") or "unknown"
    timestamp = format_datetime(message.get("created_at"))
    lines = [
        f"{primary_bold(author)} {gray(f'({timestamp})')}:",
        (message.get("content") or "").strip(),
    ]
    for attachment in message.get("attachments") or []:
        lines.append(f"   📎 {attachment.get('name') or attachment.get('uri', '')}")
    lines.append("")
    return "\n".join(lines)


class MessageThreadScreen(BaseScreen):

    help_text = "Type a message and press Enter • /refresh • /back • /home • /quit"

    def run(self, state: MessageThreadState) -> Action:
        return ThreadView(self, state).run()


class ThreadView:
    """One visit to a thread: local message cache plus the printed-key set."""

    def __init__(self, screen: MessageThreadScreen, state: MessageThreadState):
        self.screen = screen
        self.ctx = screen.ctx
        self.toolbar = screen.toolbar
        self.state = state
        self.messages = list(state.messages or [])
        self.title = state.title
        self.seen: set[str] = set()

    # -------------------------------------------------------------------------
    # Data
    # -------------------------------------------------------------------------

    def load(self, label: str) -> bool:
        """Fetch the full thread into the local cache."""
        try:
            thread = self.screen.fetch(label, fetch_chat_thread, self.state.thread_id)
        except ApiError as e:
            self.screen.report("Failed to load conversation.", e)
            return False
        self.messages = list(thread.get("messages") or [])
        self.title = thread.get("title") or self.title
        return True

    def poll_for_replies(self, baseline: int) -> list:
        """
        Refetch until the thread grows past baseline or attempts run out.

        Failures end polling quietly; they only reach the debug log.
        """
        for attempt in range(1, self.ctx.poll_attempts + 1):
            self.ctx.sleep(self.ctx.poll_delay)
            try:
                thread = fetch_chat_thread(self.ctx.api, self.state.thread_id)
            except ApiError as e:
                debug_log(f"Reply polling failed on attempt {attempt}: {e}")
                break
            fetched = thread.get("messages") or []
            if len(fetched) > baseline:
                return fetched[baseline:]
        return []

    def write_back(self):
        self.state.messages = self.messages
        self.state.total_messages = len(self.messages)
        self.state.title = self.title
        self.state.needs_refresh = False

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def print_from(self, start: int) -> bool:
        """Print unseen messages from start onwards. Returns True if any were printed."""
        chunks = []
        for index in range(start, len(self.messages)):
            key = message_key(self.messages[index], index)
            if key in self.seen:
                continue
            self.seen.add(key)
            chunks.append(format_message(self.messages[index]))
        if chunks:
            self.toolbar.append_content("\n".join(chunks).rstrip("\n"))
        return bool(chunks)

    def render_initial(self):
        total = len(self.messages)
        start = max(total - MAX_HISTORY, 0)
        for index in range(start):
            self.seen.add(message_key(self.messages[index], index))

        lines = [bold(self.title)]
        if total == 0:
            lines.append(gray("No messages yet. Start the conversation!"))
        elif start > 0:
            lines.append(gray(f"Showing last {total - start} of {total} messages."))
        lines.append("")
        self.toolbar.render_content("\n".join(lines))
        self.print_from(start)

    # -------------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------------

    def run(self) -> Action:
        if not self.messages or self.state.needs_refresh:
            if not self.load("Loading conversation"):
                return Back()

        self.render_initial()

        while True:
            raw = self.toolbar.prompt_user()
            if raw is None:
                break
            text = raw.strip()
            if not text:
                continue

            command = match_global(text.lower())
            if command is GlobalCommand.QUIT:
                break
            if command is GlobalCommand.HOME:
                self.write_back()
                return Home()
            if command is GlobalCommand.BACK:
                self.write_back()
                return Back()
            if command is GlobalCommand.REFRESH:
                self.refresh()
                continue
            self.send(text)

        self.write_back()
        return Quit()

    def refresh(self):
        previous = len(self.messages)
        if self.load("Refreshing conversation") and not self.print_from(previous):
            self.toolbar.append_content(gray("No new messages."))

    def send(self, content: str):
        try:
            sent = self.screen.fetch("Sending message", send_chat_message, self.state.thread_id, content)
        except ApiError as e:
            self.screen.report("Failed to send message.", e)
            return
        self.toolbar.show_success("Message sent.")

        offset = len(self.messages)
        self.messages.append(sent or {"role": "user", "content": content})
        self.print_from(offset)

        with self.toolbar.spinner("Waiting for replies"):
            replies = self.poll_for_replies(len(self.messages))
        if replies:
            offset = len(self.messages)
            self.messages.extend(replies)
            self.print_from(offset)
