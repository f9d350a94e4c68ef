"""
Pinboard screens - post list and post detail.
"""
from __future__ import annotations

from ...api import ApiError
from ...api.pinboard import fetch_pinboard_post, fetch_pinboard_posts
from ...core.formatting import format_datetime, truncate
from ..components import format_numbered
from ..primitives import bold, gray, primary_bold
from .base import BaseScreen, navigation_action
from .commands import GlobalCommand, match_global, normalize, parse_index
from .state import (
    Action,
    Back,
    Home,
    PinboardDetailState,
    PinboardListState,
    Push,
    Quit,
    Stay,
)

EXCERPT_LENGTH = 120


class PinboardScreen(BaseScreen):
    """Latest posts; a number opens the full post."""

    help_text = "[number] open post • /refresh • /back • /home • /quit"

    def render(self, posts: list) -> str:
        if not posts:
            return gray("No pinboard posts found.")
        lines = [primary_bold("Pinboard")]
        for i, post in enumerate(posts, 1):
            timestamp = format_datetime(post.get("created_at"), fallback="Unknown date")
            priority = post.get("priority")
            suffix = gray(f" [{priority}]") if priority else ""
            lines.append(f"{format_numbered(i)} {bold(post.get('title', ''))} {gray(f'({timestamp})')}{suffix}")
            if post.get("excerpt"):
                lines.append(f"   {gray(truncate(post['excerpt'], EXCERPT_LENGTH))}")
        return "\n".join(lines)

    def run(self, state: PinboardListState) -> Action:
        try:
            posts = self.fetch("Loading pinboard", fetch_pinboard_posts, state.limit)
        except ApiError as e:
            return self.fail("Failed to load pinboard.", e)

        self.toolbar.render_content(self.render(posts))
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

        index = parse_index(text, len(posts))
        if index is None:
            if text.isdigit():
                if not posts:
                    self.toolbar.show_error("No posts to open.")
                else:
                    self.toolbar.show_error(f"Select a number between 1 and {len(posts)}")
                return Stay(state)
            return self.unknown()

        try:
            detail = self.fetch("Opening post", fetch_pinboard_post, posts[index]["slug"])
        except ApiError as e:
            return self.fail("Failed to load post.", e)
        return Push(PinboardDetailState(post=detail))


class PinboardDetailScreen(BaseScreen):
    """Full post. Anything but /home or /quit goes back."""

    help_text = "Enter or /back to return • /home • /quit"

    def render(self, post: dict) -> str:
        lines = [bold(post.get("title", ""))]
        if post.get("author_display"):
            lines.append(gray(f"By {post['author_display']}"))
        if post.get("created_at"):
            lines.append(gray(format_datetime(post["created_at"])))
        lines.append("")
        body = post.get("content_md") or post.get("excerpt") or "(no content)"
        lines.append(body.strip())

        for heading, key in (("Attachments", "attachments"), ("Sources", "sources")):
            items = post.get(key) or []
            if not items:
                continue
            lines.append("")
            lines.append(f"{heading}:")
            for i, item in enumerate(items, 1):
                url = item.get("url", "")
                lines.append(f"  {i}. {item.get('label') or url} → {url}")
        return "\n".join(lines)

    def run(self, state: PinboardDetailState) -> Action:
        self.toolbar.render_content(self.render(state.post))
        raw = self.prompt()
        if raw is None:
            return Quit()

        command = match_global(normalize(raw))
        if command is GlobalCommand.QUIT:
            return Quit()
        if command is GlobalCommand.HOME:
            return Home()
        return Back()
