"""
Plain-text formatting helpers for Tmates CLI.

No colors here; see ui/components/formatting.py for styled output.
"""

from datetime import datetime


def format_datetime(value: str | None, fallback: str = "Unknown") -> str:
    """
    Format an ISO-8601 timestamp in local time.

    Unparseable input is returned unchanged; missing input yields fallback.
    """
    if not value:
        return fallback
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M")


def truncate(text: str, max_len: int) -> str:
    """Truncate text to max_len characters, ending with an ellipsis if cut."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 1] + "…"


def humanize_key(key: str) -> str:
    """Turn a snake_case key into a display label."""
    return key.replace("_", " ")
