"""
Styled text formatting for UI display.

Error and value formatting shared by the screens and one-shot commands.
"""

import json

from ...api.client import ApiError
from ..primitives import primary, gray, red


def format_api_error(error: BaseException) -> str:
    """
    Format an error for display.

    ApiErrors with a status render as "[status] message" in red, followed by
    the pretty-printed detail payload when it is a JSON object or list.
    """
    if isinstance(error, ApiError):
        if error.status is None:
            return red(error.message)
        text = red(f"[{error.status}] {error.message}")
        if isinstance(error.detail, (dict, list)):
            text += "\n" + json.dumps(error.detail, indent=2)
        return text
    return red(str(error) or error.__class__.__name__)


def format_setting_value(value) -> str:
    """Booleans as Enabled/Disabled, None as Not set."""
    if isinstance(value, bool):
        return primary("Enabled") if value else gray("Disabled")
    if value is None:
        return gray("Not set")
    return str(value)


def format_numbered(index: int) -> str:
    """1-based list marker, e.g. '3.' in the brand color."""
    return f"{primary(str(index))}."
