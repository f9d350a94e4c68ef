"""
Reusable visual building blocks.

Non-interactive components that render UI elements to strings.
"""

from .box import (
    BOX_TL,
    BOX_TR,
    BOX_BL,
    BOX_BR,
    BOX_H,
    BOX_V,
    box_row,
    render_box,
    render_table,
)
from .header import (
    ASCII_HEADER,
    render_header,
)
from .formatting import (
    format_api_error,
    format_setting_value,
    format_numbered,
)

__all__ = [
    # Box drawing
    "BOX_TL",
    "BOX_TR",
    "BOX_BL",
    "BOX_BR",
    "BOX_H",
    "BOX_V",
    "box_row",
    "render_box",
    "render_table",
    # Header
    "ASCII_HEADER",
    "render_header",
    # Formatting
    "format_api_error",
    "format_setting_value",
    "format_numbered",
]
