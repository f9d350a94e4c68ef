"""
Box drawing and table rendering.

All helpers return strings; writing them is the toolbar's job.
"""

import re
import textwrap

from ..primitives import Colors, strip_ansi, visible_len

BOX_TL = "┌"
BOX_TR = "┐"
BOX_BL = "└"
BOX_BR = "┘"
BOX_H = "─"
BOX_V = "│"
BOX_T_DOWN = "┬"
BOX_T_UP = "┴"
BOX_T_RIGHT = "├"
BOX_T_LEFT = "┤"
BOX_CROSS = "┼"

LEADING_ANSI = re.compile(r'^(?:\x1b\[[0-9;]*m)+')


def box_row(left: str, fill: str, right: str, width: int, color: str = Colors.GRAY) -> str:
    """Horizontal box edge: left + fill * width + right, colored."""
    return f"{color}{left}{fill * width}{right}{Colors.RESET}"


def pad(text: str, width: int) -> str:
    """Pad text with spaces to a visible width (ANSI-aware)."""
    return text + " " * max(0, width - visible_len(text))


def render_box(lines: list[str], color: str = Colors.GRAY) -> str:
    """Draw a box with one space of padding around the given lines."""
    inner = max((visible_len(line) for line in lines), default=0)
    out = [box_row(BOX_TL, BOX_H, BOX_TR, inner + 2, color)]
    for line in lines:
        out.append(f"{color}{BOX_V}{Colors.RESET} {pad(line, inner)} {color}{BOX_V}{Colors.RESET}")
    out.append(box_row(BOX_BL, BOX_H, BOX_BR, inner + 2, color))
    return "\n".join(out)


def _wrap_cell(text: str, width: int) -> list[str]:
    """Split a cell into lines of at most width visible characters.

    A wrapped line keeps the ANSI codes it started with.
    """
    lines = []
    for line in str(text).split("\n"):
        if visible_len(line) <= width:
            lines.append(line)
            continue
        match = LEADING_ANSI.match(line)
        prefix = match.group(0) if match else ""
        for piece in textwrap.wrap(strip_ansi(line), width) or [""]:
            lines.append(f"{prefix}{piece}{Colors.RESET}" if prefix else piece)
    return lines


def render_table(
    headers: list[str],
    rows: list[list],
    col_widths: list[int],
    color: str = Colors.GRAY,
) -> str:
    """
    Render a bordered table with word-wrapped cells.

    Args:
        headers: Header cell text
        rows: Row cells (str or anything printable; may contain newlines and ANSI)
        col_widths: Column widths including one space of padding on each side
        color: Border color
    """
    inner = [max(1, w - 2) for w in col_widths]

    def edge(left, mid, right):
        segments = [BOX_H * w for w in col_widths]
        return f"{color}{left}{mid.join(segments)}{right}{Colors.RESET}"

    def body(cells):
        wrapped = [_wrap_cell(cell, w) for cell, w in zip(cells, inner)]
        height = max(len(c) for c in wrapped)
        out = []
        for i in range(height):
            parts = [pad(c[i] if i < len(c) else "", w) for c, w in zip(wrapped, inner)]
            sep = f" {color}{BOX_V}{Colors.RESET} "
            out.append(f"{color}{BOX_V}{Colors.RESET} {sep.join(parts)} {color}{BOX_V}{Colors.RESET}")
        return out

    lines = [edge(BOX_TL, BOX_T_DOWN, BOX_TR)]
    lines.extend(body(headers))
    for row in rows:
        lines.append(edge(BOX_T_RIGHT, BOX_CROSS, BOX_T_LEFT))
        lines.extend(body(row))
    lines.append(edge(BOX_BL, BOX_T_UP, BOX_BR))
    return "\n".join(lines)
