"""
Application header component.

ASCII art header with gradient coloring.
"""

from ..primitives import Colors, rgb, get_gradient_color


ASCII_HEADER = r"""
████████╗███╗   ███╗ █████╗ ████████╗███████╗███████╗
╚══██╔══╝████╗ ████║██╔══██╗╚══██╔══╝██╔════╝██╔════╝
   ██║   ██╔████╔██║███████║   ██║   █████╗  ███████╗
   ██║   ██║╚██╔╝██║██╔══██║   ██║   ██╔══╝  ╚════██║
   ██║   ██║ ╚═╝ ██║██║  ██║   ██║   ███████╗███████║
   ╚═╝   ╚═╝     ╚═╝╚═╝  ╚═╝   ╚═╝   ╚══════╝╚══════╝
""".strip('\n')


_header_cache = None


def render_header() -> str:
    """Render the ASCII header with diagonal gradient and version."""
    global _header_cache

    if _header_cache is None:
        from ... import __version__

        lines = ASCII_HEADER.split('\n')
        total = len(lines)
        width = max(len(line) for line in lines)
        cached_lines = []

        for row, line in enumerate(lines):
            result = []
            for col, char in enumerate(line):
                if char != ' ':
                    pos = (row / total) * 0.4 + (col / width) * 0.6
                    r, g, b = get_gradient_color(pos)
                    result.append(f"{rgb(r, g, b)}{char}")
                else:
                    result.append(char)
            cached_lines.append(''.join(result) + Colors.RESET)

        cached_lines.append(f" {Colors.DIM}v{__version__}{Colors.RESET}")
        _header_cache = '\n'.join(cached_lines)

    return _header_cache
